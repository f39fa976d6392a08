"""Configuration loading utilities."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from ..constants import DEFAULT_CONF_FILE
from ..errors.internal import ConfigError
from .model import BotConfig
from .repository import ConfigRepository


def load_config(config_file: str | None = None) -> BotConfig:
    """Load and validate the bot configuration.

    Args:
        config_file: Path to the JSON configuration file. Defaults to
            ``IRCBOT_CONF_FILE`` / ``ircbot.conf``.

    Returns:
        A validated, immutable BotConfig.

    Raises:
        ConfigError: If the file is missing, empty or fails validation.
    """
    path = config_file or DEFAULT_CONF_FILE
    repo = ConfigRepository(path)
    if not repo.exists():
        raise ConfigError(f"Configuration file not found: {path}", data={"path": path})
    raw = repo.load_raw()
    if not raw:
        raise ConfigError(f"Configuration file is empty or invalid: {path}", data={"path": path})
    try:
        config = BotConfig.from_dict(raw)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(
            f"Invalid configuration in {path}: {problems}", data={"path": path}
        ) from e
    logging.info(
        f"✅ Configuration loaded host={config.host} port={config.port} "
        f"channels={len(config.channels)}"
    )
    return config
