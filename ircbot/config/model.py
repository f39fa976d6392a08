from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import BOT_SOURCE_URL, IRC_DEFAULT_COMMAND_PREFIX


def _normalize_channels(channels: list[str]) -> list[str]:
    """Strip, prefix with '#' when no channel sigil is present, de-duplicate.

    Order is preserved: channels are joined in the order they are configured.
    """
    normalized: list[str] = []
    for ch in channels:
        if not isinstance(ch, str):
            continue
        stripped = ch.strip()
        if not stripped:
            continue
        if stripped[0] not in "#&":
            stripped = f"#{stripped}"
        normalized.append(stripped)
    return list(dict.fromkeys(normalized))


class BotConfig(BaseModel):
    """Connection and identity settings for one bot session.

    Attributes:
        host: Server hostname.
        port: Server port.
        nickname: Nick claimed during registration.
        description: Free text sent as the USER real name.
        channels: Channels joined once the server welcomes us.
        blacklist: Command codes never echoed to the console.
        command_prefix: Character marking a bot command in chat text.
        source_url: Where the bot's code lives, announced by the src command.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    port: int = Field(default=6667, ge=1, le=65535)
    nickname: str = Field(min_length=1, max_length=30)
    description: str = "ircbot"
    channels: list[str] = Field(default_factory=list)
    blacklist: frozenset[str] = Field(default_factory=frozenset)
    command_prefix: str = Field(default=IRC_DEFAULT_COMMAND_PREFIX, min_length=1)
    source_url: str = BOT_SOURCE_URL

    @field_validator("host", "nickname", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("nickname")
    @classmethod
    def validate_nickname(cls, v: str) -> str:
        if any(c.isspace() for c in v):
            raise ValueError("nickname must not contain whitespace")
        return v

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> list[str]:
        if not isinstance(v, list | tuple):
            raise ValueError("channels must be a list")
        return _normalize_channels(list(v))

    @field_validator("blacklist", mode="before")
    @classmethod
    def validate_blacklist(cls, v: Any) -> frozenset[str]:
        if v is None:
            return frozenset()
        if not isinstance(v, list | tuple | set | frozenset):
            raise ValueError("blacklist must be a list of command codes")
        return frozenset(str(code).strip() for code in v if str(code).strip())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BotConfig:
        """Create a BotConfig from a raw mapping (e.g. decoded JSON)."""
        return cls.model_validate(dict(data))
