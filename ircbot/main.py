#!/usr/bin/env python3
"""
Main entry point for the IRC bot
"""

from __future__ import annotations

import asyncio
import logging
import sys

from .commands import register_callbacks
from .config import BotConfig, load_config
from .errors.handling import log_error
from .errors.internal import ConfigError, NetworkError
from .irc.callbacks import CallbackRegistry
from .logging_config import LoggerConfigurator
from .signal_handler import SignalHandler
from .supervisor import BotSupervisor

USAGE = """Usage: {binary} [options]

Options:

    -h --help           Show this helpful screen
    --health-check      Validate the configuration file and exit

Environment:

    IRCBOT_CONF_FILE    Configuration file (default: ircbot.conf)
    DEBUG               Set to 1 for verbose event logging
"""


def build_registry(config: BotConfig) -> CallbackRegistry:
    """Create the process-wide registry: keepalive first, then commands."""
    registry = CallbackRegistry.with_defaults(config.command_prefix)
    register_callbacks(registry, config.source_url)
    return registry


async def main(config_file: str | None = None) -> None:
    """Load configuration and run the bot until a signal asks it to stop."""
    config = load_config(config_file)
    supervisor = BotSupervisor(config, build_registry(config))
    SignalHandler(supervisor.stop).setup_signal_handlers()
    logging.info(f"🚀 Starting IRC bot nick={config.nickname} server={config.host}")
    try:
        await supervisor.run()
    finally:
        logging.info("✅ Application shutdown complete")


def health_check(config_file: str | None = None) -> int:
    try:
        config = load_config(config_file)
    except ConfigError as e:
        logging.error(f"❌ Health check failed: {e}")
        return 1
    logging.info(
        f"✅ Health check passed - {config.host}:{config.port}, "
        f"{len(config.channels)} channel(s)"
    )
    return 0


def run(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the application.

    Raises:
        SystemExit: With status 1 on configuration or connection failure.
    """
    args = sys.argv if argv is None else argv
    binary, options = args[0], args[1:]
    if "-h" in options or "--help" in options:
        print(USAGE.format(binary=binary))
        return

    LoggerConfigurator().configure()

    if "--health-check" in options:
        sys.exit(health_check())

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except (ConfigError, NetworkError) as e:
        log_error("Bot stopped", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
