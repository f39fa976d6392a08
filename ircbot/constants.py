"""
Configuration constants for the IRC bot

This module contains all configurable constants used throughout the application.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Same contract as ``_get_env_int`` for floating point values.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


# Config file location (overridable per process)
DEFAULT_CONF_FILE = os.environ.get("IRCBOT_CONF_FILE", "ircbot.conf")

# Transport
IRC_CONNECT_TIMEOUT = _get_env_float(
    "IRC_CONNECT_TIMEOUT", 15.0
)  # Seconds allowed for the TCP handshake
IRC_LINE_TERMINATOR = "\r\n"
IRC_READ_LIMIT = _get_env_int(
    "IRC_READ_LIMIT", 64 * 1024
)  # StreamReader buffer limit; longer lines count as a read failure

# Protocol
IRC_WELCOME_CODE = "004"  # Numeric that triggers the auto-join of configured channels
IRC_DEFAULT_COMMAND_PREFIX = "."

# Reply of the built-in "src" command; the config file may override it
BOT_SOURCE_URL = os.environ.get("IRCBOT_SOURCE_URL", "")

# Reconnect supervisor (the session core itself never retries)
RECONNECT_MAX_ATTEMPTS = _get_env_int("RECONNECT_MAX_ATTEMPTS", 10)
RECONNECT_BACKOFF_MULTIPLIER = _get_env_float("RECONNECT_BACKOFF_MULTIPLIER", 1.0)
RECONNECT_MAX_BACKOFF_SECONDS = _get_env_float("RECONNECT_MAX_BACKOFF_SECONDS", 60.0)
