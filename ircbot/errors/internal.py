"""Centralized internal error hierarchy.

These exceptions provide semantic categories for the session core and the
reconnect supervisor. Only raise these at transport/config boundaries; raw
``OSError`` / pydantic errors are wrapped before they reach callers.

Classes:
  InternalError        – Base for all internal errors.
  NetworkError         – Transport failures (connect, read, write). Ends a session;
                         the supervisor may start a new one.
  ConfigError          – Missing or invalid configuration.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal application errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors.

    Covers connect timeouts, resets, end-of-stream and writes to a closed
    transport. The session that raised it is over.
    """


class ConfigError(InternalError):
    """Exception raised when the configuration file is missing or invalid."""


__all__ = [
    "InternalError",
    "NetworkError",
    "ConfigError",
]
