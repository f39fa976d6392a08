from __future__ import annotations

from typing import Any

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    InternalError,
    NetworkError,
)


def categorize_error(error: BaseException) -> str:
    """Map an exception to the category used by structured error logging."""
    if isinstance(error, NetworkError | OSError | ConnectionError):
        return "network"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(
    message: str, error: Exception, context: dict[str, Any] | None = None
) -> None:
    """Logs an error message with the associated exception details.

    The exception is categorized (network, config, internal, unknown) and handed
    to structured logging so repeated failures show up in the error summary.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    log_structured_error(
        error_type=categorize_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )
