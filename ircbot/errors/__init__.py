from .handling import categorize_error, log_error  # noqa: F401
from .internal import (  # noqa: F401
    ConfigError,
    InternalError,
    NetworkError,
)

__all__ = [
    "ConfigError",
    "InternalError",
    "NetworkError",
    "categorize_error",
    "log_error",
]
