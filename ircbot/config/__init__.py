"""Configuration package exports."""

from .loader import load_config
from .model import BotConfig
from .repository import ConfigRepository

__all__ = [
    "BotConfig",
    "ConfigRepository",
    "load_config",
]
