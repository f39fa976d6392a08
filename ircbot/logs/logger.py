"""Event logger: structured ``(domain, action)`` events rendered for the console."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

from .event_catalog import EVENT_TEMPLATES

# Events in this domain mirror the wire. They are printed bare so the
# console reads like the protocol stream: "< line", "> line", "<! line".
_WIRE_DOMAIN = "wire"
_PREFIX_WIDTH = 24
_EVENT_NAME_WIDTH = 32


def _debug_enabled() -> bool:
    return os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")


class ConsoleFormatter(logging.Formatter):
    """``LEVEL    message``; wire records are printed without the level column."""

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[36m",
        logging.INFO: "\x1b[32m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[35m",
    }
    RESET = "\x1b[0m"

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        stream = stream or sys.stdout
        try:
            self.enable_color = stream.isatty()
        except (AttributeError, ValueError):  # pragma: no cover
            self.enable_color = False

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if getattr(record, "wire", False):
            return msg
        level = record.levelname.ljust(8)
        if self.enable_color:
            color = self.LEVEL_COLORS.get(record.levelno, "")
            level = f"{color}{level}{self.RESET}"
        return f"{level} {msg}"


class BotLogger:
    """Project logger with lightweight structured event support.

    Usage::

        logger.log_event("irc", "join_requested", user=nick, channel="#a")

    The event name is ``<domain>_<action>``. Human text comes from
    ``event_templates.json`` (formatted with the keyword arguments) unless
    ``human`` is given. ``user`` and ``channel`` become the bracketed column;
    with ``DEBUG`` set the remaining keywords are appended as ``key=value``.
    """

    def __init__(self, name: str = "ircbot", stream: TextIO | None = None) -> None:
        self.logger = logging.getLogger(name)
        self.logger.handlers.clear()
        self.logger.setLevel(logging.DEBUG if _debug_enabled() else logging.INFO)
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(ConsoleFormatter(stream))
        self.logger.addHandler(handler)
        # The root handler from LoggerConfigurator would print it a second time
        self.logger.propagate = False

    def set_level(self, level: int) -> None:
        self.logger.setLevel(level)

    def log_event(
        self,
        domain: str,
        action: str,
        level: int = logging.INFO,
        human: str | None = None,
        *,
        exc_info: bool = False,
        **kwargs: object,
    ) -> None:
        text = human if human is not None else self._render(domain, action, kwargs)
        if domain == _WIRE_DOMAIN:
            self.logger.log(level, text, exc_info=exc_info, extra={"wire": True})
            return

        user = kwargs.pop("user", None)
        channel = kwargs.pop("channel", None)
        prefix = self._build_prefix(
            user if isinstance(user, str) else None,
            channel if isinstance(channel, str) else None,
        )
        event_name = f"{domain}_{action}".lower()
        if _debug_enabled():
            msg = self._build_debug_message(event_name, prefix, text, kwargs)
        else:
            msg = f"{prefix} {text}"
        self.logger.log(level, msg, exc_info=exc_info)

    @staticmethod
    def _render(domain: str, action: str, kwargs: dict[str, object]) -> str:
        template = EVENT_TEMPLATES.get((domain, action))
        if template is None:
            return f"{domain.replace('_', ' ')}: {action.replace('_', ' ')}"
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return template

    @staticmethod
    def _build_prefix(user: str | None, channel: str | None) -> str:
        label = f"{user or 'system'}{channel or ''}"
        return f"[{label.ljust(_PREFIX_WIDTH)[:_PREFIX_WIDTH]}]"

    @staticmethod
    def _build_debug_message(
        event_name: str, prefix: str, text: str, context: dict[str, object]
    ) -> str:
        if len(event_name) > _EVENT_NAME_WIDTH:
            event_name = event_name[: _EVENT_NAME_WIDTH - 1] + "…"
        msg = f"{event_name.ljust(_EVENT_NAME_WIDTH)} {prefix} {text}"
        if context:
            msg += " (" + ", ".join(f"{k}={v}" for k, v in context.items()) + ")"
        return msg


logger = BotLogger()
