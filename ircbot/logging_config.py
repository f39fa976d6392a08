"""
Root logging setup for the bot process.

``LoggerConfigurator`` installs a colorlog handler on the root logger, which
carries the plain ``logging.*`` calls (startup, config, error summaries).
Structured session events go through ``ircbot.logs.logger`` instead.
Failures reported with ``log_structured_error`` are also counted per
category so the process can print a summary when it exits.
"""

import atexit
import logging
import os
import sys
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any

import colorlog

_MAX_KEPT_PER_CATEGORY = 200
_RECENT_WINDOW_SECONDS = 3600


@dataclass
class _ErrorRecord:
    timestamp: float
    message: str
    context: dict[str, Any]

    def as_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "message": self.message,
            "context": self.context,
        }


@dataclass
class _Category:
    total: int = 0
    recent: deque[_ErrorRecord] = field(
        default_factory=lambda: deque(maxlen=_MAX_KEPT_PER_CATEGORY)
    )


class ErrorAggregator:
    """Counts failures per category (network, config, internal, ...).

    Reconnect loops can fail hundreds of times; only the newest records of
    each category are kept, the total keeps counting.
    """

    def __init__(self) -> None:
        self._categories: dict[str, _Category] = {}
        self._lock = threading.Lock()
        self.start_time = time.time()

    def record_error(
        self, error_type: str, message: str, context: dict[str, Any] | None = None
    ) -> None:
        record = _ErrorRecord(time.time(), message, dict(context or {}))
        with self._lock:
            category = self._categories.setdefault(error_type, _Category())
            category.total += 1
            category.recent.append(record)

    def get_error_summary(self) -> dict[str, Any]:
        """Per-category counts, hourly rate and the last recorded occurrence."""
        now = time.time()
        hours = max((now - self.start_time) / 3600, 1)
        with self._lock:
            return {
                name: {
                    "total_count": cat.total,
                    "recent_count": sum(
                        1
                        for r in cat.recent
                        if now - r.timestamp < _RECENT_WINDOW_SECONDS
                    ),
                    "rate_per_hour": cat.total / hours,
                    "last_occurrence": cat.recent[-1].as_dict() if cat.recent else None,
                }
                for name, cat in self._categories.items()
            }

    def reset(self) -> None:
        with self._lock:
            self._categories.clear()
            self.start_time = time.time()

    def log_summary_report(self) -> None:
        summary = self.get_error_summary()
        if not summary:
            logging.info("No errors recorded in current session")
            return
        logging.warning("🚨 Error summary")
        for name, stats in sorted(summary.items()):
            logging.warning(
                f"  {name}: {stats['total_count']} total, "
                f"{stats['recent_count']} in the last hour "
                f"({stats['rate_per_hour']:.1f}/hour)"
            )
            last = stats["last_occurrence"]
            if last:
                logging.warning(f"    last: {last['message']}")


error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Log ``[CATEGORY] message | Exception: ... | Context: k=v`` and count it.

    Args:
        error_type: Category used for the summary (see ``categorize_error``).
        message: What failed.
        exception: The exception that caused it, if any.
        context: Extra key/value pairs, e.g. the line that could not be written.
        level: Logging level (default: ERROR).
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception is not None:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))
    logging.log(level, " | ".join(parts))
    error_aggregator.record_error(error_type, message, context)


class LoggerConfigurator:
    """Configures the root logger with colorlog.

    ``DEBUG=1`` (or ``true``/``yes``) lowers the level to DEBUG.
    """

    LOG_COLORS = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "magenta",
    }

    def __init__(self, stream=None, summary_on_exit: bool = True):
        self.stream = stream or sys.stderr
        self.summary_on_exit = summary_on_exit

    @staticmethod
    def level_from_env() -> int:
        debug = os.environ.get("DEBUG", "").lower()
        return logging.DEBUG if debug in ("true", "1", "yes") else logging.INFO

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s "
            "%(message_log_color)s%(message)s",
            datefmt="%H:%M:%S",
            log_colors=self.LOG_COLORS,
            secondary_log_colors={"message": {"ERROR": "red", "CRITICAL": "red"}},
            reset=True,
        )

    def configure(self) -> None:
        level = self.level_from_env()
        handler = logging.StreamHandler(self.stream)
        handler.setFormatter(self.build_formatter())
        # force: replace handlers a previous configure() or library installed
        logging.basicConfig(level=level, handlers=[handler], force=True)

        # tenacity logs every sleep at DEBUG; our before_sleep hook covers it
        logging.getLogger("tenacity").setLevel(logging.INFO)
        logging.getLogger("asyncio").setLevel(logging.WARNING)

        if self.summary_on_exit:
            atexit.register(self._log_final_error_summary)

    def _log_final_error_summary(self) -> None:
        logging.info("📊 Final error summary before shutdown:")
        error_aggregator.log_summary_report()
