from __future__ import annotations

import io
import logging

import colorlog
import pytest

from ircbot.logging_config import ErrorAggregator, LoggerConfigurator


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_installs_colorlog_handler(monkeypatch, restore_root_logging):
    monkeypatch.setenv("DEBUG", "1")
    stream = io.StringIO()
    LoggerConfigurator(stream=stream, summary_on_exit=False).configure()

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h.formatter, colorlog.ColoredFormatter) for h in root.handlers)
    assert logging.getLogger("tenacity").level == logging.INFO
    logging.info("configured")
    assert "configured" in stream.getvalue()


def test_level_defaults_to_info(monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)
    assert LoggerConfigurator.level_from_env() == logging.INFO


def test_aggregator_keeps_counting_past_retention():
    aggregator = ErrorAggregator()
    for i in range(250):
        aggregator.record_error("network", f"attempt {i}")
    stats = aggregator.get_error_summary()["network"]
    assert stats["total_count"] == 250
    assert stats["recent_count"] == 200
    assert stats["last_occurrence"]["message"] == "attempt 249"
