from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from ircbot.errors.handling import categorize_error, log_error
from ircbot.errors.internal import (
    ConfigError,
    InternalError,
    NetworkError,
)
from ircbot.logging_config import error_aggregator, log_structured_error


@pytest.mark.parametrize(
    ("error", "category"),
    [
        (NetworkError("reset"), "network"),
        (ConnectionResetError("reset"), "network"),
        (ConfigError("missing"), "config"),
        (InternalError("oops"), "internal"),
        (KeyError("x"), "unknown"),
    ],
)
def test_categorize_error(error, category):
    assert categorize_error(error) == category


def test_internal_error_copies_data():
    data = {"host": "h"}
    err = NetworkError("boom", data=data)
    data["host"] = "changed"
    assert err.data == {"host": "h"}
    assert NetworkError("plain").data == {}


def test_log_error_records_in_aggregator():
    with patch("ircbot.logging_config.logging.log") as mock_log:
        log_error("Write to server failed", NetworkError("Broken pipe"), {"line": "JOIN #a"})
    level, message = mock_log.call_args.args
    assert level == logging.ERROR
    assert message.startswith("[NETWORK] Write to server failed: Broken pipe")
    assert "line=JOIN #a" in message
    summary = error_aggregator.get_error_summary()
    assert summary["network"]["total_count"] == 1
    assert summary["network"]["last_occurrence"]["context"] == {"line": "JOIN #a"}


def test_aggregator_reset_and_report():
    with patch("ircbot.logging_config.logging.log"):
        log_structured_error("config", "first")
        log_structured_error("config", "second")
    assert error_aggregator.get_error_summary()["config"]["total_count"] == 2

    with patch("ircbot.logging_config.logging.warning") as mock_warning:
        error_aggregator.log_summary_report()
    assert any("config: 2 total" in c.args[0] for c in mock_warning.call_args_list)

    error_aggregator.reset()
    with patch("ircbot.logging_config.logging.info") as mock_info:
        error_aggregator.log_summary_report()
    mock_info.assert_called_once_with("No errors recorded in current session")
