import pytest

from ircbot.config.model import BotConfig
from ircbot.logging_config import error_aggregator
from ircbot.logs.logger import logger as bot_logger
from tests.fixtures.transport_fixtures import FakeTransport


@pytest.fixture
def bot_config() -> BotConfig:
    return BotConfig(
        host="irc.example.org",
        port=6667,
        nickname="nick",
        description="desc",
        channels=["#a", "#b"],
        blacklist=["372", "375"],
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def captured_events(monkeypatch):
    """Capture (domain, action, kwargs) of every structured log event."""
    seen: list[tuple[str, str, dict]] = []
    original_log_event = bot_logger.log_event

    def capture(domain: str, action: str, *args, **kwargs) -> None:
        seen.append((domain, action, dict(kwargs)))
        original_log_event(domain, action, *args, **kwargs)

    monkeypatch.setattr(bot_logger, "log_event", capture)
    return seen


@pytest.fixture(autouse=True)
def _reset_error_aggregator():
    yield
    error_aggregator.reset()
