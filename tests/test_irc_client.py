from __future__ import annotations

import asyncio

import pytest

from ircbot.errors.internal import NetworkError
from ircbot.irc.client import IRCClient
from ircbot.irc.models import Output, Quit, Received, SessionState
from tests.fixtures.transport_fixtures import FakeTransport, wait_for_lines


@pytest.mark.asyncio
async def test_end_to_end_identify_welcome_join_quit(bot_config, transport):
    client = IRCClient(bot_config, connection_factory=transport.factory)
    task = asyncio.create_task(client.run())
    transport.lines.feed(":srv 004 nick :welcome")

    await wait_for_lines(transport.output, 4)
    assert client.state is SessionState.ACTIVE
    client.writer.quit("bye")
    await asyncio.wait_for(task, timeout=2)

    assert transport.opened_with == ("irc.example.org", 6667)
    assert transport.output.lines == [
        "NICK nick",
        "USER nick 0 * :desc",
        "JOIN #a",
        "JOIN #b",
        "QUIT :bye",
    ]
    assert client.state is SessionState.STOPPED
    assert client.registered is True
    assert transport.output.closed is True


@pytest.mark.asyncio
async def test_keepalive_answered_while_identifying(bot_config, transport):
    client = IRCClient(bot_config, connection_factory=transport.factory)
    task = asyncio.create_task(client.run())
    transport.lines.feed("PING :abc123")

    await wait_for_lines(transport.output, 3)
    assert client.state is SessionState.IDENTIFYING
    client.writer.quit()
    await asyncio.wait_for(task, timeout=2)
    assert transport.output.lines.count("PONG :abc123") == 1


@pytest.mark.asyncio
async def test_second_welcome_does_not_duplicate_joins(bot_config, transport):
    client = IRCClient(bot_config, connection_factory=transport.factory)
    task = asyncio.create_task(client.run())
    transport.lines.feed(":srv 004 nick :welcome", ":srv 004 nick :welcome")
    transport.lines.feed("PING :sync")

    await wait_for_lines(transport.output, 5)
    client.writer.quit()
    await asyncio.wait_for(task, timeout=2)
    joins = [line for line in transport.output.lines if line.startswith("JOIN")]
    assert joins == ["JOIN #a", "JOIN #b"]


@pytest.mark.asyncio
async def test_connection_lost_stops_session_with_network_error(bot_config, transport):
    client = IRCClient(bot_config, connection_factory=transport.factory)
    transport.lines.close()

    with pytest.raises(NetworkError):
        await asyncio.wait_for(client.run(), timeout=2)
    assert client.state is SessionState.STOPPED
    # Output queued before the close notification is still flushed
    assert transport.output.lines == ["NICK nick", "USER nick 0 * :desc"]


@pytest.mark.asyncio
async def test_write_failure_is_fatal(bot_config):
    transport = FakeTransport(fail_after=1)
    client = IRCClient(bot_config, connection_factory=transport.factory)

    with pytest.raises(NetworkError):
        await asyncio.wait_for(client.run(), timeout=2)
    assert transport.output.lines == ["NICK nick"]
    assert client.state is SessionState.STOPPED


@pytest.mark.asyncio
async def test_draining_flushes_output_and_drops_inbound(bot_config, transport):
    client: IRCClient

    async def connect_while_producing(host: str, port: int) -> FakeTransport:
        client.events.put_nowait(Output("PRIVMSG #a :first"))
        client.events.put_nowait(Quit(reason="test"))
        client.events.put_nowait(Received("PING :dropped"))
        client.events.put_nowait(Output("PRIVMSG #a :late"))
        return await transport.factory(host, port)

    client = IRCClient(bot_config, connection_factory=connect_while_producing)
    await asyncio.wait_for(client.run(), timeout=2)

    assert transport.output.lines == [
        "NICK nick",
        "USER nick 0 * :desc",
        "PRIVMSG #a :first",
        "PRIVMSG #a :late",
    ]
    assert "PONG :dropped" not in transport.output.lines
    assert client.state is SessionState.STOPPED


@pytest.mark.asyncio
async def test_quit_while_connecting_goes_out_after_identify(bot_config, transport):
    client: IRCClient

    async def slow_connect(host: str, port: int) -> FakeTransport:
        client.writer.quit("bye")
        return await transport.factory(host, port)

    client = IRCClient(bot_config, connection_factory=slow_connect)
    await asyncio.wait_for(client.run(), timeout=2)

    assert transport.output.lines == ["NICK nick", "USER nick 0 * :desc", "QUIT :bye"]
    assert client.registered is False


@pytest.mark.asyncio
async def test_connect_failure_propagates(bot_config):
    async def refuse(host: str, port: int):
        raise NetworkError(f"Could not connect to {host}:{port}")

    client = IRCClient(bot_config, connection_factory=refuse)
    with pytest.raises(NetworkError):
        await client.run()
    assert client.state is SessionState.CONNECTING


@pytest.mark.asyncio
async def test_console_mirrors_outbound_before_write(bot_config, transport, captured_events):
    client = IRCClient(bot_config, connection_factory=transport.factory)
    task = asyncio.create_task(client.run())
    transport.lines.feed(":srv 004 nick :welcome")
    await wait_for_lines(transport.output, 4)
    client.writer.quit("bye")
    await asyncio.wait_for(task, timeout=2)

    outbound = [kw["line"] for d, a, kw in captured_events if (d, a) == ("wire", "outbound")]
    assert outbound == transport.output.lines


@pytest.mark.asyncio
async def test_external_producer_can_queue_messages(bot_config, transport):
    client = IRCClient(bot_config, connection_factory=transport.factory)
    task = asyncio.create_task(client.run())

    async def announcer() -> None:
        await wait_for_lines(transport.output, 2)
        client.writer.privmsg("#a", "announcement")
        client.writer.quit()

    await asyncio.gather(announcer(), asyncio.wait_for(task, timeout=2))
    assert transport.output.lines[2:] == ["PRIVMSG #a :announcement", "QUIT :Leaving"]


class _BrokenReader:
    async def read_line(self) -> str | None:
        raise RuntimeError("decoder exploded")

    def close(self) -> None:
        pass


@pytest.mark.asyncio
async def test_unexpected_reader_failure_still_stops_session(bot_config, transport):
    transport.lines = _BrokenReader()  # type: ignore[assignment]
    client = IRCClient(bot_config, connection_factory=transport.factory)

    with pytest.raises(NetworkError, match="decoder exploded"):
        await asyncio.wait_for(client.run(), timeout=2)
    assert client.state is SessionState.STOPPED
