from __future__ import annotations

import asyncio

from ircbot.irc.models import Output, Quit
from ircbot.irc.writer import IRCWriter


def _drain(events: asyncio.Queue) -> list:
    items = []
    while not events.empty():
        items.append(events.get_nowait())
    return items


def test_identify_emits_nick_then_user():  # type: ignore[no-untyped-def]
    events: asyncio.Queue = asyncio.Queue()
    IRCWriter(events).identify("nick", "a helpful bot")
    assert _drain(events) == [
        Output("NICK nick"),
        Output("USER nick 0 * :a helpful bot"),
    ]


def test_single_line_builders():  # type: ignore[no-untyped-def]
    events: asyncio.Queue = asyncio.Queue()
    writer = IRCWriter(events)
    writer.join("#a")
    writer.privmsg("#a", "hello: world")
    writer.pong(":abc123")
    writer.raw("MODE nick +i")
    assert _drain(events) == [
        Output("JOIN #a"),
        Output("PRIVMSG #a :hello: world"),
        Output("PONG :abc123"),
        Output("MODE nick +i"),
    ]


def test_quit_sends_quit_line_before_sentinel():  # type: ignore[no-untyped-def]
    events: asyncio.Queue = asyncio.Queue()
    IRCWriter(events).quit("bye")
    assert _drain(events) == [Output("QUIT :bye"), Quit(reason="bye")]


def test_text_is_not_sanitised():  # type: ignore[no-untyped-def]
    events: asyncio.Queue = asyncio.Queue()
    IRCWriter(events).privmsg("#a", "line one\r\nQUIT")
    assert _drain(events) == [Output("PRIVMSG #a :line one\r\nQUIT")]
