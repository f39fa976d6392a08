"""Outbound line builders.

Every method formats one protocol line and puts it on the event channel as
an ``Output`` event; nothing is written here. Arguments are not sanitised:
callers must not pass CR/LF or other control characters in targets or text.
"""

from __future__ import annotations

import asyncio

from .models import Event, Output, Quit


class IRCWriter:
    def __init__(self, events: asyncio.Queue[Event]) -> None:
        self._events = events

    def identify(self, nick: str, description: str) -> None:
        self.raw(f"NICK {nick}")
        self.raw(f"USER {nick} 0 * :{description}")

    def join(self, channel: str) -> None:
        self.raw(f"JOIN {channel}")

    def privmsg(self, target: str, text: str) -> None:
        self.raw(f"PRIVMSG {target} :{text}")

    def pong(self, token: str) -> None:
        self.raw(f"PONG {token}")

    def raw(self, line: str) -> None:
        self._events.put_nowait(Output(line))

    def quit(self, reason: str = "Leaving") -> None:
        """Say goodbye to the server and ask the dispatcher to stop."""
        self.raw(f"QUIT :{reason}")
        self._events.put_nowait(Quit(reason=reason))
