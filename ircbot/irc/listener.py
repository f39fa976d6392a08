"""Reader task: forwards transport lines onto the event channel."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from ..errors.internal import NetworkError
from ..logs.logger import logger
from .models import Event, Quit, Received


class SupportsReadLine(Protocol):
    async def read_line(self) -> str | None: ...


class IRCListener:
    """Owns the read loop; touches nothing but the reader and the queue.

    When the stream ends or a read fails, a ``Quit`` carrying a
    ``NetworkError`` is queued so the dispatcher stops instead of waiting
    forever on a dead connection.
    """

    def __init__(
        self,
        lines: SupportsReadLine,
        events: asyncio.Queue[Event],
        username: str | None = None,
    ) -> None:
        self.lines = lines
        self.events = events
        self.username = username

    async def listen(self) -> None:
        logger.log_event("irc", "listener_start", level=logging.DEBUG, user=self.username)
        try:
            while True:
                line = await self.lines.read_line()
                if line is None:
                    logger.log_event(
                        "irc", "connection_lost", level=logging.WARNING, user=self.username
                    )
                    self._notify_closed(NetworkError("Connection closed by server"))
                    return
                self.events.put_nowait(Received(line))
        except Exception as e:  # noqa: BLE001
            # Includes ValueError when a line exceeds the StreamReader limit
            logger.log_event(
                "irc",
                "read_error",
                level=logging.ERROR,
                user=self.username,
                error=str(e),
                error_type=type(e).__name__,
            )
            self._notify_closed(NetworkError(f"Read failed: {e}"))
        finally:
            logger.log_event(
                "irc", "listener_stopped", level=logging.DEBUG, user=self.username
            )

    def _notify_closed(self, error: NetworkError) -> None:
        self.events.put_nowait(Quit(reason="connection_lost", error=error))
