"""Session event loop: one connection, one reader task, one serial dispatcher."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from ..config.model import BotConfig
from ..errors.handling import log_error
from ..errors.internal import NetworkError
from ..logs.logger import logger
from .callbacks import CallbackRegistry
from .connection import IRCConnection
from .dispatcher import IRCDispatcher
from .listener import IRCListener, SupportsReadLine
from .models import Event, Output, Quit, Received, SessionState
from .writer import IRCWriter


class SupportsWriteLine(Protocol):
    async def write_line(self, line: str) -> None: ...


class Transport(Protocol):
    lines: SupportsReadLine
    output: SupportsWriteLine

    async def close(self) -> None: ...


ConnectionFactory = Callable[[str, int], Awaitable[Transport]]


class IRCClient:  # pylint: disable=too-many-instance-attributes
    """Runs one session against ``config.host``.

    The client owns the event queue, the registry and the write half of the
    transport. Anything on the same loop may queue output through
    ``client.writer``; ``client.writer.quit()`` ends the session.
    """

    def __init__(
        self,
        config: BotConfig,
        registry: CallbackRegistry | None = None,
        *,
        connection_factory: ConnectionFactory | None = None,
    ) -> None:
        self.config = config
        self.registry = registry or CallbackRegistry.with_defaults(
            config.command_prefix
        )
        self.events: asyncio.Queue[Event] = asyncio.Queue()
        self.writer = IRCWriter(self.events)
        self.dispatcher = IRCDispatcher(self)
        self.state = SessionState.CONNECTING
        self.joined_channels: set[str] = set()
        # Set once the server welcomed us; survives the move to STOPPED
        self.registered = False
        self.error: Exception | None = None
        self._write_failed = False
        self._connection_factory: ConnectionFactory = (
            connection_factory or IRCConnection.open
        )
        self._connection: Transport | None = None
        self._reader_task: asyncio.Task[None] | None = None

    def _set_state(self, new_state: SessionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                user=self.config.nickname,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    def mark_registered(self) -> None:
        """Record the server welcome; an identifying session becomes ACTIVE."""
        self.registered = True
        if self.state is SessionState.IDENTIFYING:
            self._set_state(SessionState.ACTIVE)

    async def run(self) -> None:
        """Connect, identify and process events until the session ends.

        Returns normally after a requested quit.

        Raises:
            NetworkError: If the connection could not be opened, was lost, or
                a write failed.
        """
        # Queued before the first await: a quit requested while connecting
        # still goes out after NICK/USER.
        self.writer.identify(self.config.nickname, self.config.description)
        self._connection = await self._connection_factory(
            self.config.host, self.config.port
        )
        listener = IRCListener(
            self._connection.lines, self.events, username=self.config.nickname
        )
        self._reader_task = asyncio.create_task(listener.listen())
        self._set_state(SessionState.IDENTIFYING)
        try:
            await self._process_events()
            if not self._write_failed:
                self._set_state(SessionState.DRAINING)
                await self._drain()
        finally:
            await self._stop()
        if self.error is not None:
            raise self.error

    async def _process_events(self) -> None:
        while True:
            event = await self.events.get()
            if isinstance(event, Quit):
                self._handle_quit(event)
                return
            if isinstance(event, Output):
                if not await self._write(event.line):
                    return
            elif isinstance(event, Received):
                await self.dispatcher.handle_received(event.line)

    def _handle_quit(self, event: Quit) -> None:
        if event.error is not None and self.error is None:
            self.error = event.error
        logger.log_event(
            "irc",
            "quit",
            level=logging.WARNING if event.error else logging.INFO,
            user=self.config.nickname,
            reason=event.reason,
        )

    async def _drain(self) -> None:
        """Flush output already queued; inbound lines are dropped."""
        while not self.events.empty():
            event = self.events.get_nowait()
            if isinstance(event, Output):
                if not await self._write(event.line):
                    return
            elif isinstance(event, Received):
                logger.log_event(
                    "irc",
                    "dropped_while_draining",
                    level=logging.DEBUG,
                    user=self.config.nickname,
                    line=event.line,
                )

    async def _write(self, line: str) -> bool:
        if self._connection is None or self._write_failed:
            return False
        logger.log_event("wire", "outbound", line=line)
        try:
            await self._connection.output.write_line(line)
        except NetworkError as e:
            log_error("Write to server failed", e, context={"line": line})
            self._write_failed = True
            if self.error is None:
                self.error = e
            return False
        return True

    async def _stop(self) -> None:
        if self._connection is not None:
            await self._connection.close()
        # The reader is left to finish on its own once the transport is closed.
        self._set_state(SessionState.STOPPED)
        logger.log_event("irc", "stopped", user=self.config.nickname)
