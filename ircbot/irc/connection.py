"""Transport for one IRC session, split into a read half and a write half."""

from __future__ import annotations

import asyncio
import logging

from ..constants import IRC_CONNECT_TIMEOUT, IRC_LINE_TERMINATOR, IRC_READ_LIMIT
from ..errors.internal import NetworkError
from ..logs.logger import logger


class LineReader:
    """Read half: yields one decoded line per call, None at end-of-stream."""

    def __init__(self, reader: asyncio.StreamReader) -> None:
        self._reader = reader

    async def read_line(self) -> str | None:
        data = await self._reader.readline()
        if not data:
            return None
        # A partial line at EOF is returned as-is; the next call yields None.
        return data.decode("utf-8", errors="replace").rstrip("\r\n")


class LineWriter:
    """Write half: one line per call, flushed immediately."""

    def __init__(self, writer: asyncio.StreamWriter) -> None:
        self._writer = writer

    async def write_line(self, line: str) -> None:
        if self._writer.is_closing():
            raise NetworkError("Transport is closed", data={"line": line})
        try:
            self._writer.write(f"{line}{IRC_LINE_TERMINATOR}".encode())
            await self._writer.drain()
        except (OSError, RuntimeError) as e:
            raise NetworkError(f"Write failed: {e}", data={"line": line}) from e

    async def close(self) -> None:
        if self._writer.is_closing():
            return
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except (OSError, RuntimeError) as e:
            logger.log_event(
                "irc",
                "close_error",
                level=logging.DEBUG,
                error=str(e),
                error_type=type(e).__name__,
            )


class IRCConnection:
    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        host: str = "",
        port: int = 0,
    ) -> None:
        self.host = host
        self.port = port
        self.lines = LineReader(reader)
        self.output = LineWriter(writer)

    @classmethod
    async def open(
        cls, host: str, port: int, *, timeout: float = IRC_CONNECT_TIMEOUT
    ) -> IRCConnection:
        """Connect to ``host:port``.

        Raises:
            NetworkError: If the connection cannot be established in time.
        """
        logger.log_event("irc", "connect_start", server=host, port=port)
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port, limit=IRC_READ_LIMIT),
                timeout=timeout,
            )
        except TimeoutError as e:
            raise NetworkError(
                f"Timed out connecting to {host}:{port}",
                data={"host": host, "port": port, "timeout": timeout},
            ) from e
        except OSError as e:
            raise NetworkError(
                f"Could not connect to {host}:{port}: {e}",
                data={"host": host, "port": port},
            ) from e
        logger.log_event(
            "irc", "connection_established", level=logging.DEBUG, server=host, port=port
        )
        return cls(reader, writer, host, port)

    async def close(self) -> None:
        await self.output.close()
