"""Inbound line handling: reactors, parsing, console mirror, auto-join, commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import IRC_WELCOME_CODE
from ..logs.logger import logger
from .parser import ProtocolMessage, parse_irc_message

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient


class IRCDispatcher:
    def __init__(self, client: IRCClient):
        self.client = client

    async def handle_received(self, line: str) -> None:
        line = line.strip()
        writer = self.client.writer

        for reply in await self.client.registry.dispatch_raw(line):
            writer.raw(reply)

        parsed = parse_irc_message(line)
        if parsed is None:
            logger.log_event("wire", "unparsed", line=line)
            return
        await self._handle_message(parsed)

    async def _handle_message(self, msg: ProtocolMessage) -> None:
        if msg.command not in self.client.config.blacklist:
            logger.log_event("wire", "inbound", line=msg.raw)

        if msg.command == IRC_WELCOME_CODE:
            self._handle_welcome()

        invocation = self.client.registry.extract_command(msg)
        if invocation is None:
            return
        logger.log_event(
            "irc",
            "command",
            level=logging.DEBUG,
            user=self.client.config.nickname,
            command=invocation.name,
            sender=invocation.sender,
        )
        reply = await self.client.registry.dispatch_command(invocation)
        if reply:
            self.client.writer.privmsg(invocation.reply_to, reply)

    def _handle_welcome(self) -> None:
        client = self.client
        client.mark_registered()
        for channel in client.config.channels:
            if channel in client.joined_channels:
                continue
            client.joined_channels.add(channel)
            client.writer.join(channel)
            logger.log_event(
                "irc",
                "join_requested",
                level=logging.DEBUG,
                user=client.config.nickname,
                channel=channel,
            )
