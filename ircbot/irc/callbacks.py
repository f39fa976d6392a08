"""Reactor registry: raw-line reactors and named chat command reactors."""

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..constants import IRC_DEFAULT_COMMAND_PREFIX
from ..logs.logger import logger
from .parser import ProtocolMessage

RawCallback = Callable[[str], "str | None | Awaitable[str | None]"]
CommandCallback = Callable[
    ["CommandInvocation"], "str | None | Awaitable[str | None]"
]

_PING_PATTERN = re.compile(r"^PING\s(.+)$")


@dataclass(frozen=True, slots=True)
class CommandInvocation:
    sender: str
    target: str
    name: str
    argument: str

    @property
    def reply_to(self) -> str:
        """Channel the command was said in, or the sender for a private message."""
        return self.target if self.target[:1] in ("#", "&") else self.sender


@dataclass(frozen=True, slots=True, eq=False)
class RawReactor:
    callback: RawCallback


@dataclass(frozen=True, slots=True, eq=False)
class CommandReactor:
    name: str
    callback: CommandCallback


CallbackEntry = RawReactor | CommandReactor


def ping_reactor(line: str) -> str | None:
    """Answer ``PING <token>`` with ``PONG <token>``; a bare PING gets no reply."""
    match = _PING_PATTERN.match(line)
    if match is None:
        return None
    return f"PONG {match.group(1)}"


async def _call(callback: Callable[..., object], arg: object) -> object:
    result = callback(arg)
    if inspect.isawaitable(result):
        result = await result
    return result


class CallbackRegistry:
    """Ordered reactors; registration order is invocation order.

    For command reactors the last registration of a name wins.
    """

    def __init__(self, command_prefix: str = IRC_DEFAULT_COMMAND_PREFIX) -> None:
        self.command_prefix = command_prefix
        self._entries: list[CallbackEntry] = []

    @classmethod
    def with_defaults(
        cls, command_prefix: str = IRC_DEFAULT_COMMAND_PREFIX
    ) -> CallbackRegistry:
        registry = cls(command_prefix)
        registry.register_raw(ping_reactor)
        return registry

    @property
    def entries(self) -> tuple[CallbackEntry, ...]:
        return tuple(self._entries)

    def register_raw(self, reactor: RawCallback) -> RawReactor:
        entry = RawReactor(reactor)
        self._entries.append(entry)
        return entry

    def register_command(self, name: str, reactor: CommandCallback) -> CommandReactor:
        entry = CommandReactor(name, reactor)
        self._entries.append(entry)
        return entry

    def unregister(self, entry: CallbackEntry) -> bool:
        try:
            self._entries.remove(entry)
        except ValueError:
            return False
        return True

    async def dispatch_raw(self, line: str) -> list[str]:
        replies: list[str] = []
        for entry in self._entries:
            if not isinstance(entry, RawReactor):
                continue
            try:
                result = await _call(entry.callback, line)
            except Exception as e:  # noqa: BLE001
                logger.log_event(
                    "callback",
                    "raw_reactor_error",
                    level=logging.ERROR,
                    reactor=_describe(entry.callback),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue
            if result:
                replies.append(str(result))
        return replies

    async def dispatch_command(self, invocation: CommandInvocation) -> str | None:
        entry = self._find_command(invocation.name)
        if entry is None:
            logger.log_event(
                "callback",
                "unknown_command",
                level=logging.DEBUG,
                command=invocation.name,
                sender=invocation.sender,
            )
            return None
        try:
            result = await _call(entry.callback, invocation)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "callback",
                "command_reactor_error",
                level=logging.ERROR,
                command=invocation.name,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None
        return str(result) if result else None

    def extract_command(self, message: ProtocolMessage) -> CommandInvocation | None:
        """Recognize ``PRIVMSG <target> :<prefix><name> [argument]``."""
        if message.command != "PRIVMSG":
            return None
        target, _, text = message.params.partition(" ")
        if text.startswith(":"):
            text = text[1:]
        if not target or not text.startswith(self.command_prefix):
            return None
        name, _, argument = text[len(self.command_prefix) :].partition(" ")
        if not name:
            return None
        return CommandInvocation(
            sender=message.nick,
            target=target,
            name=name,
            argument=argument.strip(),
        )

    def _find_command(self, name: str) -> CommandReactor | None:
        for entry in reversed(self._entries):
            if isinstance(entry, CommandReactor) and entry.name == name:
                return entry
        return None


def _describe(callback: Callable[..., object]) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)
