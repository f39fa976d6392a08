"""Built-in chat commands and the startup registration hook."""

from __future__ import annotations

from collections.abc import Callable

from .irc.callbacks import CallbackRegistry, CommandInvocation, CommandReactor

_FIXED_REPLIES: dict[str, str] = {
    "help": "Prefix commands with a '{prefix}' and try '{prefix}cmds'",
    "about": "I'm a small line-oriented IRC bot, written as a learning experience.",
    "botsnack": ":)",
    "status": "Status: 418 I'm a teapot",
}


def _fixed(reply: str) -> Callable[[CommandInvocation], str]:
    def reactor(_invocation: CommandInvocation) -> str:
        return reply

    return reactor


def insult(invocation: CommandInvocation) -> str | None:
    if not invocation.argument:
        return None
    return f"{invocation.argument} thinks a netsplit is a gymnastics move."


def compliment(invocation: CommandInvocation) -> str | None:
    if not invocation.argument:
        return None
    return f"{invocation.argument} is best friends with the bot."


def _source(url: str) -> Callable[[CommandInvocation], str]:
    reply = f"Source: {url}" if url else "No source link configured"

    def reactor(_invocation: CommandInvocation) -> str:
        return reply

    return reactor


def _list_commands(registry: CallbackRegistry) -> Callable[[CommandInvocation], str]:
    def reactor(_invocation: CommandInvocation) -> str:
        names = sorted(
            {e.name for e in registry.entries if isinstance(e, CommandReactor)}
        )
        return "Commands: " + ", ".join(f"{registry.command_prefix}{n}" for n in names)

    return reactor


def register_callbacks(registry: CallbackRegistry, source_url: str = "") -> None:
    """Register the built-in commands; called once per process at startup."""
    prefix = registry.command_prefix
    for name, reply in _FIXED_REPLIES.items():
        registry.register_command(name, _fixed(reply.format(prefix=prefix)))
    registry.register_command("insult", insult)
    registry.register_command("compliment", compliment)
    registry.register_command("src", _source(source_url))
    registry.register_command("cmds", _list_commands(registry))
