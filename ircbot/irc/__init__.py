"""IRC subsystem package.

Contains the parser, transport, writer facade, callback registry, reader task
and the session event loop.
"""

from .callbacks import (  # noqa: F401
    CallbackRegistry,
    CommandInvocation,
    CommandReactor,
    RawReactor,
    ping_reactor,
)
from .client import IRCClient  # noqa: F401
from .connection import IRCConnection, LineReader, LineWriter  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .listener import IRCListener  # noqa: F401
from .models import Event, Output, Quit, Received, SessionState  # noqa: F401
from .parser import ProtocolMessage, parse_irc_message  # noqa: F401
from .writer import IRCWriter  # noqa: F401

__all__ = [
    "CallbackRegistry",
    "CommandInvocation",
    "CommandReactor",
    "Event",
    "IRCClient",
    "IRCConnection",
    "IRCDispatcher",
    "IRCListener",
    "IRCWriter",
    "LineReader",
    "LineWriter",
    "Output",
    "ProtocolMessage",
    "Quit",
    "RawReactor",
    "Received",
    "SessionState",
    "parse_irc_message",
    "ping_reactor",
]
