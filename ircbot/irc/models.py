"""Shared IRC data models: session states and the event channel payloads."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class SessionState(Enum):
    CONNECTING = auto()
    IDENTIFYING = auto()
    ACTIVE = auto()
    DRAINING = auto()
    STOPPED = auto()


@dataclass(frozen=True, slots=True)
class Received:
    """A raw line read from the transport."""

    line: str


@dataclass(frozen=True, slots=True)
class Output:
    """A line to be written to the transport."""

    line: str


@dataclass(frozen=True, slots=True)
class Quit:
    """Request an orderly shutdown of the session.

    ``error`` is set by the reader task when the transport went away, so the
    dispatcher can tell a requested quit from a lost connection.
    """

    reason: str = "quit"
    error: Exception | None = None


Event = Received | Output | Quit
