"""IRC message parsing utilities."""

from __future__ import annotations

import re
from dataclasses import dataclass

# [:prefix ]command params -- command is a word or a three digit numeric.
_MESSAGE_PATTERN = re.compile(
    r"^(?:(?P<prefix>:\S+)\s+)?(?P<command>[A-Za-z]+|\d{3})\s+(?P<params>.*?)\r?$"
)


@dataclass(frozen=True, slots=True)
class ProtocolMessage:
    raw: str
    prefix: str
    command: str
    params: str

    @property
    def nick(self) -> str:
        """Nick portion of a ``:nick!user@host`` prefix (empty without prefix)."""
        return self.prefix.lstrip(":").split("!", 1)[0]


def parse_irc_message(raw_line: str) -> ProtocolMessage | None:
    """Parse one protocol line.

    Returns None when the line does not have a prefix/command/params shape;
    the caller is expected to log the raw line and carry on. ``params`` is
    returned as-is, including any ``:`` that starts a trailing argument.
    """
    match = _MESSAGE_PATTERN.match(raw_line)
    if match is None:
        return None
    return ProtocolMessage(
        raw=raw_line,
        prefix=match.group("prefix") or "",
        command=match.group("command"),
        params=match.group("params"),
    )
