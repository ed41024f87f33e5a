"""Messages shown to the user by editor commands."""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import TextIO


class MessageType(IntEnum):
    ERROR = 0
    WARNING = 1
    INFORMATIONAL = 2


_PREFIXES = {
    MessageType.ERROR: "[ERR]",
    MessageType.WARNING: "[WARN]",
    MessageType.INFORMATIONAL: "[INFO]",
}


def show_message(
    text: str, message_type: MessageType, stream: TextIO | None = None
) -> None:
    """Show ``text`` as an error, warning or informational message.

    Errors and warnings go to stderr, informational messages to stdout,
    unless ``stream`` is given.
    """
    if stream is None:
        stream = sys.stdout if message_type is MessageType.INFORMATIONAL else sys.stderr
    print(f"{_PREFIXES[message_type]} {text}", file=stream)


__all__ = ["MessageType", "show_message"]
