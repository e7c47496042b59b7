"""Small data-processing recipes built on plain iteration.

They cover three jobs: filtering and transforming numbers and words,
pulling messages out of log lines, and writing a batch of lines to a sink.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Union

logger = logging.getLogger(__name__)

ERROR_PREFIX = "ERROR:"
_MESSAGE_OFFSET = len("ERROR: ")


class _Sink(Protocol):
    def write(self, data: bytes) -> object: ...


def double_evens(numbers: Iterable[int]) -> list[int]:
    """Keep the even numbers and double each one, preserving order."""
    return [n * 2 for n in numbers if n % 2 == 0]


def uppercase_long_words(words: Iterable[str]) -> list[str]:
    """Keep words longer than two characters, in upper case."""
    return [word.upper() for word in words if len(word) > 2]


def error_messages(entries: Iterable[str]) -> list[str]:
    """Return the message text of every entry that starts with ``ERROR:``.

    The prefix and the space after it are removed; an entry too short to
    hold a message is returned unchanged.
    """
    return [
        entry[_MESSAGE_OFFSET:] if len(entry) > _MESSAGE_OFFSET else entry
        for entry in entries
        if entry.startswith(ERROR_PREFIX)
    ]


def write_lines(sink: _Sink, lines: Iterable[Union[str, bytes]]) -> int:
    """Write each line to ``sink`` and return how many were written.

    A line whose write fails is logged and skipped; the rest are still written.
    """
    written = 0
    for number, line in enumerate(lines, start=1):
        data = line.encode("utf-8") if isinstance(line, str) else bytes(line)
        try:
            sink.write(data)
        except OSError as exc:
            logger.error("Error writing line %d: %s", number, exc)
            continue
        written += 1
    return written