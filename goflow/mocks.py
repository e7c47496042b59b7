"""Controllable stand-ins for a clock and a byte sink, for use in tests."""

from __future__ import annotations

import threading
import time
from datetime import datetime, timedelta
from typing import Optional, Union

Delta = Union[timedelta, float, int]


def _as_timedelta(delta: Delta) -> timedelta:
    if isinstance(delta, timedelta):
        return delta
    return timedelta(seconds=delta)


class MockClock:
    """A clock that only moves when told to."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self._lock = threading.Lock()
        self._now = datetime.now() if start is None else start

    def now(self) -> datetime:
        """Return the current mock time."""
        with self._lock:
            return self._now

    def advance(self, delta: Delta) -> None:
        """Move the clock forward by a timedelta or a number of seconds."""
        step = _as_timedelta(delta)
        with self._lock:
            self._now += step

    def set(self, moment: datetime) -> None:
        """Set the clock to a specific moment."""
        with self._lock:
            self._now = moment


class MockWriter:
    """A thread-safe in-memory writer that can be made slow or failing."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._buffer = bytearray()
        self._write_delay = 0.0
        self._error_on_nth = 0
        self._write_count = 0
        self._error: Optional[BaseException] = None

    def write(self, data: bytes) -> int:
        """Append ``data`` and return the number of bytes written.

        Every call is counted, including ones that fail.
        """
        with self._lock:
            self._write_count += 1
            if self._write_delay > 0:
                time.sleep(self._write_delay)
            if self._error is not None:
                raise self._error
            if self._error_on_nth > 0 and self._write_count == self._error_on_nth:
                raise OSError("simulated error")
            chunk = bytes(data)
            self._buffer.extend(chunk)
            return len(chunk)

    def getvalue(self) -> bytes:
        """Return everything written so far."""
        with self._lock:
            return bytes(self._buffer)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def __str__(self) -> str:
        return self.getvalue().decode("utf-8", errors="replace")

    def write_count(self) -> int:
        """Return how many times :meth:`write` was called."""
        with self._lock:
            return self._write_count

    def set_write_delay(self, delay: Delta) -> None:
        """Sleep this long (seconds or timedelta) in every write."""
        seconds = _as_timedelta(delay).total_seconds()
        with self._lock:
            self._write_delay = seconds

    def set_error_on_nth(self, n: int) -> None:
        """Make the ``n``-th write call fail with :class:`OSError`."""
        with self._lock:
            self._error_on_nth = n

    def set_always_error(self, error: BaseException) -> None:
        """Make every write raise ``error``."""
        with self._lock:
            self._error = error

    def reset(self) -> None:
        """Clear the buffer, the call count and all configured behaviour."""
        with self._lock:
            self._buffer.clear()
            self._write_count = 0
            self._error = None
            self._error_on_nth = 0
            self._write_delay = 0.0