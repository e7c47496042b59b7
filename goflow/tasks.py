"""Sample background tasks and a helper for submitting them in bulk.

Each task is a callable that accepts an optional context argument, as a
worker pool may pass one; the tasks here do not use it.
"""

from __future__ import annotations

import logging
import secrets
import time
from typing import Any, Callable, Iterable, Optional

logger = logging.getLogger(__name__)

Log = Callable[[str], Any]
Task = Callable[..., Any]

_FAILURE_MESSAGE = "simulated error"


def _format_duration(seconds: float) -> str:
    return f"{round(seconds * 1000)}ms"


def make_sleep_task(
    task_id: int,
    duration: Optional[float] = None,
    log: Log = print,
) -> Task:
    """Build a task that sleeps for ``duration`` seconds.

    Without a duration, each run picks a random one from 0.5 up to 1.5 seconds.
    """

    def task(_ctx: Any = None) -> None:
        seconds = duration if duration is not None else (secrets.randbelow(1000) + 500) / 1000
        log(f"Task {task_id}: working for {_format_duration(seconds)}")
        time.sleep(seconds)
        log(f"Task {task_id}: completed")

    return task


def make_square_task(task_id: int, log: Log = print) -> Task:
    """Build a task that squares its id, reports it and returns the result."""

    def task(_ctx: Any = None) -> int:
        result = task_id * task_id
        log(f"Calculation task {task_id}: {task_id}^2 = {result}")
        return result

    return task


def make_failing_task(log: Log = print) -> Task:
    """Build a task that always fails with :class:`RuntimeError`."""

    def task(_ctx: Any = None) -> None:
        error = RuntimeError(_FAILURE_MESSAGE)
        log("Error task: simulating failure")
        raise error

    return task


def submit_all(
    submit: Callable[[Task], Any],
    tasks: Iterable[Task],
) -> list[tuple[int, Exception]]:
    """Submit every task; return ``(position, error)`` for each one refused.

    Refusals are logged and do not stop the remaining submissions.
    """
    failures: list[tuple[int, Exception]] = []
    for position, task in enumerate(tasks):
        try:
            submit(task)
        except Exception as exc:
            logger.warning("Failed to submit task %d: %s", position, exc)
            failures.append((position, exc))
    return failures