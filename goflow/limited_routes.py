"""Three endpoints, each guarded by a different kind of limiter.

``/api`` uses a bursting rate limiter, ``/process`` a smooth one that
allows no bursts, and ``/db`` a concurrency limiter that caps simultaneous
operations.
"""

from __future__ import annotations

import time
from datetime import datetime
from http import HTTPStatus
from typing import Callable, Optional, Protocol

from goflow.webservice import Response

_TEXT = "text/plain; charset=utf-8"


class _RateLimiter(Protocol):
    def allow(self) -> bool: ...


class _ConcurrencyLimiter(Protocol):
    def acquire(self) -> bool: ...

    def release(self) -> None: ...


def _text(status: HTTPStatus, body: str) -> Response:
    return Response(int(status), body, _TEXT)


class LimitedRoutes:
    """Dispatch requests for ``/api``, ``/process`` and ``/db``."""

    def __init__(
        self,
        api_limiter: _RateLimiter,
        smooth_limiter: _RateLimiter,
        db_limiter: _ConcurrencyLimiter,
        db_delay: float = 0.1,
    ) -> None:
        self.api_limiter = api_limiter
        self.smooth_limiter = smooth_limiter
        self.db_limiter = db_limiter
        self.db_delay = db_delay
        self._routes: dict[str, Callable[[datetime], Response]] = {
            "/api": self._api,
            "/process": self._process,
            "/db": self._db,
        }

    @property
    def paths(self) -> list[str]:
        """The paths these routes answer."""
        return list(self._routes)

    def handle(self, path: str, now: Optional[datetime] = None) -> Response:
        """Answer a request for ``path``; ``now`` is the time reported in the body."""
        handler = self._routes.get(path)
        if handler is None:
            return _text(HTTPStatus.NOT_FOUND, "404 page not found\n")
        return handler(datetime.now() if now is None else now)

    def _api(self, now: datetime) -> Response:
        if not self.api_limiter.allow():
            return _text(HTTPStatus.TOO_MANY_REQUESTS, "Rate limited\n")
        return _text(HTTPStatus.OK, f"API request processed at {now}\n")

    def _process(self, now: datetime) -> Response:
        if not self.smooth_limiter.allow():
            return _text(HTTPStatus.TOO_MANY_REQUESTS, "Processing queue full\n")
        return _text(HTTPStatus.OK, f"Processing request at {now}\n")

    def _db(self, now: datetime) -> Response:
        if not self.db_limiter.acquire():
            return _text(HTTPStatus.SERVICE_UNAVAILABLE, "Too many DB operations\n")
        try:
            if self.db_delay > 0:
                time.sleep(self.db_delay)
            return _text(HTTPStatus.OK, f"Database query completed at {now}\n")
        finally:
            self.db_limiter.release()