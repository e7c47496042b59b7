"""A small web service that puts goflow's building blocks together.

Rate limiters guard the API routes, concurrency limiters protect scarce
resources, a worker pool takes background tasks and a four-stage pipeline
validates, enriches, transforms and persists incoming records.  The
service is a plain WSGI application. Its collaborators are duck-typed, so
any object with the right methods will do:

* rate limiters: ``allow()``, ``tokens()``
* concurrency limiters: ``acquire()``, ``release()``, ``available()``
* worker pool: ``submit(task)``, ``size()``, ``queue_size()``
"""

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Callable, Iterable, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

Record = dict[str, Any]
Stage = Callable[[Record], Record]
Handler = Callable[[str], "Response"]

METHOD_NOT_ALLOWED = "Method not allowed"


class _RateLimiter(Protocol):
    def allow(self) -> bool: ...

    def tokens(self) -> float: ...


class _ConcurrencyLimiter(Protocol):
    def acquire(self) -> bool: ...

    def release(self) -> None: ...

    def available(self) -> int: ...


class _WorkerPool(Protocol):
    def submit(self, task: Callable[..., Any]) -> Any: ...

    def size(self) -> int: ...

    def queue_size(self) -> int: ...


@dataclass(frozen=True)
class Response:
    """An HTTP response: status code, body and content type."""

    status: int
    body: str
    content_type: str = "application/json"

    @property
    def is_error(self) -> bool:
        return self.status >= 400


def _error(status: HTTPStatus, message: str) -> Response:
    return Response(int(status), message + "\n", "text/plain; charset=utf-8")


def _ok(body: str) -> Response:
    return Response(int(HTTPStatus.OK), body)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def get_user_tier(user_id: int) -> str:
    """Classify a user by id: below 100 premium, below 1000 standard, else basic."""
    if user_id < 100:
        return "premium"
    if user_id < 1000:
        return "standard"
    return "basic"


def validate_record(data: Record) -> Record:
    """Check that the record carries an ``id`` and mark it validated."""
    if data.get("id") is None:
        raise ValueError("missing required field: id")
    record = dict(data)
    record["validated"] = True
    record["validated_at"] = _now()
    return record


def enrich_record(data: Record) -> Record:
    """Add location details to the record."""
    record = dict(data)
    record["enriched"] = True
    record["country"] = "US"
    record["enriched_at"] = _now()
    return record


def transform_record(data: Record) -> Record:
    """Apply business rules, assigning a user tier when the id is numeric."""
    record = dict(data)
    user_id = record.get("id")
    if isinstance(user_id, (int, float)) and not isinstance(user_id, bool):
        record["user_tier"] = get_user_tier(int(user_id))
    record["transformed"] = True
    record["transformed_at"] = _now()
    return record


def persist_record(data: Record) -> Record:
    """Mark the record as stored."""
    record = dict(data)
    record["persisted"] = True
    record["persisted_at"] = _now()
    return record


DEFAULT_STAGES: tuple[Stage, ...] = (
    validate_record,
    enrich_record,
    transform_record,
    persist_record,
)


def process_record(data: Record, stages: Sequence[Stage] = DEFAULT_STAGES) -> Record:
    """Run ``data`` through each stage in order; the first failure propagates."""
    record = data
    for stage in stages:
        record = stage(record)
    return record


def with_rate_limit(limiter: _RateLimiter, handler: Handler) -> Handler:
    """Wrap a handler so it answers 429 once the limiter refuses."""

    def limited(method: str) -> Response:
        if not limiter.allow():
            return _error(HTTPStatus.TOO_MANY_REQUESTS, "Rate limit exceeded")
        return handler(method)

    return limited


def with_concurrency_limit(limiter: _ConcurrencyLimiter, handler: Handler) -> Handler:
    """Wrap a handler so it answers 503 when no slot is free."""

    def limited(method: str) -> Response:
        if not limiter.acquire():
            return _error(HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable")
        try:
            return handler(method)
        finally:
            limiter.release()

    return limited


def handle_users(method: str) -> Response:
    """List users on GET, create one on POST."""
    if method == "GET":
        return _ok('{"users": [{"id": 1, "name": "John"}, {"id": 2, "name": "Jane"}]}')
    if method == "POST":
        return _ok('{"message": "User created", "id": 123}')
    return _error(HTTPStatus.METHOD_NOT_ALLOWED, METHOD_NOT_ALLOWED)


def health_payload(
    workers: _WorkerPool,
    api_limiter: _RateLimiter,
    upload_limiter: _RateLimiter,
    db_limiter: _ConcurrencyLimiter,
    cpu_limiter: _ConcurrencyLimiter,
    timestamp: Optional[int] = None,
) -> dict[str, Any]:
    """Build the health report for the service's components."""
    return {
        "health": {
            "status": "healthy",
            "timestamp": int(time.time()) if timestamp is None else timestamp,
            "workers": {
                "size": workers.size(),
                "queue_size": workers.queue_size(),
            },
            "api_tokens": f"{api_limiter.tokens():.1f}",
            "upload_tokens": f"{upload_limiter.tokens():.1f}",
            "db_available": db_limiter.available(),
            "cpu_available": cpu_limiter.available(),
        }
    }


class WebService:
    """Routes requests to handlers protected by goflow limiters."""

    upload_delay = 0.1
    db_query_delay = 0.05
    cpu_work_delay = 0.2
    background_task_seconds = 1.0

    def __init__(
        self,
        api_limiter: _RateLimiter,
        upload_limiter: _RateLimiter,
        db_limiter: _ConcurrencyLimiter,
        cpu_limiter: _ConcurrencyLimiter,
        workers: _WorkerPool,
    ) -> None:
        self.api_limiter = api_limiter
        self.upload_limiter = upload_limiter
        self.db_limiter = db_limiter
        self.cpu_limiter = cpu_limiter
        self.workers = workers
        self.stages: Sequence[Stage] = DEFAULT_STAGES
        self._routes: dict[str, Handler] = {
            "/api/users": with_rate_limit(api_limiter, handle_users),
            "/api/data": with_rate_limit(api_limiter, self.handle_data_processing),
            "/api/upload": with_rate_limit(upload_limiter, self._handle_upload),
            "/api/db/users": with_concurrency_limit(db_limiter, self._handle_database_query),
            "/api/process": with_concurrency_limit(cpu_limiter, self._handle_cpu_intensive),
            "/api/tasks": self.handle_task_submission,
            "/health": self.handle_health,
        }

    @property
    def paths(self) -> list[str]:
        """The paths this service answers."""
        return list(self._routes)

    def route(self, method: str, path: str) -> Response:
        """Dispatch a request to the handler registered for ``path``."""
        handler = self._routes.get(path)
        if handler is None:
            return _error(HTTPStatus.NOT_FOUND, "404 page not found")
        return handler(method)

    def handle_data_processing(self, method: str) -> Response:
        """Run a sample record through the processing stages."""
        if method != "POST":
            return _error(HTTPStatus.METHOD_NOT_ALLOWED, METHOD_NOT_ALLOWED)
        record: Record = {
            "id": 123,
            "timestamp": int(time.time()),
            "action": "user_signup",
        }
        started = time.perf_counter()
        try:
            process_record(record, self.stages)
        except Exception as exc:
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, f"Processing failed: {exc}")
        duration = time.perf_counter() - started
        return _ok(
            json.dumps(
                {
                    "message": "Data processed successfully",
                    "stages": len(self.stages),
                    "duration": f"{duration:.6f}s",
                }
            )
        )

    def _background_task(self, cancel: Optional[threading.Event] = None) -> None:
        signal = cancel if cancel is not None else threading.Event()
        if signal.wait(self.background_task_seconds):
            raise InterruptedError("background task cancelled")
        logger.info("Background task completed")

    def handle_task_submission(self, method: str) -> Response:
        """Queue a background task on the worker pool."""
        if method != "POST":
            return _error(HTTPStatus.METHOD_NOT_ALLOWED, METHOD_NOT_ALLOWED)
        try:
            self.workers.submit(self._background_task)
        except Exception as exc:
            return _error(HTTPStatus.SERVICE_UNAVAILABLE, f"Failed to submit task: {exc}")
        return _ok('{"message": "Task submitted successfully"}')

    def handle_health(self, method: str) -> Response:
        """Report the state of workers and limiters as JSON."""
        payload = health_payload(
            self.workers,
            self.api_limiter,
            self.upload_limiter,
            self.db_limiter,
            self.cpu_limiter,
        )
        try:
            body = json.dumps(payload, sort_keys=True, separators=(",", ":"))
        except (TypeError, ValueError):
            logger.exception("Error encoding health response")
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error")
        return _ok(body)

    def _handle_upload(self, method: str) -> Response:
        if method != "POST":
            return _error(HTTPStatus.METHOD_NOT_ALLOWED, METHOD_NOT_ALLOWED)
        time.sleep(self.upload_delay)
        return _ok('{"message": "File uploaded successfully", "size": 1024}')

    def _handle_database_query(self, method: str) -> Response:
        time.sleep(self.db_query_delay)
        return _ok('{"data": [{"id": 1, "value": "result1"}, {"id": 2, "value": "result2"}]}')

    def _handle_cpu_intensive(self, method: str) -> Response:
        time.sleep(self.cpu_work_delay)
        return _ok('{"message": "Processing completed", "result": "processed_data"}')

    def __call__(
        self,
        environ: dict[str, Any],
        start_response: Callable[[str, list[tuple[str, str]]], Any],
    ) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET")
        path = environ.get("PATH_INFO", "/") or "/"
        response = self.route(method, path)
        body = response.body.encode("utf-8")
        status = HTTPStatus(response.status)
        headers = [
            ("Content-Type", response.content_type),
            ("Content-Length", str(len(body))),
        ]
        if response.is_error:
            headers.append(("X-Content-Type-Options", "nosniff"))
        start_response(f"{status.value} {status.phrase}", headers)
        return [body]