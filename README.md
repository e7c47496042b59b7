# goflow

Small, dependency-free building blocks for concurrent Python services.
Python 3.10 or later; nothing beyond the standard library.

| Module | What it gives you |
| --- | --- |
| `goflow.errors` | A shared exception hierarchy and helpers that inspect an error's cause chain |
| `goflow.validation` | One-line checks for configuration values that raise a descriptive `ValidationError` |
| `goflow.mocks` | `MockClock` and `MockWriter`, thread-safe test doubles |
| `goflow.webservice` | A WSGI application combining rate limiting, concurrency limiting, a record pipeline and background task submission |
| `goflow.limited_routes` | `LimitedRoutes`: three endpoints, each behind a different kind of limiter |
| `goflow.recipes` | Small list-processing recipes and a fault-tolerant line writer |
| `goflow.tasks` | Sample background tasks and `submit_all` for bulk submission |

Install with the test extra to run the test suite:

```
pip install -e ".[test]"
pytest
```

## Errors

Every error defined here derives from `GoflowError`. The category classes
`ClosedError`, `OperationTimeoutError` (also a `TimeoutError`),
`CapacityExceededError`, `InvalidConfigurationError` (also a `ValueError`)
and `RateLimitedError` each carry a default message, for example
`str(ClosedError())` is `"resource is closed"`.

`ValidationError` is an `InvalidConfigurationError` that records the module,
field, value, reason and an optional hint. `OperationError` wraps an
underlying cause with the module and operation that failed, plus optional
context. Both `with_hint` and `with_context` set the extra detail and return
the same error, so they chain.

```python
from goflow.errors import (
    OperationError, OperationTimeoutError, ValidationError,
    error_chain, is_retryable, is_temporary, is_validation_error,
)

err = ValidationError("ratelimit", "burst", 0, "must be positive").with_hint(
    "use a value greater than 0"
)
str(err)
# 'ratelimit: invalid burst=0 (must be positive) - use a value greater than 0'

op = OperationError("channel", "Send", OSError("buffer full")).with_context(
    "exceeded capacity of 100"
)
str(op)
# 'channel.Send failed: buffer full (exceeded capacity of 100)'

timeout = OperationError("stream", "Write", OperationTimeoutError())
is_retryable(timeout)          # True  (timeouts and rate limiting)
is_temporary(timeout)          # True  (timeouts and exceeded capacity)
is_validation_error(timeout)   # False
list(error_chain(timeout))     # [the OperationError, the OperationTimeoutError]
```

`error_chain` yields an error and then each error it wraps: an
`OperationError`'s `cause`, otherwise `__cause__`. All three predicates
return `False` for `None`.

## Validation

Each validator returns the value when it is valid and raises
`ValidationError` otherwise.

```python
from goflow.validation import validate_positive, validate_not_empty

workers = validate_positive("workerpool", "workers", 4)   # 4
validate_positive("ratelimit", "burst", -5)
# ValidationError: ratelimit: invalid burst=-5 (must be positive) - value must be greater than 0

validate_not_empty("config", "key", "")
# ValidationError: config: invalid key= (cannot be empty) - provide a non-empty key
```

Also available: `validate_non_negative` (zero allowed),
`validate_positive_float` and `validate_not_none`. `validate_not_empty`
treats whitespace as content.

## Test doubles

```python
from datetime import datetime, timedelta
from goflow.mocks import MockClock, MockWriter

clock = MockClock(datetime(2024, 1, 1))
clock.advance(1.5)                  # seconds or a timedelta
clock.now()                         # 2024-01-01 00:00:01.500000

sink = MockWriter()
sink.write(b"abc")                  # 3
sink.getvalue(), len(sink), str(sink), sink.write_count()
# (b'abc', 3, 'abc', 1)

sink.set_error_on_nth(2)            # the 2nd write raises OSError("simulated error")
sink.set_write_delay(0.01)          # sleep in every write
sink.set_always_error(OSError("disk full"))
sink.reset()                        # clear data, count and configured behaviour
```

Every call to `MockWriter.write` is counted, including those that fail.

## Web service

`WebService` is a WSGI callable. It takes two rate limiters (objects with
`allow()` and `tokens()`), two concurrency limiters (`acquire()`,
`release()`, `available()`) and a worker pool (`submit(task)`, `size()`,
`queue_size()`), and answers:

| Path | Guard | Behaviour |
| --- | --- | --- |
| `/api/users` | API rate limiter | GET lists users, POST creates one, else 405 |
| `/api/data` | API rate limiter | POST runs a sample record through the pipeline |
| `/api/upload` | upload rate limiter | POST simulates an upload |
| `/api/db/users` | DB concurrency limiter | simulated query |
| `/api/process` | CPU concurrency limiter | simulated CPU work |
| `/api/tasks` | none | POST submits a background task to the pool |
| `/health` | none | JSON report of workers and limiters |

A refused rate limiter answers 429, a refused concurrency limiter 503, an
unknown path 404. `route(method, path)` returns a `Response` (status, body,
content type) without going through WSGI.

The pipeline functions are usable on their own: `process_record(data)` runs
`validate_record`, `enrich_record`, `transform_record` and `persist_record`
in order, each returning a new dict; `validate_record` raises `ValueError`
when `id` is missing, and `transform_record` sets `user_tier` from
`get_user_tier` (below 100 `premium`, below 1000 `standard`, else `basic`).
`with_rate_limit`, `with_concurrency_limit`, `handle_users` and
`health_payload` are public too.

```python
from goflow.webservice import WebService, process_record

record = process_record({"id": 50})
record["user_tier"], record["country"]   # ('premium', 'US')

service = WebService(api, upload, db, cpu, pool)
service.route("GET", "/api/users").status   # 200, or 429 when api.allow() is False
```

## Limited routes

`LimitedRoutes(api_limiter, smooth_limiter, db_limiter, db_delay=0.1)`
answers `/api`, `/process` and `/db` through `handle(path, now=None)`,
returning a plain-text `Response`: 429 when a rate limiter refuses, 503 when
the concurrency limiter has no free slot (the slot is always released
afterwards), 404 for any other path.

## Recipes and tasks

```python
from goflow.recipes import double_evens, uppercase_long_words, error_messages, write_lines
from goflow.tasks import make_square_task, make_failing_task, submit_all

double_evens(range(1, 11))                            # [4, 8, 12, 16, 20]
uppercase_long_words(["hello", "go", "world"])        # ['HELLO', 'WORLD']
error_messages(["ERROR: Invalid input", "INFO: ok"])  # ['Invalid input']
write_lines(sink, ["a\n", "b\n"])                     # 2; failed writes are logged and skipped

make_square_task(3, log=print)()                      # prints the calculation, returns 9
submit_all(pool.submit, [make_square_task(1), make_failing_task()])
# list of (position, exception) for each task the pool refused
```

`make_sleep_task(task_id, duration=None)` sleeps for the given seconds, or a
random 0.5–1.5 s when none is given.

## What this package does not include

goflow does not ship rate limiters, concurrency limiters, worker pools,
schedulers or streams of its own: `WebService`, `LimitedRoutes` and
`submit_all` work with any objects that provide the methods listed above.
There is no command-line program and no built-in HTTP server; serve
`WebService` with any WSGI server. There are no polling or waiting helpers
for tests beyond the doubles in `goflow.mocks`.