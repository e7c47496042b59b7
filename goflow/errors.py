"""Error types shared across the goflow library.

Every error raised by the library derives from :class:`GoflowError`.  The
category classes (closed, timeout, capacity, configuration, rate limiting)
play the role of sentinel errors: code can catch them directly, or ask the
helper predicates whether anywhere in an error's cause chain such a
condition occurred.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional


class GoflowError(Exception):
    """Base class for all errors raised by goflow."""

    default_message = "goflow error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(self.default_message if message is None else message)


class ClosedError(GoflowError):
    """An operation was attempted on a closed resource."""

    default_message = "resource is closed"


class OperationTimeoutError(GoflowError, TimeoutError):
    """An operation timed out."""

    default_message = "operation timed out"


class CapacityExceededError(GoflowError):
    """A capacity limit was exceeded."""

    default_message = "capacity exceeded"


class InvalidConfigurationError(GoflowError, ValueError):
    """Configuration parameters are invalid."""

    default_message = "invalid configuration"


class RateLimitedError(GoflowError):
    """A request was rate limited."""

    default_message = "rate limited"


class ValidationError(InvalidConfigurationError):
    """A configuration value failed validation, with details on how to fix it."""

    def __init__(
        self,
        module: str,
        field: str,
        value: Any,
        reason: str,
        hint: str = "",
    ) -> None:
        self.module = module
        self.field = field
        self.value = value
        self.reason = reason
        self.hint = hint
        super().__init__(str(self))

    def with_hint(self, hint: str) -> "ValidationError":
        """Attach a suggestion for fixing the problem and return this error."""
        self.hint = hint
        self.args = (str(self),)
        return self

    def __str__(self) -> str:
        message = f"{self.module}: invalid {self.field}={self.value} ({self.reason})"
        if self.hint:
            return f"{message} - {self.hint}"
        return message


class OperationError(GoflowError):
    """A library operation failed; wraps the underlying cause."""

    def __init__(
        self,
        module: str = "",
        operation: str = "",
        cause: Optional[BaseException] = None,
        context: str = "",
    ) -> None:
        self.module = module
        self.operation = operation
        self.cause = cause
        self.context = context
        super().__init__(str(self))
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, context: str) -> "OperationError":
        """Attach additional context about the failure and return this error."""
        self.context = context
        self.args = (str(self),)
        return self

    def __str__(self) -> str:
        message = f"{self.module}.{self.operation} failed: {self.cause}"
        if self.context:
            return f"{message} ({self.context})"
        return message


def error_chain(err: Optional[BaseException]) -> Iterator[BaseException]:
    """Yield ``err`` followed by each error it wraps, outermost first."""
    seen: set[int] = set()
    current = err
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        if isinstance(current, OperationError):
            current = current.cause
        else:
            current = current.__cause__


def _chain_has(err: Optional[BaseException], *kinds: type) -> bool:
    return any(isinstance(e, kinds) for e in error_chain(err))


def is_retryable(err: Optional[BaseException]) -> bool:
    """Report whether retrying the operation might succeed."""
    return _chain_has(err, OperationTimeoutError, RateLimitedError)


def is_temporary(err: Optional[BaseException]) -> bool:
    """Report whether the error describes a temporary condition."""
    return _chain_has(err, OperationTimeoutError, CapacityExceededError)


def is_validation_error(err: Optional[BaseException]) -> bool:
    """Report whether the error is, or wraps, a :class:`ValidationError`."""
    return _chain_has(err, ValidationError)