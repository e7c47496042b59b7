"""Reusable validation of configuration parameters.

Each validator returns the value it was given when it is valid, so it can be
used inline, and raises :class:`~goflow.errors.ValidationError` otherwise.
"""

from __future__ import annotations

from typing import Any, TypeVar

from goflow.errors import ValidationError

T = TypeVar("T")


def validate_positive(module: str, field: str, value: int) -> int:
    """Require an integer greater than zero."""
    if value <= 0:
        raise ValidationError(module, field, value, "must be positive").with_hint(
            "value must be greater than 0"
        )
    return value


def validate_non_negative(module: str, field: str, value: float) -> float:
    """Require a number that is zero or greater."""
    if value < 0:
        raise ValidationError(module, field, value, "cannot be negative").with_hint(
            "use 0 or a positive value"
        )
    return value


def validate_positive_float(module: str, field: str, value: float) -> float:
    """Require a number greater than zero."""
    if value <= 0:
        raise ValidationError(module, field, value, "must be positive").with_hint(
            "value must be greater than 0"
        )
    return value


def validate_not_none(module: str, field: str, value: T) -> T:
    """Require a value other than ``None``."""
    if value is None:
        raise ValidationError(module, field, None, "cannot be None").with_hint(
            "provide a valid " + field
        )
    return value


def validate_not_empty(module: str, field: str, value: str) -> str:
    """Require a non-empty string; whitespace counts as content."""
    if value == "":
        raise ValidationError(module, field, value, "cannot be empty").with_hint(
            "provide a non-empty " + field
        )
    return value


__all__: list[Any] = [
    "validate_positive",
    "validate_non_negative",
    "validate_positive_float",
    "validate_not_none",
    "validate_not_empty",
]