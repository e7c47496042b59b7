import pytest

from goflow.errors import InvalidConfigurationError, ValidationError, is_validation_error
from goflow.validation import (
    validate_non_negative,
    validate_not_empty,
    validate_not_none,
    validate_positive,
    validate_positive_float,
)


@pytest.mark.parametrize("value", [10, 1, 1000000])
def test_validate_positive_accepts(value):
    assert validate_positive("test", "count", value) == value


@pytest.mark.parametrize("value", [0, -1, -1000000])
def test_validate_positive_rejects(value):
    with pytest.raises(ValidationError) as info:
        validate_positive("test", "count", value)
    assert is_validation_error(info.value)
    assert info.value.value == value


@pytest.mark.parametrize("value", [10.5, 0.0, 0.001, 99999.99])
def test_validate_non_negative_accepts(value):
    assert validate_non_negative("test", "rate", value) == value


@pytest.mark.parametrize("value", [-1.5, -0.001, -99999.99])
def test_validate_non_negative_rejects(value):
    with pytest.raises(ValidationError) as info:
        validate_non_negative("test", "rate", value)
    assert is_validation_error(info.value)


@pytest.mark.parametrize("value", [5.5, 10.0, 0.0001, 1e-10])
def test_validate_positive_float_accepts(value):
    assert validate_positive_float("test", "rate", value) == value


@pytest.mark.parametrize("value", [0.0, -2.5, -1e308])
def test_validate_positive_float_rejects(value):
    with pytest.raises(ValidationError) as info:
        validate_positive_float("test", "rate", value)
    assert is_validation_error(info.value)


@pytest.mark.parametrize("value", [123, "value", object(), [], {}, 0, False])
def test_validate_not_none_accepts(value):
    assert validate_not_none("test", "config", value) is value


def test_validate_not_none_rejects():
    with pytest.raises(ValidationError) as info:
        validate_not_none("test", "config", None)
    assert info.value.hint == "provide a valid config"
    assert info.value.value is None


@pytest.mark.parametrize("value", ["value", "a", " ", "this is a long value"])
def test_validate_not_empty_accepts(value):
    assert validate_not_empty("test", "name", value) == value


def test_validate_not_empty_rejects():
    with pytest.raises(ValidationError) as info:
        validate_not_empty("test", "name", "")
    assert is_validation_error(info.value)


def test_validate_positive_error_details():
    with pytest.raises(ValidationError) as info:
        validate_positive("ratelimit", "burst", -5)
    err = info.value
    assert err.module == "ratelimit"
    assert err.field == "burst"
    assert err.value == -5
    assert err.reason == "must be positive"
    assert err.hint == "value must be greater than 0"
    assert str(err) == (
        "ratelimit: invalid burst=-5 (must be positive) - value must be greater than 0"
    )


def test_validate_non_negative_error_details():
    with pytest.raises(ValidationError) as info:
        validate_non_negative("scheduler", "delay", -10.5)
    assert info.value.reason == "cannot be negative"
    assert info.value.hint == "use 0 or a positive value"


def test_validate_not_empty_error_details():
    with pytest.raises(ValidationError) as info:
        validate_not_empty("config", "key", "")
    assert info.value.reason == "cannot be empty"
    assert info.value.hint == "provide a non-empty key"


@pytest.mark.parametrize(
    "call",
    [
        lambda: validate_positive("test", "field", -1),
        lambda: validate_non_negative("test", "field", -1.0),
        lambda: validate_positive_float("test", "field", 0.0),
        lambda: validate_not_none("test", "field", None),
        lambda: validate_not_empty("test", "field", ""),
    ],
)
def test_errors_wrap_invalid_configuration(call):
    with pytest.raises(InvalidConfigurationError) as info:
        call()
    assert isinstance(info.value, ValidationError)
    assert is_validation_error(info.value)
    assert isinstance(info.value, ValueError)