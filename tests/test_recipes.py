import pytest

from goflow.mocks import MockWriter
from goflow.recipes import (
    double_evens,
    error_messages,
    uppercase_long_words,
    write_lines,
)

LOG_ENTRIES = [
    "INFO: User login successful",
    "ERROR: Database connection failed",
    "WARN: High memory usage",
    "INFO: Request processed",
    "ERROR: Invalid input",
    "DEBUG: Cache hit",
]


def test_double_evens_keeps_order_and_count():
    numbers = list(range(1, 11))
    result = double_evens(numbers)
    evens = [n for n in numbers if n % 2 == 0]
    assert len(result) == len(evens)
    assert all(r % 4 == 0 for r in result)
    assert result == sorted(result)
    assert [r // 2 for r in result] == evens


def test_double_evens_empty_and_all_odd():
    assert double_evens([]) == []
    assert double_evens([1, 3, 5]) == []


def test_double_evens_accepts_generator():
    assert double_evens(n for n in [2]) == [4]


def test_uppercase_long_words():
    words = ["hello", "world", "go", "streaming", "example"]
    result = uppercase_long_words(words)
    assert "GO" not in result
    assert result == [w.upper() for w in words if w != "go"]
    assert all(w.isupper() for w in result)


def test_uppercase_long_words_boundary():
    assert uppercase_long_words(["ab", "abc"]) == ["ABC"]


def test_error_messages_from_log():
    result = error_messages(LOG_ENTRIES)
    assert result == ["Database connection failed", "Invalid input"]


def test_error_messages_short_entry_unchanged():
    assert error_messages(["ERROR: ", "ERROR:x"]) == ["ERROR: ", "ERROR:x"]


def test_error_messages_ignores_other_levels():
    assert error_messages(["INFO: ERROR: nested", "error: lower"]) == []


def test_write_lines_writes_everything():
    sink = MockWriter()
    lines = ["one\n", b"two\n", "three\n"]
    assert write_lines(sink, lines) == len(lines)
    assert str(sink) == "one\ntwo\nthree\n"
    assert sink.write_count() == len(lines)


def test_write_lines_skips_failed_line():
    sink = MockWriter()
    sink.set_error_on_nth(2)
    written = write_lines(sink, ["a", "b", "c"])
    assert written == 2
    assert sink.getvalue() == b"ac"
    assert sink.write_count() == 3


@pytest.mark.parametrize("count", [0, 1, 5])
def test_write_lines_with_always_failing_sink(count):
    sink = MockWriter()
    sink.set_always_error(OSError("disk full"))
    assert write_lines(sink, ["x"] * count) == 0
    assert len(sink) == 0
    assert sink.write_count() == count