from __future__ import annotations

import pytest

from passgen.history import DEFAULT_CAPACITY, SessionHistory


def test_most_recent_first():
    h = SessionHistory()
    for pw in ("first", "second", "third"):
        h.push(pw)
    assert list(h) == ["third", "second", "first"]
    assert h.latest() == "third"


def test_bounded():
    h = SessionHistory()
    for i in range(DEFAULT_CAPACITY + 5):
        h.push(f"pw{i}")
    assert len(h) == DEFAULT_CAPACITY
    assert h.snapshot()[0] == f"pw{DEFAULT_CAPACITY + 4}"
    assert "pw0" not in h.snapshot()


def test_clear():
    h = SessionHistory(capacity=3)
    h.push("x")
    h.clear()
    assert len(h) == 0
    assert h.latest() is None


def test_repr_hides_entries():
    h = SessionHistory()
    h.push("hunter2hunter2")
    assert "hunter2" not in repr(h)


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        SessionHistory(capacity=0)
