"""Tests for return policies."""

import pytest

from mockspace.returns import (
    NOT_SET,
    ComputedReturn,
    FixedReturn,
    QueuedReturn,
    RaisingReturn,
    ReturnPolicy,
    returning,
)


def test_fixed_return() -> None:
    policy = FixedReturn("value")
    assert policy.evaluate((), {}) == "value"
    assert policy.evaluate((1,), {"x": 2}) == "value"


def test_fixed_return_defaults_to_none() -> None:
    assert FixedReturn().evaluate((), {}) is None


def test_computed_return_gets_call_arguments() -> None:
    policy = ComputedReturn(lambda a, b=0: a + b)
    assert policy.evaluate((1,), {"b": 2}) == 3
    assert policy.evaluate((5,), {}) == 5


def test_queued_return_last_value_sticks() -> None:
    policy = QueuedReturn([1, 2, 3])
    results = [policy.evaluate((), {}) for _ in range(5)]
    assert results == [1, 2, 3, 3, 3]
    assert policy.remaining == 0


def test_queued_return_needs_values() -> None:
    with pytest.raises(ValueError, match="at least one value"):
        QueuedReturn([])


def test_raising_return() -> None:
    policy = RaisingReturn(KeyError("missing"))
    with pytest.raises(KeyError, match="missing"):
        policy.evaluate((), {})


def test_raising_return_accepts_exception_class() -> None:
    with pytest.raises(TimeoutError):
        RaisingReturn(TimeoutError).evaluate((), {})


def test_returning_chooses_policy() -> None:
    assert isinstance(returning(), FixedReturn)
    assert returning().evaluate((), {}) is None
    assert isinstance(returning(1), FixedReturn)
    assert isinstance(returning(1, 2), QueuedReturn)


def test_policies_satisfy_protocol() -> None:
    assert isinstance(FixedReturn(), ReturnPolicy)
    assert isinstance(ComputedReturn(len), ReturnPolicy)
    assert isinstance(QueuedReturn([1]), ReturnPolicy)
    assert isinstance(RaisingReturn(ValueError), ReturnPolicy)


def test_not_set_is_falsy_sentinel() -> None:
    assert not NOT_SET
    assert NOT_SET is not None
