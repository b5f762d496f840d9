"""Return policies for expectations and stubs.

A return policy decides what an intercepted call evaluates to once an
expectation or stub has accepted it.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


class _NotSet:
    def __repr__(self) -> str:
        return "NOT_SET"

    def __bool__(self) -> bool:
        return False


# Distinguishes "no return value given" from an explicit None.
NOT_SET: Any = _NotSet()


@runtime_checkable
class ReturnPolicy(Protocol):
    """Protocol for producing the result of an accepted call."""

    def evaluate(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        ...


class FixedReturn:
    """Always returns the same value."""

    def __init__(self, value: Any = None) -> None:
        self.value = value

    def evaluate(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"FixedReturn({self.value!r})"


class ComputedReturn:
    """Calls ``fn`` with the call's arguments each time."""

    def __init__(self, fn: Callable[..., Any]) -> None:
        self.fn = fn

    def evaluate(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        return self.fn(*args, **kwargs)


class QueuedReturn:
    """Returns values one per call; the last value sticks once exhausted."""

    def __init__(self, values: list[Any]) -> None:
        if not values:
            raise ValueError("QueuedReturn needs at least one value")
        self.values = list(values)
        self._position = 0

    def evaluate(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        value = self.values[self._position]
        if self._position < len(self.values) - 1:
            self._position += 1
        return value

    @property
    def remaining(self) -> int:
        return len(self.values) - self._position - 1


class RaisingReturn:
    """Raises the configured exception (instance or class) at the call site."""

    def __init__(self, exception: BaseException | type[BaseException]) -> None:
        self.exception = exception

    def evaluate(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        raise self.exception


def returning(*values: Any) -> ReturnPolicy:
    """Build the policy for ``and_return(*values)``."""
    if len(values) > 1:
        return QueuedReturn(list(values))
    return FixedReturn(values[0] if values else None)
