"""Argument-list matchers.

A matcher decides whether the ``(args, kwargs)`` of a call is accepted by
an expectation or a stub. Records without a matcher accept every call.

Usage:
    from mockspace.matchers import ANY, ArgumentListMatcher, instance_of

    ArgumentListMatcher(1, ANY, key=instance_of(str))
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ArgumentMatcher(Protocol):
    """Protocol for argument-list predicates."""

    def matches(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> bool:
        """Return True if the call arguments are accepted."""
        ...


class _Anything:
    """Single-argument wildcard; equal to every value."""

    def __eq__(self, other: object) -> bool:
        return True

    def __ne__(self, other: object) -> bool:
        return False

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return "ANY"


ANY = _Anything()


class InstanceOf:
    """Single-argument matcher equal to any instance of the given types."""

    def __init__(self, *types: type) -> None:
        self.types = types

    def __eq__(self, other: object) -> bool:
        return isinstance(other, self.types)

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        names = ", ".join(t.__name__ for t in self.types)
        return f"instance_of({names})"


def instance_of(*types: type) -> InstanceOf:
    return InstanceOf(*types)


class ArgumentListMatcher:
    """Matches calls whose arguments equal the expected ones.

    Expected values are compared with ``expected == actual`` so that
    wildcards such as ``ANY`` and ``instance_of`` decide the comparison.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.args = args
        self.kwargs = kwargs

    def matches(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> bool:
        if len(args) != len(self.args) or kwargs.keys() != self.kwargs.keys():
            return False
        if not all(expected == actual for expected, actual in zip(self.args, args)):
            return False
        return all(self.kwargs[key] == kwargs[key] for key in self.kwargs)

    def __repr__(self) -> str:
        parts = [repr(arg) for arg in self.args]
        parts.extend(f"{key}={value!r}" for key, value in self.kwargs.items())
        return f"with_args({', '.join(parts)})"


class AnyArgs:
    """Accepts every argument list."""

    def matches(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> bool:
        return True

    def __repr__(self) -> str:
        return "any_args"


def any_args() -> AnyArgs:
    return AnyArgs()


class PredicateMatcher:
    """Wraps a plain callable; the call's arguments are passed to it unchanged."""

    def __init__(self, fn: Callable[..., Any]) -> None:
        self.fn = fn

    def matches(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> bool:
        return bool(self.fn(*args, **kwargs))

    def __repr__(self) -> str:
        return f"predicate({getattr(self.fn, '__name__', self.fn)!r})"


def predicate(fn: Callable[..., Any]) -> PredicateMatcher:
    return PredicateMatcher(fn)


def as_matcher(matcher: ArgumentMatcher | Callable[..., Any] | None) -> ArgumentMatcher | None:
    """Coerce a plain callable into a matcher; matchers and None pass through."""
    if matcher is None or isinstance(matcher, ArgumentMatcher):
        return matcher
    if callable(matcher):
        return PredicateMatcher(matcher)
    raise TypeError(f"Expected an ArgumentMatcher or callable, got {type(matcher).__name__}")
