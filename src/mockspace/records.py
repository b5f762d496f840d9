"""Expectation and stub records, and the handles tests configure them through.

Records hold the state an interceptor matches calls against. Handles are
what the public API returns, so a test can keep refining a record after
registering it:

    expect(repo, "save").with_args(user).and_return(True).twice()
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from mockspace.exceptions import MockConfigurationError
from mockspace.matchers import ArgumentListMatcher, ArgumentMatcher, as_matcher
from mockspace.models import CountRange, ExpectationFailure
from mockspace.returns import ComputedReturn, FixedReturn, RaisingReturn, ReturnPolicy, returning


@dataclass(eq=False)
class MethodStub:
    """Canned behavior for a message, with no call-count requirement."""

    method_name: str
    matcher: ArgumentMatcher | None = None
    return_policy: ReturnPolicy = field(default_factory=FixedReturn)
    observed_count: int = 0

    def matches(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> bool:
        return self.matcher is None or self.matcher.matches(args, kwargs)

    def invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        self.observed_count += 1
        return self.return_policy.evaluate(args, kwargs)


@dataclass(eq=False)
class MessageExpectation:
    """A requirement that a message arrives within a count range.

    ``observed_count`` only counts calls delivered to this expectation.
    ``excess_count`` counts matching calls that arrived after the range
    maximum was reached; they are reported at verify time.
    """

    method_name: str
    matcher: ArgumentMatcher | None = None
    count_range: CountRange = field(default_factory=CountRange)
    return_policy: ReturnPolicy = field(default_factory=FixedReturn)
    origin: str | None = None
    observed_count: int = 0
    excess_count: int = 0

    @property
    def is_negative(self) -> bool:
        return self.count_range.is_negative

    @property
    def actual_count(self) -> int:
        return self.observed_count + self.excess_count

    @property
    def is_satisfied(self) -> bool:
        return self.count_range.contains(self.actual_count)

    def matches(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> bool:
        return self.matcher is None or self.matcher.matches(args, kwargs)

    def can_accept(self) -> bool:
        return self.count_range.allows_another(self.observed_count)

    def invoke(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        self.observed_count += 1
        return self.return_policy.evaluate(args, kwargs)

    def failure(self) -> ExpectationFailure:
        return ExpectationFailure(
            method_name=self.method_name,
            expected=self.count_range,
            observed_count=self.actual_count,
            origin=self.origin,
        )


class StubHandle:
    """Fluent configuration for a registered stub."""

    def __init__(self, record: MethodStub) -> None:
        self._record = record

    @property
    def record(self) -> MethodStub:
        return self._record

    def with_args(self, *args: Any, **kwargs: Any) -> "StubHandle":
        """Only accept calls with exactly these arguments."""
        self._record.matcher = ArgumentListMatcher(*args, **kwargs)
        return self

    def with_matcher(self, matcher: ArgumentMatcher | Callable[..., Any]) -> "StubHandle":
        """Only accept calls the matcher (or predicate callable) accepts."""
        self._record.matcher = as_matcher(matcher)
        return self

    def and_return(self, *values: Any) -> "StubHandle":
        """Return ``values`` one per call; the last one repeats."""
        self._record.return_policy = returning(*values)
        return self

    def and_call(self, fn: Callable[..., Any]) -> "StubHandle":
        """Compute the result by calling ``fn`` with the call's arguments."""
        self._record.return_policy = ComputedReturn(fn)
        return self

    def and_raise(self, exception: BaseException | type[BaseException]) -> "StubHandle":
        self._record.return_policy = RaisingReturn(exception)
        return self


class ExpectationHandle(StubHandle):
    """Fluent configuration for a registered expectation.

    Adds count constraints on top of the stub configuration. The count
    methods replace the range; the default is exactly once.
    """

    _record: MessageExpectation

    def __init__(self, record: MessageExpectation) -> None:
        super().__init__(record)  # type: ignore[arg-type]

    @property
    def record(self) -> MessageExpectation:  # type: ignore[override]
        return self._record

    def _set_range(self, factory: Callable[..., CountRange], *bounds: int) -> "ExpectationHandle":
        try:
            self._record.count_range = factory(*bounds)
        except ValidationError as exc:
            raise MockConfigurationError(
                f"Invalid call count {bounds} for :{self._record.method_name}: "
                f"{exc.errors()[0]['msg']}"
            ) from exc
        return self

    def exactly(self, count: int) -> "ExpectationHandle":
        return self._set_range(CountRange.exactly, count)

    times = exactly

    def once(self) -> "ExpectationHandle":
        return self.exactly(1)

    def twice(self) -> "ExpectationHandle":
        return self.exactly(2)

    def at_least(self, count: int) -> "ExpectationHandle":
        return self._set_range(CountRange.at_least, count)

    def at_most(self, count: int) -> "ExpectationHandle":
        return self._set_range(CountRange.at_most, count)

    def between(self, minimum: int, maximum: int) -> "ExpectationHandle":
        return self._set_range(CountRange.between, minimum, maximum)

    def any_number_of_times(self) -> "ExpectationHandle":
        return self.at_least(0)

    def never(self) -> "ExpectationHandle":
        """Turn this into a negative expectation."""
        return self._set_range(CountRange.never)
