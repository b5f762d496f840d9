"""Value types for mockspace.

These models describe call-count requirements, verify-time failures
and the history of messages a double has received. They are frozen
because they describe facts (a declared range, an observed count,
a call that already happened).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


def format_call(method_name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """Render a call as ``name(1, 'a', key=2)`` for diagnostics."""
    parts = [repr(arg) for arg in args]
    parts.extend(f"{key}={value!r}" for key, value in kwargs.items())
    return f"{method_name}({', '.join(parts)})"


def _times(count: int) -> str:
    return "1 time" if count == 1 else f"{count} times"


class CountRange(BaseModel):
    """Closed interval of acceptable call counts.

    ``maximum=None`` means the range is unbounded above ("at least n").
    A range of ``[0, 0]`` is a negative expectation.
    """

    model_config = ConfigDict(frozen=True)

    minimum: int = Field(default=1, ge=0, description="Fewest calls that satisfy")
    maximum: int | None = Field(default=1, ge=0, description="Most calls delivered, None = unbounded")

    @model_validator(mode="after")
    def check_bounds(self) -> "CountRange":
        if self.maximum is not None and self.minimum > self.maximum:
            raise ValueError(f"minimum ({self.minimum}) exceeds maximum ({self.maximum})")
        return self

    @classmethod
    def exactly(cls, count: int) -> "CountRange":
        return cls(minimum=count, maximum=count)

    @classmethod
    def at_least(cls, count: int) -> "CountRange":
        return cls(minimum=count, maximum=None)

    @classmethod
    def at_most(cls, count: int) -> "CountRange":
        return cls(minimum=0, maximum=count)

    @classmethod
    def between(cls, minimum: int, maximum: int) -> "CountRange":
        return cls(minimum=minimum, maximum=maximum)

    @classmethod
    def never(cls) -> "CountRange":
        return cls(minimum=0, maximum=0)

    @property
    def is_negative(self) -> bool:
        return self.maximum == 0

    def contains(self, count: int) -> bool:
        """Return True if ``count`` satisfies the range."""
        if count < self.minimum:
            return False
        return self.maximum is None or count <= self.maximum

    def allows_another(self, count: int) -> bool:
        """Return True if a call can still be delivered after ``count`` calls."""
        return self.maximum is None or count < self.maximum

    def describe(self) -> str:
        if self.is_negative:
            return "never"
        if self.maximum is None:
            return f"at least {_times(self.minimum)}"
        if self.minimum == self.maximum:
            return f"exactly {_times(self.minimum)}"
        if self.minimum == 0:
            return f"at most {_times(self.maximum)}"
        return f"between {self.minimum} and {_times(self.maximum)}"


class ExpectationFailure(BaseModel):
    """One expectation whose observed count fell outside its range."""

    model_config = ConfigDict(frozen=True)

    method_name: str = Field(..., description="Expected message name")
    expected: CountRange = Field(..., description="Declared count range")
    observed_count: int = Field(..., ge=0, description="Matching calls received")
    origin: str | None = Field(default=None, description="Where the expectation was declared")

    def describe(self) -> str:
        message = (
            f"expected :{self.method_name} {self.expected.describe()}, "
            f"received {_times(self.observed_count)}"
        )
        if self.origin:
            message += f" (declared at {self.origin})"
        return message


class ReceivedCall(BaseModel):
    """A message handled by an expectation or a stub."""

    model_config = ConfigDict(frozen=True)

    method_name: str
    args: tuple[Any, ...] = Field(default_factory=tuple)
    kwargs: dict[str, Any] = Field(default_factory=dict)

    def describe(self) -> str:
        return format_call(self.method_name, self.args, self.kwargs)
