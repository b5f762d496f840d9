"""mockspace exception hierarchy.

Two families of errors:
- Configuration errors: the test set up a double incorrectly.
- Expectation errors: the code under test talked to a double in a way
  the test did not allow. These subclass AssertionError so test runners
  report them as ordinary test failures.

Usage:
    from mockspace.exceptions import MockExpectationError, UnexpectedMessageError

    try:
        space.verify_all()
    except SpaceVerificationError as e:
        for error in e.errors:
            print(error.subject_description, len(error.failures))
"""

from typing import Any

from mockspace.models import ExpectationFailure, format_call


class MockspaceError(Exception):
    """Base exception for all mockspace errors.

    All mockspace-specific exceptions inherit from this class, allowing
    callers to catch all of them with a single except clause.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


# Configuration Errors


class MockConfigurationError(MockspaceError):
    """A double could not be configured as requested.

    Raised for invalid count ranges, subjects that cannot be
    intercepted, and similar set-up mistakes.
    """

    pass


class ChainConfigurationError(MockConfigurationError):
    """Malformed chain specification.

    Raised when a chain is empty, contains an empty link, or ends in a
    terminal mapping with other than exactly one entry.
    """

    def __init__(self, reason: str, chain: Any = None) -> None:
        self.reason = reason
        self.chain = chain
        message = f"Invalid chain: {reason}"
        if chain is not None:
            message += f" (got {chain!r})"
        super().__init__(message)


# Expectation Errors


class MockExpectationError(MockspaceError, AssertionError):
    """Base class for failures caused by the code under test."""

    pass


class UnexpectedMessageError(MockExpectationError):
    """A call matched no expectation or stub and had nowhere else to go.

    Carries the names currently registered on the double so the
    failure shows what the test did configure.
    """

    def __init__(
        self,
        subject_description: str,
        method_name: str,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        registered_names: list[str],
    ) -> None:
        self.subject_description = subject_description
        self.method_name = method_name
        self.call_args = args
        self.call_kwargs = kwargs
        self.registered_names = registered_names
        message = (
            f"{subject_description} received unexpected message "
            f"{format_call(method_name, args, kwargs)}"
        )
        if registered_names:
            message += f"; registered: {', '.join(registered_names)}"
        else:
            message += "; nothing is registered"
        super().__init__(message)


class NegativeExpectationViolatedError(MockExpectationError):
    """A call matched an expectation that forbids it."""

    def __init__(
        self,
        subject_description: str,
        method_name: str,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        origin: str | None = None,
    ) -> None:
        self.subject_description = subject_description
        self.method_name = method_name
        self.call_args = args
        self.call_kwargs = kwargs
        self.origin = origin
        message = (
            f"{subject_description} expected :{method_name} never, "
            f"but received {format_call(method_name, args, kwargs)}"
        )
        if origin:
            message += f" (declared at {origin})"
        super().__init__(message)


class UnsatisfiedExpectationError(MockExpectationError):
    """One double finished a test with unmet expectations.

    Carries every failing expectation of that double, not just the first.
    """

    def __init__(self, subject_description: str, failures: list[ExpectationFailure]) -> None:
        self.subject_description = subject_description
        self.failures = failures
        lines = [f"{subject_description} has {len(failures)} unmet expectation(s):"]
        lines.extend(f"  - {failure.describe()}" for failure in failures)
        super().__init__("\n".join(lines))


class SpaceVerificationError(MockExpectationError):
    """Aggregated verify report across every double in a space."""

    def __init__(
        self,
        errors: list[UnsatisfiedExpectationError],
        message: str | None = None,
    ) -> None:
        self.errors = errors
        if message is None:
            message = "\n".join(error.message for error in errors)
        super().__init__(message)

    @property
    def failures(self) -> list[ExpectationFailure]:
        return [failure for error in self.errors for failure in error.failures]
