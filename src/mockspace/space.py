"""Space: the registry of every interceptor created during one test.

The test runner calls ``verify_all()`` once after the test body and
``reset_all()`` unconditionally afterwards so the next test starts clean.

Usage:
    space = Space()
    with use_space(space):
        ...  # configure doubles and run the code under test
        space.verify_all()
    space.reset_all()
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

from mockspace.exceptions import SpaceVerificationError, UnsatisfiedExpectationError
from mockspace.report import render_failures

if TYPE_CHECKING:
    from mockspace.interceptor import Interceptor

logger = logging.getLogger(__name__)


class Space:
    """Interceptors tracked for one test, deduplicated by subject identity."""

    def __init__(self) -> None:
        self._interceptors: dict[int, "Interceptor"] = {}

    def __len__(self) -> int:
        return len(self._interceptors)

    def __contains__(self, interceptor: object) -> bool:
        return any(tracked is interceptor for tracked in self._interceptors.values())

    @property
    def interceptors(self) -> list["Interceptor"]:
        return list(self._interceptors.values())

    def add(self, interceptor: "Interceptor") -> None:
        """Track ``interceptor`` unless one for the same subject already is."""
        key = id(interceptor.subject)
        if key not in self._interceptors:
            self._interceptors[key] = interceptor

    def verify_all(self) -> None:
        """Verify every interceptor and raise one report for all failures.

        Every interceptor is checked even after one fails.
        """
        errors: list[UnsatisfiedExpectationError] = []
        for interceptor in self._interceptors.values():
            try:
                interceptor.verify()
            except UnsatisfiedExpectationError as exc:
                errors.append(exc)
        logger.debug(
            "Verified %d interceptor(s), %d failing", len(self._interceptors), len(errors)
        )
        if errors:
            raise SpaceVerificationError(errors, render_failures(errors))

    def reset_all(self) -> None:
        """Reset every interceptor and stop tracking all of them."""
        for interceptor in self._interceptors.values():
            interceptor.reset()
        logger.debug("Reset %d interceptor(s)", len(self._interceptors))
        self._interceptors.clear()


_default_space = Space()

# Space that new interceptors register with
_active_space: ContextVar[Space | None] = ContextVar("mockspace_active_space", default=None)


def get_space() -> Space:
    """Get the active space, falling back to the process-wide default."""
    space = _active_space.get()
    return _default_space if space is None else space


def set_space(space: Space | None) -> None:
    """Set the active space; None restores the process-wide default."""
    _active_space.set(space)


@contextmanager
def use_space(space: Space) -> Iterator[Space]:
    """Make ``space`` active for the duration of the block."""
    token = _active_space.set(space)
    try:
        yield space
    finally:
        _active_space.reset(token)
