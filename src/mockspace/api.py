"""Public functions test authors configure doubles with.

Every function takes the subject explicitly; nothing is patched onto
objects globally. Subjects are either Doubles or plain objects, whose
configured methods are shadowed per instance (partial doubles).

Usage:
    from mockspace import Double, expect, stub_method, verify_all

    mailer = Double("mailer")
    expect(mailer, "send").with_args("bob@example.com").and_return(True)
    stub_method(mailer, "queue_size", returns=0)

    notify_user(mailer, "bob@example.com")
    verify_all()
"""

import inspect
from collections.abc import Callable, Mapping
from typing import Any

from mockspace.chain import ChainResolver, ChainSpec
from mockspace.config import get_settings
from mockspace.interceptor import attach, find_interceptor
from mockspace.matchers import ArgumentListMatcher, ArgumentMatcher, as_matcher
from mockspace.records import ExpectationHandle, StubHandle
from mockspace.returns import NOT_SET
from mockspace.space import get_space


def caller_location(depth: int = 2) -> str | None:
    """Return ``file:line`` of the frame ``depth`` levels above this one.

    Returns None when origin capture is disabled in settings.
    """
    if not get_settings().capture_origin:
        return None
    frame = inspect.currentframe()
    try:
        for _ in range(depth):
            if frame is None:
                return None
            frame = frame.f_back
        if frame is None:
            return None
        return f"{frame.f_code.co_filename}:{frame.f_lineno}"
    finally:
        del frame


def expect(
    subject: Any,
    name: str,
    *,
    returns: Any = NOT_SET,
    origin: str | None = None,
) -> ExpectationHandle:
    """Require ``subject`` to receive ``name`` (exactly once unless refined)."""
    handle = attach(subject).add_expectation(name, origin=origin or caller_location())
    if returns is not NOT_SET:
        handle.and_return(returns)
    return handle


def refuse(subject: Any, name: str, *, origin: str | None = None) -> ExpectationHandle:
    """Forbid ``subject`` from receiving ``name``; a matching call fails at once."""
    return attach(subject).add_negative_expectation(name, origin=origin or caller_location())


def stub_method(
    subject: Any,
    name: str,
    *,
    returns: Any = NOT_SET,
    computes: Callable[..., Any] | None = None,
) -> StubHandle:
    """Give ``name`` canned behavior on ``subject`` without requiring a call."""
    handle = attach(subject).add_stub(name)
    if computes is not None:
        handle.and_call(computes)
    elif returns is not NOT_SET:
        handle.and_return(returns)
    return handle


def stub_methods(subject: Any, mapping: Mapping[str, Any]) -> dict[str, StubHandle]:
    """Stub each ``name -> value`` of ``mapping`` to return its value."""
    return {name: stub_method(subject, name, returns=value) for name, value in mapping.items()}


def unstub(subject: Any, name: str) -> None:
    """Remove every stub for ``name``; later calls pass through or fail."""
    interceptor = find_interceptor(subject)
    if interceptor is not None:
        interceptor.remove_stub(name)


def stub_chain(
    subject: Any,
    chain: ChainSpec,
    value: Any = NOT_SET,
    *,
    computes: Callable[..., Any] | None = None,
) -> StubHandle:
    """Stub a call chain such as ``"a.b.c"`` so it ends in ``value``."""
    return ChainResolver().stub_chain(subject, chain, value, computes=computes)


def received_message(
    subject: Any,
    name: str,
    matcher: ArgumentMatcher | Callable[..., Any] | None = None,
) -> bool:
    """Return True if ``subject`` handled a matching ``name`` call so far."""
    interceptor = find_interceptor(subject)
    if interceptor is None:
        return False
    return interceptor.received_message(name, as_matcher(matcher))


def received_message_with(subject: Any, name: str, *args: Any, **kwargs: Any) -> bool:
    """Shorthand for ``received_message`` with exact arguments."""
    return received_message(subject, name, ArgumentListMatcher(*args, **kwargs))


def mark_null_object(subject: Any) -> Any:
    """Make unregistered calls on ``subject`` return ``subject`` itself."""
    attach(subject).as_null_object()
    return subject


def is_null_object(subject: Any) -> bool:
    interceptor = find_interceptor(subject)
    return interceptor is not None and interceptor.is_null_object()


def verify_double(subject: Any) -> None:
    interceptor = find_interceptor(subject)
    if interceptor is not None:
        interceptor.verify()


def reset_double(subject: Any) -> None:
    interceptor = find_interceptor(subject)
    if interceptor is not None:
        interceptor.reset()


def verify_all() -> None:
    """Verify every double in the active space."""
    get_space().verify_all()


def reset_all() -> None:
    """Reset every double in the active space and forget them."""
    get_space().reset_all()
