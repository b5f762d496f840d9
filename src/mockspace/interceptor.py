"""The per-subject interceptor.

An Interceptor owns every expectation and stub registered for one
subject and decides what happens to each call routed to it:

1. A matching negative expectation fails the call immediately.
2. The newest matching expectation with calls left handles it.
3. Otherwise the newest matching stub handles it.
4. Otherwise a null object answers with itself.
5. Otherwise the subject's real method handles it, if there is one.
6. Otherwise the call fails with UnexpectedMessageError.

Searching newest-first lets a test override a broad stub with a
narrower one later in the same test without removing the first.
"""

import logging
from typing import Any

from mockspace.exceptions import (
    MockConfigurationError,
    NegativeExpectationViolatedError,
    UnexpectedMessageError,
    UnsatisfiedExpectationError,
)
from mockspace.hooks import SavedAttribute, has_own_namespace, install_hook, restore_hook
from mockspace.matchers import ArgumentMatcher
from mockspace.models import CountRange, ReceivedCall
from mockspace.records import ExpectationHandle, MessageExpectation, MethodStub, StubHandle
from mockspace.returns import FixedReturn, ReturnPolicy
from mockspace.space import get_space

logger = logging.getLogger(__name__)

# Attribute under which a subject caches its interceptor.
INTERCEPTOR_ATTR = "_mockspace_interceptor"


def describe_subject(subject: Any) -> str:
    return f"<{type(subject).__name__} at {id(subject):#x}>"


class Interceptor:
    """Expectations, stubs and dispatch for one subject.

    ``target`` is the object calls pass through to when nothing else
    handles them; doubles that wrap a real object set it. Interceptors
    for plain objects instead set ``hook_methods`` and shadow each
    configured method on the subject itself.
    """

    def __init__(
        self,
        subject: Any,
        *,
        description: str | None = None,
        target: Any = None,
        hook_methods: bool = False,
    ) -> None:
        self.subject = subject
        self.description = description or describe_subject(subject)
        self.target = target
        self.hook_methods = hook_methods
        self._expectations: list[MessageExpectation] = []
        self._stubs: list[MethodStub] = []
        self._received: list[ReceivedCall] = []
        self._hooks: dict[str, SavedAttribute] = {}
        self._null_object = False

    def __repr__(self) -> str:
        return f"Interceptor({self.description})"

    @property
    def expectations(self) -> tuple[MessageExpectation, ...]:
        return tuple(self._expectations)

    @property
    def stubs(self) -> tuple[MethodStub, ...]:
        return tuple(self._stubs)

    @property
    def is_configured(self) -> bool:
        return bool(self._expectations or self._stubs or self._null_object)

    # Configuration

    def add_expectation(
        self,
        name: str,
        matcher: ArgumentMatcher | None = None,
        count_range: CountRange | None = None,
        return_policy: ReturnPolicy | None = None,
        origin: str | None = None,
    ) -> ExpectationHandle:
        self._hook(name)
        record = MessageExpectation(
            method_name=name,
            matcher=matcher,
            count_range=count_range or CountRange(),
            return_policy=return_policy or FixedReturn(),
            origin=origin,
        )
        self._expectations.append(record)
        logger.debug(
            "%s expects :%s %s", self.description, name, record.count_range.describe()
        )
        return ExpectationHandle(record)

    def add_negative_expectation(
        self,
        name: str,
        matcher: ArgumentMatcher | None = None,
        origin: str | None = None,
    ) -> ExpectationHandle:
        return self.add_expectation(
            name, matcher=matcher, count_range=CountRange.never(), origin=origin
        )

    def add_stub(
        self,
        name: str,
        return_policy: ReturnPolicy | None = None,
        matcher: ArgumentMatcher | None = None,
    ) -> StubHandle:
        self._hook(name)
        record = MethodStub(
            method_name=name, matcher=matcher, return_policy=return_policy or FixedReturn()
        )
        self._stubs.append(record)
        logger.debug("%s stubs :%s", self.description, name)
        return StubHandle(record)

    def remove_stub(self, name: str) -> None:
        """Remove every stub for ``name``; expectations are kept."""
        self._stubs = [stub for stub in self._stubs if stub.method_name != name]
        if name in self._hooks and not self.handles(name):
            restore_hook(self, self._hooks.pop(name))
        logger.debug("%s unstubbed :%s", self.description, name)

    def as_null_object(self) -> None:
        self._null_object = True

    def is_null_object(self) -> bool:
        return self._null_object

    def _hook(self, name: str) -> None:
        if self.hook_methods and name not in self._hooks:
            self._hooks[name] = install_hook(self, name)

    # Lookup

    def handles(self, name: str) -> bool:
        """Return True if any expectation or stub is registered for ``name``."""
        return any(record.method_name == name for record in self._expectations) or any(
            record.method_name == name for record in self._stubs
        )

    def registered_names(self) -> list[str]:
        names = {record.method_name for record in self._expectations}
        names.update(record.method_name for record in self._stubs)
        return sorted(names)

    def find_stub(
        self,
        name: str,
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
    ) -> MethodStub | None:
        """Return the newest stub for ``name`` that accepts the arguments."""
        kwargs = kwargs or {}
        for stub in reversed(self._stubs):
            if stub.method_name == name and stub.matches(args, kwargs):
                return stub
        return None

    def _find_expectation(
        self, name: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> MessageExpectation | None:
        for expectation in reversed(self._expectations):
            if (
                expectation.method_name == name
                and not expectation.is_negative
                and expectation.can_accept()
                and expectation.matches(args, kwargs)
            ):
                return expectation
        return None

    def _find_negative(
        self, name: str, args: tuple[Any, ...], kwargs: dict[str, Any]
    ) -> MessageExpectation | None:
        for expectation in reversed(self._expectations):
            if (
                expectation.method_name == name
                and expectation.is_negative
                and expectation.matches(args, kwargs)
            ):
                return expectation
        return None

    def _note_excess(self, name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        # Every matching expectation is exhausted here; charge the newest.
        for expectation in reversed(self._expectations):
            if (
                expectation.method_name == name
                and not expectation.is_negative
                and expectation.matches(args, kwargs)
            ):
                expectation.excess_count += 1
                logger.debug(
                    "%s received :%s more often than expected", self.description, name
                )
                return

    def _original(self, name: str) -> Any:
        if name in self._hooks:
            return self._hooks[name].original
        if self.target is not None:
            original = getattr(self.target, name, None)
            if callable(original):
                return original
        return None

    # Dispatch

    def intercept(self, name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        """Resolve one call against the registered expectations and stubs."""
        negative = self._find_negative(name, args, kwargs)
        if negative is not None:
            negative.observed_count += 1
            self._received.append(ReceivedCall(method_name=name, args=args, kwargs=kwargs))
            raise NegativeExpectationViolatedError(
                self.description, name, args, kwargs, origin=negative.origin
            )

        expectation = self._find_expectation(name, args, kwargs)
        if expectation is not None:
            logger.debug("%s :%s handled by expectation", self.description, name)
            self._received.append(ReceivedCall(method_name=name, args=args, kwargs=kwargs))
            return expectation.invoke(args, kwargs)
        self._note_excess(name, args, kwargs)

        stub = self.find_stub(name, args, kwargs)
        if stub is not None:
            logger.debug("%s :%s handled by stub", self.description, name)
            self._received.append(ReceivedCall(method_name=name, args=args, kwargs=kwargs))
            return stub.invoke(args, kwargs)

        if self._null_object:
            return self.subject

        original = self._original(name)
        if original is not None:
            logger.debug("%s :%s passed through", self.description, name)
            return original(*args, **kwargs)

        raise UnexpectedMessageError(
            self.description, name, args, kwargs, self.registered_names()
        )

    def received_message(self, name: str, matcher: ArgumentMatcher | None = None) -> bool:
        """Return True if a matching call was handled by an expectation or stub."""
        for call in self._received:
            if call.method_name != name:
                continue
            if matcher is None or matcher.matches(call.args, dict(call.kwargs)):
                return True
        return False

    # Lifecycle

    def verify(self) -> None:
        """Raise UnsatisfiedExpectationError listing every unmet expectation."""
        failures = [
            expectation.failure()
            for expectation in self._expectations
            if not expectation.is_satisfied
        ]
        if failures:
            logger.debug("%s failed verification: %d", self.description, len(failures))
            raise UnsatisfiedExpectationError(self.description, failures)

    def reset(self) -> None:
        """Return to the unconfigured state. Never raises."""
        self._expectations.clear()
        self._stubs.clear()
        self._received.clear()
        self._null_object = False
        hooks, self._hooks = self._hooks, {}
        for saved in hooks.values():
            restore_hook(self, saved)


def find_interceptor(subject: Any) -> Interceptor | None:
    """Return the interceptor cached on ``subject``, without creating one."""
    try:
        interceptor = vars(subject).get(INTERCEPTOR_ATTR)
    except TypeError:
        return None
    if isinstance(interceptor, Interceptor) and interceptor.subject is subject:
        return interceptor
    return None


def attach(subject: Any) -> Interceptor:
    """Get or create the interceptor for ``subject`` and track it in the active space."""
    interceptor = find_interceptor(subject)
    if interceptor is None:
        if not has_own_namespace(subject):
            raise MockConfigurationError(
                f"Cannot attach to {describe_subject(subject)}: "
                f"{type(subject).__name__} objects have no instance namespace"
            )
        interceptor = Interceptor(subject, hook_methods=True)
        try:
            setattr(subject, INTERCEPTOR_ATTR, interceptor)
        except (AttributeError, TypeError) as exc:
            raise MockConfigurationError(
                f"Cannot attach to {describe_subject(subject)}: {exc}"
            ) from exc
        logger.debug("Attached %s", interceptor.description)
    get_space().add(interceptor)
    return interceptor
