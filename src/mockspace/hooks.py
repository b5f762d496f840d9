"""Per-instance method hooks for partial doubles.

A plain object is partially doubled by shadowing one attribute on the
instance (or on the class object itself, when the subject is a class)
with a dispatcher that routes calls to its interceptor. The original
attribute is kept so it can serve as the passthrough target and be put
back on reset.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from mockspace.exceptions import MockConfigurationError

if TYPE_CHECKING:
    from mockspace.interceptor import Interceptor

logger = logging.getLogger(__name__)

_MISSING = object()


class MethodDispatcher:
    """Callable standing in for one method name of an intercepted subject."""

    __slots__ = ("_interceptor", "_name")

    def __init__(self, interceptor: "Interceptor", name: str) -> None:
        self._interceptor = interceptor
        self._name = name

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._interceptor.intercept(self._name, args, kwargs)

    def __repr__(self) -> str:
        return f"<intercepted {self._interceptor.description}.{self._name}>"


@dataclass
class SavedAttribute:
    """What a hooked attribute looked like before the hook went in."""

    name: str
    had_own_value: bool
    own_value: Any
    original: Callable[..., Any] | None


def has_own_namespace(subject: Any) -> bool:
    """Return True if attributes can be shadowed directly on ``subject``."""
    try:
        vars(subject)
    except TypeError:
        return False
    return True


def install_hook(interceptor: "Interceptor", name: str) -> SavedAttribute:
    """Shadow ``name`` on the interceptor's subject with a dispatcher."""
    subject = interceptor.subject
    if not has_own_namespace(subject):
        raise MockConfigurationError(
            f"Cannot intercept :{name} on {interceptor.description}: "
            f"{type(subject).__name__} objects have no instance namespace"
        )
    namespace = vars(subject)
    own_value = namespace.get(name, _MISSING)
    original = getattr(subject, name, None)
    saved = SavedAttribute(
        name=name,
        had_own_value=own_value is not _MISSING,
        own_value=None if own_value is _MISSING else own_value,
        original=original if callable(original) else None,
    )
    try:
        setattr(subject, name, MethodDispatcher(interceptor, name))
    except (AttributeError, TypeError) as exc:
        raise MockConfigurationError(
            f"Cannot intercept :{name} on {interceptor.description}: {exc}"
        ) from exc
    logger.debug("Hooked %s on %s", name, interceptor.description)
    return saved


def restore_hook(interceptor: "Interceptor", saved: SavedAttribute) -> None:
    """Put the pre-hook attribute back. Never raises."""
    subject = interceptor.subject
    try:
        if saved.had_own_value:
            setattr(subject, saved.name, saved.own_value)
        else:
            delattr(subject, saved.name)
    except (AttributeError, TypeError) as exc:
        logger.warning(
            "Could not restore %s on %s: %s", saved.name, interceptor.description, exc
        )
