"""Explicit test doubles.

A Double routes every public method call through its interceptor, so
unconfigured messages reach the dispatch rules (null object, passthrough
or UnexpectedMessageError) instead of raising AttributeError.

Usage:
    repo = Double("repo", find=user)
    repo.find(42)  # -> user

    cache = Double("cache", wraps=real_cache)
    stub_method(cache, "get", returns=None)
    cache.set("k", 1)  # passes through to real_cache.set
"""

from typing import Any

from mockspace.hooks import MethodDispatcher
from mockspace.interceptor import INTERCEPTOR_ATTR, Interceptor, attach
from mockspace.returns import FixedReturn

_MISSING = object()


class Double:
    """Stand-in object whose method calls are all intercepted."""

    def __init__(self, name: str | None = None, wraps: Any = None, **stubs: Any) -> None:
        self._mockspace_name = name
        self._mockspace_wrapped = wraps
        description = f"Double({name!r})" if name else f"Double at {id(self):#x}"
        setattr(
            self,
            INTERCEPTOR_ATTR,
            Interceptor(self, description=description, target=wraps),
        )
        interceptor = attach(self)
        for method_name, value in stubs.items():
            interceptor.add_stub(method_name, FixedReturn(value))

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not found normally
        if name.startswith("_"):
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        interceptor: Interceptor = self.__dict__[INTERCEPTOR_ATTR]
        wrapped = self.__dict__["_mockspace_wrapped"]
        if wrapped is not None and not interceptor.handles(name):
            value = getattr(wrapped, name, _MISSING)
            if value is not _MISSING and not callable(value):
                return value
        return MethodDispatcher(interceptor, name)

    def __repr__(self) -> str:
        return f"<{self.__dict__[INTERCEPTOR_ATTR].description}>"


def double(name: str | None = None, **stubs: Any) -> Double:
    """Create a Double, stubbing each keyword as a method returning its value."""
    return Double(name, **stubs)


def is_interceptable(value: Any) -> bool:
    """Return True if ``value`` can carry an interceptor of its own."""
    if isinstance(value, Double):
        return True
    if isinstance(value, (type(None), bool, int, float, complex, str, bytes)):
        return False
    try:
        vars(value)
    except TypeError:
        return False
    return True
