"""Chained stubbing.

Stubs a whole call chain in one step:

    stub_chain(article_cls, "published.order.limit", [a1, a2])
    article_cls.published().order().limit()  # -> [a1, a2]

Intermediate links are anonymous Doubles. A link that is already stubbed
to return an interceptable object is reused rather than replaced, so two
chains sharing a prefix end up on the same intermediate double.
"""

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from mockspace.doubles import Double, is_interceptable
from mockspace.exceptions import ChainConfigurationError
from mockspace.interceptor import Interceptor, attach
from mockspace.records import StubHandle
from mockspace.returns import NOT_SET, ComputedReturn, FixedReturn, ReturnPolicy

logger = logging.getLogger(__name__)

ChainSpec = str | Sequence[str | Mapping[str, Any]]


def normalize_chain(chain: ChainSpec, value: Any = NOT_SET) -> tuple[list[str], Any]:
    """Split a chain spec into method names and the terminal value.

    ``"a.b.c"``, ``["a", "b", "c"]``, ``["a.b", {"c": value}]`` and
    ``("a.b", {"c": value})`` passed as chain and terminal value all
    normalize to ``["a", "b", "c"]``. A one-entry mapping, either trailing
    the chain or given as the terminal value, appends its key to the chain
    and supplies the terminal value.
    """
    parts: list[Any] = [chain] if isinstance(chain, (str, Mapping)) else list(chain)

    terminal: Mapping[str, Any] | None = None
    if isinstance(value, Mapping):
        terminal, value = value, NOT_SET
        if parts and isinstance(parts[-1], Mapping):
            raise ChainConfigurationError(
                "terminal value given both in the mapping and separately", chain
            )
    elif parts and isinstance(parts[-1], Mapping):
        terminal = parts.pop()
        if value is not NOT_SET:
            raise ChainConfigurationError(
                "terminal value given both in the mapping and separately", chain
            )

    if terminal is not None:
        if len(terminal) != 1:
            raise ChainConfigurationError(
                "terminal mapping must have exactly one entry", terminal
            )
        ((final_name, value),) = terminal.items()
        parts.append(final_name)

    if not all(isinstance(part, str) for part in parts):
        raise ChainConfigurationError("chain links must be method names", chain)

    names = ".".join(parts).split(".") if parts else []
    if not names or not all(names):
        raise ChainConfigurationError("chain must name at least one method and no empty links", chain)
    return names, value


class ChainResolver:
    """Builds the stubs and intermediate doubles for a call chain."""

    def __init__(
        self,
        attach_to: Callable[[Any], Interceptor] = attach,
        make_link: Callable[[str], Any] | None = None,
    ) -> None:
        self._attach = attach_to
        self._make_link = make_link or (lambda path: Double(path))

    def stub_chain(
        self,
        subject: Any,
        chain: ChainSpec,
        value: Any = NOT_SET,
        computes: Callable[..., Any] | None = None,
    ) -> StubHandle:
        """Stub ``chain`` on ``subject``; returns the handle of the final stub."""
        names, value = normalize_chain(chain, value)
        current = self._attach(subject)
        walked: list[str] = []

        for name in names[:-1]:
            walked.append(name)
            link = self._existing_link(current, name)
            if link is None:
                link = self._make_link(".".join(walked))
                current.add_stub(name, FixedReturn(link))
            current = self._attach(link)

        policy: ReturnPolicy
        if computes is not None:
            policy = ComputedReturn(computes)
        else:
            policy = FixedReturn(None if value is NOT_SET else value)
        logger.debug("Stubbed chain %s on %s", ".".join(names), subject)
        return current.add_stub(names[-1], policy)

    def _existing_link(self, interceptor: Interceptor, name: str) -> Any:
        stub = interceptor.find_stub(name)
        if stub is None or not isinstance(stub.return_policy, FixedReturn):
            return None
        link = stub.return_policy.value
        return link if is_interceptable(link) else None
