"""Immutable parameter bindings and cancellation scopes.

A :class:`BindingContext` is what every scope of a plan carries: the
parameter choices made on the path from the root to that scope, the active
parameter selector, and the cancel scope of the owning node. Contexts are
never mutated; extending one returns a new context, so a child scope that
captured its parent's context is unaffected by later parent bindings.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from paramplan.errors import BranchCancelled

if TYPE_CHECKING:
    from paramplan.testing.selector import ParameterSelector


class CancelScope:
    """Node in a tree of cancellation flags.

    Cancelling a scope cancels every scope derived from it.
    """

    def __init__(self, parent: CancelScope | None = None) -> None:
        self._parent = parent
        self._event = threading.Event()

    def child(self) -> CancelScope:
        return CancelScope(self)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        scope: CancelScope | None = self
        while scope is not None:
            if scope._event.is_set():
                return True
            scope = scope._parent
        return False

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise BranchCancelled("scope was cancelled")


def _freeze(values: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True, slots=True)
class BindingContext:
    """Accumulated parameter bindings visible to a scope and its descendants.

    Attributes
    ----------
    selector
        Policy consulted when a scope selects a parameter that is not bound yet.
    cancel_scope
        Cancellation flag of the scope owning this context.
    """

    selector: ParameterSelector | None = None
    cancel_scope: CancelScope = field(default_factory=CancelScope)
    _values: Mapping[str, str] = field(default_factory=lambda: _freeze({}))

    def get(self, name: str) -> str | None:
        return self._values.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self._values.items())

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def with_value(self, name: str, value: str) -> BindingContext:
        """Return a new context with ``name`` bound to ``value``."""
        values = dict(self._values)
        values[name] = value
        return replace(self, _values=_freeze(values))

    def with_selector(self, selector: ParameterSelector) -> BindingContext:
        return replace(self, selector=selector)

    def with_cancel(self) -> BindingContext:
        """Return a new context whose cancel scope derives from this one."""
        return replace(self, cancel_scope=self.cancel_scope.child())

    @property
    def cancelled(self) -> bool:
        return self.cancel_scope.cancelled
