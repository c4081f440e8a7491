"""Parameter selection policies and their registry.

A selector decides which of the options a test presents for a parameter are
actually exercised. The first returned option becomes the default path, the
remaining ones are exhausted as sibling runs. An empty result skips the
branch.
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

from paramplan.errors import SelectorError
from paramplan.types import WILDCARD


@runtime_checkable
class ParameterSelector(Protocol):
    """Policy choosing the options to run for a named parameter."""

    def select(self, name: str, options: Sequence[str]) -> list[str]:
        """Return the ordered subset of ``options`` to run."""
        ...


T = TypeVar("T")

_selector_registry: dict[str, type[Any]] = {}
_builtin_registry: dict[str, type[Any]] = {}


def register_selector(name: str, *, builtin: bool = False):
    """Register a selector class under ``name``.

        @register_selector("random")
        class RandomSelector: ...
    """

    def decorator(cls: type[T]) -> type[T]:
        _selector_registry[name] = cls
        if builtin:
            _builtin_registry[name] = cls
        return cls

    return decorator


@register_selector("all", builtin=True)
class SelectAll:
    """Run every presented option."""

    def select(self, name: str, options: Sequence[str]) -> list[str]:
        return list(options)


@register_selector("first", builtin=True)
class SelectFirst:
    """Run only the first presented option."""

    def select(self, name: str, options: Sequence[str]) -> list[str]:
        return list(options[:1])


@register_selector("none", builtin=True)
class SelectNone:
    """Run nothing; every branch that discovers a parameter is skipped."""

    def select(self, name: str, options: Sequence[str]) -> list[str]:
        return []


class PinnedSelector:
    """Restrict some parameters to fixed values, delegate the rest.

    Pinned values that the test does not offer are dropped, so a pin that
    matches none of the options skips that branch. When the test offers the
    wildcard, the pinned values are returned as they are.
    """

    def __init__(
        self,
        pins: Mapping[str, Sequence[str]],
        fallback: ParameterSelector | None = None,
    ) -> None:
        self.pins = {name: list(values) for name, values in pins.items()}
        self.fallback = fallback or SelectAll()

    def select(self, name: str, options: Sequence[str]) -> list[str]:
        if name not in self.pins:
            return self.fallback.select(name, options)
        pinned = self.pins[name]
        if WILDCARD in options:
            return list(pinned)
        return [value for value in pinned if value in options]


def get_selector_registry() -> dict[str, type[Any]]:
    return _selector_registry


def clear_selector_registry() -> None:
    """Clear all registered selectors, keeping built-ins."""
    _selector_registry.clear()
    _selector_registry.update(_builtin_registry)


def _import_selector_class(import_path: str) -> type[Any]:
    if ":" in import_path:
        module_path, class_name = import_path.rsplit(":", 1)
    else:
        module_path, class_name = import_path.rsplit(".", 1)

    try:
        module = importlib.import_module(module_path)
        cls = getattr(module, class_name)
    except (ImportError, AttributeError) as exc:
        msg = f"Cannot import selector {import_path}: {exc}"
        raise SelectorError(msg) from exc

    if not isinstance(cls, type) or not callable(getattr(cls, "select", None)):
        msg = f"{import_path} is not a ParameterSelector class"
        raise SelectorError(msg)
    return cls


def resolve_selector(name: str, **kwargs: Any) -> ParameterSelector:
    """Resolve a selector by registry name or import string.

    Args:
        name: Registry name (e.g., "all") or import string
              (e.g., "myapp.selectors:NightlySelector").
        **kwargs: Arguments passed to the selector constructor.

    Raises:
        SelectorError: If the selector cannot be resolved.
    """
    if name in _selector_registry:
        return _selector_registry[name](**kwargs)

    if ":" in name or "." in name:
        return _import_selector_class(name)(**kwargs)

    available = ", ".join(sorted(_selector_registry))
    msg = f"Unknown selector: {name}. Available: {available}"
    raise SelectorError(msg)


def build_selector(name: str, pins: Mapping[str, Sequence[str]] | None = None) -> ParameterSelector:
    """Resolve ``name`` and restrict it by ``pins`` when any are given."""
    selector = resolve_selector(name)
    if pins:
        return PinnedSelector(pins, fallback=selector)
    return selector


__all__ = [
    "ParameterSelector",
    "build_selector",
    "PinnedSelector",
    "SelectAll",
    "SelectFirst",
    "SelectNone",
    "clear_selector_registry",
    "get_selector_registry",
    "register_selector",
    "resolve_selector",
]
