"""Reporter registry for plugin-style reporter registration."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any, TypeVar

from paramplan.errors import ReporterError

if TYPE_CHECKING:
    from paramplan.reports.base import Reporter


T = TypeVar("T")

_reporter_registry: dict[str, type[Any]] = {}
_builtin_registry: dict[str, type[Any]] = {}

_REPORTER_HOOKS = ("on_run_start", "on_node_complete", "on_run_complete")


def reporter(
    cls: type[T] | None = None,
    *,
    enabled: bool = True,
    name: str | None = None,
) -> type[T] | Any:
    """Register a Reporter class for lookup by name.

    Can be used as a decorator with or without arguments:

        @reporter
        class MyReporter: ...

        @reporter(name="custom")
        class MyReporter: ...
    """

    def decorator(cls: type[T]) -> type[T]:
        if enabled:
            _reporter_registry[name or cls.__name__] = cls
        return cls

    if cls is not None:
        return decorator(cls)
    return decorator


def get_reporter_registry() -> dict[str, type[Any]]:
    return _reporter_registry


def clear_reporter_registry() -> None:
    """Clear all registered reporters, keeping built-ins."""
    _reporter_registry.clear()
    _reporter_registry.update(_builtin_registry)


def register_builtin(cls: type[T]) -> type[T]:
    """Register a built-in reporter (persists through clear)."""
    _reporter_registry[cls.__name__] = cls
    _builtin_registry[cls.__name__] = cls
    return cls


def _import_reporter_class(import_path: str) -> type[Any]:
    """Import a reporter class from "module.path:ClassName" or "module.path.ClassName"."""
    if ":" in import_path:
        module_path, class_name = import_path.rsplit(":", 1)
    else:
        module_path, class_name = import_path.rsplit(".", 1)

    try:
        cls = getattr(importlib.import_module(module_path), class_name)
    except (ImportError, AttributeError) as exc:
        msg = f"Cannot import reporter {import_path}: {exc}"
        raise ReporterError(msg) from exc

    if not isinstance(cls, type) or not all(callable(getattr(cls, hook, None)) for hook in _REPORTER_HOOKS):
        msg = f"{import_path} does not implement the Reporter protocol"
        raise ReporterError(msg)
    return cls


def resolve_reporter(name: str, **kwargs: Any) -> Reporter:
    """Resolve a reporter by registry name or import string.

    Raises:
        ReporterError: If the reporter cannot be resolved.
    """
    if name in _reporter_registry:
        return _reporter_registry[name](**kwargs)

    if ":" in name or "." in name:
        return _import_reporter_class(name)(**kwargs)

    available = ", ".join(sorted(_reporter_registry))
    msg = f"Unknown reporter: {name}. Available: {available}"
    raise ReporterError(msg)


def resolve_reporters(
    names: list[str],
    options: dict[str, dict[str, Any]] | None = None,
) -> list[Reporter]:
    """Resolve reporters by name with optional per-reporter constructor kwargs."""
    options = options or {}
    return [resolve_reporter(name, **options.get(name, {})) for name in names]


__all__ = [
    "clear_reporter_registry",
    "get_reporter_registry",
    "register_builtin",
    "reporter",
    "resolve_reporter",
    "resolve_reporters",
]
