"""Logging setup for paramplan.

Every scope gets its own :class:`ScopeLogger`, built once from the scope's
node and a configured severity. Records below that severity are dropped;
the rest are kept in the node's output (shown for failing nodes) and
forwarded to the ``paramplan.scope`` logger with the scope name attached.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from paramplan.testing.runner import TestNode

__all__ = ["SCOPE_LOGGER_NAME", "ScopeLogger", "build_scope_logger", "configure_logging", "parse_level"]

SCOPE_LOGGER_NAME = "paramplan.scope"


def parse_level(level: int | str) -> int:
    """Translate a level name like ``"debug"`` into its numeric value."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        msg = f"Unknown log level: {level}"
        raise ValueError(msg)
    return value


class ScopeLogger(logging.LoggerAdapter):
    """Logger bound to a single node of the run tree."""

    def __init__(self, logger: logging.Logger, node: TestNode, level: int) -> None:
        super().__init__(logger, {"scope": node.full_name})
        self.node = node
        self.level = level

    def isEnabledFor(self, level: int) -> bool:
        return level >= self.level

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **(kwargs.get("extra") or {})}
        return msg, kwargs

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        text = str(msg) % args if args else str(msg)
        self.node.log(f"{logging.getLevelName(level)}: {text}")
        _, kwargs = self.process(msg, kwargs)
        self.logger.log(level, "[%s] %s", self.node.full_name, text, **kwargs)


def build_scope_logger(node: TestNode, level: int | str) -> ScopeLogger:
    return ScopeLogger(logging.getLogger(SCOPE_LOGGER_NAME), node, parse_level(level))


def configure_logging(level: int | str = logging.WARNING, console: Console | None = None) -> None:
    """Send paramplan logs to a rich console handler.

    Args:
        level: Minimum level shown for library and scope logs.
        console: Console to render to. Defaults to stderr.
    """
    root = logging.getLogger("paramplan")
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    root.addHandler(handler)
    root.setLevel(parse_level(level))
