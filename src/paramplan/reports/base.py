"""Base reporter protocol for plan run output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from paramplan.testing.result import RunResult
    from paramplan.testing.runner import TestNode


class Reporter(Protocol):
    """Protocol defining the interface for plan reporters.

    Methods are called synchronously from the thread running the plan, in
    completion order: a node is reported after all of its children.
    """

    def on_run_start(self, name: str) -> None:
        """Called before a root node starts."""
        ...

    def on_node_complete(self, node: TestNode) -> None:
        """Called after each node (roots included) completes."""
        ...

    def on_run_complete(self, result: RunResult) -> None:
        """Called once the session is finished."""
        ...
