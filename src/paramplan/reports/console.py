"""Rich console output for plan runs."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from paramplan.testing.result import NodeResult, RunResult
from paramplan.testing.runner import TestNode
from paramplan.types import TestStatus

_STYLES = {
    TestStatus.PASSED: ("PASS", "green"),
    TestStatus.FAILED: ("FAIL", "red"),
    TestStatus.ERROR: ("ERROR", "bold red"),
    TestStatus.SKIPPED: ("SKIP", "yellow"),
}


def _label(status: TestStatus) -> str:
    text, style = _STYLES.get(status, (status.value.upper(), "white"))
    return f"[{style}]{text}[/{style}]"


def _params(params: dict[str, str]) -> str:
    if not params:
        return ""
    joined = ", ".join(f"{key}={value}" for key, value in sorted(params.items()))
    return f" [dim]({escape(joined)})[/dim]"


class ConsoleReporter:
    """Print node outcomes, failure output and a summary.

    Verbosity 0 prints failures and the summary, 1 adds one line per
    completed node and 2 adds a tree of every root.
    """

    def __init__(self, console: Console | None = None, verbosity: int = 0) -> None:
        self.console = console or Console()
        self.verbosity = verbosity

    def on_run_start(self, name: str) -> None:
        if self.verbosity >= 1:
            self.console.print(f"[bold]{escape(name)}[/bold]")

    def on_node_complete(self, node: TestNode) -> None:
        if self.verbosity < 1 or node.parent is None:
            return
        line = f"  {_label(node.status)} {escape(node.full_name)}{_params(node.params)}"
        if node.status is TestStatus.SKIPPED and node.message:
            line += f" [dim]- {escape(node.message)}[/dim]"
        self.console.print(line)

    def on_run_complete(self, result: RunResult) -> None:
        if self.verbosity >= 2:
            for root in result.roots:
                self.console.print(self._tree(root))

        for node in result.failures():
            self.console.rule(f"[red]{escape(node.full_name)}[/red]")
            self.console.print(f"{_label(node.status)} {escape(node.message or '')}{_params(node.params)}")
            for line in node.output:
                self.console.print(f"  {escape(line)}", highlight=False)

        parts = [f"[green]{result.passed} passed[/green]"]
        if result.failed:
            parts.append(f"[red]{result.failed} failed[/red]")
        if result.errors:
            parts.append(f"[bold red]{result.errors} errors[/bold red]")
        if result.skipped:
            parts.append(f"[yellow]{result.skipped} skipped[/yellow]")
        if result.total == 0:
            self.console.print("[yellow]No plans ran.[/yellow]")
            return
        self.console.print(", ".join(parts) + f" in {len(result.roots)} plan(s)")

    def _tree(self, root: NodeResult) -> Tree:
        tree = Tree(f"{_label(root.status)} {escape(root.name)}")
        self._add_children(tree, root)
        return tree

    def _add_children(self, branch: Tree, node: NodeResult) -> None:
        for child in node.children:
            sub = branch.add(f"{_label(child.status)} {escape(child.name)}{_params(child.params)}")
            self._add_children(sub, child)
