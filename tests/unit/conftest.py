"""Shared fixtures for unit tests."""

from collections.abc import Sequence

import pytest

from paramplan.pytest_plugin import run_plan  # noqa: F401
from paramplan.testing.result import RunResult
from paramplan.testing.runner import TestNode


class NullReporter:
    """Silent reporter for testing."""

    def on_run_start(self, name: str) -> None:
        pass

    def on_node_complete(self, node: TestNode) -> None:
        pass

    def on_run_complete(self, result: RunResult) -> None:
        pass


class RecordingReporter:
    """Reporter that remembers every event it receives."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []
        self.result: RunResult | None = None

    def on_run_start(self, name: str) -> None:
        self.events.append(("start", name))

    def on_node_complete(self, node: TestNode) -> None:
        self.events.append(("complete", node.full_name))

    def on_run_complete(self, result: RunResult) -> None:
        self.events.append(("finish", ""))
        self.result = result


class CountingSelector:
    """Selects every option and records which parameters it was asked about."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def select(self, name: str, options: Sequence[str]) -> list[str]:
        self.calls.append((name, tuple(options)))
        return list(options)


@pytest.fixture
def null_reporter() -> NullReporter:
    """Provide a silent reporter for tests."""
    return NullReporter()


@pytest.fixture
def recording_reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def counting_selector() -> CountingSelector:
    return CountingSelector()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("PARAMPLAN_SELECTOR", raising=False)
    monkeypatch.delenv("PARAMPLAN_LOG_LEVEL", raising=False)
