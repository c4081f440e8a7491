"""pytest integration: run a plan inside a pytest test.

    def test_storage(run_plan):
        def body(t):
            backend = t.select("backend", "sqlite", "postgres")
            ...

        run_plan(body)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from paramplan.testing.result import RunResult
from paramplan.testing.scope import Planner, plan


def _summary(result: RunResult) -> str:
    lines = []
    for node in result.failures():
        params = ", ".join(f"{k}={v}" for k, v in sorted(node.params.items()))
        lines.append(f"{node.status.value.upper()} {node.full_name} ({params}): {node.message}")
        lines.extend(f"    {line}" for line in node.output)
    return "\n".join(lines)


@pytest.fixture
def run_plan(request: pytest.FixtureRequest) -> Callable[..., RunResult]:
    """Run a plan body, failing the test when any branch fails."""

    def runner(fn: Callable[[Planner], Any], **kwargs: Any) -> RunResult:
        kwargs.setdefault("name", request.node.name)
        result = plan(fn, **kwargs)
        if not result.ok:
            pytest.fail(f"plan failed:\n{_summary(result)}", pytrace=False)
        if result.total and result.skipped == result.total:
            pytest.skip("every branch of the plan was skipped")
        return result

    return runner


__all__ = ["run_plan"]

