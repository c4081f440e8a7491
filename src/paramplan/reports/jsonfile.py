"""Write the run result as JSON."""

from __future__ import annotations

import logging
from pathlib import Path

from paramplan.testing.result import RunResult
from paramplan.testing.runner import TestNode

logger = logging.getLogger(__name__)


class JsonReporter:
    """Dump the finished :class:`RunResult` to ``path``."""

    def __init__(self, path: Path | str = "paramplan-results.json") -> None:
        self.path = Path(path)

    def on_run_start(self, name: str) -> None:
        pass

    def on_node_complete(self, node: TestNode) -> None:
        pass

    def on_run_complete(self, result: RunResult) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        logger.info("wrote plan results to %s", self.path)
