"""Shared types for the paramplan execution engine."""

from enum import Enum


class TestStatus(Enum):
    """Outcome of a single node in the run tree."""

    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    SKIPPED = "skipped"

    __test__ = False


WILDCARD = "*"  # option meaning "accept whatever is already bound"
