"""Plan execution: scopes, parameter selection and the sub-test runner.

Provides lazy discovery and exhaustion of parameter combinations on top of
a nested sub-test primitive.
"""

from .discovery import PlanDefinition, collect, run_definitions
from .result import NodeResult, RunResult
from .runner import Session, TestNode
from .scope import Executor, ParameterSelection, Planner, Scope, Testing, plan, run_root
from .selector import (
    ParameterSelector,
    PinnedSelector,
    SelectAll,
    SelectFirst,
    SelectNone,
    build_selector,
    register_selector,
    resolve_selector,
)
from .tags import tag


__all__ = [
    "Executor",
    "NodeResult",
    "ParameterSelection",
    "ParameterSelector",
    "PinnedSelector",
    "PlanDefinition",
    "Planner",
    "RunResult",
    "Scope",
    "SelectAll",
    "SelectFirst",
    "SelectNone",
    "Session",
    "TestNode",
    "Testing",
    "build_selector",
    "collect",
    "plan",
    "register_selector",
    "resolve_selector",
    "run_definitions",
    "run_root",
    "tag",
]
