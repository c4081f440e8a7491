"""paramplan - discover and exhaust test parameter combinations at run time."""

from .config import PlanConfig, load_config
from .context import BindingContext, CancelScope, current_scope
from .errors import (
    BranchCancelled,
    BranchFailed,
    BranchSkipped,
    ConfigError,
    FrameworkError,
    PlanError,
    SelectorError,
)
from .testing import (
    Executor,
    ParameterSelector,
    PinnedSelector,
    Planner,
    RunResult,
    Scope,
    SelectAll,
    SelectFirst,
    SelectNone,
    Session,
    collect,
    plan,
    register_selector,
    resolve_selector,
    tag,
)
from .types import WILDCARD, TestStatus
from .version import __version__


__all__ = [
    # Core planning
    "plan",
    "Planner",
    "Executor",
    "Scope",
    "Session",
    "RunResult",
    "TestStatus",
    "WILDCARD",
    "BindingContext",
    "CancelScope",
    "current_scope",
    # Selectors
    "ParameterSelector",
    "SelectAll",
    "SelectFirst",
    "SelectNone",
    "PinnedSelector",
    "register_selector",
    "resolve_selector",
    # Discovery
    "collect",
    "tag",
    # Configuration
    "PlanConfig",
    "load_config",
    # Errors
    "PlanError",
    "ConfigError",
    "SelectorError",
    "BranchFailed",
    "BranchSkipped",
    "BranchCancelled",
    "FrameworkError",
]
