"""Exception hierarchy for paramplan."""


class PlanError(Exception):
    """Base exception for paramplan library errors."""


class ConfigError(PlanError):
    """Invalid or missing configuration."""


class SelectorError(PlanError):
    """A parameter selector could not be resolved."""


class ReporterError(PlanError):
    """A reporter could not be resolved."""


class BranchAborted(BaseException):
    """Ends the current branch of the run tree.

    Derives from BaseException so that ``except Exception`` in a test body
    does not swallow it; the runner node that raised it contains it.
    """

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


class BranchFailed(BranchAborted):
    """Abort this branch and mark it failed."""


class FrameworkError(BranchFailed):
    """A test used the planning API inconsistently."""


class BranchSkipped(BranchAborted):
    """Abort this branch and mark it skipped, not failed."""


class BranchCancelled(BranchAborted):
    """The branch's cancel scope was cancelled."""


__all__ = [
    "BranchAborted",
    "BranchCancelled",
    "BranchFailed",
    "BranchSkipped",
    "ConfigError",
    "FrameworkError",
    "PlanError",
    "ReporterError",
    "SelectorError",
]
