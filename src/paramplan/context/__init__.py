from .bindings import BindingContext, CancelScope
from .context import CURRENT_SCOPE, current_scope, scope_context

__all__ = [
    "BindingContext",
    "CancelScope",
    "CURRENT_SCOPE",
    "current_scope",
    "scope_context",
]
