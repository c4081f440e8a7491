from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from paramplan.testing.scope import Scope


CURRENT_SCOPE: ContextVar[Scope | None] = ContextVar("current_scope", default=None)


def current_scope() -> Scope | None:
    """Return the scope whose body is executing, if any."""
    return CURRENT_SCOPE.get()


@contextmanager
def scope_context(scope: Scope) -> Iterator[None]:
    token = CURRENT_SCOPE.set(scope)
    try:
        yield
    finally:
        CURRENT_SCOPE.reset(token)
