"""Request-scoped context carrier.

A :class:`Context` is an immutable chain of key/value entries. Deriving a
context with :meth:`Context.with_value` never modifies the parent, so
holders of an earlier context keep a stable view while new values are
layered on top.

Hosts that do not want to thread a context through every call can keep one
in a context variable with :func:`set_current_context` or
:class:`ContextScope`.
"""

from contextvars import ContextVar
from typing import Any


class Context:
    """Immutable, structurally shared key/value carrier."""

    __slots__ = ("_parent", "_key", "_value")

    def __init__(
        self, parent: "Context | None" = None, key: Any = None, value: Any = None
    ) -> None:
        self._parent = parent
        self._key = key
        self._value = value

    def with_value(self, key: Any, value: Any) -> "Context":
        """Return a child context in which ``key`` maps to ``value``."""
        return Context(self, key, value)

    def value(self, key: Any, default: Any = None) -> Any:
        """Look ``key`` up, nearest entry first."""
        ctx: Context | None = self
        while ctx is not None:
            if ctx._parent is not None and ctx._key == key:
                return ctx._value
            ctx = ctx._parent
        return default

    def __repr__(self) -> str:
        depth = 0
        ctx = self._parent
        while ctx is not None:
            depth += 1
            ctx = ctx._parent
        return f"<Context depth={depth}>"


_BACKGROUND = Context()


def background() -> Context:
    """Return the empty root context."""
    return _BACKGROUND


# Per-task/thread current context
_current_context: ContextVar[Context | None] = ContextVar(
    "pluginlog_context", default=None
)


def get_current_context() -> Context:
    """Get the current context, or the empty root context if none is set."""
    return _current_context.get() or _BACKGROUND


def set_current_context(context: Context) -> None:
    """Set the current context."""
    _current_context.set(context)


class ContextScope:
    """Context manager for temporarily setting the current context."""

    def __init__(self, context: Context):
        self.context = context
        self._token = None

    def __enter__(self) -> Context:
        self._token = _current_context.set(self.context)
        return self.context

    def __exit__(self, exc_type, exc_val, exc_tb):
        _current_context.reset(self._token)
