"""Testing fakes – InMemoryTransaction."""
from __future__ import annotations

import contextvars
from typing import Any, Callable

_current: contextvars.ContextVar["InMemoryTransaction | None"] = contextvars.ContextVar(
    "mp_outbox_in_memory_transaction", default=None
)


def current_transaction() -> "InMemoryTransaction | None":
    """Return the in-memory transaction active in this context, if any."""
    return _current.get()


def register_undo(undo: Callable[[], None]) -> None:
    """Record *undo* on the active in-memory transaction (no-op outside one)."""
    tx = _current.get()
    if tx is not None:
        tx._undo.append(undo)


class InMemoryTransaction:
    """Async context manager giving the in-memory fakes rollback semantics.

    Writes made by :class:`InMemoryOutboxStore` inside the block are undone
    when the block raises. :class:`InMemoryDeduplicationStore` keeps its marks
    pending until the block ends and registers an :meth:`on_finish` callback
    to publish or drop them.
    """

    def __init__(self) -> None:
        self._undo: list[Callable[[], None]] = []
        self._finish: list[Callable[[bool], None]] = []
        self._token: Any = None
        self.committed = False
        self.rolled_back = False

    def on_finish(self, callback: Callable[[bool], None]) -> None:
        """Call *callback* with ``True`` on commit, ``False`` on rollback."""
        self._finish.append(callback)

    async def __aenter__(self) -> "InMemoryTransaction":
        self._token = _current.set(self)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        _current.reset(self._token)
        if exc_type is None:
            self.committed = True
        else:
            for undo in reversed(self._undo):
                undo()
            self.rolled_back = True
        for callback in self._finish:
            callback(self.committed)
        self._undo.clear()
        self._finish.clear()


__all__ = ["InMemoryTransaction", "current_transaction", "register_undo"]
