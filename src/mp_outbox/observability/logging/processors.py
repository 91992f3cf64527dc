"""Observability – structlog logger helper and message-scoped log context."""
from __future__ import annotations

import contextlib
from typing import Any, Iterator

import structlog


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


@contextlib.contextmanager
def bind_message_context(message_id: str | None, message_name: str | None) -> Iterator[None]:
    """Bind ``message_id`` / ``message_name`` to every log line inside the block.

    Relies on ``structlog.contextvars.merge_contextvars`` being part of the
    processor chain (see :class:`JsonLoggerFactory`).
    """
    values = {k: v for k, v in (("message_id", message_id), ("message_name", message_name)) if v}
    with structlog.contextvars.bound_contextvars(**values):
        yield


__all__ = ["bind_message_context", "get_logger"]
