"""Kernel messaging – deduplication (inbox idempotency) port."""
from __future__ import annotations

import abc
import dataclasses
from datetime import datetime


@dataclasses.dataclass(frozen=True)
class DeduplicationRecord:
    """Proof that a message identity was admitted for processing."""

    message_id: str
    message_name: str
    processed_at: datetime


class DeduplicationStore(abc.ABC):
    """Port: admit each message identity exactly once.

    Implementations must decide by a single atomic insert (never a read
    followed by a write) executed in the caller's transaction, so that the
    marker commits or rolls back together with the handler's side effects.
    """

    @abc.abstractmethod
    async def check_and_mark(self, message_id: str, message_name: str) -> bool:
        """Return ``True`` if *message_id* was already admitted, else mark it and return ``False``."""
        ...


__all__ = ["DeduplicationRecord", "DeduplicationStore"]
