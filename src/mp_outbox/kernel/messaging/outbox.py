"""Kernel messaging – outbox store port."""
from __future__ import annotations

import abc
import dataclasses
from datetime import datetime
from typing import Any


@dataclasses.dataclass(frozen=True)
class OutboxRow:
    """One pending outgoing message, as stored."""

    id: int
    body: str
    headers: dict[str, str]
    queue_name: str
    partition_key: str
    created_at: datetime
    available_at: datetime
    delivered_at: datetime | None = None


class OutboxStore(abc.ABC):
    """Port: durable append log with per-partition head-of-line claiming.

    Only the oldest unacknowledged row of a partition is ever claimable. Rows
    with an empty partition key are independent of each other.
    """

    @abc.abstractmethod
    async def setup(self) -> None:
        """Create the underlying storage if missing (idempotent)."""
        ...

    @abc.abstractmethod
    async def append(
        self,
        body: str,
        headers: dict[str, str],
        *,
        partition_key: str = "",
        delay: float = 0.0,
        session: Any | None = None,
    ) -> int:
        """Insert a row inside the caller's transaction; return its sequence id."""
        ...

    @abc.abstractmethod
    async def claim(self) -> OutboxRow | None:
        """Claim the oldest eligible partition head, or ``None``."""
        ...

    @abc.abstractmethod
    async def ack(self, row_id: int) -> None:
        """Remove a successfully published row."""
        ...

    async def reject(self, row_id: int) -> None:
        """Remove a row the caller gave up on; same effect as :meth:`ack`."""
        await self.ack(row_id)

    @abc.abstractmethod
    async def keepalive(self, row_id: int) -> None:
        """Extend an in-flight claim by refreshing its delivery timestamp."""
        ...


__all__ = ["OutboxRow", "OutboxStore"]
