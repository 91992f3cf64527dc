"""SQLAlchemy adapter – ordered outbox store.

Claiming selects the lowest-id *partition head* that is available and not in
flight, locks it with ``FOR UPDATE SKIP LOCKED``, stamps ``delivered_at`` and
commits, all in one short transaction. A partition's head is its lowest
remaining id whether or not that row is currently claimed, so a later row
of the same partition never becomes claimable while an earlier one exists.
Rows with an empty partition key are unordered and each is its own head.
"""
from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import Any

from mp_outbox.adapters.sqlalchemy.session import _require_sqlalchemy, current_session
from mp_outbox.kernel.errors import ConfigurationError
from mp_outbox.kernel.messaging import OutboxRow, OutboxStore
from mp_outbox.kernel.time import Clock, SystemClock
from mp_outbox.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TABLE_NAME = "messenger_outbox"


def outbox_table(metadata: Any, name: str = DEFAULT_TABLE_NAME) -> Any:
    """Define the outbox table (and its claim indexes) on *metadata*."""
    _require_sqlalchemy()
    from sqlalchemy import BigInteger, Column, DateTime, Index, Integer, String, Table, Text  # type: ignore[import-untyped]

    return Table(
        name,
        metadata,
        Column("id", BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True),
        Column("body", Text, nullable=False),
        Column("headers", Text, nullable=False),
        Column("queue_name", String(190), nullable=False),
        Column("partition_key", String(190), nullable=False, default=""),
        Column("created_at", DateTime(timezone=True), nullable=False),
        Column("available_at", DateTime(timezone=True), nullable=False),
        Column("delivered_at", DateTime(timezone=True), nullable=True),
        Index(f"ix_{name}_partition_head", "queue_name", "partition_key", "available_at", "delivered_at", "id"),
        Index(f"ix_{name}_available", "queue_name", "available_at", "delivered_at", "id"),
    )


def _aware(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SqlAlchemyOutboxStore(OutboxStore):
    """Outbox store on any SQLAlchemy async engine.

    ``FOR UPDATE SKIP LOCKED`` is emitted on dialects that support it
    (PostgreSQL, MySQL 8, MariaDB 10.6); SQLite has no row locks and runs
    the same query unlocked, which is safe for a single writer only.
    """

    def __init__(
        self,
        engine: Any,
        *,
        table_name: str = DEFAULT_TABLE_NAME,
        queue_name: str = "outbox",
        redeliver_timeout: float = 3600.0,
        auto_setup: bool = False,
        clock: Clock | None = None,
        metadata: Any | None = None,
    ) -> None:
        _require_sqlalchemy()
        from sqlalchemy import MetaData  # type: ignore[import-untyped]

        if redeliver_timeout <= 0:
            raise ConfigurationError("redeliver_timeout must be positive")
        self._engine = engine
        self._metadata = metadata if metadata is not None else MetaData()
        self._table = outbox_table(self._metadata, table_name)
        self._queue_name = queue_name
        self._redeliver_timeout = timedelta(seconds=redeliver_timeout)
        self._auto_setup = auto_setup
        self._setup_done = False
        self._clock = clock or SystemClock()

    @property
    def table(self) -> Any:
        return self._table

    @property
    def queue_name(self) -> str:
        return self._queue_name

    async def setup(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(self._metadata.create_all, tables=[self._table], checkfirst=True)
        self._setup_done = True

    async def append(
        self,
        body: str,
        headers: dict[str, str],
        *,
        partition_key: str = "",
        delay: float = 0.0,
        session: Any | None = None,
    ) -> int:
        from sqlalchemy import insert  # type: ignore[import-untyped]

        session = session if session is not None else current_session()
        if session is None:
            raise ConfigurationError(
                "Outbox append needs a session; run it inside a SqlAlchemyUnitOfWork or pass session="
            )
        now = self._clock.now()
        result = await session.execute(
            insert(self._table).values(
                body=body,
                headers=json.dumps(headers),
                queue_name=self._queue_name,
                partition_key=partition_key or "",
                created_at=now,
                available_at=now + timedelta(seconds=delay),
                delivered_at=None,
            )
        )
        return int(result.inserted_primary_key[0])

    def claim_statement(self, now: datetime) -> Any:
        """Build the locking ``SELECT`` that finds the next eligible partition head."""
        from sqlalchemy import func, or_, select  # type: ignore[import-untyped]

        t = self._table
        heads = (
            select(func.min(t.c.id))
            .where(t.c.queue_name == self._queue_name, t.c.partition_key != "")
            .group_by(t.c.partition_key)
        )
        return (
            select(t)
            .where(
                t.c.queue_name == self._queue_name,
                or_(t.c.partition_key == "", t.c.id.in_(heads)),
                t.c.available_at <= now,
                or_(t.c.delivered_at.is_(None), t.c.delivered_at < now - self._redeliver_timeout),
            )
            .order_by(t.c.id)
            .limit(1)
            .with_for_update(skip_locked=True)
        )

    async def claim(self) -> OutboxRow | None:
        from sqlalchemy import update  # type: ignore[import-untyped]

        if self._auto_setup and not self._setup_done:
            await self.setup()
        now = self._clock.now()
        async with self._engine.begin() as conn:
            found = (await conn.execute(self.claim_statement(now))).mappings().first()
            if found is None:
                return None
            await conn.execute(
                update(self._table).where(self._table.c.id == found["id"]).values(delivered_at=now)
            )
        row = self._to_row(found, delivered_at=now)
        logger.debug("outbox.claimed", row_id=row.id, partition_key=row.partition_key)
        return row

    async def ack(self, row_id: int) -> None:
        from sqlalchemy import delete  # type: ignore[import-untyped]

        async with self._engine.begin() as conn:
            await conn.execute(delete(self._table).where(self._table.c.id == row_id))

    async def keepalive(self, row_id: int) -> None:
        from sqlalchemy import update  # type: ignore[import-untyped]

        async with self._engine.begin() as conn:
            await conn.execute(
                update(self._table).where(self._table.c.id == row_id).values(delivered_at=self._clock.now())
            )

    def _to_row(self, data: Any, *, delivered_at: datetime | None) -> OutboxRow:
        return OutboxRow(
            id=int(data["id"]),
            body=data["body"],
            headers=json.loads(data["headers"]),
            queue_name=data["queue_name"],
            partition_key=data["partition_key"],
            created_at=_aware(data["created_at"]),
            available_at=_aware(data["available_at"]),
            delivered_at=delivered_at,
        )


__all__ = ["DEFAULT_TABLE_NAME", "SqlAlchemyOutboxStore", "outbox_table"]
