"""SQLAlchemy adapter – deduplication (inbox idempotency) store.

``check_and_mark`` is one atomic insert in the ambient transaction:

* PostgreSQL / SQLite: ``INSERT ... ON CONFLICT DO NOTHING``
* MySQL / MariaDB: ``INSERT IGNORE``
* anything else: plain ``INSERT`` inside a SAVEPOINT, a unique violation
  meaning "duplicate"

The affected row count tells whether this call created the record.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable

from mp_outbox.adapters.sqlalchemy.session import _require_sqlalchemy, current_session
from mp_outbox.kernel.errors import ConfigurationError
from mp_outbox.kernel.messaging import DeduplicationStore
from mp_outbox.kernel.time import Clock, SystemClock
from mp_outbox.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TABLE_NAME = "message_broker_deduplication"


def deduplication_table(metadata: Any, name: str = DEFAULT_TABLE_NAME) -> Any:
    """Define the deduplication ledger table on *metadata*."""
    _require_sqlalchemy()
    from sqlalchemy import Column, DateTime, Index, String, Table  # type: ignore[import-untyped]

    return Table(
        name,
        metadata,
        Column("message_id", String(36), primary_key=True),
        Column("message_name", String(255), nullable=False),
        Column("processed_at", DateTime(timezone=True), nullable=False),
        Index(f"ix_{name}_processed_at", "processed_at"),
    )


class SqlAlchemyDeduplicationStore(DeduplicationStore):
    """Deduplication ledger backed by SQLAlchemy.

    *engine* is only used by :meth:`setup` and :meth:`purge`; marking always
    goes through the session returned by *session_provider* (the active unit
    of work's session by default).
    """

    def __init__(
        self,
        engine: Any,
        *,
        table_name: str = DEFAULT_TABLE_NAME,
        clock: Clock | None = None,
        session_provider: Callable[[], Any] = current_session,
        metadata: Any | None = None,
    ) -> None:
        _require_sqlalchemy()
        from sqlalchemy import MetaData  # type: ignore[import-untyped]

        self._engine = engine
        self._metadata = metadata if metadata is not None else MetaData()
        self._table = deduplication_table(self._metadata, table_name)
        self._clock = clock or SystemClock()
        self._session_provider = session_provider

    @property
    def table(self) -> Any:
        return self._table

    async def setup(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(self._metadata.create_all, tables=[self._table], checkfirst=True)

    async def check_and_mark(self, message_id: str, message_name: str) -> bool:
        session = self._session_provider()
        if session is None:
            raise ConfigurationError(
                "Deduplication needs a session; run it inside a SqlAlchemyUnitOfWork"
            )
        values = {"message_id": message_id, "message_name": message_name, "processed_at": self._clock.now()}
        dialect = session.get_bind().dialect.name

        if dialect in ("postgresql", "sqlite", "mysql", "mariadb"):
            result = await session.execute(self._insert_ignoring_duplicates(dialect, values))
            duplicate = result.rowcount == 0
        else:
            duplicate = await self._insert_in_savepoint(session, values)

        if duplicate:
            logger.info("inbox.duplicate_skipped", message_id=message_id, message_name=message_name)
        return duplicate

    def _insert_ignoring_duplicates(self, dialect: str, values: dict[str, Any]) -> Any:
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert  # type: ignore[import-untyped]

            return insert(self._table).values(**values).on_conflict_do_nothing(index_elements=["message_id"])
        if dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert  # type: ignore[import-untyped]

            return insert(self._table).values(**values).on_conflict_do_nothing(index_elements=["message_id"])
        from sqlalchemy import insert  # type: ignore[import-untyped]

        return insert(self._table).values(**values).prefix_with("IGNORE")

    async def _insert_in_savepoint(self, session: Any, values: dict[str, Any]) -> bool:
        from sqlalchemy import insert  # type: ignore[import-untyped]
        from sqlalchemy.exc import IntegrityError  # type: ignore[import-untyped]

        try:
            async with session.begin_nested():
                await session.execute(insert(self._table).values(**values))
        except IntegrityError:
            return True
        return False

    async def purge(self, older_than: timedelta) -> int:
        """Delete records processed before ``now - older_than``; return how many."""
        from sqlalchemy import delete  # type: ignore[import-untyped]

        cutoff = self._clock.now() - older_than
        async with self._engine.begin() as conn:
            result = await conn.execute(delete(self._table).where(self._table.c.processed_at < cutoff))
        logger.info("inbox.deduplication_purged", deleted=result.rowcount, cutoff=cutoff.isoformat())
        return int(result.rowcount)


__all__ = ["DEFAULT_TABLE_NAME", "SqlAlchemyDeduplicationStore", "deduplication_table"]
