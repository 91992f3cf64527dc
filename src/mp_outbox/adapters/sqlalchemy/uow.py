"""SQLAlchemy adapter – SqlAlchemyUnitOfWork."""
from __future__ import annotations

from typing import Any

from mp_outbox.adapters.sqlalchemy.session import _current_session


class SqlAlchemyUnitOfWork:
    """SQLAlchemy async unit of work.

    While the block runs its session is the ambient session, so outbox
    appends and deduplication marks join the same transaction without being
    handed the session explicitly.
    """

    def __init__(self, session_factory: Any) -> None:
        self._factory = session_factory
        self.session: Any = None
        self._token: Any = None

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self.session = self._factory()
        self._token = _current_session.set(self.session)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            _current_session.reset(self._token)
            await self.session.close()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


__all__ = ["SqlAlchemyUnitOfWork"]
