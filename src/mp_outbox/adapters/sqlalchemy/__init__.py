"""SQLAlchemy adapter – sessions, unit of work, outbox and deduplication stores."""
from mp_outbox.adapters.sqlalchemy.deduplication import SqlAlchemyDeduplicationStore, deduplication_table
from mp_outbox.adapters.sqlalchemy.outbox import SqlAlchemyOutboxStore, outbox_table
from mp_outbox.adapters.sqlalchemy.session import SqlAlchemySessionFactory, current_session
from mp_outbox.adapters.sqlalchemy.uow import SqlAlchemyUnitOfWork

__all__ = [
    "SqlAlchemyDeduplicationStore",
    "SqlAlchemyOutboxStore",
    "SqlAlchemySessionFactory",
    "SqlAlchemyUnitOfWork",
    "current_session",
    "deduplication_table",
    "outbox_table",
]
