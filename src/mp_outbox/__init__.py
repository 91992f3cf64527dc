"""
mp_outbox – transactional outbox / inbox messaging core.

Import path convention::

    from mp_outbox.kernel.messaging import Envelope, MessageIdStamp
    from mp_outbox.application.outbox import MessageBus, OutboxRelay
    from mp_outbox.application.inbox import InboxProcessor
    from mp_outbox.adapters.sqlalchemy import SqlAlchemyOutboxStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
