"""Inbox processor – pipeline and handler inside one transaction."""
from __future__ import annotations

from typing import Any, Callable

from mp_outbox.application.pipeline import Handler, Pipeline, Stop
from mp_outbox.kernel.messaging import Envelope, MessageIdStamp, MessageNameStamp
from mp_outbox.observability.logging import bind_message_context, get_logger

logger = get_logger(__name__)

TransactionFactory = Callable[[], Any]


class InboxProcessor:
    """Processes received envelopes with exactly-once effect.

    *transaction_factory* returns an async context manager (typically a
    :class:`~mp_outbox.adapters.sqlalchemy.SqlAlchemyUnitOfWork`) that commits
    on a clean exit and rolls back on an exception. The deduplication record
    written by :class:`~mp_outbox.application.pipeline.DeduplicationStage`
    and the handler's own writes therefore share one fate.
    """

    def __init__(self, pipeline: Pipeline, handler: Handler, transaction_factory: TransactionFactory) -> None:
        self._pipeline = pipeline
        self._handler = handler
        self._transaction_factory = transaction_factory

    async def process(self, envelope: Envelope) -> bool:
        """Return ``True`` if the handler ran, ``False`` if a stage stopped the message."""
        id_stamp = envelope.last(MessageIdStamp)
        name_stamp = envelope.last(MessageNameStamp)
        with bind_message_context(
            id_stamp.message_id if id_stamp else None,
            name_stamp.message_name if name_stamp else None,
        ):
            async with self._transaction_factory():
                outcome = await self._pipeline.run(envelope)
                if isinstance(outcome, Stop):
                    logger.info("inbox.skipped")
                    return False
                await self._handler(outcome.envelope)
            logger.debug("inbox.handled")
            return True


__all__ = ["InboxProcessor", "TransactionFactory"]
