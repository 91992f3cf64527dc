"""Outbox – message bus (submission side)."""
from __future__ import annotations

from typing import Any

from mp_outbox.application.outbox.transport import OutboxTransport
from mp_outbox.application.pipeline import Pipeline, Stop
from mp_outbox.kernel.messaging import Envelope, Stamp


class MessageBus:
    """Stamp a message through the submission pipeline and append it to the outbox.

    Call :meth:`dispatch` inside the unit of work that persists the related
    business state; the outbox row commits or rolls back with it.

    Example::

        async with uow:
            await repo.save(order)
            await bus.dispatch(OrderPlaced(order_id=order.id))
            await uow.commit()
    """

    def __init__(self, pipeline: Pipeline, transport: OutboxTransport) -> None:
        self._pipeline = pipeline
        self._transport = transport

    async def dispatch(self, message: Any, *stamps: Stamp, session: Any | None = None) -> Envelope:
        envelope = message.with_stamps(*stamps) if isinstance(message, Envelope) else Envelope(message, stamps)
        outcome = await self._pipeline.run(envelope)
        if isinstance(outcome, Stop):
            return outcome.envelope
        return await self._transport.send(outcome.envelope, session=session)


__all__ = ["MessageBus"]
