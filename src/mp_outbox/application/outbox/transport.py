"""Outbox transport – envelope-level facade over an :class:`OutboxStore`.

Sending encodes the envelope with the native serializer and appends it in
the caller's transaction; receiving claims the next partition head and
returns it decoded, stamped with its row id so it can be acknowledged.
"""
from __future__ import annotations

from typing import Any

from mp_outbox.kernel.errors import MissingStampError
from mp_outbox.kernel.messaging import (
    DelayStamp,
    EncodedMessage,
    Envelope,
    EnvelopeSerializer,
    OutboxStore,
    PartitionKeyStamp,
    ReceivedStamp,
    TransportMessageIdStamp,
    type_identity,
)
from mp_outbox.observability.logging import get_logger

logger = get_logger(__name__)


class OutboxTransport:
    """Send to and receive from the transactional outbox."""

    def __init__(self, store: OutboxStore, serializer: EnvelopeSerializer, name: str = "outbox") -> None:
        self._store = store
        self._serializer = serializer
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def send(self, envelope: Envelope, *, session: Any | None = None) -> Envelope:
        encoded = self._serializer.encode(envelope)
        partition = envelope.last(PartitionKeyStamp)
        delay = envelope.last(DelayStamp)
        row_id = await self._store.append(
            encoded.body,
            encoded.headers,
            partition_key=partition.partition_key if partition is not None else "",
            delay=delay.delay_ms / 1000 if delay is not None else 0.0,
            session=session,
        )
        logger.debug("outbox.appended", row_id=row_id, message_type=type_identity(envelope.message_type))
        return envelope.with_stamps(TransportMessageIdStamp(row_id))

    async def get(self) -> Envelope | None:
        """Claim and decode the next eligible row, or return ``None``."""
        row = await self._store.claim()
        if row is None:
            return None
        envelope = self._serializer.decode(EncodedMessage(body=row.body, headers=row.headers))
        return envelope.with_stamps(TransportMessageIdStamp(row.id), ReceivedStamp(self._name))

    async def ack(self, envelope: Envelope) -> None:
        await self._store.ack(self._row_id(envelope))

    async def reject(self, envelope: Envelope) -> None:
        await self._store.reject(self._row_id(envelope))

    async def keepalive(self, envelope: Envelope) -> None:
        await self._store.keepalive(self._row_id(envelope))

    @staticmethod
    def _row_id(envelope: Envelope) -> int:
        stamp = envelope.last(TransportMessageIdStamp)
        if stamp is None:
            raise MissingStampError("TransportMessageIdStamp", type_identity(envelope.message_type))
        return stamp.transport_id


__all__ = ["OutboxTransport"]
