"""Application pipeline – built-in stages.

Submission stages stamp a freshly dispatched envelope and leave received
envelopes alone; none of them overwrites a stamp that is already present.
:class:`DeduplicationStage` runs on the consuming side.
"""
from __future__ import annotations

from typing import Any, Callable

from mp_outbox.application.pipeline.stage import Continue, Stage, StageResult, Stop
from mp_outbox.kernel.errors import InvalidMessageIdError, MissingStampError
from mp_outbox.kernel.messaging import (
    DeduplicationStore,
    Envelope,
    MessageIdStamp,
    MessageNameStamp,
    MessageRegistry,
    PartitionKeyStamp,
    ReceivedStamp,
    type_identity,
)
from mp_outbox.kernel.types import canonical_message_id, new_message_id
PartitionKeyResolver = Callable[[Any], "str | None"]


class MessageIdStage(Stage):
    """Assign a UUID v7 :class:`MessageIdStamp` at submission."""

    def __init__(self, id_factory: Callable[[], str] = new_message_id) -> None:
        self._id_factory = id_factory

    async def process(self, envelope: Envelope) -> StageResult:
        if envelope.last(ReceivedStamp) is not None or envelope.last(MessageIdStamp) is not None:
            return Continue(envelope)
        return Continue(envelope.with_stamps(MessageIdStamp(self._id_factory())))


class MessageNameStage(Stage):
    """Attach the registered semantic name."""

    def __init__(self, registry: MessageRegistry) -> None:
        self._registry = registry

    async def process(self, envelope: Envelope) -> StageResult:
        if envelope.last(ReceivedStamp) is not None or envelope.last(MessageNameStamp) is not None:
            return Continue(envelope)
        name = self._registry.name_of(envelope.message)
        return Continue(envelope.with_stamps(MessageNameStamp(name)))


class PartitionKeyStage(Stage):
    """Attach a :class:`PartitionKeyStamp` computed from the message.

    *resolver* maps a message to its ordering key (``None`` or ``""`` for no
    ordering). With ``required=True`` an envelope leaving this stage without
    a partition key raises :class:`MissingStampError`.
    """

    def __init__(self, resolver: PartitionKeyResolver | None = None, required: bool = False) -> None:
        self._resolver = resolver
        self._required = required

    async def process(self, envelope: Envelope) -> StageResult:
        if envelope.last(ReceivedStamp) is not None or envelope.last(PartitionKeyStamp) is not None:
            return Continue(envelope)
        key = self._resolver(envelope.message) if self._resolver is not None else None
        if key:
            return Continue(envelope.with_stamps(PartitionKeyStamp(key)))
        if self._required:
            raise MissingStampError("PartitionKeyStamp", type_identity(envelope.message_type))
        return Continue(envelope)


class DeduplicationStage(Stage):
    """Admit each received message identity once.

    Must run inside the transaction that also wraps the handler, so that the
    ledger record is rolled back together with a failed handler. The ledger
    key is the canonical UUID string, so differently spelled copies of one id
    count as the same message.
    """

    def __init__(self, store: DeduplicationStore) -> None:
        self._store = store

    async def process(self, envelope: Envelope) -> StageResult:
        if envelope.last(ReceivedStamp) is None:
            return Continue(envelope)
        id_stamp = envelope.last(MessageIdStamp)
        if id_stamp is None:
            return Continue(envelope)

        message_type = type_identity(envelope.message_type)
        try:
            message_id = canonical_message_id(id_stamp.message_id)
        except ValueError:
            raise InvalidMessageIdError(id_stamp.message_id, message_type) from None

        name_stamp = envelope.last(MessageNameStamp)
        message_name = name_stamp.message_name if name_stamp is not None else message_type

        if await self._store.check_and_mark(message_id, message_name):
            return Stop(envelope)
        return Continue(envelope)


__all__ = [
    "DeduplicationStage",
    "MessageIdStage",
    "MessageNameStage",
    "PartitionKeyResolver",
    "PartitionKeyStage",
]
