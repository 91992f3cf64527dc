"""Kernel messaging – stamps (single metadata facts attached to an envelope)."""
from __future__ import annotations

import dataclasses
from typing import ClassVar


@dataclasses.dataclass(frozen=True)
class Stamp:
    """Base class for envelope metadata.

    ``sendable`` stamps travel with the message (outbox row, wire headers);
    non-sendable ones describe local delivery state only.
    """

    sendable: ClassVar[bool] = True


@dataclasses.dataclass(frozen=True)
class MessageIdStamp(Stamp):
    """Stable identity assigned once at submission; survives redelivery."""

    message_id: str


@dataclasses.dataclass(frozen=True)
class MessageNameStamp(Stamp):
    """Semantic, broker-facing name (e.g. ``order.placed``)."""

    message_name: str


@dataclasses.dataclass(frozen=True)
class PartitionKeyStamp(Stamp):
    """Ordering domain. ``""`` means no ordering constraint."""

    partition_key: str = ""


@dataclasses.dataclass(frozen=True)
class SourceQueueStamp(Stamp):
    """Broker queue the message was consumed from."""

    queue: str


@dataclasses.dataclass(frozen=True)
class DelayStamp(Stamp):
    """Postpone availability of an outbox row by *delay_ms* milliseconds."""

    sendable: ClassVar[bool] = False

    delay_ms: int


@dataclasses.dataclass(frozen=True)
class ReceivedStamp(Stamp):
    """Marks an envelope as received from a transport (not freshly dispatched)."""

    sendable: ClassVar[bool] = False

    transport_name: str


@dataclasses.dataclass(frozen=True)
class TransportMessageIdStamp(Stamp):
    """Transport-local id (the outbox row sequence id)."""

    sendable: ClassVar[bool] = False

    transport_id: int


BUILTIN_STAMP_TYPES: tuple[type[Stamp], ...] = (
    MessageIdStamp,
    MessageNameStamp,
    PartitionKeyStamp,
    SourceQueueStamp,
)


__all__ = [
    "BUILTIN_STAMP_TYPES",
    "DelayStamp",
    "MessageIdStamp",
    "MessageNameStamp",
    "PartitionKeyStamp",
    "ReceivedStamp",
    "SourceQueueStamp",
    "Stamp",
    "TransportMessageIdStamp",
]
