"""Kernel messaging – envelope, stamps, registry and store/broker ports."""
from mp_outbox.kernel.messaging.broker import (
    BrokerConsumer,
    BrokerDelivery,
    BrokerPublisher,
    TopologyProvisioner,
)
from mp_outbox.kernel.messaging.deduplication import DeduplicationRecord, DeduplicationStore
from mp_outbox.kernel.messaging.envelope import Envelope
from mp_outbox.kernel.messaging.outbox import OutboxRow, OutboxStore
from mp_outbox.kernel.messaging.registry import MessageRegistry, type_identity
from mp_outbox.kernel.messaging.serializer import EncodedMessage, EnvelopeSerializer
from mp_outbox.kernel.messaging.stamps import (
    BUILTIN_STAMP_TYPES,
    DelayStamp,
    MessageIdStamp,
    MessageNameStamp,
    PartitionKeyStamp,
    ReceivedStamp,
    SourceQueueStamp,
    Stamp,
    TransportMessageIdStamp,
)

__all__ = [
    "BUILTIN_STAMP_TYPES",
    "BrokerConsumer",
    "BrokerDelivery",
    "BrokerPublisher",
    "DeduplicationRecord",
    "DeduplicationStore",
    "DelayStamp",
    "EncodedMessage",
    "Envelope",
    "EnvelopeSerializer",
    "MessageIdStamp",
    "MessageNameStamp",
    "MessageRegistry",
    "OutboxRow",
    "OutboxStore",
    "PartitionKeyStamp",
    "ReceivedStamp",
    "SourceQueueStamp",
    "Stamp",
    "TopologyProvisioner",
    "TransportMessageIdStamp",
    "type_identity",
]
