"""Testing fakes – in-memory doubles for kernel ports."""
from mp_outbox.testing.fakes.broker import (
    InMemoryBrokerConsumer,
    InMemoryBrokerDelivery,
    InMemoryBrokerPublisher,
    PublishedMessage,
)
from mp_outbox.testing.fakes.deduplication import InMemoryDeduplicationStore
from mp_outbox.testing.fakes.outbox import InMemoryOutboxStore
from mp_outbox.testing.fakes.transaction import InMemoryTransaction
from mp_outbox.kernel.time import FrozenClock

__all__ = [
    "FrozenClock",
    "InMemoryBrokerConsumer",
    "InMemoryBrokerDelivery",
    "InMemoryBrokerPublisher",
    "InMemoryDeduplicationStore",
    "InMemoryOutboxStore",
    "InMemoryTransaction",
    "PublishedMessage",
]
