"""Testing support – in-memory fakes for the outbox, inbox and broker ports."""

from mp_outbox.testing.fakes import (
    FrozenClock,
    InMemoryBrokerConsumer,
    InMemoryBrokerDelivery,
    InMemoryBrokerPublisher,
    InMemoryDeduplicationStore,
    InMemoryOutboxStore,
    InMemoryTransaction,
    PublishedMessage,
)

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
