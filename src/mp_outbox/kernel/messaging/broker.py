"""Kernel messaging – external broker collaborator ports."""
from __future__ import annotations

import abc
from typing import Any, AsyncIterator, Protocol


class BrokerPublisher(abc.ABC):
    """Port: hand a message to the external broker."""

    @abc.abstractmethod
    async def publish(
        self,
        destination: str,
        routing_key: str,
        body: str,
        headers: dict[str, str],
    ) -> None: ...


class BrokerDelivery(Protocol):
    """One message received from the broker, acknowledged explicitly."""

    body: bytes
    headers: dict[str, Any]

    async def ack(self) -> None: ...

    async def reject(self, requeue: bool = False) -> None: ...


class BrokerConsumer(abc.ABC):
    """Port: stream deliveries from one broker queue."""

    queue_name: str

    @abc.abstractmethod
    def deliveries(self) -> AsyncIterator[BrokerDelivery]: ...


class TopologyProvisioner(Protocol):
    """Declares exchanges/queues/bindings at deployment time.

    Never called by the runtime relay or inbox; listed here so deployment
    tooling has a stable seam.
    """

    async def declare(self) -> list[Any]: ...

    def dry_run(self) -> list[str]: ...


__all__ = ["BrokerConsumer", "BrokerDelivery", "BrokerPublisher", "TopologyProvisioner"]
