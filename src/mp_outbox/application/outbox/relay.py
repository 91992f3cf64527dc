"""Outbox relay – moves one claimed row to the external broker.

Each call walks ``claimed -> translated -> routed -> handed off -> acked``.
A failure at any step is logged and re-raised with the row still claimed;
it becomes claimable again after the store's redelivery timeout and, since
it is its partition's head, nothing behind it overtakes it.
"""
from __future__ import annotations

import dataclasses
from typing import Mapping

from mp_outbox.application.outbox.transport import OutboxTransport
from mp_outbox.application.routing import RoutingResolver
from mp_outbox.kernel.errors import MissingStampError, PublisherNotFoundError
from mp_outbox.kernel.messaging import (
    BrokerPublisher,
    EnvelopeSerializer,
    MessageIdStamp,
    MessageNameStamp,
    ReceivedStamp,
    TransportMessageIdStamp,
    type_identity,
)
from mp_outbox.observability.logging import bind_message_context, get_logger

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class RelayResult:
    """Outcome of one successful relay iteration."""

    row_id: int
    message_id: str
    message_name: str
    channel: str
    routing_key: str


class OutboxRelay:
    """Claim, translate, route, publish, acknowledge.

    *publishers* maps a channel to the :class:`BrokerPublisher` that serves
    it; the map is fixed at construction.
    """

    def __init__(
        self,
        transport: OutboxTransport,
        translator: EnvelopeSerializer,
        resolver: RoutingResolver,
        publishers: Mapping[str, BrokerPublisher],
    ) -> None:
        self._transport = transport
        self._translator = translator
        self._resolver = resolver
        self._publishers = dict(publishers)

    async def relay_next(self) -> RelayResult | None:
        """Relay the next eligible row; ``None`` when nothing is claimable."""
        envelope = await self._transport.get()
        if envelope is None:
            return None

        row_id = envelope.last(TransportMessageIdStamp).transport_id
        name_stamp = envelope.last(MessageNameStamp)
        id_stamp = envelope.last(MessageIdStamp)
        message_name = name_stamp.message_name if name_stamp else None
        message_id = id_stamp.message_id if id_stamp else None

        with bind_message_context(message_id, message_name):
            try:
                clean = envelope.without(TransportMessageIdStamp).without(ReceivedStamp)
                encoded = self._translator.encode(clean)
                if message_name is None or message_id is None:
                    raise MissingStampError(
                        "MessageNameStamp" if message_name is None else "MessageIdStamp",
                        type_identity(envelope.message_type),
                    )
                route = self._resolver.resolve(message_name)
                publisher = self._publishers.get(route.channel)
                if publisher is None:
                    raise PublisherNotFoundError(route.channel, known=list(self._publishers))
                await publisher.publish(
                    route.channel,
                    route.routing_key,
                    encoded.body,
                    {**encoded.headers, **route.headers},
                )
            except Exception as exc:
                logger.error("outbox.relay_failed", row_id=row_id, error=str(exc))
                raise

            await self._transport.ack(envelope)
            logger.info(
                "outbox.relayed",
                row_id=row_id,
                channel=route.channel,
                routing_key=route.routing_key,
            )
        return RelayResult(row_id, message_id, message_name, route.channel, route.routing_key)


__all__ = ["OutboxRelay", "RelayResult"]
