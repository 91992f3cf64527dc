"""Inbox worker – broker deliveries to :class:`InboxProcessor`.

Acknowledgement rules:

* decoded and handled (or skipped as duplicate): ``ack``
* cannot be decoded, or carries an invalid message id: forwarded to the
  failure channel and acked when a failure publisher is configured,
  otherwise ``reject(requeue=False)`` so the broker dead-letters it
* handler raised: ``reject(requeue=True)`` and the error propagates
"""
from __future__ import annotations

from typing import Any

from mp_outbox.application.inbox.processor import InboxProcessor
from mp_outbox.kernel.errors import InvalidMessageIdError, MessageDecodingFailedError
from mp_outbox.kernel.messaging import (
    BrokerConsumer,
    BrokerDelivery,
    BrokerPublisher,
    EncodedMessage,
    EnvelopeSerializer,
    ReceivedStamp,
    SourceQueueStamp,
)
from mp_outbox.observability.logging import get_logger

logger = get_logger(__name__)

FAILURE_REASON_HEADER = "x-failure-reason"


def _text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode()
    return str(value)


class InboxWorker:
    """Consume one broker queue and process every delivery."""

    def __init__(
        self,
        translator: EnvelopeSerializer,
        processor: InboxProcessor,
        consumer: BrokerConsumer,
        failure_publisher: BrokerPublisher | None = None,
        failure_channel: str = "failed",
    ) -> None:
        self._translator = translator
        self._processor = processor
        self._consumer = consumer
        self._failure_publisher = failure_publisher
        self._failure_channel = failure_channel

    async def handle(self, delivery: BrokerDelivery) -> bool:
        """Process one delivery; return ``True`` if the handler ran."""
        queue = self._consumer.queue_name
        try:
            body = _text(delivery.body)
            headers = {str(k): _text(v) for k, v in (delivery.headers or {}).items()}
            envelope = self._translator.decode(EncodedMessage(body=body, headers=headers))
        except (MessageDecodingFailedError, UnicodeDecodeError) as exc:
            await self._dead_letter(delivery, exc)
            return False

        envelope = envelope.with_stamps(ReceivedStamp(queue), SourceQueueStamp(queue))
        try:
            handled = await self._processor.process(envelope)
        except InvalidMessageIdError as exc:
            await self._dead_letter(delivery, exc)
            return False
        except Exception as exc:
            logger.error("inbox.handler_failed", queue=queue, error=str(exc))
            await delivery.reject(requeue=True)
            raise
        await delivery.ack()
        return handled

    async def run(self, max_messages: int | None = None) -> int:
        """Consume until the consumer is exhausted or *max_messages* were received."""
        received = 0
        async for delivery in self._consumer.deliveries():
            await self.handle(delivery)
            received += 1
            if max_messages is not None and received >= max_messages:
                break
        return received

    async def _dead_letter(self, delivery: BrokerDelivery, exc: Exception) -> None:
        queue = self._consumer.queue_name
        logger.warning("inbox.decode_failed", queue=queue, error=str(exc))
        if self._failure_publisher is None:
            await delivery.reject(requeue=False)
            return
        body = delivery.body
        headers = {str(k): _text(v) for k, v in (delivery.headers or {}).items()}
        headers[FAILURE_REASON_HEADER] = str(exc)
        await self._failure_publisher.publish(
            self._failure_channel,
            queue,
            body.decode(errors="replace") if isinstance(body, (bytes, bytearray)) else str(body),
            headers,
        )
        await delivery.ack()


__all__ = ["FAILURE_REASON_HEADER", "InboxWorker"]
