"""RabbitMQ adapter – aio-pika import guard and connection retry.

Connecting retries with exponential back-off through ``tenacity``; once the
attempts are exhausted a :class:`BrokerConnectionError` is raised.
"""
from __future__ import annotations

from typing import Any

from mp_outbox.kernel.errors import BrokerConnectionError
from mp_outbox.observability.logging import get_logger

logger = get_logger(__name__)


def _require_aio_pika() -> Any:
    try:
        import aio_pika  # type: ignore[import-untyped]
        return aio_pika
    except ImportError as exc:
        raise ImportError("Install 'mp-outbox[rabbitmq]' (aio-pika) to use this adapter") from exc


async def connect_with_retry(aio_pika: Any, url: str, attempts: int = 3, backoff: float = 0.5) -> Any:
    """Open a robust connection, retrying up to *attempts* times."""
    import tenacity

    retrying = tenacity.AsyncRetrying(
        stop=tenacity.stop_after_attempt(max(1, attempts)),
        wait=tenacity.wait_exponential(multiplier=backoff, max=10),
        retry=tenacity.retry_if_exception_type((ConnectionError, OSError)),
        reraise=True,
    )
    try:
        async for attempt in retrying:
            with attempt:
                connection = await aio_pika.connect_robust(url)
    except (ConnectionError, OSError) as exc:
        logger.error("rabbitmq.connect_failed", attempts=attempts, error=str(exc))
        raise BrokerConnectionError(url, cause=exc) from exc
    return connection


__all__ = ["connect_with_retry"]
