"""Outbox worker – polling loop around :class:`OutboxRelay`."""
from __future__ import annotations

import asyncio

from mp_outbox.application.outbox.relay import OutboxRelay
from mp_outbox.observability.logging import get_logger

logger = get_logger(__name__)


class OutboxWorker:
    """Relay rows until stopped.

    Sleeps *poll_interval* seconds whenever nothing is claimable. Relay errors
    propagate and end the loop; restarting is left to the process supervisor.
    Run several workers (tasks or processes) for cross-partition parallelism.
    """

    def __init__(self, relay: OutboxRelay, poll_interval: float = 1.0) -> None:
        if poll_interval < 0:
            raise ValueError("poll_interval must be >= 0")
        self._relay = relay
        self._poll_interval = poll_interval
        self._stopped = asyncio.Event()

    def stop(self) -> None:
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    async def run(self, max_messages: int | None = None, *, until_idle: bool = False) -> int:
        """Relay until :meth:`stop`, *max_messages* relayed, or (with *until_idle*) an empty claim.

        Returns the number of relayed messages.
        """
        relayed = 0
        logger.info("outbox.worker_started", poll_interval=self._poll_interval)
        while not self._stopped.is_set():
            if max_messages is not None and relayed >= max_messages:
                break
            result = await self._relay.relay_next()
            if result is not None:
                relayed += 1
                continue
            if until_idle:
                break
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self._poll_interval)
            except asyncio.TimeoutError:
                pass
        logger.info("outbox.worker_stopped", relayed=relayed)
        return relayed


__all__ = ["OutboxWorker"]
