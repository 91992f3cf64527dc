"""Testing fakes – InMemoryDeduplicationStore."""
from __future__ import annotations

import asyncio

from mp_outbox.kernel.messaging import DeduplicationRecord, DeduplicationStore
from mp_outbox.kernel.time import Clock, SystemClock
from mp_outbox.testing.fakes.transaction import InMemoryTransaction, current_transaction


class InMemoryDeduplicationStore(DeduplicationStore):
    """Dict-backed deduplication ledger for tests.

    Inside an :class:`InMemoryTransaction` a mark stays pending until the
    transaction ends, like an uncommitted row under a unique key. Another
    transaction marking the same id waits for the owner: it sees a duplicate
    after a commit and may claim the id after a rollback. The owning
    transaction sees its own pending mark as a duplicate at once. Outside a
    transaction marks are recorded immediately.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._records: dict[str, DeduplicationRecord] = {}
        self._pending: dict[str, tuple[InMemoryTransaction, asyncio.Event]] = {}
        self._clock = clock or SystemClock()

    async def check_and_mark(self, message_id: str, message_name: str) -> bool:
        tx = current_transaction()
        while message_id in self._pending:
            owner, released = self._pending[message_id]
            if owner is tx:
                return True
            await released.wait()
        if message_id in self._records:
            return True

        record = DeduplicationRecord(message_id, message_name, self._clock.now())
        if tx is None:
            self._records[message_id] = record
            return False

        released = asyncio.Event()
        self._pending[message_id] = (tx, released)

        def _finish(committed: bool) -> None:
            del self._pending[message_id]
            if committed:
                self._records[message_id] = record
            released.set()

        tx.on_finish(_finish)
        return False

    def all_ids(self) -> list[str]:
        """Return the committed ids."""
        return list(self._records)


__all__ = ["InMemoryDeduplicationStore"]
