"""Kernel messaging – Envelope."""
from __future__ import annotations

import dataclasses
from typing import Any, TypeVar

from mp_outbox.kernel.messaging.stamps import Stamp

S = TypeVar("S", bound=Stamp)


@dataclasses.dataclass(frozen=True)
class Envelope:
    """A business message plus the ordered stamps collected along the pipeline.

    Envelopes are immutable: every "modification" returns a new instance.

    Example::

        env = Envelope(OrderPlaced(order_id="o-1")).with_stamps(
            PartitionKeyStamp("order-1"),
        )
        env.last(PartitionKeyStamp).partition_key  # 'order-1'
    """

    message: Any
    stamps: tuple[Stamp, ...] = ()

    def with_stamps(self, *stamps: Stamp) -> "Envelope":
        """Return a copy with *stamps* appended."""
        return dataclasses.replace(self, stamps=self.stamps + tuple(stamps))

    def without(self, stamp_type: type[Stamp]) -> "Envelope":
        """Return a copy with every stamp of *stamp_type* removed."""
        return dataclasses.replace(
            self, stamps=tuple(s for s in self.stamps if not isinstance(s, stamp_type))
        )

    def last(self, stamp_type: type[S]) -> S | None:
        """Return the most recently added stamp of *stamp_type*, if any."""
        for stamp in reversed(self.stamps):
            if isinstance(stamp, stamp_type):
                return stamp
        return None

    def all(self, stamp_type: type[S]) -> list[S]:
        return [s for s in self.stamps if isinstance(s, stamp_type)]

    @property
    def message_type(self) -> type:
        return type(self.message)


__all__ = ["Envelope"]
