"""Application pipeline – Stage contract and its two outcomes."""
from __future__ import annotations

import abc
import dataclasses

from mp_outbox.kernel.messaging import Envelope


@dataclasses.dataclass(frozen=True)
class Continue:
    """Pass *envelope* (possibly restamped) to the next stage."""

    envelope: Envelope


@dataclasses.dataclass(frozen=True)
class Stop:
    """Short-circuit: later stages and the handler do not run."""

    envelope: Envelope


StageResult = Continue | Stop


class Stage(abc.ABC):
    """One interceptor in a :class:`~mp_outbox.application.pipeline.Pipeline`."""

    @abc.abstractmethod
    async def process(self, envelope: Envelope) -> StageResult: ...


__all__ = ["Continue", "Stage", "StageResult", "Stop"]
