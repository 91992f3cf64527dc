"""Kernel messaging – envelope serializer port."""
from __future__ import annotations

import abc
import dataclasses

from mp_outbox.kernel.messaging.envelope import Envelope


@dataclasses.dataclass(frozen=True)
class EncodedMessage:
    """Transport-ready representation: opaque body plus string headers."""

    body: str
    headers: dict[str, str] = dataclasses.field(default_factory=dict)


class EnvelopeSerializer(abc.ABC):
    """Port: envelope <-> (body, headers)."""

    @abc.abstractmethod
    def encode(self, envelope: Envelope) -> EncodedMessage: ...

    @abc.abstractmethod
    def decode(self, encoded: EncodedMessage) -> Envelope: ...


__all__ = ["EncodedMessage", "EnvelopeSerializer"]
