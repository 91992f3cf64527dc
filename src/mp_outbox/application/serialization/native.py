"""Native envelope serializer – JSON body plus one header per stamp type.

Header layout::

    type                          internal type identity (module.QualName)
    Content-Type                  application/json
    X-Message-Stamp-<StampName>   JSON list of that stamp type's fields

Non-sendable stamps (delivery state such as ``ReceivedStamp``) are dropped.
"""
from __future__ import annotations

import dataclasses
import functools
import json
from typing import Any, Iterable

from mp_outbox.kernel.errors import MessageDecodingFailedError, SerializationError
from mp_outbox.kernel.messaging import (
    BUILTIN_STAMP_TYPES,
    EncodedMessage,
    Envelope,
    EnvelopeSerializer,
    MessageRegistry,
    Stamp,
    type_identity,
)

STAMP_HEADER_PREFIX = "X-Message-Stamp-"
TYPE_HEADER = "type"
CONTENT_TYPE_HEADER = "Content-Type"


@functools.lru_cache(maxsize=256)
def _adapter(message_type: type) -> Any:
    from pydantic import TypeAdapter

    return TypeAdapter(message_type)


class NativeEnvelopeSerializer(EnvelopeSerializer):
    """Round-trips envelopes for the outbox table and as the base wire format.

    Payloads are dumped and validated with pydantic, so dataclasses,
    ``BaseModel`` subclasses and TypedDicts all work, including UUID and
    datetime fields.
    """

    def __init__(
        self,
        registry: MessageRegistry,
        stamp_types: Iterable[type[Stamp]] = BUILTIN_STAMP_TYPES,
    ) -> None:
        self._registry = registry
        self._stamp_types: dict[str, type[Stamp]] = {t.__name__: t for t in stamp_types}

    @property
    def registry(self) -> MessageRegistry:
        return self._registry

    def encode(self, envelope: Envelope) -> EncodedMessage:
        message_type = type(envelope.message)
        try:
            body = _adapter(message_type).dump_json(envelope.message).decode()
        except Exception as exc:
            raise SerializationError(
                f"Cannot serialize {type_identity(message_type)}",
                payload_type=type_identity(message_type),
                cause=exc,
            ) from exc

        headers = {TYPE_HEADER: type_identity(message_type), CONTENT_TYPE_HEADER: "application/json"}
        grouped: dict[str, list[dict[str, Any]]] = {}
        for stamp in envelope.stamps:
            if not stamp.sendable:
                continue
            name = type(stamp).__name__
            if self._stamp_types.get(name) is not type(stamp):
                raise SerializationError(
                    f"Stamp type {name} is not registered with the serializer",
                    payload_type=type_identity(message_type),
                )
            grouped.setdefault(name, []).append(dataclasses.asdict(stamp))
        for name, items in grouped.items():
            headers[STAMP_HEADER_PREFIX + name] = json.dumps(items)
        return EncodedMessage(body=body, headers=headers)

    def decode(self, encoded: EncodedMessage, message_type: type | None = None) -> Envelope:
        headers = encoded.headers
        identity = headers.get(TYPE_HEADER)
        if not identity:
            raise MessageDecodingFailedError('Encoded envelope does not have a "type" header.')
        if message_type is None:
            message_type = self._registry.type_for_identity(identity)
        if message_type is None:
            raise MessageDecodingFailedError(
                f"Type {identity!r} is not registered", payload_type=identity
            )

        try:
            message = _adapter(message_type).validate_json(encoded.body)
        except Exception as exc:
            raise MessageDecodingFailedError(
                f"Cannot decode body as {type_identity(message_type)}",
                payload_type=identity,
                cause=exc,
            ) from exc

        return Envelope(message, tuple(self._decode_stamps(headers)))

    def _decode_stamps(self, headers: dict[str, str]) -> list[Stamp]:
        stamps: list[Stamp] = []
        for key, value in headers.items():
            if not key.startswith(STAMP_HEADER_PREFIX):
                continue
            name = key[len(STAMP_HEADER_PREFIX):]
            stamp_type = self._stamp_types.get(name)
            if stamp_type is None:
                raise MessageDecodingFailedError(f"Unknown stamp type {name!r} in headers")
            try:
                stamps.extend(stamp_type(**fields) for fields in json.loads(value))
            except (TypeError, ValueError) as exc:
                raise MessageDecodingFailedError(
                    f"Malformed {key} header", cause=exc
                ) from exc
        return stamps


__all__ = [
    "CONTENT_TYPE_HEADER",
    "NativeEnvelopeSerializer",
    "STAMP_HEADER_PREFIX",
    "TYPE_HEADER",
]
