"""Wire format translation at the broker boundary.

Outbound, the internal type identity in the ``type`` header is replaced by the
message's semantic name; the identity is kept in ``X-Message-Class`` and the
message id is exposed as ``X-Message-Id`` for broker-side tooling. Every other
stamp travels untouched through the native ``X-Message-Stamp-*`` headers.

Inbound, the semantic name is resolved through the static registry. When the
name is unmapped, ``X-Message-Class`` is tried against the same registry (a
message coming back through a retry or failure transport); anything else is
an unrecoverable decode failure.
"""
from __future__ import annotations

from mp_outbox.application.serialization.native import TYPE_HEADER, NativeEnvelopeSerializer
from mp_outbox.kernel.errors import MessageDecodingFailedError, MissingStampError, UnknownMessageNameError
from mp_outbox.kernel.messaging import (
    EncodedMessage,
    Envelope,
    EnvelopeSerializer,
    MessageIdStamp,
    MessageNameStamp,
    MessageRegistry,
    type_identity,
)

MESSAGE_CLASS_HEADER = "X-Message-Class"
MESSAGE_ID_HEADER = "X-Message-Id"


class WireFormatTranslator(EnvelopeSerializer):
    """Translate between internal envelopes and the broker-agnostic wire format."""

    def __init__(
        self,
        serializer: NativeEnvelopeSerializer,
        registry: MessageRegistry | None = None,
    ) -> None:
        self._serializer = serializer
        self._registry = registry if registry is not None else serializer.registry

    def encode(self, envelope: Envelope) -> EncodedMessage:
        message_type = type_identity(type(envelope.message))
        name_stamp = envelope.last(MessageNameStamp)
        if name_stamp is None:
            raise MissingStampError("MessageNameStamp", message_type)
        id_stamp = envelope.last(MessageIdStamp)
        if id_stamp is None:
            raise MissingStampError("MessageIdStamp", message_type)

        encoded = self._serializer.encode(envelope)
        headers = dict(encoded.headers)
        headers[MESSAGE_CLASS_HEADER] = headers[TYPE_HEADER]
        headers[TYPE_HEADER] = name_stamp.message_name
        headers[MESSAGE_ID_HEADER] = id_stamp.message_id
        return EncodedMessage(body=encoded.body, headers=headers)

    def decode(self, encoded: EncodedMessage) -> Envelope:
        headers = dict(encoded.headers)
        semantic_name = headers.get(TYPE_HEADER)
        if not semantic_name:
            raise MessageDecodingFailedError('Encoded envelope does not have a "type" header.')

        message_type = self._registry.type_for_name(semantic_name)
        if message_type is None:
            fallback = headers.get(MESSAGE_CLASS_HEADER)
            message_type = self._registry.type_for_identity(fallback) if fallback else None
        if message_type is None:
            raise UnknownMessageNameError(semantic_name)

        message_id = headers.pop(MESSAGE_ID_HEADER, None)
        headers.pop(MESSAGE_CLASS_HEADER, None)
        headers[TYPE_HEADER] = type_identity(message_type)
        envelope = self._serializer.decode(
            EncodedMessage(body=encoded.body, headers=headers), message_type=message_type
        )

        if envelope.last(MessageNameStamp) is None:
            envelope = envelope.with_stamps(MessageNameStamp(semantic_name))
        if message_id and envelope.last(MessageIdStamp) is None:
            envelope = envelope.with_stamps(MessageIdStamp(message_id))
        return envelope


__all__ = ["MESSAGE_CLASS_HEADER", "MESSAGE_ID_HEADER", "WireFormatTranslator"]
