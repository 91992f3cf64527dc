"""Application serialization – native envelope format and wire translation."""
from mp_outbox.application.serialization.native import (
    CONTENT_TYPE_HEADER,
    STAMP_HEADER_PREFIX,
    TYPE_HEADER,
    NativeEnvelopeSerializer,
)
from mp_outbox.application.serialization.wire import (
    MESSAGE_CLASS_HEADER,
    MESSAGE_ID_HEADER,
    WireFormatTranslator,
)

__all__ = [
    "CONTENT_TYPE_HEADER",
    "MESSAGE_CLASS_HEADER",
    "MESSAGE_ID_HEADER",
    "NativeEnvelopeSerializer",
    "STAMP_HEADER_PREFIX",
    "TYPE_HEADER",
    "WireFormatTranslator",
]
