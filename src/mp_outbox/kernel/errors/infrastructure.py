"""Serialization and infrastructure errors."""

from __future__ import annotations

from typing import Any

from mp_outbox.kernel.errors.base import BaseError


class SerializationError(BaseError):
    """Failed to serialize or deserialize a payload or its headers."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class MessageDecodingFailedError(SerializationError):
    """A wire/outbox message cannot be turned back into an envelope.

    Retrying will not help; the surrounding worker must dead-letter it.
    """

    default_code = "message_decoding_failed"


class UnknownMessageNameError(MessageDecodingFailedError):
    """The semantic name on the wire has no mapping to a local type."""

    default_code = "unknown_message_name"

    def __init__(self, message_name: str, **kwargs: Any) -> None:
        super().__init__(
            f"Unknown message type \"{message_name}\"; register it in the message registry",
            **kwargs,
        )
        self.message_name = message_name


class InvalidMessageIdError(MessageDecodingFailedError):
    """A ``MessageIdStamp`` does not hold a valid UUID."""

    default_code = "invalid_message_id"

    def __init__(self, message_id: str, message_type: str, **kwargs: Any) -> None:
        super().__init__(
            f"MessageIdStamp contains invalid UUID \"{message_id}\" (message type: {message_type})",
            **kwargs,
        )
        self.message_id = message_id
        self.message_type = message_type


class InfrastructureError(BaseError):
    """I/O failure that is worth retrying at the worker-loop level."""

    default_code = "infrastructure_error"
    retryable = True


class BrokerConnectionError(InfrastructureError):
    """Failed to reach the message broker."""

    default_code = "broker_connection_error"

    def __init__(self, url: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Could not connect to broker at '{url}'", **kwargs)
        self.url = url


__all__ = [
    "BrokerConnectionError",
    "InfrastructureError",
    "InvalidMessageIdError",
    "MessageDecodingFailedError",
    "SerializationError",
    "UnknownMessageNameError",
]
