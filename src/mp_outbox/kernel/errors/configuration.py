"""Configuration errors: deployment or programming defects, never retried."""

from __future__ import annotations

from typing import Any

from mp_outbox.kernel.errors.base import BaseError


class ConfigurationError(BaseError):
    """The system is wired incorrectly; fail fast."""

    default_code = "configuration_error"


class MissingStampError(ConfigurationError):
    """An envelope reached a stage that requires a stamp it does not carry.

    This always means an upstream stage did not run (e.g. the submission
    pipeline was bypassed).
    """

    default_code = "missing_stamp"

    def __init__(self, stamp: str, message_type: str, **kwargs: Any) -> None:
        super().__init__(
            f"Envelope for {message_type} is missing {stamp}",
            detail={"stamp": stamp, "message_type": message_type},
            **kwargs,
        )
        self.stamp = stamp
        self.message_type = message_type


class UnregisteredMessageError(ConfigurationError):
    """A message type has no semantic name in the registry."""

    default_code = "unregistered_message"

    def __init__(self, message_type: str, **kwargs: Any) -> None:
        super().__init__(
            f"Message type {message_type} has no registered semantic name",
            detail={"message_type": message_type},
            **kwargs,
        )
        self.message_type = message_type


class PublisherNotFoundError(ConfigurationError):
    """A resolved channel has no broker publisher registered for it."""

    default_code = "publisher_not_found"

    def __init__(self, channel: str, known: list[str] | None = None, **kwargs: Any) -> None:
        super().__init__(
            f"No publisher registered for channel '{channel}'",
            detail={"channel": channel, "known_channels": sorted(known or [])},
            **kwargs,
        )
        self.channel = channel


class RoutingConfigurationError(ConfigurationError):
    """A routing override or convention produced an unusable route."""

    default_code = "routing_configuration_error"


__all__ = [
    "ConfigurationError",
    "MissingStampError",
    "PublisherNotFoundError",
    "RoutingConfigurationError",
    "UnregisteredMessageError",
]
