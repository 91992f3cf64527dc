"""Kernel error hierarchy: public re-export surface.

Hierarchy::

    BaseError
    ├── ConfigurationError            (configuration.py, never retryable)
    │   ├── MissingStampError
    │   ├── UnregisteredMessageError
    │   ├── PublisherNotFoundError
    │   └── RoutingConfigurationError
    ├── SerializationError            (infrastructure.py, never retryable)
    │   └── MessageDecodingFailedError
    │       ├── UnknownMessageNameError
    │       └── InvalidMessageIdError
    └── InfrastructureError           (infrastructure.py, retryable)
        └── BrokerConnectionError
"""

from mp_outbox.kernel.errors.base import BaseError
from mp_outbox.kernel.errors.configuration import (
    ConfigurationError,
    MissingStampError,
    PublisherNotFoundError,
    RoutingConfigurationError,
    UnregisteredMessageError,
)
from mp_outbox.kernel.errors.infrastructure import (
    BrokerConnectionError,
    InfrastructureError,
    InvalidMessageIdError,
    MessageDecodingFailedError,
    SerializationError,
    UnknownMessageNameError,
)

__all__ = [
    "BaseError",
    "BrokerConnectionError",
    "ConfigurationError",
    "InfrastructureError",
    "InvalidMessageIdError",
    "MessageDecodingFailedError",
    "MissingStampError",
    "PublisherNotFoundError",
    "RoutingConfigurationError",
    "SerializationError",
    "UnknownMessageNameError",
    "UnregisteredMessageError",
]
