"""Application routing – semantic name to (channel, routing key)."""
from mp_outbox.application.routing.resolver import (
    MESSAGE_ACTION_HEADER,
    MESSAGE_DOMAIN_HEADER,
    MESSAGE_NAME_HEADER,
    MESSAGE_SUBDOMAIN_HEADER,
    Convention,
    Route,
    RoutingResolver,
    message_headers,
    segment_convention,
)

__all__ = [
    "Convention",
    "MESSAGE_ACTION_HEADER",
    "MESSAGE_DOMAIN_HEADER",
    "MESSAGE_NAME_HEADER",
    "MESSAGE_SUBDOMAIN_HEADER",
    "Route",
    "RoutingResolver",
    "message_headers",
    "segment_convention",
]
