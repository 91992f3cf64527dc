"""Routing – semantic message name to broker channel and routing key.

The default convention keeps the routing key equal to the semantic name and
derives the channel from its first two dot-separated segments::

    order.placed              -> channel "order.placed",     key "order.placed"
    sla.calculation.started   -> channel "sla.calculation",  key "sla.calculation.started"

Per-name overrides replace only the fields they set.
"""
from __future__ import annotations

import dataclasses
from typing import Callable, Mapping

from mp_outbox.kernel.errors import RoutingConfigurationError

MESSAGE_NAME_HEADER = "x-message-name"
MESSAGE_DOMAIN_HEADER = "x-message-domain"
MESSAGE_SUBDOMAIN_HEADER = "x-message-subdomain"
MESSAGE_ACTION_HEADER = "x-message-action"

_UNKNOWN_SEGMENT = "unknown"

_WILDCARDS = ("*", "#")
_OVERRIDE_FIELDS = frozenset({"channel", "routing_key"})


@dataclasses.dataclass(frozen=True)
class Route:
    """Where a message goes: exchange/topic, binding key and extra headers."""

    channel: str
    routing_key: str
    headers: dict[str, str] = dataclasses.field(default_factory=dict)


Convention = Callable[[str], tuple[str, str]]


def segment_convention(depth: int = 2) -> Convention:
    """Channel = first *depth* segments of the name; routing key = the name."""
    if depth < 1:
        raise RoutingConfigurationError(f"Channel depth must be >= 1, got {depth}")

    def _convention(name: str) -> tuple[str, str]:
        return ".".join(name.split(".")[:depth]), name

    return _convention


def message_headers(message_name: str) -> dict[str, str]:
    """Broker headers describing *message_name*: the name plus its first three segments.

    Missing segments are reported as ``"unknown"``.
    """
    parts = message_name.split(".")
    parts += [_UNKNOWN_SEGMENT] * (3 - len(parts))
    return {
        MESSAGE_NAME_HEADER: message_name,
        MESSAGE_DOMAIN_HEADER: parts[0],
        MESSAGE_SUBDOMAIN_HEADER: parts[1],
        MESSAGE_ACTION_HEADER: parts[2],
    }


def _check_routing_key(name: str, routing_key: str) -> None:
    if any(w in routing_key for w in _WILDCARDS):
        raise RoutingConfigurationError(
            f"Routing key {routing_key!r} for {name!r} contains a wildcard",
            detail={"message_name": name, "routing_key": routing_key},
        )


class RoutingResolver:
    """Resolve a :class:`Route` for a semantic message name.

    Example::

        resolver = RoutingResolver(overrides={"order.placed": {"channel": "orders"}})
        resolver.resolve("order.placed")
        # Route(channel='orders', routing_key='order.placed', headers={...})
    """

    def __init__(
        self,
        convention: Convention | None = None,
        overrides: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        self._convention = convention or segment_convention()
        self._overrides: dict[str, dict[str, str]] = {}
        for name, override in (overrides or {}).items():
            unknown = set(override) - _OVERRIDE_FIELDS
            if unknown:
                raise RoutingConfigurationError(
                    f"Unknown routing override field(s) {sorted(unknown)} for {name!r}",
                    detail={"message_name": name},
                )
            if "routing_key" in override:
                _check_routing_key(name, override["routing_key"])
            if "channel" in override and not override["channel"]:
                raise RoutingConfigurationError(f"Empty channel override for {name!r}")
            self._overrides[name] = dict(override)

    def resolve(self, message_name: str) -> Route:
        channel, routing_key = self._convention(message_name)
        override = self._overrides.get(message_name, {})
        channel = override.get("channel", channel)
        routing_key = override.get("routing_key", routing_key)
        _check_routing_key(message_name, routing_key)
        if not channel:
            raise RoutingConfigurationError(f"No channel resolved for {message_name!r}")
        return Route(channel, routing_key, message_headers(message_name))


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
