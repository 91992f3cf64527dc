"""Kernel messaging – static message registry (type <-> semantic name)."""
from __future__ import annotations

import re
from typing import Any, Mapping

from mp_outbox.kernel.errors import ConfigurationError, UnregisteredMessageError

_NAME_RE = re.compile(r"^[A-Za-z0-9_-]+(\.[A-Za-z0-9_-]+)*$")


def type_identity(message_type: type) -> str:
    """Return the internal identity of *message_type* (``module.QualName``)."""
    return f"{message_type.__module__}.{message_type.__qualname__}"


class MessageRegistry:
    """Registration table built once at startup.

    Each message type maps to exactly one semantic name and vice versa.
    Lookups never import modules or inspect class attributes; anything not
    registered is unknown.

    Example::

        registry = MessageRegistry({OrderPlaced: "order.placed"})
        registry.name_of(OrderPlaced)              # 'order.placed'
        registry.type_for_name("order.placed")     # OrderPlaced
    """

    def __init__(self, names: Mapping[type, str] | None = None) -> None:
        self._by_type: dict[type, str] = {}
        self._by_name: dict[str, type] = {}
        self._by_identity: dict[str, type] = {}
        for message_type, name in (names or {}).items():
            self.register(message_type, name)

    @classmethod
    def from_names(cls, message_types: Mapping[str, type]) -> "MessageRegistry":
        """Build from the consumer-side ``{semantic_name: type}`` map."""
        return cls({t: n for n, t in message_types.items()})

    def register(self, message_type: type, name: str) -> "MessageRegistry":
        if not _NAME_RE.match(name):
            raise ConfigurationError(
                f"Invalid semantic name {name!r} for {type_identity(message_type)}",
                detail={"name": name},
            )
        existing = self._by_name.get(name)
        if existing is not None and existing is not message_type:
            raise ConfigurationError(
                f"Semantic name {name!r} already registered for {type_identity(existing)}",
                detail={"name": name},
            )
        previous = self._by_type.get(message_type)
        if previous is not None and previous != name:
            raise ConfigurationError(
                f"{type_identity(message_type)} already registered as {previous!r}",
                detail={"name": previous},
            )
        self._by_type[message_type] = name
        self._by_name[name] = message_type
        self._by_identity[type_identity(message_type)] = message_type
        return self

    def name_of(self, message_or_type: Any) -> str:
        """Return the semantic name; raise :class:`UnregisteredMessageError`."""
        message_type = message_or_type if isinstance(message_or_type, type) else type(message_or_type)
        name = self._by_type.get(message_type)
        if name is None:
            raise UnregisteredMessageError(type_identity(message_type))
        return name

    def type_for_name(self, name: str) -> type | None:
        return self._by_name.get(name)

    def type_for_identity(self, identity: str) -> type | None:
        return self._by_identity.get(identity)

    def __contains__(self, message_type: object) -> bool:
        return message_type in self._by_type

    def __len__(self) -> int:
        return len(self._by_type)


__all__ = ["MessageRegistry", "type_identity"]
