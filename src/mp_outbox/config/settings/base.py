"""Config settings – Settings base class for the outbox relay and inbox consumer.

A settings class is a dataclass with a ``_prefix``; :class:`EnvSettingsLoader`
reads each field from ``<PREFIX>_<FIELD>``. ``__post_init__`` runs
:meth:`Settings._validate`, so an instance is never constructed with values
the workers would reject later (a zero redelivery timeout, an empty table or
queue name, ...).
"""
from __future__ import annotations

import dataclasses

from mp_outbox.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for environment-driven settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        """Environment variable holding *field_name*, e.g. ``OUTBOX_TABLE_NAME``."""
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def _validate(self) -> None:
        """Hook for field checks; raise :class:`InvalidSettingValueError` on a bad value.

        ``OutboxSettings`` requires a positive redelivery timeout, a
        non-negative poll interval, a channel depth of at least one and
        non-empty table and queue names. ``InboxSettings`` requires a
        positive prefetch count and retention and non-empty table and queue
        names.
        """

    def _require_positive(self, *names: str) -> None:
        for name in names:
            value = getattr(self, name)
            if value <= 0:
                raise InvalidSettingValueError(name, value, "must be positive")

    def _require_non_empty(self, *names: str) -> None:
        for name in names:
            value = getattr(self, name)
            if not value:
                raise InvalidSettingValueError(name, value, "must not be empty")


__all__ = ["Settings"]
