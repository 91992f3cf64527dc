"""Kernel time – Clock protocol used by the stores for claim and retention math."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    """Port: source of "now" (always timezone-aware UTC)."""

    def now(self) -> datetime: ...


class SystemClock:
    """Production clock backed by ``datetime.now(UTC)``."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class FrozenClock:
    """Test clock pinned to a fixed instant; move it with :meth:`advance`.

    Used to step past a redelivery timeout without sleeping.
    """

    def __init__(self, fixed: datetime | None = None) -> None:
        self._fixed = fixed or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def now(self) -> datetime:
        return self._fixed

    def advance(self, **kwargs: float) -> None:
        """Advance the frozen time by ``timedelta(**kwargs)``."""
        self._fixed += timedelta(**kwargs)


__all__ = ["Clock", "FrozenClock", "SystemClock"]
