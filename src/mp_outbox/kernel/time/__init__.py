"""Kernel time – clock abstraction."""
from mp_outbox.kernel.time.clock import Clock, FrozenClock, SystemClock

__all__ = ["Clock", "FrozenClock", "SystemClock"]
