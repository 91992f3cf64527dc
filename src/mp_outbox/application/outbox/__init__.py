"""Application outbox – bus, transport, relay and worker loop."""
from mp_outbox.application.outbox.bus import MessageBus
from mp_outbox.application.outbox.relay import OutboxRelay, RelayResult
from mp_outbox.application.outbox.transport import OutboxTransport
from mp_outbox.application.outbox.worker import OutboxWorker

__all__ = ["MessageBus", "OutboxRelay", "OutboxTransport", "OutboxWorker", "RelayResult"]
