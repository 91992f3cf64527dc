"""Observability – structured logging helpers."""
from mp_outbox.observability.logging.factory import JsonLoggerFactory
from mp_outbox.observability.logging.processors import bind_message_context, get_logger

__all__ = ["JsonLoggerFactory", "bind_message_context", "get_logger"]
