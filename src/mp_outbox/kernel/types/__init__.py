"""Kernel value types."""
from mp_outbox.kernel.types.message_id import canonical_message_id, is_valid_message_id, new_message_id

__all__ = ["canonical_message_id", "is_valid_message_id", "new_message_id"]
