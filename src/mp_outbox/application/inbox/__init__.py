"""Application inbox – transactional processing of received messages."""
from mp_outbox.application.inbox.processor import InboxProcessor, TransactionFactory
from mp_outbox.application.inbox.worker import FAILURE_REASON_HEADER, InboxWorker

__all__ = ["FAILURE_REASON_HEADER", "InboxProcessor", "InboxWorker", "TransactionFactory"]
