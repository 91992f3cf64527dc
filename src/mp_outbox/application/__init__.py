"""Application layer – pipeline, serialization, routing, outbox and inbox."""
