"""Application layer – rule store, refresh scheduling, decision engines."""
