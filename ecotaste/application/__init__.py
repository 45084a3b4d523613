"""Application layer: CQRS commands, queries and event handlers."""
