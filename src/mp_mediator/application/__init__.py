"""Application layer – CQRS primitives, behavior pipeline, mediator façade."""
