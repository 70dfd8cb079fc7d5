"""Resilience – retry policies used by the retry behavior."""
