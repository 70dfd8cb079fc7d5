"""Kernel security – names of fields that must never reach logs or audit trails."""
from __future__ import annotations

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "password", "passwd", "secret", "token", "api_key", "apikey",
    "authorization", "credit_card", "card_number", "cvv", "ssn",
})

__all__ = ["DEFAULT_SENSITIVE_FIELDS"]
