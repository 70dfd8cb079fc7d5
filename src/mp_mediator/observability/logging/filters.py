"""Observability – SensitiveFieldsFilter (redaction for log events and audit metadata)."""
from __future__ import annotations

from typing import Any, Mapping

from mp_mediator.kernel.security import DEFAULT_SENSITIVE_FIELDS


class SensitiveFieldsFilter:
    """Mask values whose key (case-insensitive) names a sensitive field.

    Usable directly on a mapping, or as a structlog processor::

        structlog.configure(processors=[SensitiveFieldsFilter(), ...])
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = frozenset(f.lower() for f in (sensitive_fields or DEFAULT_SENSITIVE_FIELDS))

    def is_sensitive(self, key: str) -> bool:
        return key.lower() in self._fields

    def redact(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Top-level keys only."""
        return {key: self.REDACTED if self.is_sensitive(key) else value for key, value in data.items()}

    def redact_deep(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {key: self._mask(key, value) for key, value in data.items()}

    def _mask(self, key: str, value: Any) -> Any:
        if self.is_sensitive(key):
            return self.REDACTED
        if isinstance(value, Mapping):
            return self.redact_deep(value)
        return value

    def __call__(self, logger: Any, method: Any, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        return self.redact_deep(event_dict)


__all__ = ["SensitiveFieldsFilter"]
