"""Domain errors – request data that violates validation rules."""

from __future__ import annotations

import dataclasses
from typing import Any, Sequence

from mp_mediator.kernel.errors.base import BaseError


@dataclasses.dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure.

    ``property`` is a dotted path for nested fields (``address.zip``).
    """

    property: str
    message: str
    code: str | None = None
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"property": self.property, "message": self.message}
        if self.code is not None:
            payload["code"] = self.code
        if self.value is not None:
            payload["value"] = self.value
        return payload


class DomainError(BaseError):
    """Raised when a domain rule is violated."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Aggregate of every field error produced while validating a request."""

    default_code = "validation_error"

    def __init__(self, errors: Sequence[FieldError], **kwargs: Any) -> None:
        self.errors: list[FieldError] = list(errors)
        super().__init__(self._format_message(self.errors), **kwargs)

    @staticmethod
    def _format_message(errors: Sequence[FieldError]) -> str:
        if not errors:
            return "Validation failed"
        if len(errors) == 1:
            return f"Validation failed: {errors[0].property} - {errors[0].message}"
        joined = "; ".join(f"{e.property}: {e.message}" for e in errors)
        return f"Validation failed with {len(errors)} errors: {joined}"

    def errors_for(self, property: str) -> list[FieldError]:  # noqa: A002
        return [e for e in self.errors if e.property == property]

    def has_error_for(self, property: str) -> bool:  # noqa: A002
        return any(e.property == property for e in self.errors)

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = [e.to_dict() for e in self.errors]
        return base


__all__ = ["DomainError", "FieldError", "ValidationError"]
