"""Application validation – PydanticValidationStrategy.

Re-validates requests that pydantic knows how to describe:

* ``pydantic.BaseModel`` instances (including ones built with
  ``model_construct``, which skips validation),
* dataclasses, whose field annotations may carry ``Annotated`` constraints
  such as ``Annotated[str, Field(min_length=2)]``.

Any other request validates clean.
"""
from __future__ import annotations

import dataclasses
from typing import Any

import pydantic

from mp_mediator.application.validation.strategy import ValidationStrategy
from mp_mediator.kernel.errors import FieldError


class PydanticValidationStrategy(ValidationStrategy):
    def __init__(self) -> None:
        self._adapters: dict[type, pydantic.TypeAdapter[Any]] = {}

    async def validate(self, request: Any) -> list[FieldError]:
        try:
            if isinstance(request, pydantic.BaseModel):
                type(request).model_validate(request.model_dump(by_alias=True))
            elif dataclasses.is_dataclass(request) and not isinstance(request, type):
                self._adapter(type(request)).validate_python(_shallow_fields(request))
            else:
                return []
        except pydantic.ValidationError as exc:
            return self._to_field_errors(exc)
        return []

    def _adapter(self, request_type: type) -> pydantic.TypeAdapter[Any]:
        adapter = self._adapters.get(request_type)
        if adapter is None:
            adapter = self._adapters[request_type] = pydantic.TypeAdapter(request_type)
        return adapter

    @staticmethod
    def _to_field_errors(exc: pydantic.ValidationError) -> list[FieldError]:
        return [
            FieldError(
                property=".".join(str(part) for part in err["loc"]),
                message=err["msg"],
                code=err["type"],
                value=err.get("input"),
            )
            for err in exc.errors()
        ]


def _shallow_fields(instance: Any) -> dict[str, Any]:
    # Nested dataclass values stay as instances; pydantic validates them in place.
    return {f.name: getattr(instance, f.name) for f in dataclasses.fields(instance)}


__all__ = ["PydanticValidationStrategy"]
