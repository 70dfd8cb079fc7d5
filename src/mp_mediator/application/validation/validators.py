"""Application validation – per-request-type Validator objects."""
from __future__ import annotations

import abc
from typing import Any, Generic, TypeVar

from mp_mediator.application.validation.strategy import ValidationStrategy
from mp_mediator.kernel.errors import FieldError

R = TypeVar("R")


class Validator(abc.ABC, Generic[R]):
    """Validate one request type.

    Usage::

        class CreateUserValidator(Validator[CreateUser]):
            async def validate(self, request: CreateUser) -> list[FieldError]:
                errors = []
                if "@" not in request.email:
                    errors.append(FieldError("email", "Valid email is required"))
                return errors
    """

    @abc.abstractmethod
    async def validate(self, request: R) -> list[FieldError]: ...


class ValidatorRegistryStrategy(ValidationStrategy):
    """Look up validators by exact request type and run them all."""

    def __init__(self) -> None:
        self._validators: dict[type, list[Validator[Any]]] = {}

    def register(self, request_type: type, validator: Validator[Any]) -> "ValidatorRegistryStrategy":
        self._validators.setdefault(request_type, []).append(validator)
        return self

    async def validate(self, request: Any) -> list[FieldError]:
        errors: list[FieldError] = []
        for validator in self._validators.get(type(request), ()):
            errors.extend(await validator.validate(request))
        return errors


__all__ = ["Validator", "ValidatorRegistryStrategy"]
