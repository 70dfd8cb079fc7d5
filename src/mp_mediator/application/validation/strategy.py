"""Application validation – ValidationStrategy port and simple strategies."""
from __future__ import annotations

import abc
import inspect
from typing import Any, Sequence

from mp_mediator.kernel.errors import FieldError


class ValidationStrategy(abc.ABC):
    """Port: produce every field error for a request (empty list when valid)."""

    @abc.abstractmethod
    async def validate(self, request: Any) -> list[FieldError]: ...


class NoOpValidationStrategy(ValidationStrategy):
    """Accept everything.  Default when no strategy is configured."""

    async def validate(self, request: Any) -> list[FieldError]:  # noqa: ARG002
        return []


class SelfValidatingStrategy(ValidationStrategy):
    """Call ``request.validate()`` when the request defines it.

    ``validate`` may be sync or async and may return an iterable of
    :class:`FieldError` or ``None``.
    """

    async def validate(self, request: Any) -> list[FieldError]:
        validate = getattr(request, "validate", None)
        if not callable(validate):
            return []
        result = validate()
        if inspect.isawaitable(result):
            result = await result
        return list(result or ())


class CompositeValidationStrategy(ValidationStrategy):
    """Run several strategies in order and concatenate their errors."""

    def __init__(self, strategies: Sequence[ValidationStrategy]) -> None:
        self._strategies = tuple(strategies)

    async def validate(self, request: Any) -> list[FieldError]:
        errors: list[FieldError] = []
        for strategy in self._strategies:
            errors.extend(await strategy.validate(request))
        return errors


__all__ = [
    "CompositeValidationStrategy",
    "NoOpValidationStrategy",
    "SelfValidatingStrategy",
    "ValidationStrategy",
]
