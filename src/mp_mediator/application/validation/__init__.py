"""Application validation – pluggable strategies for the validation behavior."""
from mp_mediator.application.validation.strategy import (
    CompositeValidationStrategy,
    NoOpValidationStrategy,
    SelfValidatingStrategy,
    ValidationStrategy,
)
from mp_mediator.application.validation.validators import Validator, ValidatorRegistryStrategy
from mp_mediator.application.validation.pydantic_strategy import PydanticValidationStrategy

__all__ = [
    "CompositeValidationStrategy",
    "NoOpValidationStrategy",
    "PydanticValidationStrategy",
    "SelfValidatingStrategy",
    "ValidationStrategy",
    "Validator",
    "ValidatorRegistryStrategy",
]
