"""Unit tests for validation strategies."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Annotated

import pydantic
import pytest

from mp_mediator.application.cqrs import Command
from mp_mediator.application.validation import (
    CompositeValidationStrategy,
    NoOpValidationStrategy,
    PydanticValidationStrategy,
    SelfValidatingStrategy,
    Validator,
    ValidatorRegistryStrategy,
)
from mp_mediator.kernel.errors import FieldError


@dataclasses.dataclass
class CreateUser(Command):
    name: Annotated[str, pydantic.Field(min_length=2)]
    email: str
    age: Annotated[int, pydantic.Field(ge=0)] = 0


class RegisterUser(pydantic.BaseModel, Command):
    name: str = pydantic.Field(min_length=2)
    email: str


class GetUserProfile(pydantic.BaseModel):
    user_id: str = pydantic.Field(alias="userId", min_length=1)


class AsyncSelfValidating:
    async def validate(self) -> list[FieldError]:
        return [FieldError("x", "bad")]


class NoneSelfValidating:
    def validate(self) -> None:
        return None


class CreateUserValidator(Validator[CreateUser]):
    async def validate(self, request: CreateUser) -> list[FieldError]:
        if "@" not in request.email:
            return [FieldError("email", "Valid email is required", code="email")]
        return []


def _validate(strategy, request) -> list[FieldError]:
    return asyncio.run(strategy.validate(request))


class TestSimpleStrategies:
    def test_noop_accepts_anything(self) -> None:
        assert _validate(NoOpValidationStrategy(), object()) == []

    def test_self_validating_async(self) -> None:
        assert _validate(SelfValidatingStrategy(), AsyncSelfValidating()) == [FieldError("x", "bad")]

    def test_self_validating_none_means_valid(self) -> None:
        assert _validate(SelfValidatingStrategy(), NoneSelfValidating()) == []

    def test_self_validating_without_method(self) -> None:
        assert _validate(SelfValidatingStrategy(), object()) == []


class TestValidatorRegistry:
    def test_runs_validators_for_exact_type(self) -> None:
        strategy = ValidatorRegistryStrategy().register(CreateUser, CreateUserValidator())
        errors = _validate(strategy, CreateUser(name="Ada", email="nope"))
        assert errors == [FieldError("email", "Valid email is required", code="email")]

    def test_unregistered_type_is_valid(self) -> None:
        strategy = ValidatorRegistryStrategy().register(CreateUser, CreateUserValidator())
        assert _validate(strategy, object()) == []

    def test_multiple_validators_concatenate(self) -> None:
        strategy = (
            ValidatorRegistryStrategy()
            .register(CreateUser, CreateUserValidator())
            .register(CreateUser, CreateUserValidator())
        )
        assert len(_validate(strategy, CreateUser(name="Ada", email="nope"))) == 2


class TestPydanticStrategy:
    def test_dataclass_constraints_checked(self) -> None:
        errors = _validate(PydanticValidationStrategy(), CreateUser(name="A", email="a@b.c", age=-1))
        by_property = {e.property: e for e in errors}
        assert set(by_property) == {"name", "age"}
        assert by_property["name"].code == "string_too_short"
        assert by_property["name"].value == "A"
        assert by_property["age"].code == "greater_than_equal"

    def test_valid_dataclass(self) -> None:
        assert _validate(PydanticValidationStrategy(), CreateUser(name="Ada", email="a@b.c")) == []

    def test_model_construct_bypass_caught(self) -> None:
        request = RegisterUser.model_construct(name="A", email="a@b.c")
        errors = _validate(PydanticValidationStrategy(), request)
        assert [e.property for e in errors] == ["name"]

    def test_aliased_model_validates_clean(self) -> None:
        request = GetUserProfile(userId="42")
        assert _validate(PydanticValidationStrategy(), request) == []

    def test_aliased_model_errors_use_alias(self) -> None:
        request = GetUserProfile.model_construct(userId="")
        errors = _validate(PydanticValidationStrategy(), request)
        assert [(e.property, e.code) for e in errors] == [("userId", "string_too_short")]

    def test_non_model_requests_pass(self) -> None:
        assert _validate(PydanticValidationStrategy(), object()) == []


class TestComposite:
    def test_concatenates_in_order(self) -> None:
        strategy = CompositeValidationStrategy([
            PydanticValidationStrategy(),
            ValidatorRegistryStrategy().register(CreateUser, CreateUserValidator()),
        ])
        errors = _validate(strategy, CreateUser(name="A", email="nope"))
        assert [e.property for e in errors] == ["name", "email"]


class TestFieldError:
    def test_to_dict_omits_empty_optional_parts(self) -> None:
        assert FieldError("name", "required").to_dict() == {"property": "name", "message": "required"}

    def test_frozen(self) -> None:
        error = FieldError("name", "required")
        with pytest.raises(dataclasses.FrozenInstanceError):
            error.message = "changed"  # type: ignore[misc]
