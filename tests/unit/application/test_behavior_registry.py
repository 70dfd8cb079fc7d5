"""Unit tests for BehaviorRegistry – ordering, options, inference."""

from __future__ import annotations

import pytest

from mp_mediator.application.cqrs import Command, Query
from mp_mediator.application.pipeline import (
    BehaviorRegistry,
    BehaviorScope,
    Next,
    PipelineBehavior,
    handles,
    pipeline_behavior,
)
from mp_mediator.kernel.errors import DuplicateBehaviorError, RegistrationError
from mp_mediator.testing import TraceRecorder, make_recording_behavior


class CreateUser(Command):
    pass


class GetUser(Query):
    pass


@pipeline_behavior(priority=42, scope="query")
class DecoratedBehavior(PipelineBehavior):
    async def handle(self, request: object, next_: Next) -> object:
        return await next_()


class CreateUserOnly(PipelineBehavior):
    @handles
    async def handle(self, request: CreateUser, next_: Next) -> None:
        return await next_()


class Undecorated(PipelineBehavior):
    async def handle(self, request: object, next_: Next) -> object:
        return await next_()


class TestOrdering:
    def test_sorted_by_priority_regardless_of_registration_order(self) -> None:
        trace = TraceRecorder()
        high = make_recording_behavior("High", trace)
        low = make_recording_behavior("Low", trace)
        mid = make_recording_behavior("Mid", trace)

        registry = BehaviorRegistry()
        registry.register(high, priority=100)
        registry.register(low, priority=-100)
        registry.register(mid, priority=0)

        assert registry.list_names() == ("Low", "Mid", "High")

    def test_equal_priorities_keep_registration_order(self) -> None:
        trace = TraceRecorder()
        names = ["First", "Second", "Third", "Fourth"]
        registry = BehaviorRegistry()
        for name in names:
            registry.register(make_recording_behavior(name, trace))

        assert list(registry.list_names()) == names

    def test_ties_stay_stable_across_later_registrations(self) -> None:
        trace = TraceRecorder()
        registry = BehaviorRegistry()
        registry.register(make_recording_behavior("A", trace), priority=5)
        registry.register(make_recording_behavior("B", trace), priority=5)
        registry.register(make_recording_behavior("Z", trace), priority=-1)
        registry.register(make_recording_behavior("C", trace), priority=5)

        assert registry.list_names() == ("Z", "A", "B", "C")

    def test_snapshot_is_not_mutated_by_later_registration(self) -> None:
        trace = TraceRecorder()
        registry = BehaviorRegistry()
        registry.register(make_recording_behavior("A", trace))
        snapshot = registry.list_ordered()

        registry.register(make_recording_behavior("B", trace), priority=-5)

        assert [d.name for d in snapshot] == ["A"]
        assert registry.list_names() == ("B", "A")


class TestOptions:
    def test_defaults(self) -> None:
        registry = BehaviorRegistry()
        descriptor = registry.register(Undecorated)
        assert descriptor.priority == 0
        assert descriptor.scope is BehaviorScope.ALL
        assert descriptor.target_type is None
        assert descriptor.identity is Undecorated

    def test_decorator_options_used(self) -> None:
        descriptor = BehaviorRegistry().register(DecoratedBehavior)
        assert descriptor.priority == 42
        assert descriptor.scope is BehaviorScope.QUERY

    def test_explicit_options_override_decorator(self) -> None:
        descriptor = BehaviorRegistry().register(DecoratedBehavior, priority=-3, scope="command")
        assert descriptor.priority == -3
        assert descriptor.scope is BehaviorScope.COMMAND

    def test_instance_identity_is_its_class(self) -> None:
        instance = DecoratedBehavior()
        descriptor = BehaviorRegistry().register(instance)
        assert descriptor.identity is DecoratedBehavior
        assert descriptor.behavior is instance

    def test_invalid_scope_rejected(self) -> None:
        with pytest.raises(ValueError):
            BehaviorRegistry().register(Undecorated, scope="everything")

    def test_duplicate_identity_rejected(self) -> None:
        registry = BehaviorRegistry()
        registry.register(Undecorated)
        with pytest.raises(DuplicateBehaviorError):
            registry.register(Undecorated())
        assert len(registry) == 1


class TestTargetTypeInference:
    def test_handles_marker_infers_request_annotation(self) -> None:
        descriptor = BehaviorRegistry().register(CreateUserOnly)
        assert descriptor.target_type is CreateUser

    def test_explicit_target_type_wins(self) -> None:
        descriptor = BehaviorRegistry().register(CreateUserOnly, target_type=GetUser)
        assert descriptor.target_type is GetUser

    def test_unmarked_handle_is_not_inferred(self) -> None:
        class Annotated(PipelineBehavior):
            async def handle(self, request: CreateUser, next_: Next) -> None:
                return await next_()

        assert BehaviorRegistry().register(Annotated).target_type is None

    def test_unresolvable_annotation_is_a_registration_error(self) -> None:
        class Broken(PipelineBehavior):
            @handles
            async def handle(self, request: "DoesNotExist", next_: Next) -> None:  # noqa: F821
                return await next_()

        with pytest.raises(RegistrationError):
            BehaviorRegistry().register(Broken)


class TestIntrospection:
    def test_identities_and_contains(self) -> None:
        registry = BehaviorRegistry()
        registry.register(Undecorated, priority=1)
        registry.register(DecoratedBehavior)

        assert registry.list_identities() == (Undecorated, DecoratedBehavior)
        assert Undecorated in registry
        assert CreateUserOnly not in registry
