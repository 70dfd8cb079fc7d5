"""Unit tests for Mediator – dispatch, namespaces, sealing, concurrency."""

from __future__ import annotations

import asyncio
import dataclasses
from typing import Any

import pytest

from mp_mediator.application.cqrs import Command, CommandHandler, Query, QueryHandler, RequestKind
from mp_mediator.application.mediator import Mediator
from mp_mediator.application.pipeline import (
    ExceptionHandlingBehavior,
    LoggingBehavior,
    Next,
    PerformanceBehavior,
    PipelineBehavior,
    ValidationBehavior,
)
from mp_mediator.config.settings import MediatorSettings
from mp_mediator.kernel.errors import (
    DuplicateHandlerError,
    HandlerNotFoundError,
    RegistryFrozenError,
)
from mp_mediator.testing import TraceRecorder, make_recording_behavior


@dataclasses.dataclass
class RenameUser(Command):
    user_id: str
    name: str


@dataclasses.dataclass
class GetUserName(Query):
    user_id: str


@dataclasses.dataclass
class Explode(Command):
    message: str = "boom"


class UserStore:
    def __init__(self) -> None:
        self.names: dict[str, str] = {}


STORE = UserStore()


class RenameUserHandler(CommandHandler[RenameUser]):
    async def handle(self, command: RenameUser) -> None:
        STORE.names[command.user_id] = command.name
        return "ignored"  # type: ignore[return-value]


class GetUserNameHandler(QueryHandler[GetUserName, str]):
    async def handle(self, query: GetUserName) -> str:
        return STORE.names.get(query.user_id, "unknown")


class ExplodeHandler(CommandHandler[Explode]):
    async def handle(self, command: Explode) -> None:
        raise RuntimeError(command.message)


def _mediator(**settings: Any) -> Mediator:
    mediator = Mediator(settings=MediatorSettings(**settings))
    mediator.register_command_handler(RenameUser, RenameUserHandler)
    mediator.register_query_handler(GetUserName, GetUserNameHandler)
    mediator.register_command_handler(Explode, ExplodeHandler)
    return mediator


@pytest.fixture(autouse=True)
def _clear_store():
    STORE.names.clear()
    yield
    STORE.names.clear()


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


class TestDispatch:
    def test_send_runs_handler_and_returns_none(self) -> None:
        mediator = _mediator()
        result = asyncio.run(mediator.send(RenameUser("1", "Ada")))
        assert result is None
        assert STORE.names == {"1": "Ada"}

    def test_query_returns_handler_result(self) -> None:
        mediator = _mediator()

        async def run() -> str:
            await mediator.send(RenameUser("1", "Grace"))
            return await mediator.query(GetUserName("1"))

        assert asyncio.run(run()) == "Grace"

    def test_handler_instances_accepted(self) -> None:
        handler = GetUserNameHandler()
        mediator = Mediator()
        mediator.register_query_handler(GetUserName, handler)
        assert asyncio.run(mediator.query(GetUserName("x"))) == "unknown"

    def test_handler_class_resolved_once(self) -> None:
        created: list[int] = []

        class CountingHandler(QueryHandler[GetUserName, int]):
            def __init__(self) -> None:
                created.append(1)

            async def handle(self, query: GetUserName) -> int:
                return len(created)

        mediator = Mediator()
        mediator.register_query_handler(GetUserName, CountingHandler)

        async def run() -> list[int]:
            return [await mediator.query(GetUserName("a")) for _ in range(3)]

        assert asyncio.run(run()) == [1, 1, 1]

    def test_custom_resolver_used_for_handlers(self) -> None:
        seen: list[Any] = []

        def resolver(ref: Any) -> Any:
            seen.append(ref)
            return ref() if isinstance(ref, type) else ref

        mediator = Mediator(resolver=resolver)
        mediator.register_query_handler(GetUserName, GetUserNameHandler)
        asyncio.run(mediator.query(GetUserName("a")))
        assert seen == [GetUserNameHandler]


class TestNamespaces:
    def test_missing_command_handler(self) -> None:
        mediator = Mediator()
        with pytest.raises(HandlerNotFoundError) as info:
            asyncio.run(mediator.send(RenameUser("1", "x")))
        assert info.value.kind == "command"
        assert info.value.request_type is RenameUser

    def test_missing_query_handler(self) -> None:
        mediator = Mediator()
        with pytest.raises(HandlerNotFoundError) as info:
            asyncio.run(mediator.query(GetUserName("1")))
        assert info.value.kind == "query"

    def test_query_registered_type_not_sendable(self) -> None:
        mediator = _mediator()
        with pytest.raises(HandlerNotFoundError):
            asyncio.run(mediator.send(GetUserName("1")))

    def test_missing_handler_runs_no_behaviors(self) -> None:
        trace = TraceRecorder()
        mediator = Mediator()
        mediator.register_behavior(make_recording_behavior("Any", trace))
        with pytest.raises(HandlerNotFoundError):
            asyncio.run(mediator.query(GetUserName("1")))
        assert trace.events == []

    def test_duplicate_handler_keeps_original(self) -> None:
        mediator = _mediator()

        class Replacement(QueryHandler[GetUserName, str]):
            async def handle(self, query: GetUserName) -> str:
                return "replacement"

        with pytest.raises(DuplicateHandlerError):
            mediator.register_query_handler(GetUserName, Replacement)

        assert asyncio.run(mediator.query(GetUserName("1"))) == "unknown"


# ---------------------------------------------------------------------------
# Pipeline integration
# ---------------------------------------------------------------------------


class TestPipeline:
    def test_trace_for_three_behaviors(self) -> None:
        trace = TraceRecorder()

        class AnswerQuery(Query):
            pass

        class AnswerHandler(QueryHandler[AnswerQuery, int]):
            async def handle(self, query: AnswerQuery) -> int:
                trace.append("handler returns 42")
                return 42

        mediator = Mediator()
        mediator.register_behavior(make_recording_behavior("A", trace), priority=-100)
        mediator.register_behavior(make_recording_behavior("B", trace), priority=0)
        mediator.register_behavior(make_recording_behavior("C", trace), priority=100)
        mediator.register_query_handler(AnswerQuery, AnswerHandler)

        assert asyncio.run(mediator.query(AnswerQuery())) == 42
        assert trace.events == [
            "enter A",
            "enter B",
            "enter C",
            "handler returns 42",
            "exit C",
            "exit B",
            "exit A",
        ]

    def test_exception_behavior_catches_exactly_once(self) -> None:
        calls: list[str] = []

        class CountingExceptionBehavior(ExceptionHandlingBehavior):
            async def _process(self, error: Exception, request: Any) -> BaseException:
                calls.append(str(error))
                return await super()._process(error, request)

        mediator = _mediator()
        mediator.register_behavior(CountingExceptionBehavior())

        with pytest.raises(RuntimeError, match="boom"):
            asyncio.run(mediator.send(Explode()))
        assert calls == ["boom"]

    def test_query_scoped_behavior_never_runs_for_send(self) -> None:
        trace = TraceRecorder()
        mediator = _mediator()
        mediator.register_behavior(make_recording_behavior("QueryOnly", trace), scope="query")

        asyncio.run(mediator.send(RenameUser("1", "x")))
        assert trace.events == []

        asyncio.run(mediator.query(GetUserName("1")))
        assert trace.entered() == ["QueryOnly"]

    def test_pipeline_for_lists_applicable_behaviors(self) -> None:
        mediator = _mediator().use_default_behaviors()
        names = [d.name for d in mediator.pipeline_for(RenameUser("1", "x"), "command")]
        assert names == [
            "ExceptionHandlingBehavior",
            "LoggingBehavior",
            "PerformanceBehavior",
            "ValidationBehavior",
        ]

    def test_default_behaviors_take_settings(self) -> None:
        mediator = _mediator(performance_threshold_ms=5.0, log_all_requests=True)
        mediator.use_default_behaviors()
        descriptors = {d.identity: d for d in mediator.registry.behaviors.list_ordered()}

        performance = descriptors[PerformanceBehavior].behavior
        assert performance.threshold_ms == 5.0
        assert performance.log_all_requests is True
        assert descriptors[LoggingBehavior].priority == 0
        assert descriptors[ValidationBehavior].priority == 100

    def test_concurrent_dispatches_do_not_interfere(self) -> None:
        class Echo(Query):
            def __init__(self, value: int) -> None:
                self.value = value

        class EchoHandler(QueryHandler[Echo, int]):
            async def handle(self, query: Echo) -> int:
                await asyncio.sleep(0.001 * (query.value % 3))
                return query.value

        class Slow(PipelineBehavior):
            async def handle(self, request: Any, next_: Next) -> Any:
                await asyncio.sleep(0)
                return await next_()

        mediator = Mediator()
        mediator.register_query_handler(Echo, EchoHandler)
        mediator.register_behavior(Slow)

        async def run() -> list[int]:
            return list(await asyncio.gather(*(mediator.query(Echo(i)) for i in range(20))))

        assert asyncio.run(run()) == list(range(20))


# ---------------------------------------------------------------------------
# Sealing
# ---------------------------------------------------------------------------


class TestSealing:
    def test_first_dispatch_seals_registry(self) -> None:
        mediator = _mediator()
        asyncio.run(mediator.query(GetUserName("1")))

        assert mediator.registry.frozen
        with pytest.raises(RegistryFrozenError):
            mediator.register_behavior(LoggingBehavior)
        with pytest.raises(RegistryFrozenError):
            mediator.register_command_handler(RenameUser, RenameUserHandler)

    def test_sealing_can_be_disabled(self) -> None:
        mediator = _mediator(seal_on_first_dispatch=False)
        asyncio.run(mediator.query(GetUserName("1")))

        assert not mediator.registry.frozen
        mediator.register_behavior(LoggingBehavior)

    def test_explicit_freeze(self) -> None:
        mediator = _mediator(seal_on_first_dispatch=False)
        mediator.freeze()
        with pytest.raises(RegistryFrozenError):
            mediator.register_query_handler(GetUserName, GetUserNameHandler)

    def test_frozen_registry_still_dispatches(self) -> None:
        mediator = _mediator()
        mediator.freeze()
        asyncio.run(mediator.send(RenameUser("2", "Linus")))
        assert asyncio.run(mediator.query(GetUserName("2"))) == "Linus"


class TestRequestKind:
    def test_of_marker_classes(self) -> None:
        assert RequestKind.of(RenameUser("1", "x")) is RequestKind.COMMAND
        assert RequestKind.of(GetUserName("1")) is RequestKind.QUERY
        assert RequestKind.of(object()) is None
