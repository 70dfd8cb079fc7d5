"""Unit tests for decorator-driven component discovery."""

from __future__ import annotations

import asyncio
import sys
from typing import Any

from mp_mediator.application.cqrs import (
    Command,
    CommandHandler,
    Query,
    QueryHandler,
    command_handler,
    get_handler_metadata,
    query_handler,
)
from mp_mediator.application.mediator import Mediator, discover, register_components, scan_modules
from mp_mediator.application.pipeline import LoggingBehavior, Next, PipelineBehavior, pipeline_behavior

SEEN: list[str] = []


class Greet(Command):
    def __init__(self, who: str) -> None:
        self.who = who


class CountGreetings(Query):
    pass


@command_handler(Greet)
class GreetHandler(CommandHandler[Greet]):
    async def handle(self, command: Greet) -> None:
        SEEN.append(f"hello {command.who}")


@query_handler(CountGreetings)
class CountGreetingsHandler(QueryHandler[CountGreetings, int]):
    async def handle(self, query: CountGreetings) -> int:
        return len(SEEN)


class LoudGreetHandler(GreetHandler):
    """Inherits the decorator attribute but is not itself a registered handler."""


@pipeline_behavior(priority=-10, scope="command")
class TagBehavior(PipelineBehavior):
    async def handle(self, request: Any, next_: Next) -> Any:
        SEEN.append("tag")
        return await next_()


class PlainHelper:
    pass


class TestScan:
    def test_finds_decorated_classes_defined_here(self) -> None:
        found = set(scan_modules(sys.modules[__name__]))
        assert found == {GreetHandler, CountGreetingsHandler, TagBehavior}

    def test_subclass_does_not_inherit_handler_metadata(self) -> None:
        assert get_handler_metadata(GreetHandler) is not None
        assert get_handler_metadata(LoudGreetHandler) is None


class TestRegister:
    def test_discover_registers_and_dispatches(self) -> None:
        SEEN.clear()
        mediator = Mediator()
        assert discover(mediator, sys.modules[__name__]) == 3

        async def run() -> int:
            await mediator.send(Greet("Ada"))
            return await mediator.query(CountGreetings())

        assert asyncio.run(run()) == 2
        assert SEEN == ["tag", "hello Ada"]

    def test_register_components_accepts_instances_and_ignores_plain(self) -> None:
        mediator = Mediator()
        count = register_components(mediator, [LoggingBehavior(), GreetHandler, PlainHelper])
        assert count == 2
        assert mediator.registry.behaviors.list_names() == ("LoggingBehavior",)
        assert mediator.registry.handlers.has_command_handler(Greet)

    def test_registration_order_does_not_affect_execution_order(self) -> None:
        mediator_a = Mediator()
        mediator_b = Mediator()
        register_components(mediator_a, [TagBehavior, LoggingBehavior])
        register_components(mediator_b, [LoggingBehavior, TagBehavior])

        names_a = [d.name for d in mediator_a.pipeline_for(Greet("x"), "command")]
        names_b = [d.name for d in mediator_b.pipeline_for(Greet("x"), "command")]
        assert names_a == names_b == ["TagBehavior", "LoggingBehavior"]
