"""Application mediator – Mediator façade (``send`` / ``query``).

Usage::

    mediator = Mediator(settings=MediatorSettings())
    mediator.use_default_behaviors()
    mediator.register_command_handler(CreateUser, CreateUserHandler)
    mediator.register_query_handler(GetUser, GetUserHandler)

    await mediator.send(CreateUser(name="Ada", email="ada@example.com"))
    user = await mediator.query(GetUser(user_id="1"))
"""
from __future__ import annotations

from typing import Any

from mp_mediator.application.cqrs.kinds import RequestKind
from mp_mediator.application.mediator.registry import Registry
from mp_mediator.application.pipeline.behavior import BehaviorScope
from mp_mediator.application.pipeline.behaviors import (
    ExceptionHandlingBehavior,
    LoggingBehavior,
    PerformanceBehavior,
    ValidationBehavior,
)
from mp_mediator.application.pipeline.builder import PipelineBuilder
from mp_mediator.application.pipeline.registry import BehaviorDescriptor
from mp_mediator.application.resolver import Resolver, SingletonResolver
from mp_mediator.application.validation import ValidationStrategy
from mp_mediator.config.settings import MediatorSettings


class Mediator:
    """Routes each request to its single handler through the behavior pipeline.

    The mediator holds no per-request state; concurrent ``send``/``query``
    calls on one event loop only share the (read-only) registry.
    """

    def __init__(
        self,
        registry: Registry | None = None,
        *,
        resolver: Resolver | None = None,
        settings: MediatorSettings | None = None,
    ) -> None:
        self.registry = registry or Registry()
        self.settings = settings or MediatorSettings()
        self._resolve = resolver or SingletonResolver()
        self._builder = PipelineBuilder(self.registry.behaviors, self._resolve)

    # ------------------------------------------------------------------
    # Registration API
    # ------------------------------------------------------------------

    def register_command_handler(self, command_type: type, handler: Any) -> None:
        self.registry.register_command_handler(command_type, handler)

    def register_query_handler(self, query_type: type, handler: Any) -> None:
        self.registry.register_query_handler(query_type, handler)

    def register_behavior(
        self,
        behavior: Any,
        *,
        priority: int | None = None,
        scope: BehaviorScope | str | None = None,
        target_type: type | None = None,
    ) -> BehaviorDescriptor:
        return self.registry.register_behavior(
            behavior, priority=priority, scope=scope, target_type=target_type
        )

    def use_default_behaviors(
        self,
        *,
        validation_strategy: ValidationStrategy | None = None,
    ) -> "Mediator":
        """Register exception handling, logging, performance and validation."""
        self.register_behavior(ExceptionHandlingBehavior())
        self.register_behavior(LoggingBehavior())
        self.register_behavior(
            PerformanceBehavior(
                threshold_ms=self.settings.performance_threshold_ms,
                log_all_requests=self.settings.log_all_requests,
            )
        )
        self.register_behavior(ValidationBehavior(validation_strategy))
        return self

    def freeze(self) -> None:
        self.registry.freeze()

    # ------------------------------------------------------------------
    # Dispatch API
    # ------------------------------------------------------------------

    async def send(self, command: Any) -> None:
        """Dispatch *command*; resolves once the whole chain has completed."""
        handler = self._resolve(self._lookup(RequestKind.COMMAND, command))

        async def terminal() -> None:
            await handler.handle(command)

        await self._builder.build(command, RequestKind.COMMAND, terminal)()

    async def query(self, query: Any) -> Any:
        """Dispatch *query* and return the handler's result."""
        handler = self._resolve(self._lookup(RequestKind.QUERY, query))

        async def terminal() -> Any:
            return await handler.handle(query)

        return await self._builder.build(query, RequestKind.QUERY, terminal)()

    def pipeline_for(self, request: Any, kind: RequestKind | str) -> tuple[BehaviorDescriptor, ...]:
        """Behaviors that would wrap *request* (diagnostics)."""
        return self._builder.applicable(request, RequestKind(kind))

    def _lookup(self, kind: RequestKind, request: Any) -> Any:
        if self.settings.seal_on_first_dispatch:
            self.registry.freeze()
        return self.registry.handlers.resolve(kind, type(request))


__all__ = ["Mediator"]
