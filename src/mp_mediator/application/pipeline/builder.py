"""Application pipeline – PipelineBuilder.

Composes the applicable behaviors for one request into a single zero-argument
continuation.  Given behaviors ``A(-100) B(0) C(100)`` the composed chain is::

    A.handle(req, -> B.handle(req, -> C.handle(req, -> terminal())))

so ``A`` observes everything ``B``, ``C`` and the handler do, and equal
priorities keep registration order with the earlier one further out.
"""
from __future__ import annotations

from typing import Any

from mp_mediator.application.cqrs.decorators import get_skip_list
from mp_mediator.application.cqrs.kinds import RequestKind
from mp_mediator.application.pipeline.behavior import Next
from mp_mediator.application.pipeline.registry import BehaviorDescriptor, BehaviorRegistry
from mp_mediator.application.resolver import Resolver, SingletonResolver


class PipelineBuilder:
    """Builds a fresh per-dispatch chain; never raises while composing.

    Behavior references are resolved when the chain enters them, so a
    failing behavior factory surfaces during execution and unwinds through
    the behaviors already entered.
    """

    def __init__(self, behaviors: BehaviorRegistry, resolver: Resolver | None = None) -> None:
        self._behaviors = behaviors
        self._resolve = resolver or SingletonResolver()

    def applicable(self, request: Any, kind: RequestKind) -> tuple[BehaviorDescriptor, ...]:
        """Ordered behaviors that wrap *request* when dispatched as *kind*."""
        request_type = type(request)
        skip = get_skip_list(request_type)
        return tuple(
            d for d in self._behaviors.list_ordered()
            if d.applies_to(request_type, kind, skip)
        )

    def build(self, request: Any, kind: RequestKind, terminal: Next) -> Next:
        """Wrap *terminal* in every applicable behavior, lowest priority outermost."""
        chain = terminal
        for descriptor in reversed(self.applicable(request, kind)):
            chain = _wrap(self._resolve, descriptor.behavior, request, chain)
        return chain


def _wrap(resolve: Resolver, ref: Any, request: Any, inner: Next) -> Next:
    # Separate function so each closure binds its own behavior/inner pair.
    async def _next() -> Any:
        return await resolve(ref).handle(request, inner)

    return _next


__all__ = ["PipelineBuilder"]
