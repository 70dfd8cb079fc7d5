"""Application pipeline – PipelineBehavior contract and its registration options."""
from __future__ import annotations

import abc
import dataclasses
import inspect
import typing
from enum import Enum
from typing import Any, Awaitable, Callable, TypeVar

from mp_mediator.application.cqrs.kinds import RequestKind
from mp_mediator.kernel.errors import RegistrationError

Next = Callable[[], Awaitable[Any]]
"""Zero-argument continuation to the remainder of the chain."""

T = TypeVar("T", bound=type)

BEHAVIOR_METADATA = "__pipeline_behavior__"
HANDLES_MARKER = "__pipeline_handles__"


class BehaviorScope(str, Enum):
    """Which dispatch namespace a behavior applies to."""

    COMMAND = "command"
    QUERY = "query"
    ALL = "all"

    def covers(self, kind: RequestKind) -> bool:
        return self is BehaviorScope.ALL or self.value == RequestKind(kind).value


class PipelineBehavior(abc.ABC):
    """Single cross-cutting unit wrapping handler execution.

    Implementations call ``await next_()`` at most once to continue the chain,
    or return without calling it to short-circuit the handler.

    Suggested priority bands (lower runs further out):

    * ``-100 .. -1``  exception handling, retry
    * ``0 .. 99``     logging, performance, caching, authorization, audit
    * ``100 .. 199``  validation, timeouts
    * ``200+``        transactions / unit of work (innermost)
    """

    @abc.abstractmethod
    async def handle(self, request: Any, next_: Next) -> Any: ...


@dataclasses.dataclass(frozen=True)
class BehaviorOptions:
    """Options attached by :func:`pipeline_behavior`."""

    priority: int = 0
    scope: BehaviorScope = BehaviorScope.ALL
    target_type: type | None = None


def pipeline_behavior(
    *,
    priority: int = 0,
    scope: BehaviorScope | str = BehaviorScope.ALL,
    target_type: type | None = None,
) -> Callable[[T], T]:
    """Class decorator declaring default registration options for a behavior.

    Usage::

        @pipeline_behavior(priority=100, scope="command")
        class CommandValidation(PipelineBehavior):
            async def handle(self, request, next_):
                ...
                return await next_()

    Options given explicitly to ``register_behavior`` override these.
    """
    options = BehaviorOptions(priority=priority, scope=BehaviorScope(scope), target_type=target_type)

    def decorator(behavior_class: T) -> T:
        setattr(behavior_class, BEHAVIOR_METADATA, options)
        return behavior_class

    return decorator


def get_behavior_options(behavior_class: type) -> BehaviorOptions | None:
    return getattr(behavior_class, BEHAVIOR_METADATA, None)


def handles(method: Callable[..., Any]) -> Callable[..., Any]:
    """Mark a ``handle`` method so its ``request`` annotation becomes the
    behavior's target type.

    Usage::

        class CreateUserChecks(PipelineBehavior):
            @handles
            async def handle(self, request: CreateUser, next_: Next) -> None:
                ...   # only ever runs for CreateUser
    """
    setattr(method, HANDLES_MARKER, True)
    return method


def infer_target_type(behavior_class: type) -> type | None:
    """Return the request type a ``@handles``-marked ``handle`` is annotated with."""
    method = getattr(behavior_class, "handle", None)
    if method is None or not getattr(method, HANDLES_MARKER, False):
        return None

    params = [p for p in inspect.signature(method).parameters.values() if p.name != "self"]
    if not params:
        raise RegistrationError(f"{behavior_class.__qualname__}.handle takes no request parameter")
    try:
        hints = typing.get_type_hints(method)
    except NameError as exc:
        raise RegistrationError(
            f"Cannot resolve request annotation of {behavior_class.__qualname__}.handle: {exc}",
            cause=exc,
        ) from exc

    target = hints.get(params[0].name)
    if not isinstance(target, type):
        raise RegistrationError(
            f"{behavior_class.__qualname__}.handle must annotate its request with a concrete class"
        )
    return target


__all__ = [
    "BehaviorOptions",
    "BehaviorScope",
    "Next",
    "PipelineBehavior",
    "get_behavior_options",
    "handles",
    "infer_target_type",
    "pipeline_behavior",
]
