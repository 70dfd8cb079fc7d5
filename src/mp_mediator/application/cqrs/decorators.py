"""Application CQRS – handler and skip-list class decorators.

The decorators only attach metadata to the decorated class; nothing is
registered until the class is handed to
:func:`~mp_mediator.application.mediator.discovery.register_components` (or to
the mediator's registration API directly).
"""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, TypeVar

from mp_mediator.application.cqrs.kinds import RequestKind

T = TypeVar("T", bound=type)

HANDLER_METADATA = "__mediator_handler__"
SKIP_BEHAVIORS_METADATA = "__mediator_skip_behaviors__"


@dataclasses.dataclass(frozen=True)
class HandlerMetadata:
    """What a decorated handler class handles."""

    kind: RequestKind
    request_type: type


def _mark_handler(kind: RequestKind, request_type: type) -> Callable[[T], T]:
    def decorator(handler_class: T) -> T:
        setattr(handler_class, HANDLER_METADATA, HandlerMetadata(kind, request_type))
        return handler_class

    return decorator


def command_handler(command_type: type) -> Callable[[T], T]:
    """Class decorator that marks a handler class for *command_type*.

    Usage::

        @command_handler(CreateUser)
        class CreateUserHandler(CommandHandler[CreateUser]):
            async def handle(self, command: CreateUser) -> None:
                ...
    """
    return _mark_handler(RequestKind.COMMAND, command_type)


def query_handler(query_type: type) -> Callable[[T], T]:
    """Class decorator that marks a handler class for *query_type*.

    Usage::

        @query_handler(GetUser)
        class GetUserHandler(QueryHandler[GetUser, User]):
            async def handle(self, query: GetUser) -> User:
                ...
    """
    return _mark_handler(RequestKind.QUERY, query_type)


def get_handler_metadata(handler_class: Any) -> HandlerMetadata | None:
    # Read from the class's own namespace so subclasses of a decorated
    # handler are not registered twice for the same request type.
    if not isinstance(handler_class, type):
        return None
    return handler_class.__dict__.get(HANDLER_METADATA)


def skip_behaviors(*behaviors: type) -> Callable[[T], T]:
    """Class decorator declaring behaviors a request type is never wrapped by.

    Usage::

        @skip_behaviors(PerformanceBehavior, LoggingBehavior)
        @dataclasses.dataclass
        class HealthCheck(Query):
            ...

    The skip-list is static per request type and inherited by subclasses.
    Applying the decorator again extends the list.
    """
    if len(behaviors) == 1 and isinstance(behaviors[0], (list, tuple, set, frozenset)):
        behaviors = tuple(behaviors[0])

    def decorator(request_class: T) -> T:
        inherited = get_skip_list(request_class)
        setattr(request_class, SKIP_BEHAVIORS_METADATA, inherited | frozenset(behaviors))
        return request_class

    return decorator


def get_skip_list(request_type: type) -> frozenset[type]:
    """Behavior identities *request_type* opts out of (empty if none)."""
    return getattr(request_type, SKIP_BEHAVIORS_METADATA, frozenset())


__all__ = [
    "HandlerMetadata",
    "command_handler",
    "get_handler_metadata",
    "get_skip_list",
    "query_handler",
    "skip_behaviors",
]
