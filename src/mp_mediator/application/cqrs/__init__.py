"""Application CQRS – Commands, Queries, handler registry and decorators."""
from mp_mediator.application.cqrs.commands import Command, CommandHandler
from mp_mediator.application.cqrs.queries import Query, QueryHandler
from mp_mediator.application.cqrs.kinds import RequestKind
from mp_mediator.application.cqrs.handler_registry import HandlerRegistry
from mp_mediator.application.cqrs.decorators import (
    HandlerMetadata,
    command_handler,
    get_handler_metadata,
    get_skip_list,
    query_handler,
    skip_behaviors,
)

__all__ = [
    "Command", "CommandHandler",
    "HandlerMetadata", "HandlerRegistry",
    "Query", "QueryHandler", "RequestKind",
    "command_handler",
    "get_handler_metadata",
    "get_skip_list",
    "query_handler",
    "skip_behaviors",
]
