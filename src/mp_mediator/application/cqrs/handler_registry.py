"""Application CQRS – HandlerRegistry."""
from __future__ import annotations

from typing import Any

from mp_mediator.application.cqrs.kinds import RequestKind
from mp_mediator.kernel.errors import DuplicateHandlerError, HandlerNotFoundError


class HandlerRegistry:
    """Maps request types to exactly one handler reference per namespace.

    Keys are the request *type objects*, so two classes that share a name in
    different modules never collide.  A handler reference is either a handler
    class (instantiated later by the mediator's resolver) or a ready instance.
    """

    def __init__(self) -> None:
        self._handlers: dict[RequestKind, dict[type, Any]] = {
            RequestKind.COMMAND: {},
            RequestKind.QUERY: {},
        }

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, kind: RequestKind, request_type: type, handler_ref: Any) -> None:
        namespace = self._handlers[RequestKind(kind)]
        if request_type in namespace:
            raise DuplicateHandlerError(request_type, RequestKind(kind).value)
        namespace[request_type] = handler_ref

    def register_command_handler(self, request_type: type, handler_ref: Any) -> None:
        self.register(RequestKind.COMMAND, request_type, handler_ref)

    def register_query_handler(self, request_type: type, handler_ref: Any) -> None:
        self.register(RequestKind.QUERY, request_type, handler_ref)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, kind: RequestKind, request_type: type) -> Any:
        try:
            return self._handlers[RequestKind(kind)][request_type]
        except KeyError:
            raise HandlerNotFoundError(request_type, RequestKind(kind).value) from None

    def resolve_command_handler(self, request_type: type) -> Any:
        return self.resolve(RequestKind.COMMAND, request_type)

    def resolve_query_handler(self, request_type: type) -> Any:
        return self.resolve(RequestKind.QUERY, request_type)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def has_command_handler(self, request_type: type) -> bool:
        return request_type in self._handlers[RequestKind.COMMAND]

    def has_query_handler(self, request_type: type) -> bool:
        return request_type in self._handlers[RequestKind.QUERY]

    def command_types(self) -> tuple[type, ...]:
        return tuple(self._handlers[RequestKind.COMMAND])

    def query_types(self) -> tuple[type, ...]:
        return tuple(self._handlers[RequestKind.QUERY])


__all__ = ["HandlerRegistry"]
