"""Dispatch errors – raised while routing a request to its handler."""

from __future__ import annotations

from typing import Any

from mp_mediator.kernel.errors.base import BaseError, type_name


class DispatchError(BaseError):
    """A request could not be routed."""

    default_code = "dispatch_error"


class HandlerNotFoundError(DispatchError):
    """No handler is registered for the request type in the given namespace."""

    default_code = "handler_not_found"

    def __init__(self, request_type: type, kind: str, **kwargs: Any) -> None:
        decorator = "command_handler" if kind == "command" else "query_handler"
        super().__init__(
            f"No handler registered for {kind}: {type_name(request_type)}. "
            f"Did you forget to decorate it with @{decorator}?",
            detail={"request_type": type_name(request_type), "kind": kind},
            **kwargs,
        )
        self.request_type = request_type
        self.kind = kind


__all__ = ["DispatchError", "HandlerNotFoundError"]
