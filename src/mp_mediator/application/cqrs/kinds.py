"""Application CQRS – RequestKind (dispatch namespace)."""
from __future__ import annotations

from enum import Enum
from typing import Any


class RequestKind(str, Enum):
    """Namespace a request is dispatched in."""

    COMMAND = "command"
    QUERY = "query"

    @classmethod
    def of(cls, request: Any) -> "RequestKind | None":
        """Kind implied by the request's marker base class, if any."""
        from mp_mediator.application.cqrs.commands import Command
        from mp_mediator.application.cqrs.queries import Query

        if isinstance(request, Command):
            return cls.COMMAND
        if isinstance(request, Query):
            return cls.QUERY
        return None


__all__ = ["RequestKind"]
