"""Kernel errors – BaseError, root of every error this package raises."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Carries a message plus a machine-readable ``code``.

    Subclasses set ``default_code``; callers may override it per instance.
    ``detail`` holds structured context for logs, and ``cause`` (when given)
    also becomes ``__cause__`` so tracebacks show the chain.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if self.cause is not None:
            data["cause"] = repr(self.cause)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


def type_name(request_type: type) -> str:
    """``module.qualname`` of *request_type*, for messages."""
    return f"{request_type.__module__}.{request_type.__qualname__}"


__all__ = ["BaseError", "type_name"]
