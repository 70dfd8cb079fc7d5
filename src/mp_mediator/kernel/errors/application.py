"""Kernel errors – application-layer failures raised by cross-cutting behaviors."""

from __future__ import annotations

from typing import Any

from mp_mediator.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    default_code = "application_error"


class UnauthorizedError(ApplicationError):
    """No authenticated principal was present for a request that needs one."""

    default_code = "unauthorized"

    def __init__(self, message: str = "Authentication required", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class ForbiddenError(ApplicationError):
    """The principal is known but may not dispatch this request.

    ``permission`` names the missing role or policy when one is known.
    """

    default_code = "forbidden"

    def __init__(self, message: str = "Access denied", *, permission: str | None = None, **kwargs: Any) -> None:
        if permission is not None:
            kwargs.setdefault("detail", {"permission": permission})
        super().__init__(message, **kwargs)
        self.permission = permission


class TimeoutError(ApplicationError):  # noqa: A001
    """The inner chain did not finish before its timeout."""

    default_code = "timeout"

    def __init__(self, message: str, *, timeout_seconds: float | None = None, **kwargs: Any) -> None:
        if timeout_seconds is not None:
            kwargs.setdefault("detail", {"timeout_seconds": timeout_seconds})
        super().__init__(message, **kwargs)
        self.timeout_seconds = timeout_seconds


__all__ = [
    "ApplicationError",
    "ForbiddenError",
    "TimeoutError",
    "UnauthorizedError",
]
