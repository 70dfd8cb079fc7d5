"""Registration errors – raised while wiring handlers and behaviors at startup."""

from __future__ import annotations

from typing import Any

from mp_mediator.kernel.errors.base import BaseError, type_name


class RegistrationError(BaseError):
    """Invalid mediator configuration detected at registration time."""

    default_code = "registration_error"


class DuplicateHandlerError(RegistrationError):
    """A second handler was registered for a request type in one namespace."""

    default_code = "duplicate_handler"

    def __init__(self, request_type: type, kind: str, **kwargs: Any) -> None:
        super().__init__(
            f"{kind.capitalize()} handler for {type_name(request_type)} is already registered",
            detail={"request_type": type_name(request_type), "kind": kind},
            **kwargs,
        )
        self.request_type = request_type
        self.kind = kind


class DuplicateBehaviorError(RegistrationError):
    """The same behavior identity was registered twice."""

    default_code = "duplicate_behavior"

    def __init__(self, identity: type, **kwargs: Any) -> None:
        super().__init__(
            f"Pipeline behavior {type_name(identity)} is already registered",
            detail={"behavior": type_name(identity)},
            **kwargs,
        )
        self.identity = identity


class RegistryFrozenError(RegistrationError):
    """Registration attempted after the registry was sealed."""

    default_code = "registry_frozen"

    def __init__(self, what: str, **kwargs: Any) -> None:
        super().__init__(
            f"Cannot register {what}: registry is frozen",
            **kwargs,
        )
        self.what = what


__all__ = [
    "DuplicateBehaviorError",
    "DuplicateHandlerError",
    "RegistrationError",
    "RegistryFrozenError",
]
