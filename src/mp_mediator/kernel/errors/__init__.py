"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── RegistrationError     (registration.py)
    │   ├── DuplicateHandlerError
    │   ├── DuplicateBehaviorError
    │   └── RegistryFrozenError
    ├── DispatchError         (dispatch.py)
    │   └── HandlerNotFoundError
    ├── DomainError           (domain.py)
    │   └── ValidationError
    └── ApplicationError      (application.py)
        ├── UnauthorizedError
        ├── ForbiddenError
        └── TimeoutError
"""

from mp_mediator.kernel.errors.application import (
    ApplicationError,
    ForbiddenError,
    TimeoutError,
    UnauthorizedError,
)
from mp_mediator.kernel.errors.base import BaseError, type_name
from mp_mediator.kernel.errors.dispatch import DispatchError, HandlerNotFoundError
from mp_mediator.kernel.errors.domain import DomainError, FieldError, ValidationError
from mp_mediator.kernel.errors.registration import (
    DuplicateBehaviorError,
    DuplicateHandlerError,
    RegistrationError,
    RegistryFrozenError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "DispatchError",
    "DomainError",
    "DuplicateBehaviorError",
    "DuplicateHandlerError",
    "FieldError",
    "ForbiddenError",
    "HandlerNotFoundError",
    "RegistrationError",
    "RegistryFrozenError",
    "TimeoutError",
    "UnauthorizedError",
    "ValidationError",
    "type_name",
]
