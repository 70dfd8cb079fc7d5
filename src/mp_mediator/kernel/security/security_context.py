"""Kernel security – SecurityContext, the principal a request is dispatched for.

The principal lives in a :class:`contextvars.ContextVar`, so every asyncio
task (and therefore every concurrent ``send``/``query``) sees the principal
that was current when the task was created.
"""

from __future__ import annotations

import contextlib
import contextvars
from typing import Iterator

from mp_mediator.kernel.errors import UnauthorizedError
from mp_mediator.kernel.security.principal import Principal

_current_principal: contextvars.ContextVar[Principal | None] = contextvars.ContextVar(
    "mp_mediator_principal", default=None
)

PrincipalToken = contextvars.Token


class SecurityContext:
    @staticmethod
    def get_current() -> Principal | None:
        return _current_principal.get()

    @staticmethod
    def set_current(principal: Principal | None) -> PrincipalToken:
        """Install *principal*; pass the returned token to :meth:`reset`."""
        return _current_principal.set(principal)

    @staticmethod
    def reset(token: PrincipalToken) -> None:
        _current_principal.reset(token)

    @staticmethod
    @contextlib.contextmanager
    def as_principal(principal: Principal | None) -> Iterator[Principal | None]:
        """Scope *principal* to a ``with`` block::

            with SecurityContext.as_principal(Principal.with_roles("alice", "admin")):
                await mediator.send(DeleteUser(user_id="2"))
        """
        token = _current_principal.set(principal)
        try:
            yield principal
        finally:
            _current_principal.reset(token)

    @staticmethod
    def require() -> Principal:
        principal = _current_principal.get()
        if principal is None:
            raise UnauthorizedError("Authentication required")
        return principal


__all__ = ["SecurityContext"]
