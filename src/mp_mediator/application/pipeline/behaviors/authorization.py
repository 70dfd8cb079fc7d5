"""Application pipeline – AuthorizationBehavior."""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from mp_mediator.application.cqrs.kinds import RequestKind
from mp_mediator.application.pipeline.behavior import Next, PipelineBehavior, pipeline_behavior
from mp_mediator.kernel.errors import ForbiddenError, UnauthorizedError
from mp_mediator.kernel.security import PolicyContext, PolicyDecision, PolicyEngine, SecurityContext
from mp_mediator.observability.logging import get_logger, request_name

logger = get_logger(__name__)


@pipeline_behavior(priority=25)
class AuthorizationBehavior(PipelineBehavior):
    """Check the current :class:`SecurityContext` principal before dispatch.

    * No principal and ``require_auth`` → :class:`UnauthorizedError`.
    * A role listed in ``required_roles`` for the exact request type is
      missing → :class:`ForbiddenError`.
    * A configured :class:`PolicyEngine` returns ``DENY`` →
      :class:`ForbiddenError`.  The policy context uses the request class name
      as ``resource`` and the request kind (``command``/``query``) as
      ``action``.

    The kind is read from the request's ``Command``/``Query`` base class, not
    from whether it was dispatched through ``send`` or ``query``.  A plain
    object with neither base is evaluated with the action ``"execute"``.
    """

    def __init__(
        self,
        policy_engine: PolicyEngine | None = None,
        *,
        required_roles: Mapping[type, Iterable[str]] | None = None,
        require_auth: bool = True,
    ) -> None:
        self._engine = policy_engine
        self._required_roles = {t: tuple(roles) for t, roles in (required_roles or {}).items()}
        self._require_auth = require_auth

    async def handle(self, request: Any, next_: Next) -> Any:
        name = request_name(request)
        principal = SecurityContext.get_current()
        if principal is None:
            if self._require_auth:
                logger.warning("authorization.unauthenticated", request=name)
                raise UnauthorizedError("Authentication required")
            return await next_()

        for role in self._required_roles.get(type(request), ()):
            if not principal.has_role(role):
                logger.warning("authorization.forbidden", request=name, subject=principal.subject, role=role)
                raise ForbiddenError(f"{name} requires the {role!r} role", permission=role)

        if self._engine is not None:
            kind = RequestKind.of(request)
            context = PolicyContext(
                principal=principal,
                resource=name,
                action=kind.value if kind is not None else "execute",
            )
            if await self._engine.evaluate(context) == PolicyDecision.DENY:
                logger.warning("authorization.denied", request=name, subject=principal.subject)
                raise ForbiddenError(f"Access denied: {context.resource}:{context.action}")

        logger.info("authorization.granted", request=name, subject=principal.subject)
        return await next_()


__all__ = ["AuthorizationBehavior"]
