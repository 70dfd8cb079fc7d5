"""Application pipeline – AuditBehavior."""

from __future__ import annotations

from typing import Any

from mp_mediator.application.cqrs.kinds import RequestKind
from mp_mediator.application.pipeline.behavior import Next, PipelineBehavior, pipeline_behavior
from mp_mediator.kernel.security import AuditEvent, AuditOutcome, AuditStore, SecurityContext
from mp_mediator.observability.logging import SensitiveFieldsFilter, request_fields, request_name


@pipeline_behavior(priority=50, scope="command")
class AuditBehavior(PipelineBehavior):
    """Record an :class:`AuditEvent` before and after every command.

    Three outcomes are written to *store*:

    - ``"started"`` before the inner chain runs, carrying the request fields
      with sensitive keys redacted;
    - ``"succeeded"`` after it returns;
    - ``"failed"`` when it raises, carrying the error message.  The error is
      re-raised unchanged.

    ``principal_id`` comes from the current
    :class:`~mp_mediator.kernel.security.SecurityContext`, or ``"anonymous"``.
    ``request_kind`` is read from the request's ``Command``/``Query`` base;
    a plain object with neither base is recorded as ``"command"``.

    Usage::

        mediator.register_behavior(AuditBehavior(store=InMemoryAuditStore()))
    """

    def __init__(self, store: AuditStore, *, sensitive_fields: frozenset[str] | None = None) -> None:
        self.store = store
        self._filter = SensitiveFieldsFilter(sensitive_fields)

    async def handle(self, request: Any, next_: Next) -> Any:
        name = request_name(request)
        await self._record(request, f"Executing {name}", "started", self._filter.redact(request_fields(request)))
        try:
            result = await next_()
        except Exception as exc:
            await self._record(request, f"Failed {name}: {exc}", "failed", {"error": str(exc)})
            raise
        await self._record(request, f"Completed {name}", "succeeded", {})
        return result

    async def _record(self, request: Any, action: str, outcome: AuditOutcome, metadata: dict[str, Any]) -> None:
        principal = SecurityContext.get_current()
        kind = RequestKind.of(request)
        await self.store.record(
            AuditEvent(
                principal_id=principal.subject if principal is not None else "anonymous",
                action=action,
                request_name=request_name(request),
                request_kind=kind.value if kind is not None else "command",
                outcome=outcome,
                metadata=metadata,
            )
        )


__all__ = ["AuditBehavior"]
