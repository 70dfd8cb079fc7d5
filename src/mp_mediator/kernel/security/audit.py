"""Kernel security – audit trail of dispatched requests.

:class:`AuditEvent` is what :class:`~mp_mediator.application.pipeline.behaviors.audit.AuditBehavior`
writes; :class:`AuditStore` is the port it writes to.
"""

from __future__ import annotations

import abc
import dataclasses
import uuid
from datetime import UTC, datetime
from typing import Any, Literal

AuditOutcome = Literal["started", "succeeded", "failed"]


def _new_event_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclasses.dataclass(frozen=True)
class AuditEvent:
    """One step in the life of a request.

    A command normally yields two events sharing ``request_name``: one with
    outcome ``"started"`` and one with ``"succeeded"`` or ``"failed"``.
    ``principal_id`` is ``"anonymous"`` when no principal was set, and
    ``metadata`` carries the redacted request fields (on start) or the error
    message (on failure).
    """

    principal_id: str
    action: str
    request_name: str
    request_kind: str
    outcome: AuditOutcome
    event_id: str = dataclasses.field(default_factory=_new_event_id)
    occurred_at: datetime = dataclasses.field(default_factory=_utcnow)
    metadata: dict[str, Any] = dataclasses.field(default_factory=dict)

    def is_failure(self) -> bool:
        return self.outcome == "failed"


class AuditStore(abc.ABC):
    """Port: append-only audit log."""

    @abc.abstractmethod
    async def record(self, event: AuditEvent) -> None: ...

    @abc.abstractmethod
    async def query(
        self,
        *,
        principal_id: str | None = None,
        request_name: str | None = None,
        outcome: AuditOutcome | None = None,
        limit: int = 1000,
    ) -> list[AuditEvent]:
        """Events matching every given filter, oldest first, at most *limit*."""


class InMemoryAuditStore(AuditStore):
    """Keeps events in a list.  Meant for tests and local runs."""

    def __init__(self) -> None:
        self._events: list[AuditEvent] = []

    async def record(self, event: AuditEvent) -> None:
        self._events.append(event)

    async def query(
        self,
        *,
        principal_id: str | None = None,
        request_name: str | None = None,
        outcome: AuditOutcome | None = None,
        limit: int = 1000,
    ) -> list[AuditEvent]:
        wanted = {"principal_id": principal_id, "request_name": request_name, "outcome": outcome}
        matches = [
            event for event in self._events
            if all(value is None or getattr(event, key) == value for key, value in wanted.items())
        ]
        matches.sort(key=lambda event: event.occurred_at)
        return matches[:limit]

    def all(self) -> list[AuditEvent]:
        return list(self._events)


__all__ = ["AuditEvent", "AuditOutcome", "AuditStore", "InMemoryAuditStore"]
