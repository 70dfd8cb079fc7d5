"""Kernel security – Principal, SecurityContext, policy port, audit trail."""
from mp_mediator.kernel.security.principal import Principal, Role
from mp_mediator.kernel.security.policy import PolicyContext, PolicyDecision, PolicyEngine
from mp_mediator.kernel.security.pii import DEFAULT_SENSITIVE_FIELDS
from mp_mediator.kernel.security.security_context import SecurityContext
from mp_mediator.kernel.security.audit import AuditEvent, AuditOutcome, AuditStore, InMemoryAuditStore

__all__ = [
    "AuditEvent",
    "AuditOutcome",
    "AuditStore",
    "DEFAULT_SENSITIVE_FIELDS",
    "InMemoryAuditStore",
    "PolicyContext",
    "PolicyDecision",
    "PolicyEngine",
    "Principal",
    "Role",
    "SecurityContext",
]
