"""Kernel security – Principal and Role."""
from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass(frozen=True)
class Role:
    """Named role (e.g. ADMIN, VIEWER)."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclasses.dataclass(frozen=True)
class Principal:
    """Authenticated identity on whose behalf a request is dispatched."""
    subject: str
    roles: frozenset[Role] = frozenset()
    claims: dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def with_roles(cls, subject: str, *roles: str) -> "Principal":
        return cls(subject=subject, roles=frozenset(Role(r) for r in roles))

    def has_role(self, role: str | Role) -> bool:
        name = role.name if isinstance(role, Role) else role
        return any(r.name == name for r in self.roles)


__all__ = ["Principal", "Role"]
