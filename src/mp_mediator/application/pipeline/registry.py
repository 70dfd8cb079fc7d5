"""Application pipeline – BehaviorDescriptor and BehaviorRegistry."""
from __future__ import annotations

import dataclasses
import itertools
from typing import Any

from mp_mediator.application.cqrs.kinds import RequestKind
from mp_mediator.application.pipeline.behavior import (
    BehaviorScope,
    get_behavior_options,
    infer_target_type,
)
from mp_mediator.kernel.errors import DuplicateBehaviorError


@dataclasses.dataclass(frozen=True)
class BehaviorDescriptor:
    """Registered behavior plus the metadata the pipeline filters on.

    ``identity`` is the behavior class; ``behavior`` is what was registered
    (the class itself or a configured instance of it).  ``sequence`` records
    registration order and breaks priority ties.
    """

    identity: type
    behavior: Any
    priority: int = 0
    scope: BehaviorScope = BehaviorScope.ALL
    target_type: type | None = None
    sequence: int = 0

    @property
    def name(self) -> str:
        return self.identity.__name__

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.priority, self.sequence)

    def applies_to(self, request_type: type, kind: RequestKind, skip: frozenset[type]) -> bool:
        if not self.scope.covers(kind):
            return False
        if self.identity in skip:
            return False
        return self.target_type is None or request_type is self.target_type


class BehaviorRegistry:
    """Holds registered behaviors in ``(priority, registration order)`` order.

    Every registration publishes a freshly sorted immutable tuple, so a reader
    holding a snapshot never observes a partially applied registration and a
    dispatch only needs a single filter pass.
    """

    def __init__(self) -> None:
        self._ordered: tuple[BehaviorDescriptor, ...] = ()
        self._sequence = itertools.count()

    def register(
        self,
        behavior: Any,
        *,
        priority: int | None = None,
        scope: BehaviorScope | str | None = None,
        target_type: type | None = None,
    ) -> BehaviorDescriptor:
        """Register *behavior* (a class or an instance) and return its descriptor.

        Options left as ``None`` fall back to the ``@pipeline_behavior``
        metadata on the class, then to ``priority=0, scope=ALL``.
        """
        identity = behavior if isinstance(behavior, type) else type(behavior)
        if any(d.identity is identity for d in self._ordered):
            raise DuplicateBehaviorError(identity)

        declared = get_behavior_options(identity)
        if priority is None:
            priority = declared.priority if declared else 0
        if scope is None:
            scope = declared.scope if declared else BehaviorScope.ALL
        if target_type is None:
            target_type = (declared.target_type if declared else None) or infer_target_type(identity)

        descriptor = BehaviorDescriptor(
            identity=identity,
            behavior=behavior,
            priority=int(priority),
            scope=BehaviorScope(scope),
            target_type=target_type,
            sequence=next(self._sequence),
        )
        self._ordered = tuple(sorted((*self._ordered, descriptor), key=lambda d: d.sort_key))
        return descriptor

    def list_ordered(self) -> tuple[BehaviorDescriptor, ...]:
        """Current priority-ordered snapshot."""
        return self._ordered

    def list_identities(self) -> tuple[type, ...]:
        return tuple(d.identity for d in self._ordered)

    def list_names(self) -> tuple[str, ...]:
        return tuple(d.name for d in self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, identity: object) -> bool:
        return any(d.identity is identity for d in self._ordered)


__all__ = ["BehaviorDescriptor", "BehaviorRegistry"]
