"""Application mediator – Registry: handlers + behaviors behind one freeze gate."""
from __future__ import annotations

from typing import Any

from mp_mediator.application.cqrs.handler_registry import HandlerRegistry
from mp_mediator.application.pipeline.behavior import BehaviorScope
from mp_mediator.application.pipeline.registry import BehaviorDescriptor, BehaviorRegistry
from mp_mediator.kernel.errors import RegistryFrozenError, type_name
from mp_mediator.observability.logging import get_logger

logger = get_logger(__name__)


class Registry:
    """Process-wide registration state, constructed once and passed by reference.

    Registration is expected to finish before the first dispatch.
    :meth:`freeze` makes that explicit: afterwards every registration call
    raises :class:`RegistryFrozenError`.
    """

    def __init__(self) -> None:
        self.handlers = HandlerRegistry()
        self.behaviors = BehaviorRegistry()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        if not self._frozen:
            self._frozen = True
            logger.debug(
                "mediator.registry_frozen",
                commands=len(self.handlers.command_types()),
                queries=len(self.handlers.query_types()),
                behaviors=list(self.behaviors.list_names()),
            )

    def _ensure_open(self, what: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(what)

    def register_command_handler(self, request_type: type, handler_ref: Any) -> None:
        self._ensure_open(f"command handler for {type_name(request_type)}")
        self.handlers.register_command_handler(request_type, handler_ref)
        logger.info(
            "mediator.handler_registered",
            kind="command",
            request=request_type.__name__,
            handler=_ref_name(handler_ref),
        )

    def register_query_handler(self, request_type: type, handler_ref: Any) -> None:
        self._ensure_open(f"query handler for {type_name(request_type)}")
        self.handlers.register_query_handler(request_type, handler_ref)
        logger.info(
            "mediator.handler_registered",
            kind="query",
            request=request_type.__name__,
            handler=_ref_name(handler_ref),
        )

    def register_behavior(
        self,
        behavior: Any,
        *,
        priority: int | None = None,
        scope: BehaviorScope | str | None = None,
        target_type: type | None = None,
    ) -> BehaviorDescriptor:
        self._ensure_open(f"behavior {_ref_name(behavior)}")
        descriptor = self.behaviors.register(
            behavior, priority=priority, scope=scope, target_type=target_type
        )
        logger.info(
            "mediator.behavior_registered",
            behavior=descriptor.name,
            priority=descriptor.priority,
            scope=descriptor.scope.value,
            target_type=descriptor.target_type.__name__ if descriptor.target_type else None,
        )
        return descriptor


def _ref_name(ref: Any) -> str:
    return ref.__name__ if isinstance(ref, type) else type(ref).__name__


__all__ = ["Registry"]
