"""Application mediator – component discovery.

Plays the part of a container scan: finds classes decorated with
``@command_handler``, ``@query_handler`` or ``@pipeline_behavior`` and feeds
them to the mediator's registration API.  Final execution order never depends
on discovery order; the behavior registry sorts by priority.
"""
from __future__ import annotations

import inspect
from types import ModuleType
from typing import Any, Iterable, Iterator

from mp_mediator.application.cqrs.decorators import get_handler_metadata
from mp_mediator.application.cqrs.kinds import RequestKind
from mp_mediator.application.mediator.mediator import Mediator
from mp_mediator.application.pipeline.behavior import BEHAVIOR_METADATA
from mp_mediator.observability.logging import get_logger

logger = get_logger(__name__)


def _is_declared_behavior(component: Any) -> bool:
    return isinstance(component, type) and BEHAVIOR_METADATA in component.__dict__ and not inspect.isabstract(component)


def scan_modules(*modules: ModuleType) -> Iterator[type]:
    """Yield decorated classes defined (not merely imported) in *modules*."""
    for module in modules:
        for _, member in inspect.getmembers(module, inspect.isclass):
            if member.__module__ != module.__name__:
                continue
            if get_handler_metadata(member) is not None or _is_declared_behavior(member):
                yield member


def register_components(mediator: Mediator, components: Iterable[Any]) -> int:
    """Register every handler / behavior in *components*; return how many were registered.

    Behaviors may be given as classes or configured instances.  Anything
    without mediator metadata is ignored.
    """
    count = 0
    for component in components:
        component_class = component if isinstance(component, type) else type(component)
        metadata = get_handler_metadata(component_class)
        if metadata is not None:
            if metadata.kind is RequestKind.COMMAND:
                mediator.register_command_handler(metadata.request_type, component)
            else:
                mediator.register_query_handler(metadata.request_type, component)
            count += 1
        elif BEHAVIOR_METADATA in component_class.__dict__:
            mediator.register_behavior(component)
            count += 1
        else:
            logger.debug("mediator.component_ignored", component=component_class.__name__)
    return count


def discover(mediator: Mediator, *modules: ModuleType) -> int:
    """Scan *modules* and register everything found."""
    return register_components(mediator, scan_modules(*modules))


__all__ = ["discover", "register_components", "scan_modules"]
