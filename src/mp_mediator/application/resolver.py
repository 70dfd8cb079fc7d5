"""Application – resolvers turning registered references into live objects."""
from __future__ import annotations

from typing import Any, Callable

Resolver = Callable[[Any], Any]
"""Turns a handler/behavior reference (class or instance) into an instance."""


class SingletonResolver:
    """Default resolver: instantiate each class once with no arguments.

    Instances pass through unchanged.  Plug a DI container in instead by
    passing any ``Callable[[Any], Any]`` as the mediator's ``resolver``.
    """

    def __init__(self) -> None:
        self._instances: dict[type, Any] = {}

    def __call__(self, ref: Any) -> Any:
        if not isinstance(ref, type):
            return ref
        instance = self._instances.get(ref)
        if instance is None:
            instance = self._instances[ref] = ref()
        return instance


__all__ = ["Resolver", "SingletonResolver"]
