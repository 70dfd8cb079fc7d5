"""Application mediator – the public façade and its registry."""
from mp_mediator.application.mediator.registry import Registry
from mp_mediator.application.mediator.mediator import Mediator
from mp_mediator.application.mediator.discovery import discover, register_components, scan_modules

__all__ = ["Mediator", "Registry", "discover", "register_components", "scan_modules"]
