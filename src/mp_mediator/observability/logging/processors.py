"""Observability – get_logger helper and request introspection for log context."""
from __future__ import annotations

import dataclasses
from typing import Any

import structlog


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


def request_name(request: Any) -> str:
    """Class name used to label a request in log events."""
    if request is None:
        return "UnknownRequest"
    return type(request).__name__


def request_fields(request: Any) -> dict[str, Any]:
    """Shallow field mapping of a request (dataclass, pydantic model or plain object)."""
    if dataclasses.is_dataclass(request) and not isinstance(request, type):
        return {f.name: getattr(request, f.name) for f in dataclasses.fields(request)}
    model_dump = getattr(request, "model_dump", None)
    if callable(model_dump):
        return dict(model_dump())
    if hasattr(request, "__dict__"):
        return {k: v for k, v in vars(request).items() if not k.startswith("_")}
    return {}


__all__ = ["get_logger", "request_fields", "request_name"]
