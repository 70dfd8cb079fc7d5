"""Observability – structured logging helpers."""
from mp_mediator.observability.logging.filters import SensitiveFieldsFilter
from mp_mediator.observability.logging.factory import JsonLoggerFactory
from mp_mediator.observability.logging.processors import get_logger, request_fields, request_name

__all__ = [
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "get_logger",
    "request_fields",
    "request_name",
]
