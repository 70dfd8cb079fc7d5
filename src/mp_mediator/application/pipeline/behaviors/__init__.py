"""Application pipeline – built-in and illustrative behaviors."""
from mp_mediator.application.pipeline.behaviors.builtin import (
    ExceptionHandlingBehavior,
    ExceptionTransformer,
    LoggingBehavior,
    PerformanceBehavior,
    ValidationBehavior,
)
from mp_mediator.application.pipeline.behaviors.audit import AuditBehavior
from mp_mediator.application.pipeline.behaviors.authorization import AuthorizationBehavior
from mp_mediator.application.pipeline.behaviors.caching import (
    CacheEntry,
    CachingBehavior,
    InMemoryQueryCache,
    QueryCache,
    query_cache_key,
)
from mp_mediator.application.pipeline.behaviors.retry import NON_RETRYABLE_ERRORS, RetryBehavior
from mp_mediator.application.pipeline.behaviors.timeout import TimeoutBehavior

__all__ = [
    "NON_RETRYABLE_ERRORS",
    "AuditBehavior",
    "AuthorizationBehavior",
    "CacheEntry",
    "CachingBehavior",
    "ExceptionHandlingBehavior",
    "ExceptionTransformer",
    "InMemoryQueryCache",
    "LoggingBehavior",
    "PerformanceBehavior",
    "QueryCache",
    "RetryBehavior",
    "TimeoutBehavior",
    "ValidationBehavior",
    "query_cache_key",
]
