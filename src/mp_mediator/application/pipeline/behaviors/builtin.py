"""Application pipeline – built-in behaviors.

=============================  ========  =====
Behavior                       Priority  Scope
=============================  ========  =====
``ExceptionHandlingBehavior``  -100      all
``LoggingBehavior``            0         all
``PerformanceBehavior``        10        all
``ValidationBehavior``         100       all
=============================  ========  =====
"""
from __future__ import annotations

import abc
import inspect
import time
from typing import Any, Awaitable, Iterable

from mp_mediator.application.pipeline.behavior import Next, PipelineBehavior, pipeline_behavior
from mp_mediator.application.validation import NoOpValidationStrategy, ValidationStrategy
from mp_mediator.kernel.errors import ValidationError
from mp_mediator.observability.logging import get_logger, request_name

logger = get_logger("mp_mediator.pipeline")


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


# ---------------------------------------------------------------------------
# Exception handling
# ---------------------------------------------------------------------------


class ExceptionTransformer(abc.ABC):
    """Turn one family of errors into another before it leaves the pipeline."""

    @abc.abstractmethod
    def can_handle(self, error: BaseException) -> bool: ...

    @abc.abstractmethod
    def transform(self, error: BaseException, request: Any) -> BaseException | Awaitable[BaseException]: ...


@pipeline_behavior(priority=-100)
class ExceptionHandlingBehavior(PipelineBehavior):
    """Outermost catch-all: log the error, transform it, re-raise it.

    The first registered transformer whose ``can_handle`` matches wins.  A
    transformed error is raised ``from`` the original so the cause survives.
    """

    def __init__(self, transformers: Iterable[ExceptionTransformer] = ()) -> None:
        self._transformers: list[ExceptionTransformer] = list(transformers)

    def register_transformer(self, transformer: ExceptionTransformer) -> None:
        self._transformers.append(transformer)

    async def handle(self, request: Any, next_: Next) -> Any:
        try:
            return await next_()
        except Exception as exc:
            processed = await self._process(exc, request)
            if processed is exc:
                raise
            raise processed from exc

    async def _process(self, error: Exception, request: Any) -> BaseException:
        logger.error(
            "request.exception",
            request=request_name(request),
            error_type=type(error).__name__,
            error=str(error),
            exc_info=error,
        )
        for transformer in self._transformers:
            if transformer.can_handle(error):
                result = transformer.transform(error, request)
                if inspect.isawaitable(result):
                    result = await result
                return result
        return error


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pipeline_behavior(priority=0)
class LoggingBehavior(PipelineBehavior):
    """Log start, completion with elapsed time, or failure with elapsed time."""

    async def handle(self, request: Any, next_: Next) -> Any:
        name = request_name(request)
        start = time.perf_counter()
        logger.info("request.started", request=name)
        try:
            result = await next_()
        except Exception as exc:
            logger.error("request.failed", request=name, duration_ms=_elapsed_ms(start), error=str(exc))
            raise
        logger.info("request.completed", request=name, duration_ms=_elapsed_ms(start))
        return result


# ---------------------------------------------------------------------------
# Performance
# ---------------------------------------------------------------------------


@pipeline_behavior(priority=10)
class PerformanceBehavior(PipelineBehavior):
    """Warn about requests slower than *threshold_ms*; never alters control flow."""

    def __init__(self, threshold_ms: float = 500.0, log_all_requests: bool = False) -> None:
        self.threshold_ms = threshold_ms
        self.log_all_requests = log_all_requests

    async def handle(self, request: Any, next_: Next) -> Any:
        start = time.perf_counter()
        try:
            return await next_()
        finally:
            elapsed = _elapsed_ms(start)
            if elapsed > self.threshold_ms:
                logger.warning(
                    "request.slow",
                    request=request_name(request),
                    duration_ms=elapsed,
                    threshold_ms=self.threshold_ms,
                )
            elif self.log_all_requests:
                logger.debug("request.timing", request=request_name(request), duration_ms=elapsed)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@pipeline_behavior(priority=100)
class ValidationBehavior(PipelineBehavior):
    """Reject invalid requests before the handler sees them."""

    def __init__(self, strategy: ValidationStrategy | None = None) -> None:
        self.strategy = strategy or NoOpValidationStrategy()

    async def handle(self, request: Any, next_: Next) -> Any:
        errors = await self.strategy.validate(request)
        if errors:
            raise ValidationError(errors)
        return await next_()


__all__ = [
    "ExceptionHandlingBehavior",
    "ExceptionTransformer",
    "LoggingBehavior",
    "PerformanceBehavior",
    "ValidationBehavior",
]
