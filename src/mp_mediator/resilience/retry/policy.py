"""Resilience – RetryPolicy."""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

from mp_mediator.observability.logging import get_logger
from mp_mediator.resilience.retry.backoff import BackoffStrategy, ExponentialBackoff
from mp_mediator.resilience.retry.jitter import FullJitter, JitterStrategy

T = TypeVar("T")
logger = get_logger(__name__)


class RetryPolicy:
    """Configurable async retry policy."""

    def __init__(
        self,
        max_attempts: int = 3,
        backoff: BackoffStrategy | None = None,
        jitter: JitterStrategy | None = None,
        retryable_exceptions: tuple[type[BaseException], ...] = (Exception,),
        non_retryable_exceptions: tuple[type[BaseException], ...] = (),
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.backoff = backoff or ExponentialBackoff()
        self.jitter = jitter or FullJitter()
        self.retryable_exceptions = retryable_exceptions
        self.non_retryable_exceptions = non_retryable_exceptions

    def _should_retry(self, exc: BaseException) -> bool:
        if isinstance(exc, self.non_retryable_exceptions):
            return False
        return isinstance(exc, self.retryable_exceptions)

    async def execute_async(self, func: Callable[[], Awaitable[T]]) -> T:
        """Await *func* until it succeeds or the attempts are exhausted."""
        attempt = 1
        while True:
            try:
                return await func()
            except Exception as exc:
                if not self._should_retry(exc) or attempt >= self.max_attempts:
                    raise
                delay = self.jitter.apply(self.backoff.compute(attempt))
                logger.warning(
                    "retry.scheduled",
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    delay_s=round(delay, 3),
                    error=str(exc),
                )
                await asyncio.sleep(delay)
                attempt += 1


__all__ = ["RetryPolicy"]
