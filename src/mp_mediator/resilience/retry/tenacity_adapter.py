"""Resilience – TenacityRetryPolicy, a tenacity-backed drop-in for RetryPolicy.

Usage::

    policy = TenacityRetryPolicy(
        max_attempts=5,
        wait=tenacity.wait_fixed(0.2),
        retry=tenacity.retry_if_exception_type(ConnectionError),
    )
    mediator.register_behavior(RetryBehavior(policy))
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, TypeVar

import tenacity

T = TypeVar("T")

DEFAULT_WAIT = tenacity.wait_exponential(multiplier=0.1, max=5)


class TenacityRetryPolicy:
    """``execute_async`` over :class:`tenacity.AsyncRetrying`.

    *wait* and *retry* take tenacity strategies; extra keyword arguments go
    straight to ``AsyncRetrying``.  The final failure is re-raised as-is.
    """

    def __init__(self, max_attempts: int = 3, wait: Any = None, retry: Any = None, **kwargs: Any) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.wait = wait if wait is not None else DEFAULT_WAIT
        self.retry = retry if retry is not None else tenacity.retry_if_exception_type(Exception)
        self.options = kwargs

    def retrying(self) -> tenacity.AsyncRetrying:
        return tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(self.max_attempts),
            wait=self.wait,
            retry=self.retry,
            reraise=True,
            **self.options,
        )

    async def execute_async(self, func: Callable[[], Awaitable[T]]) -> T:
        return await self.retrying()(func)


__all__ = ["TenacityRetryPolicy"]
