"""Application pipeline – RetryBehavior for commands."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Protocol

from mp_mediator.application.pipeline.behavior import Next, PipelineBehavior, pipeline_behavior
from mp_mediator.config.settings import MediatorSettings
from mp_mediator.kernel.errors import (
    ForbiddenError,
    HandlerNotFoundError,
    RegistrationError,
    UnauthorizedError,
    ValidationError,
)
from mp_mediator.observability.logging import get_logger, request_name
from mp_mediator.resilience.retry import RetryPolicy

logger = get_logger(__name__)

NON_RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    ValidationError,
    RegistrationError,
    HandlerNotFoundError,
    UnauthorizedError,
    ForbiddenError,
)


class AsyncRetryPolicy(Protocol):
    async def execute_async(self, func: Callable[[], Awaitable[Any]]) -> Any: ...


@pipeline_behavior(priority=-50, scope="command")
class RetryBehavior(PipelineBehavior):
    """Re-run the inner chain when it fails with a retryable error.

    This is the one behavior that calls ``next_`` more than once: every retry
    re-enters all behaviors registered inside it.  The default policy never
    retries validation, registration, missing-handler, authentication or
    authorization failures.
    """

    def __init__(self, policy: AsyncRetryPolicy | None = None, max_attempts: int = 3) -> None:
        self.policy = policy if policy is not None else RetryPolicy(
            max_attempts=max_attempts,
            non_retryable_exceptions=NON_RETRYABLE_ERRORS,
        )

    @classmethod
    def from_settings(cls, settings: MediatorSettings) -> "RetryBehavior":
        return cls(max_attempts=settings.retry_max_attempts)

    async def handle(self, request: Any, next_: Next) -> Any:
        attempts = 0

        async def _attempt() -> Any:
            nonlocal attempts
            attempts += 1
            if attempts > 1:
                logger.warning("retry.attempt", request=request_name(request), attempt=attempts)
            return await next_()

        return await self.policy.execute_async(_attempt)


__all__ = ["NON_RETRYABLE_ERRORS", "AsyncRetryPolicy", "RetryBehavior"]
