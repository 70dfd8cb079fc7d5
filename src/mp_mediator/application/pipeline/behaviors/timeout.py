"""Application pipeline – TimeoutBehavior."""
from __future__ import annotations

import asyncio
from typing import Any

from mp_mediator.application.pipeline.behavior import Next, PipelineBehavior, pipeline_behavior
from mp_mediator.config.settings import MediatorSettings
from mp_mediator.kernel.errors import TimeoutError as AppTimeoutError
from mp_mediator.observability.logging import get_logger, request_name

logger = get_logger(__name__)


@pipeline_behavior(priority=150)
class TimeoutBehavior(PipelineBehavior):
    """Race the inner chain against a timer; cancel it when the timer wins."""

    def __init__(self, timeout_seconds: float) -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, settings: MediatorSettings) -> "TimeoutBehavior":
        if settings.timeout_seconds is None:
            raise ValueError("MediatorSettings.timeout_seconds is not set")
        return cls(settings.timeout_seconds)

    async def handle(self, request: Any, next_: Next) -> Any:
        deadline = asyncio.timeout(self.timeout_seconds)
        try:
            async with deadline:
                return await next_()
        except TimeoutError as exc:
            # A TimeoutError raised by the chain itself passes through untouched.
            if not deadline.expired():
                raise
            logger.warning("request.timeout", request=request_name(request), timeout_s=self.timeout_seconds)
            raise AppTimeoutError(
                f"{request_name(request)} timed out after {self.timeout_seconds}s",
                timeout_seconds=self.timeout_seconds,
            ) from exc


__all__ = ["TimeoutBehavior"]
