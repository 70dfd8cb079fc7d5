"""Resilience – backoff strategies."""
from __future__ import annotations

import abc


class BackoffStrategy(abc.ABC):
    """Compute wait duration (seconds) after the *attempt*-th failure."""

    @abc.abstractmethod
    def compute(self, attempt: int) -> float: ...


class ConstantBackoff(BackoffStrategy):
    """Fixed delay between attempts."""

    def __init__(self, delay: float = 1.0) -> None:
        self._delay = delay

    def compute(self, attempt: int) -> float:  # noqa: ARG002
        return self._delay


class ExponentialBackoff(BackoffStrategy):
    """Delay doubles per attempt: ``base_delay * 2^(attempt - 1)``."""

    def __init__(self, base_delay: float = 0.1, max_delay: float = 30.0) -> None:
        self._base = base_delay
        self._max = max_delay

    def compute(self, attempt: int) -> float:
        return min(self._base * (2 ** max(attempt - 1, 0)), self._max)


__all__ = ["BackoffStrategy", "ConstantBackoff", "ExponentialBackoff"]
