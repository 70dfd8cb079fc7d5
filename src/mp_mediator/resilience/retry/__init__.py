"""Resilience – retry with configurable backoff and jitter strategies."""
from mp_mediator.resilience.retry.backoff import BackoffStrategy, ConstantBackoff, ExponentialBackoff
from mp_mediator.resilience.retry.jitter import FullJitter, JitterStrategy, NoJitter
from mp_mediator.resilience.retry.policy import RetryPolicy
from mp_mediator.resilience.retry.tenacity_adapter import TenacityRetryPolicy

__all__ = [
    "BackoffStrategy", "ConstantBackoff", "ExponentialBackoff",
    "FullJitter", "JitterStrategy", "NoJitter",
    "RetryPolicy", "TenacityRetryPolicy",
]
