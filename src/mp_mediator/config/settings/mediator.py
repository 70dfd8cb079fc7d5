"""Config settings – MediatorSettings."""
from __future__ import annotations

import dataclasses

from mp_mediator.config.settings.base import Settings
from mp_mediator.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class MediatorSettings(Settings):
    """Tunables for the mediator and its built-in behaviors.

    Loaded from ``MEDIATOR_*`` environment variables by
    :class:`~mp_mediator.config.settings.loaders.EnvSettingsLoader`.
    """

    _prefix = "MEDIATOR"

    performance_threshold_ms: float = 500.0
    log_all_requests: bool = False
    seal_on_first_dispatch: bool = True
    retry_max_attempts: int = 3
    cache_ttl_seconds: float = 30.0
    timeout_seconds: float | None = None

    def _validate(self) -> None:
        if self.performance_threshold_ms < 0:
            raise InvalidSettingValueError(
                "performance_threshold_ms", self.performance_threshold_ms, "must be >= 0"
            )
        if self.retry_max_attempts < 1:
            raise InvalidSettingValueError(
                "retry_max_attempts", self.retry_max_attempts, "must be >= 1"
            )
        if self.cache_ttl_seconds < 0:
            raise InvalidSettingValueError(
                "cache_ttl_seconds", self.cache_ttl_seconds, "must be >= 0"
            )
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise InvalidSettingValueError(
                "timeout_seconds", self.timeout_seconds, "must be > 0 when set"
            )


__all__ = ["MediatorSettings"]
