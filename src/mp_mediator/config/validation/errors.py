"""Config validation – errors raised while loading or checking settings."""
from __future__ import annotations

from mp_mediator.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A field without a default received no value from any source."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        self.setting_name = setting_name
        super().__init__(f"Required setting '{setting_name}' is missing", detail={"setting": setting_name})


class InvalidSettingValueError(ConfigError):
    """A value could not be coerced, or failed ``Settings._validate``."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        self.setting_name = setting_name
        self.value = value
        self.reason = reason
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
