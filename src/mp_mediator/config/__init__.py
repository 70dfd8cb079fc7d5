"""Config – 12-factor settings and loaders."""

from mp_mediator.config.settings import (
    EnvSettingsLoader,
    MediatorSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from mp_mediator.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MediatorSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
