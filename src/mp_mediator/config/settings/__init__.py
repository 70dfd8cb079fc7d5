"""Config settings – 12-factor env-based configuration."""
from mp_mediator.config.settings.base import Settings
from mp_mediator.config.settings.factory import SettingsFactory
from mp_mediator.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from mp_mediator.config.settings.mediator import MediatorSettings

__all__ = ["EnvSettingsLoader", "MediatorSettings", "Settings", "SettingsFactory", "SettingsLoader"]
