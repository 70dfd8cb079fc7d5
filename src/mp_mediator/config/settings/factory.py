"""Config settings – SettingsFactory.

Usage::

    settings = SettingsFactory.create(
        MediatorSettings,
        loaders=[EnvSettingsLoader()],
        overrides={"log_all_requests": True},
    )
"""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping, Sequence, TypeVar

from mp_mediator.config.settings.base import Settings
from mp_mediator.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from mp_mediator.config.validation.errors import ConfigError, MissingRequiredSettingError

T = TypeVar("T", bound=Settings)


def _is_required(field: dataclasses.Field[Any]) -> bool:
    return field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING


class SettingsFactory:
    """Build one settings object out of several sources.

    Sources are layered in order, so a later loader shadows an earlier one and
    *overrides* shadow every loader.  A loader failing with
    :class:`ConfigError` contributes nothing; the rest still apply.
    Validation errors from the settings class itself always propagate.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> T:
        values: dict[str, Any] = {}
        for loader in loaders or ():
            try:
                loaded = loader.load(settings_cls)
            except ConfigError:
                continue
            values.update(dataclasses.asdict(loaded))
        values.update(overrides or {})

        missing = [
            f.name for f in dataclasses.fields(settings_cls)  # type: ignore[arg-type]
            if _is_required(f) and f.name not in values
        ]
        if missing:
            raise MissingRequiredSettingError(missing[0])

        try:
            return settings_cls(**values)
        except ConfigError:
            raise
        except TypeError as exc:
            raise ConfigError(f"Cannot build {settings_cls.__name__}: {exc}") from exc

    @classmethod
    def from_env(
        cls,
        settings_cls: type[T],
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> T:
        """Shortcut for a single :class:`EnvSettingsLoader` plus keyword overrides."""
        return cls.create(settings_cls, [EnvSettingsLoader(environ)], overrides)


__all__ = ["SettingsFactory"]
