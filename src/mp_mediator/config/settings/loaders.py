"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Callable, Mapping, TypeVar

from mp_mediator.config.settings.base import Settings
from mp_mediator.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_NULL = frozenset({"", "none", "null"})


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in _TRUE


_PARSERS: dict[str, Callable[[str], Any]] = {
    "bool": _parse_bool,
    "int": int,
    "float": float,
    "str": str,
}


class SettingsLoader(abc.ABC):
    """Port: produce a settings instance from some external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Read ``<PREFIX>_<FIELD>`` variables from *environ* (``os.environ`` by default).

    Unset variables fall back to the field default; a field without a default
    and without a variable raises :class:`MissingRequiredSettingError`.
    Values are parsed according to the field annotation (``bool``, ``int``,
    ``float``, ``str``, optionally ``| None``).
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        values: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            key = settings_class.env_key(field.name)
            if key in environ:
                values[field.name] = self._parse(key, environ[key], field.type)
            elif field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                raise MissingRequiredSettingError(key)

        try:
            return settings_class(**values)
        except ConfigError:
            raise
        except TypeError as exc:
            raise ConfigError(f"Failed to load {settings_class.__name__}: {exc}") from exc

    @staticmethod
    def _parse(key: str, raw: str, annotation: Any) -> Any:
        hint = annotation if isinstance(annotation, str) else getattr(annotation, "__name__", str(annotation))
        base, optional = hint, False
        if hint.replace(" ", "").endswith("|None"):
            base, optional = hint.rsplit("|", 1)[0].strip(), True
        if optional and raw.strip().lower() in _NULL:
            return None
        parser = _PARSERS.get(base, str)
        try:
            return parser(raw)
        except ValueError as exc:
            raise InvalidSettingValueError(key, raw, str(exc)) from exc


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
