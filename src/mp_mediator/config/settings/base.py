"""Config settings – Settings, the dataclass base every settings object extends."""
from __future__ import annotations

import dataclasses


@dataclasses.dataclass
class Settings:
    """Subclasses declare fields with defaults and set ``_prefix``.

    Each field maps to the environment variable ``<PREFIX>_<FIELD>``
    (upper-cased); :meth:`_validate` runs after every construction.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def _validate(self) -> None:
        pass


__all__ = ["Settings"]
