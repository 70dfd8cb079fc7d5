"""Application CQRS – Command and CommandHandler."""
from __future__ import annotations

import abc
from typing import Generic, TypeVar

C = TypeVar("C", bound="Command")


class Command:
    """Marker base for commands (intent to change state)."""


class CommandHandler(abc.ABC, Generic[C]):
    """Handle a single command type.  The return value is discarded."""

    @abc.abstractmethod
    async def handle(self, command: C) -> None: ...


__all__ = ["Command", "CommandHandler"]
