"""Application CQRS – Query and QueryHandler."""
from __future__ import annotations

import abc
from typing import Generic, TypeVar

Q = TypeVar("Q", bound="Query")
R = TypeVar("R")


class Query:
    """Marker base for queries (read-only intent)."""


class QueryHandler(abc.ABC, Generic[Q, R]):
    """Handle a single query type and return a result."""

    @abc.abstractmethod
    async def handle(self, query: Q) -> R: ...


__all__ = ["Query", "QueryHandler"]
