"""Result envelope for paginated queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class PaginatedData(Generic[T]):
    """One page of ``results`` plus the number of matches across all pages."""

    results: list[T] = field(default_factory=list)
    total_count: int = 0


__all__ = ["PaginatedData"]
