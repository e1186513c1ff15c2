"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rookery.core.move import Move
    from rookery.core.position import Position

CancelCheck = Callable[[], bool]

# Difficulty tiers: 0 plays a random legal move, 1..MAX_DEPTH search.
MAX_DEPTH = 4


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation.

    ``time_limit_ms`` is only honoured between root moves; the recursive
    interior always runs to completion.
    """

    depth: int = 2
    time_limit_ms: int | None = None

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"Search depth must be >= 0, got {self.depth}")


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: float
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
