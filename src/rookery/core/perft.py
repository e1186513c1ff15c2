"""Perft: count leaf nodes of the legal move tree."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from rookery.core.move_generator import DEFAULT_PROMOTIONS, MoveGenerator

if TYPE_CHECKING:
    from rookery.core.enums import PieceType
    from rookery.core.position import Position


def perft(
    position: Position,
    depth: int,
    promotion_types: Sequence[PieceType] = DEFAULT_PROMOTIONS,
) -> int:
    """Compute perft node count for *position* at *depth*.

    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Published reference counts assume all four promotion kinds; pass them
    via *promotion_types* when comparing against those tables.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1
    successors = MoveGenerator(position, promotion_types).legal_successors()
    if depth == 1:
        return len(successors)
    return sum(
        perft(child, depth - 1, promotion_types) for _, child in successors
    )
