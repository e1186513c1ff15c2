"""Move lookup by coordinates: the move-proposal side of the rules engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.errors import IllegalMoveRequested
from rookery.core.move import promotion_from_char
from rookery.core.move_generator import MoveGenerator
from rookery.core.types import Square, parse_square, square_name

if TYPE_CHECKING:
    from rookery.core.enums import PieceType
    from rookery.core.move import Move
    from rookery.core.position import Position


def find_move(
    position: Position,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceType | None = None,
) -> Move:
    """Pick the legal move matching (from, to[, promotion kind]).

    With ``promotion=None`` the first matching move is returned, which for
    the default generator is the queen promotion.
    """
    for move in MoveGenerator(position).generate_legal_moves():
        if move.from_sq != from_sq or move.to_sq != to_sq:
            continue
        if promotion is None or move.promotion == promotion:
            return move
    raise IllegalMoveRequested(
        f"Illegal move: {square_name(from_sq)}{square_name(to_sq)}"
    )


def parse_uci(position: Position, text: str) -> Move:
    """Resolve long-algebraic text such as ``e2e4`` or ``e7e8q``."""
    text = text.strip()
    if len(text) not in (4, 5):
        raise IllegalMoveRequested(f"Invalid UCI move: {text!r}")
    try:
        from_sq = parse_square(text[0:2])
        to_sq = parse_square(text[2:4])
        promotion = promotion_from_char(text[4]) if len(text) == 5 else None
    except ValueError:
        raise IllegalMoveRequested(f"Invalid UCI move: {text!r}") from None
    return find_move(position, from_sq, to_sq, promotion)
