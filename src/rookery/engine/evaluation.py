"""Static evaluation: material plus a small mobility term."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import Color, PieceType
from rookery.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from rookery.core.position import Position

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20_000,
}

MOBILITY_WEIGHT = 1.5


def material(position: Position) -> int:
    """White material minus black material."""
    score = 0
    for _, piece in position.board.occupied():
        value = PIECE_VALUES[piece.piece_type]
        score += value if piece.color == Color.WHITE else -value
    return score


def mobility(position: Position) -> int:
    """Legal-move count of the mover minus that of the other side."""
    own = len(MoveGenerator(position).generate_legal_moves())
    flipped = position.with_side_to_move(position.side_to_move.opposite)
    other = len(MoveGenerator(flipped).generate_legal_moves())
    return own - other


def evaluate(position: Position) -> float:
    """Score from white's point of view (positive favours white)."""
    sign = 1 if position.side_to_move == Color.WHITE else -1
    return material(position) + sign * MOBILITY_WEIGHT * mobility(position)


def perspective_score(position: Position) -> float:
    """Score from the side to move's point of view."""
    score = evaluate(position)
    return score if position.side_to_move == Color.WHITE else -score
