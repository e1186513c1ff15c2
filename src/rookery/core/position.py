"""Position: complete game state (board + metadata) as an immutable value."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from rookery.core.board import Board
from rookery.core.enums import CastleSide, CastlingRights, Color, PieceType
from rookery.core.errors import InvariantViolation
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.types import Square, make_square, rank_of, square_name

# Rook home square -> (owner, castling right it guards)
_ROOK_HOMES: dict[Square, tuple[Color, CastlingRights]] = {
    make_square(0, 0): (Color.WHITE, CastlingRights.WHITE_QUEENSIDE),
    make_square(7, 0): (Color.WHITE, CastlingRights.WHITE_KINGSIDE),
    make_square(0, 7): (Color.BLACK, CastlingRights.BLACK_QUEENSIDE),
    make_square(7, 7): (Color.BLACK, CastlingRights.BLACK_KINGSIDE),
}

# Castle side -> (rook from file, rook to file)
_CASTLE_ROOK_FILES: dict[CastleSide, tuple[int, int]] = {
    CastleSide.KINGSIDE: (7, 5),
    CastleSide.QUEENSIDE: (0, 3),
}


def home_rank(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


def promotion_rank(color: Color) -> int:
    return 7 if color == Color.WHITE else 0


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions are values. :meth:`apply` never touches ``self``; it builds
    the successor on a copied board, so search branches can share a parent
    without seeing each other's moves.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position."""
        return cls()

    # ── State transition ─────────────────────────────────────────────────

    def apply(self, move: Move) -> Position:
        """Return the position reached by playing *move*.

        *move* is expected to come from
        :class:`~rookery.core.move_generator.MoveGenerator`; anything else
        is a contract violation.
        """
        board = self.board.copy()
        mover = self.side_to_move
        piece = board[move.from_sq]
        if piece is None:
            raise InvariantViolation(f"No piece on {square_name(move.from_sq)}")

        # The pawn taken en passant sits one rank behind the destination.
        if move.is_en_passant:
            board[move.to_sq - 8 * mover.forward] = None

        board[move.from_sq] = None
        placed = piece
        if (
            piece.piece_type == PieceType.PAWN
            and rank_of(move.to_sq) == promotion_rank(mover)
        ):
            placed = Piece(mover, move.promotion or PieceType.QUEEN)
        board[move.to_sq] = placed

        castling = self.castling
        if piece.piece_type == PieceType.KING:
            castling &= ~CastlingRights.both(mover)
            side = move.castle
            if side is not None:
                rank = home_rank(mover)
                rook_from_file, rook_to_file = _CASTLE_ROOK_FILES[side]
                rook_from = make_square(rook_from_file, rank)
                rook = board[rook_from]
                if rook is None or not rook.is_a(mover, PieceType.ROOK):
                    raise InvariantViolation(
                        f"Castling without a rook on {square_name(rook_from)}"
                    )
                board[rook_from] = None
                board[make_square(rook_to_file, rank)] = rook

        if piece.piece_type == PieceType.ROOK:
            home = _ROOK_HOMES.get(move.from_sq)
            if home is not None and home[0] == mover:
                castling &= ~home[1]
        if move.captured:
            home = _ROOK_HOMES.get(move.to_sq)
            if home is not None and home[0] != mover:
                castling &= ~home[1]

        if piece.piece_type == PieceType.PAWN or move.is_capture:
            halfmove_clock = 0
        else:
            halfmove_clock = self.halfmove_clock + 1

        next_side = mover.opposite
        fullmove_number = self.fullmove_number
        if next_side == Color.WHITE:
            fullmove_number += 1

        return Position(
            board=board,
            side_to_move=next_side,
            castling=castling,
            en_passant=move.en_passant_set,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    # ── Utilities ────────────────────────────────────────────────────────

    def with_side_to_move(self, color: Color) -> Position:
        """Same placement with *color* to move and no en-passant target.

        Only meaningful for evaluation (mobility of the side not on move);
        the result is not a position reachable by play.
        """
        if color == self.side_to_move:
            return self
        return replace(self, side_to_move=color, en_passant=None)

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    def __repr__(self) -> str:
        return (
            f"Position(side_to_move={self.side_to_move}, "
            f"castling={self.castling!r}, en_passant={self.en_passant}, "
            f"halfmove_clock={self.halfmove_clock}, "
            f"fullmove_number={self.fullmove_number})\n{self.board!r}"
        )
