"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from rookery.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    is_in_check,
    is_square_attacked,
)
from rookery.core.enums import CastleSide, CastlingRights, Color, MoveKind, PieceType
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.position import home_rank, promotion_rank
from rookery.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from rookery.core.position import Position

# Only queen promotions are offered unless the caller asks otherwise.
DEFAULT_PROMOTIONS: tuple[PieceType, ...] = (PieceType.QUEEN,)

_KING_HOME_FILE = 4

# (files that must be empty, files the king stands on/crosses/lands on,
#  rook file, king destination file)
_CastleGeometry = tuple[tuple[int, ...], tuple[int, ...], int, int]

_CASTLE_GEOMETRY: dict[CastleSide, _CastleGeometry] = {
    CastleSide.KINGSIDE: ((5, 6), (4, 5, 6), 7, 6),
    CastleSide.QUEENSIDE: ((1, 2, 3), (4, 3, 2), 0, 2),
}
_CASTLE_KIND: dict[CastleSide, MoveKind] = {
    CastleSide.KINGSIDE: MoveKind.CASTLE_KINGSIDE,
    CastleSide.QUEENSIDE: MoveKind.CASTLE_QUEENSIDE,
}


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    Moves come back in a fixed order: origin squares ascending, then the
    per-piece direction order. Search tie-breaking relies on it.
    """

    __slots__ = ("_pos", "_board", "_promotions")

    def __init__(
        self,
        position: Position,
        promotion_types: Sequence[PieceType] = DEFAULT_PROMOTIONS,
    ) -> None:
        self._pos = position
        self._board = position.board
        self._promotions = tuple(promotion_types)

    # -- Public API ---------------------------------------------------------

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        return [move for move, _ in self.legal_successors()]

    def legal_successors(self) -> list[tuple[Move, Position]]:
        """Legal moves paired with the positions they lead to.

        The legality test has to build each successor anyway, so callers
        that will recurse into them (search, perft) can reuse it.
        """
        mover = self._pos.side_to_move
        result: list[tuple[Move, Position]] = []
        for move in self.generate_pseudo_legal_moves():
            child = self._pos.apply(move)
            if not is_in_check(child, mover):
                result.append((move, child))
        return result

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        moves: list[Move] = []
        color = self._pos.side_to_move
        board = self._board

        for sq in board.all_pieces(color):
            piece = board[sq]
            assert piece is not None
            ptype = piece.piece_type
            if ptype == PieceType.PAWN:
                self._gen_pawn(sq, color, moves)
            elif ptype == PieceType.KNIGHT:
                self._gen_steps(sq, color, KNIGHT_TARGETS[sq], moves)
            elif ptype == PieceType.BISHOP:
                self._gen_sliding(sq, color, BISHOP_RAYS[sq], moves)
            elif ptype == PieceType.ROOK:
                self._gen_sliding(sq, color, ROOK_RAYS[sq], moves)
            elif ptype == PieceType.QUEEN:
                self._gen_sliding(sq, color, QUEEN_RAYS[sq], moves)
            else:
                self._gen_steps(sq, color, KING_TARGETS[sq], moves)
                self._gen_castling(sq, color, moves)

        return moves

    # -- Piece-specific generators (private) -------------------------------

    def _add_pawn_move(
        self,
        from_sq: Square,
        to_sq: Square,
        color: Color,
        captured: bool,
        moves: list[Move],
    ) -> None:
        if rank_of(to_sq) == promotion_rank(color):
            for pt in self._promotions:
                moves.append(Move(from_sq, to_sq, captured=captured, promotion=pt))
        else:
            moves.append(Move(from_sq, to_sq, captured=captured))

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        file_idx = file_of(sq)
        rank_idx = rank_of(sq)
        forward = color.forward
        next_rank = rank_idx + forward
        if not 0 <= next_rank < 8:
            return

        one_step = make_square(file_idx, next_rank)
        if board.is_empty(one_step):
            self._add_pawn_move(sq, one_step, color, False, moves)
            start_rank = 1 if color == Color.WHITE else 6
            if rank_idx == start_rank:
                two_step = make_square(file_idx, rank_idx + 2 * forward)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, MoveKind.DOUBLE_PUSH))

        for df in (-1, 1):
            cap_file = file_idx + df
            if not 0 <= cap_file < 8:
                continue
            cap_sq = make_square(cap_file, next_rank)
            target = board[cap_sq]
            if target is not None and target.color != color:
                self._add_pawn_move(sq, cap_sq, color, True, moves)

        ep = self._pos.en_passant
        if (
            ep is not None
            and rank_of(ep) == next_rank
            and abs(file_of(ep) - file_idx) == 1
            and board.is_empty(ep)
            and board[ep - 8 * forward] == Piece(color.opposite, PieceType.PAWN)
        ):
            moves.append(Move(sq, ep, MoveKind.EN_PASSANT, captured=True))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != color:
                moves.append(Move(sq, to_sq, captured=True))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, captured=True))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        rank = home_rank(color)
        if king_sq != make_square(_KING_HOME_FILE, rank):
            return

        board = self._board
        opponent = color.opposite
        own_rook = Piece(color, PieceType.ROOK)

        for side in (CastleSide.KINGSIDE, CastleSide.QUEENSIDE):
            if not self._pos.castling & CastlingRights.for_side(color, side):
                continue
            empty_files, safe_files, rook_file, king_to_file = _CASTLE_GEOMETRY[side]
            if board[make_square(rook_file, rank)] != own_rook:
                continue
            if any(not board.is_empty(make_square(f, rank)) for f in empty_files):
                continue
            # Evaluated on the pre-move position: no castling out of,
            # through, or into check.
            if any(
                is_square_attacked(self._pos, make_square(f, rank), opponent)
                for f in safe_files
            ):
                continue
            moves.append(
                Move(king_sq, make_square(king_to_file, rank), _CASTLE_KIND[side])
            )
