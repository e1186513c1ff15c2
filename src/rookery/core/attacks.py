"""Attack detection: does a side attack a given square?

Everything here is a pure function of the position it is given, so it can
be asked about hypothetical positions (e.g. the result of a pseudo-legal
move) before anything has been checked for legality.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rookery.core.enums import Color, PieceType
from rookery.core.types import Square, make_square

if TYPE_CHECKING:
    from rookery.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if 0 <= af < 8 and 0 <= ar < 8:
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_attack_masks(targets: tuple[tuple[Square, ...], ...]) -> tuple[int, ...]:
    masks: list[int] = [0] * 64
    for sq in range(64):
        mask = 0
        for to_sq in targets[sq]:
            mask |= 1 << to_sq
        masks[sq] = mask
    return tuple(masks)


def _build_pawn_attacker_masks() -> tuple[tuple[int, ...], tuple[int, ...]]:
    """[color][sq] -> squares a *color* pawn must stand on to attack *sq*.

    The attacker sits one rank behind *sq* from its own direction of travel:
    below for white, above for black.
    """
    per_color: list[tuple[int, ...]] = []
    for color in (Color.WHITE, Color.BLACK):
        masks: list[int] = [0] * 64
        for sq in range(64):
            file_idx = sq & 7
            behind = (sq >> 3) - color.forward
            if not 0 <= behind < 8:
                continue
            for df in (-1, 1):
                af = file_idx + df
                if 0 <= af < 8:
                    masks[sq] |= 1 << make_square(af, behind)
        per_color.append(tuple(masks))
    return (per_color[0], per_color[1])


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while 0 <= af < 8 and 0 <= ar < 8:
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
_KNIGHT_ATTACK_MASKS = _build_attack_masks(KNIGHT_TARGETS)
_KING_ATTACK_MASKS = _build_attack_masks(KING_TARGETS)
_PAWN_ATTACKER_MASKS = _build_pawn_attacker_masks()

BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)


# -- Public API -------------------------------------------------------------


def is_square_attacked(position: Position, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color* in *position*?"""
    board = position.board

    if (
        board.pieces_bitboard(by_color, PieceType.PAWN)
        & _PAWN_ATTACKER_MASKS[int(by_color)][sq]
    ):
        return True

    if board.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_ATTACK_MASKS[sq]:
        return True

    if board.pieces_bitboard(by_color, PieceType.KING) & _KING_ATTACK_MASKS[sq]:
        return True

    if _ray_hits(position, BISHOP_RAYS[sq], by_color, _DIAGONAL_ATTACKERS):
        return True

    return _ray_hits(position, ROOK_RAYS[sq], by_color, _ORTHOGONAL_ATTACKERS)


def is_in_check(position: Position, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?"""
    king_sq = position.board.king_square(color)
    return is_square_attacked(position, king_sq, color.opposite)


def _ray_hits(
    position: Position,
    rays: tuple[tuple[Square, ...], ...],
    by_color: Color,
    attackers: tuple[PieceType, PieceType],
) -> bool:
    board = position.board
    if not (
        board.pieces_bitboard(by_color, attackers[0])
        or board.pieces_bitboard(by_color, attackers[1])
    ):
        return False

    for ray in rays:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in attackers:
                return True
            break
    return False
