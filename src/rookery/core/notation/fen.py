"""FEN parsing and serialization."""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.errors import MalformedImport
from rookery.core.piece import Piece
from rookery.core.position import Position
from rookery.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    Raises :class:`MalformedImport` on any shape error. Nothing is built
    until every field has parsed, so the caller's state is never touched
    by a rejected import.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise MalformedImport(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    board = _parse_placement(placement, fen)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise MalformedImport(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_CHARS)
        seen: set[str] = set()
        for ch in castling_part:
            right = rights.get(ch)
            if right is None or ch in seen:
                raise MalformedImport(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise MalformedImport(
                f"Invalid FEN en-passant square: {ep_part!r}"
            ) from None
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if rank_of(ep) != expected_ep_rank:
            raise MalformedImport(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        # The pawn that just double-stepped sits behind an empty target.
        pushed = board[ep - 8 * side.forward]
        if board[ep] is not None or pushed != Piece(side.opposite, PieceType.PAWN):
            raise MalformedImport(
                f"Invalid FEN en-passant square, no pawn passed it: {ep_part!r}"
            )

    # 5–6. Clocks (optional)
    halfmove = _parse_clock(parts, 4, default=0, minimum=0, name="halfmove clock")
    fullmove = _parse_clock(parts, 5, default=1, minimum=1, name="fullmove number")

    return Position(board, side, castling, ep, halfmove, fullmove)


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise MalformedImport(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    pieces: list[tuple[Square, Piece]] = []
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise MalformedImport(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise MalformedImport(f"Invalid FEN rank width: {fen!r}")
                try:
                    piece = Piece.from_char(ch)
                except ValueError:
                    raise MalformedImport(
                        f"Invalid FEN piece {ch!r}: {fen!r}"
                    ) from None
                pieces.append((make_square(file, rank), piece))
                file += 1
            if file > 8:
                raise MalformedImport(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise MalformedImport(f"Invalid FEN rank width: {fen!r}")

    for color in Color:
        kings = sum(1 for _, p in pieces if p.is_a(color, PieceType.KING))
        if kings != 1:
            raise MalformedImport(
                f"Invalid FEN: expected one {color} king, found {kings}: {fen!r}"
            )

    board = Board()
    for sq, piece in pieces:
        board[sq] = piece
    return board


def _parse_clock(
    parts: list[str], index: int, *, default: int, minimum: int, name: str
) -> int:
    if len(parts) <= index:
        return default
    try:
        value = int(parts[index])
    except ValueError:
        raise MalformedImport(f"Invalid FEN {name}: {parts[index]!r}") from None
    if value < minimum:
        raise MalformedImport(f"Invalid FEN {name}: {parts[index]!r}")
    return value


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN (always all six fields)."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
