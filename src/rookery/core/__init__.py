"""Core domain layer: pure chess logic with zero external dependencies.

Quick start::

    from rookery.core import MoveGenerator, Rules, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for move in MoveGenerator(pos).generate_legal_moves():
        print(move, Rules.status(pos.apply(move)))
"""

from rookery.core.attacks import is_in_check, is_square_attacked
from rookery.core.board import Board
from rookery.core.enums import (
    CastleSide,
    CastlingRights,
    Color,
    GameResult,
    MoveKind,
    PieceType,
    StatusKind,
)
from rookery.core.errors import (
    IllegalMoveRequested,
    InvariantViolation,
    MalformedImport,
    RookeryError,
)
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import (
    STARTING_FEN,
    find_move,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from rookery.core.piece import Piece
from rookery.core.position import Position
from rookery.core.rules import GameStatus, Rules
from rookery.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastleSide",
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveKind",
    "PieceType",
    "StatusKind",
    # Errors
    "IllegalMoveRequested",
    "InvariantViolation",
    "MalformedImport",
    "RookeryError",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "GameStatus",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Attack oracle
    "is_in_check",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "find_move",
    "parse_uci",
    "position_from_fen",
    "position_to_fen",
]
