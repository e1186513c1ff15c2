"""Notation package: FEN import/export and coordinate move lookup."""

from rookery.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from rookery.core.notation.uci import find_move, parse_uci

__all__ = [
    "STARTING_FEN",
    "find_move",
    "parse_uci",
    "position_from_fen",
    "position_to_fen",
]
