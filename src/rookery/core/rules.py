"""High-level chess rules: check, checkmate, stalemate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rookery.core.attacks import is_in_check
from rookery.core.enums import Color, GameResult, StatusKind
from rookery.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from rookery.core.position import Position


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Terminal classification; ``loser`` is set only for checkmate."""

    kind: StatusKind
    loser: Color | None = None

    @property
    def is_terminal(self) -> bool:
        return self.kind != StatusKind.ONGOING

    def __str__(self) -> str:
        if self.kind == StatusKind.CHECKMATE:
            return f"checkmate({self.loser})"
        return self.kind.name.lower()


ONGOING = GameStatus(StatusKind.ONGOING)
STALEMATE = GameStatus(StatusKind.STALEMATE)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    # The halfmove clock is tracked on Position but no draw is ever
    # declared from it, nor from repetition or material.

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        """Is *color* (default: the side to move) in check?"""
        if color is None:
            color = position.side_to_move
        return is_in_check(position, color)

    @staticmethod
    def status(position: Position) -> GameStatus:
        """Ongoing, checkmate (with loser) or stalemate."""
        if MoveGenerator(position).legal_successors():
            return ONGOING
        side = position.side_to_move
        if is_in_check(position, side):
            return GameStatus(StatusKind.CHECKMATE, loser=side)
        return STALEMATE

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.status(position).kind == StatusKind.CHECKMATE

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return Rules.status(position).kind == StatusKind.STALEMATE

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result."""
        status = Rules.status(position)
        if status.kind == StatusKind.CHECKMATE:
            return (
                GameResult.BLACK_WINS
                if status.loser == Color.WHITE
                else GameResult.WHITE_WINS
            )
        if status.kind == StatusKind.STALEMATE:
            return GameResult.DRAW
        return GameResult.IN_PROGRESS
