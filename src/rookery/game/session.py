"""GameSession: one game against the engine, without any UI.

Holds the current position, validates and applies moves, lets the engine
reply on its turn and notifies listeners through plain callbacks. All
state is owned by the session instance; nothing is module-global.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from rookery.config import EngineSettings
from rookery.core.attacks import is_in_check
from rookery.core.enums import Color, PieceType, StatusKind
from rookery.core.errors import IllegalMoveRequested
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import (
    STARTING_FEN,
    find_move,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from rookery.core.position import Position
from rookery.core.rules import GameStatus, Rules
from rookery.core.types import Square
from rookery.engine.negamax import NegamaxEngine
from rookery.engine.search import IEngine

_LOGGER = logging.getLogger(__name__)

_SIDE_NAMES = {Color.WHITE: "White", Color.BLACK: "Black"}


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    position_before: Position
    position_after: Position
    was_check: bool = False

    @property
    def was_capture(self) -> bool:
        return self.move.is_capture

    @property
    def fen_after(self) -> str:
        return position_to_fen(self.position_after)


MoveCallback = Callable[[MoveRecord], None]
GameOverCallback = Callable[[GameStatus], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


class GameSession:
    """A human-vs-engine game driven by explicit method calls."""

    __slots__ = ("_position", "_history", "_settings", "_engine", "events")

    def __init__(
        self,
        settings: EngineSettings | None = None,
        fen: str | None = None,
        engine: IEngine | None = None,
    ) -> None:
        self._settings = settings if settings is not None else EngineSettings()
        self._engine: IEngine = (
            engine if engine is not None else NegamaxEngine(self._settings.make_rng())
        )
        self._position = position_from_fen(fen or STARTING_FEN)
        self._history: list[MoveRecord] = []
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.status().is_terminal

    # ── Setup / import / export ──────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        """Reset to the start position (or *fen*) and clear history."""
        self.load_fen(fen or STARTING_FEN)

    def load_fen(self, fen: str) -> None:
        """Replace the current game with *fen*.

        On :class:`~rookery.core.errors.MalformedImport` the session keeps
        its previous position and history.
        """
        try:
            position = position_from_fen(fen)
        except ValueError:
            _LOGGER.warning("Rejected FEN import: %r", fen)
            raise
        self._position = position
        self._history.clear()

    def fen(self) -> str:
        return position_to_fen(self._position)

    def set_depth(self, depth: int) -> None:
        """Move the difficulty slider; takes effect on the next engine move."""
        self._settings = EngineSettings(
            depth=depth,
            time_limit_ms=self._settings.time_limit_ms,
            seed=self._settings.seed,
            engine_color=self._settings.engine_color,
        )

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self) -> list[Move]:
        return MoveGenerator(self._position).generate_legal_moves()

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq* (empty if none or not its turn)."""
        return [m for m in self.legal_moves() if m.from_sq == sq]

    def status(self) -> GameStatus:
        return Rules.status(self._position)

    def in_check(self, color: Color | None = None) -> bool:
        if color is None:
            color = self._position.side_to_move
        return is_in_check(self._position, color)

    def status_text(self) -> str:
        """One-line status for display."""
        status = self.status()
        if status.kind == StatusKind.CHECKMATE:
            assert status.loser is not None
            return f"{_SIDE_NAMES[status.loser]} is checkmated"
        if status.kind == StatusKind.STALEMATE:
            return "Stalemate"
        text = f"{_SIDE_NAMES[self.side_to_move]} to move"
        if self.in_check():
            text += " - check!"
        return text

    # ── Moves ────────────────────────────────────────────────────────────

    def submit_move(self, move: Move) -> MoveRecord:
        """Apply *move* if it is legal here, else raise IllegalMoveRequested."""
        if self.is_game_over:
            raise IllegalMoveRequested(f"Game is over; cannot play {move}")
        for legal, child in MoveGenerator(self._position).legal_successors():
            if legal == move:
                return self._commit(move, child)
        _LOGGER.warning("Illegal move requested: %s in %s", move, self.fen())
        raise IllegalMoveRequested(f"Illegal move: {move}")

    def play(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> MoveRecord:
        """Play the legal move matching (from, to[, promotion])."""
        return self.submit_move(find_move(self._position, from_sq, to_sq, promotion))

    def play_uci(self, text: str) -> MoveRecord:
        return self.submit_move(parse_uci(self._position, text))

    def engine_to_move(self) -> bool:
        return (
            not self.is_game_over
            and self.side_to_move == self._settings.engine_color
        )

    def engine_move(self) -> MoveRecord | None:
        """Let the engine play if it owns the side to move."""
        if not self.engine_to_move():
            return None
        result = self._engine.search(self._position, self._settings.limits())
        if result.best_move is None:
            return None
        _LOGGER.debug(
            "engine plays %s (depth=%d score=%s nodes=%d)",
            result.best_move,
            result.depth,
            result.score,
            result.nodes,
        )
        return self.submit_move(result.best_move)

    def undo(self) -> Move | None:
        """Take back the last move. Returns it, or None if history is empty."""
        if not self._history:
            return None
        record = self._history.pop()
        self._position = record.position_before
        return record.move

    # ── Internal helpers ─────────────────────────────────────────────────

    def _commit(self, move: Move, child: Position) -> MoveRecord:
        record = MoveRecord(
            move=move,
            position_before=self._position,
            position_after=child,
            was_check=is_in_check(child, child.side_to_move),
        )
        self._position = child
        self._history.append(record)
        _LOGGER.debug("played %s -> %s", move, record.fen_after)

        for cb in self.events.on_move:
            cb(record)

        status = self.status()
        if status.is_terminal:
            _LOGGER.info("game over: %s", status)
            for cb in self.events.on_game_over:
                cb(status)
        return record
