"""Pure-Python chess engine search (negamax + alpha-beta)."""

from __future__ import annotations

import logging
import math
import random
from time import perf_counter

from rookery.core.attacks import is_in_check
from rookery.core.enums import PieceType
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator
from rookery.core.position import Position
from rookery.engine.evaluation import PIECE_VALUES, perspective_score
from rookery.engine.search import CancelCheck, IEngine, SearchLimits, SearchResult

_LOGGER = logging.getLogger(__name__)

INF_SCORE = math.inf
# Quiet moves sort below every capture, including king-takes-queen.
_QUIET_ORDER_KEY = -1_000_000


def _never_cancelled() -> bool:
    return False


class NegamaxEngine(IEngine):
    """Fixed-depth negamax with alpha-beta pruning.

    Depth 0 is the "random play" tier: a uniformly random legal move, no
    search. Pass a seeded :class:`random.Random` for reproducible games.
    """

    __slots__ = ("_rng", "_nodes", "_deadline", "_cancel_check")

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._nodes = 0
        self._deadline: float | None = None
        self._cancel_check: CancelCheck = _never_cancelled

    def search(
        self,
        position: Position,
        limits: SearchLimits,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        self._nodes = 0
        self._cancel_check = is_cancelled or _never_cancelled
        self._deadline = None
        if limits.time_limit_ms is not None:
            ms = max(limits.time_limit_ms, 1)
            self._deadline = perf_counter() + (ms / 1000.0)

        successors = MoveGenerator(position).legal_successors()
        if not successors:
            score = -INF_SCORE if is_in_check(position, position.side_to_move) else 0
            return SearchResult(None, score, 0, self._nodes)

        if limits.depth == 0:
            move, _ = self._rng.choice(successors)
            return SearchResult(move, perspective_score(position), 0, 1)

        score, move = self._negamax(
            position,
            limits.depth,
            -INF_SCORE,
            INF_SCORE,
            successors=successors,
            root=True,
        )
        _LOGGER.debug(
            "search depth=%d best=%s score=%s nodes=%d",
            limits.depth,
            move,
            score,
            self._nodes,
        )
        return SearchResult(move, score, limits.depth, self._nodes)

    def _negamax(
        self,
        position: Position,
        depth: int,
        alpha: float,
        beta: float,
        successors: list[tuple[Move, Position]] | None = None,
        root: bool = False,
    ) -> tuple[float, Move | None]:
        self._nodes += 1

        # No terminal check at the horizon: a mated leaf is scored statically.
        if depth == 0:
            return perspective_score(position), None

        if successors is None:
            successors = MoveGenerator(position).legal_successors()
        if not successors:
            if is_in_check(position, position.side_to_move):
                return -INF_SCORE, None
            return 0, None

        best_score = -INF_SCORE
        best_move: Move | None = None

        for move, child in self._order_moves(position, successors):
            if root and best_move is not None and self._should_stop():
                _LOGGER.debug("search stopped early at root after %s", best_move)
                break

            child_score, _ = self._negamax(child, depth - 1, -beta, -alpha)
            score = -child_score

            if best_move is None or score > best_score:
                best_score = score
                best_move = move
            if score > alpha:
                alpha = score
            if alpha >= beta:
                break

        return best_score, best_move

    def _should_stop(self) -> bool:
        if self._cancel_check():
            return True
        return self._deadline is not None and perf_counter() >= self._deadline

    @staticmethod
    def _order_moves(
        position: Position,
        successors: list[tuple[Move, Position]],
    ) -> list[tuple[Move, Position]]:
        """Captures first by victim minus attacker value, then quiet moves.

        The sort is stable, so equal keys keep generation order.
        """
        board = position.board

        def key(item: tuple[Move, Position]) -> int:
            move = item[0]
            if not move.is_capture:
                return _QUIET_ORDER_KEY
            attacker = board[move.from_sq]
            victim = board[move.to_sq]
            victim_type = victim.piece_type if victim is not None else PieceType.PAWN
            assert attacker is not None
            return PIECE_VALUES[victim_type] - PIECE_VALUES[attacker.piece_type]

        return sorted(successors, key=key, reverse=True)

    @property
    def nodes(self) -> int:
        """Nodes visited by the last search."""
        return self._nodes


def select_move(
    position: Position,
    depth: int,
    rng: random.Random | None = None,
) -> Move | None:
    """Pick a move for the side to move; ``None`` only if there is none."""
    engine = NegamaxEngine(rng)
    return engine.search(position, SearchLimits(depth=depth)).best_move
