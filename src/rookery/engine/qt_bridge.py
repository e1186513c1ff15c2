"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from rookery.core.position import Position
from rookery.engine.negamax import NegamaxEngine
from rookery.engine.search import IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move it to a ``QThread`` and invoke :meth:`request_move` through a
    queued connection; the UI gets control back between the request and
    the ``best_move_ready`` signal.
    """

    best_move_ready = pyqtSignal(int, object, object, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, object, int, int)
    search_error = pyqtSignal(int, str)

    def __init__(
        self,
        *,
        depth: int = 2,
        time_limit_ms: int | None = None,
        engine: IEngine | None = None,
    ) -> None:
        super().__init__()
        self._engine: IEngine = engine if engine is not None else NegamaxEngine()
        self._limits = SearchLimits(depth=depth, time_limit_ms=time_limit_ms)
        self._cancel_event = threading.Event()

    @property
    def limits(self) -> SearchLimits:
        return self._limits

    @pyqtSlot(object, int)
    def request_move(self, position_obj: object, request_id: int) -> None:
        """Search for the best move in *position_obj* and emit result."""
        if not isinstance(position_obj, Position):
            self.search_error.emit(request_id, "Engine received invalid position")
            return

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                position_obj,
                self._limits,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.exception("Engine search failed (request %d)", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(
                request_id,
                result.score,
                result.depth,
                result.nodes,
            )
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_depth(self, depth: int) -> None:
        """Change the difficulty tier for subsequent searches."""
        self._limits = SearchLimits(
            depth=depth, time_limit_ms=self._limits.time_limit_ms
        )
