"""Chess engine package: evaluation and negamax search.

The Qt worker bridge lives in :mod:`rookery.engine.qt_bridge` and is not
imported here, so headless callers never load Qt.
"""

from rookery.engine.evaluation import PIECE_VALUES, evaluate, perspective_score
from rookery.engine.negamax import INF_SCORE, NegamaxEngine, select_move
from rookery.engine.search import (
    MAX_DEPTH,
    CancelCheck,
    IEngine,
    SearchLimits,
    SearchResult,
)

__all__ = [
    "CancelCheck",
    "IEngine",
    "INF_SCORE",
    "MAX_DEPTH",
    "NegamaxEngine",
    "PIECE_VALUES",
    "SearchLimits",
    "SearchResult",
    "evaluate",
    "perspective_score",
    "select_move",
]
