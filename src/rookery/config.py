"""User-configurable engine settings."""

from __future__ import annotations

import random
from dataclasses import dataclass

from rookery.core.enums import Color
from rookery.engine.search import MAX_DEPTH, SearchLimits


@dataclass
class EngineSettings:
    """Difficulty and side assignment for the automated opponent.

    ``depth`` is the difficulty slider: 0 plays random legal moves, 1–4
    search that many plies. Out-of-range values are clamped.
    """

    depth: int = 2
    time_limit_ms: int | None = None
    seed: int | None = None
    engine_color: Color = Color.BLACK

    def __post_init__(self) -> None:
        self.depth = max(0, min(MAX_DEPTH, int(self.depth)))

    def limits(self) -> SearchLimits:
        return SearchLimits(depth=self.depth, time_limit_ms=self.time_limit_ms)

    def make_rng(self) -> random.Random:
        return random.Random(self.seed)
