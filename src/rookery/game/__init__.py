"""Game management layer: a session against the engine.

Quick start::

    from rookery.game import GameSession
    from rookery.config import EngineSettings

    session = GameSession(EngineSettings(depth=2))
    session.play_uci("e2e4")
    session.engine_move()
    print(session.status_text())
"""

from rookery.game.session import GameEvents, GameSession, MoveRecord

__all__ = [
    "GameEvents",
    "GameSession",
    "MoveRecord",
]
