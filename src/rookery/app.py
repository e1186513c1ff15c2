"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from rookery.config import EngineSettings
from rookery.core.errors import MalformedImport
from rookery.core.notation import STARTING_FEN, position_from_fen
from rookery.core.perft import perft
from rookery.core.rules import Rules
from rookery.engine.negamax import NegamaxEngine

_LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rookery",
        description="Pick an engine move (or run perft) for a FEN position",
    )
    parser.add_argument(
        "--fen", type=str, default=STARTING_FEN, help="FEN string (default: startpos)"
    )
    parser.add_argument(
        "--depth", type=int, default=2, help="Search depth 0-4 (0 = random move)"
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for depth 0")
    parser.add_argument(
        "--perft", type=int, default=None, metavar="N", help="Run perft to depth N"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI; returns the process exit code."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        position = position_from_fen(args.fen)
    except MalformedImport as exc:
        _LOGGER.error("%s", exc)
        return 2

    if args.perft is not None:
        start = time.perf_counter()
        nodes = perft(position, args.perft)
        dt = time.perf_counter() - start
        print(f"nodes={nodes} depth={args.perft} time_ms={int(dt * 1000)}")
        return 0

    status = Rules.status(position)
    print(f"status: {status}")
    if status.is_terminal:
        return 0

    settings = EngineSettings(depth=args.depth, seed=args.seed)
    engine = NegamaxEngine(settings.make_rng())
    result = engine.search(position, settings.limits())
    print(f"bestmove {result.best_move} score={result.score} nodes={result.nodes}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
