"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import CastleSide, MoveKind, PieceType
from rookery.core.errors import InvariantViolation
from rookery.core.types import Square, is_valid_square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``kind`` is the closed set of special-move shapes. ``captured`` and
    ``promotion`` ride alongside it because a pawn can capture and promote
    in the same move.
    """

    from_sq: Square
    to_sq: Square
    kind: MoveKind = MoveKind.QUIET
    captured: bool = False
    promotion: PieceType | None = None

    def __post_init__(self) -> None:
        if not (is_valid_square(self.from_sq) and is_valid_square(self.to_sq)):
            raise InvariantViolation(
                f"Move squares out of range: {self.from_sq} -> {self.to_sq}"
            )
        if self.promotion is not None and self.promotion not in _PROMO_CHARS:
            raise InvariantViolation(f"Invalid promotion piece: {self.promotion!r}")

    # ── Derived flags ────────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return self.captured or self.kind == MoveKind.EN_PASSANT

    @property
    def is_en_passant(self) -> bool:
        return self.kind == MoveKind.EN_PASSANT

    @property
    def castle(self) -> CastleSide | None:
        if self.kind == MoveKind.CASTLE_KINGSIDE:
            return CastleSide.KINGSIDE
        if self.kind == MoveKind.CASTLE_QUEENSIDE:
            return CastleSide.QUEENSIDE
        return None

    @property
    def en_passant_set(self) -> Square | None:
        """Square skipped by a double push, recorded as the next ep target."""
        if self.kind != MoveKind.DOUBLE_PUSH:
            return None
        return (self.from_sq + self.to_sq) // 2

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)


def promotion_from_char(char: str) -> PieceType:
    """Map a UCI promotion suffix ('q', 'r', 'b', 'n') to a piece type."""
    for ptype, promo_char in _PROMO_CHARS.items():
        if promo_char == char.lower():
            return ptype
    raise ValueError(f"Invalid promotion character: {char!r}")
