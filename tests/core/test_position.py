"""Tests for Position.apply and the value semantics of positions."""

import dataclasses

import pytest

from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.errors import InvariantViolation
from rookery.core.move import Move
from rookery.core.notation import (
    STARTING_FEN,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from rookery.core.piece import Piece
from rookery.core.position import Position
from rookery.core.types import E4, E5, parse_square


def play(pos: Position, *ucis: str) -> Position:
    for text in ucis:
        pos = pos.apply(parse_uci(pos, text))
    return pos


class TestApply:
    def test_parent_is_untouched(self, start_position: Position) -> None:
        before = position_to_fen(start_position)
        play(start_position, "e2e4")
        assert position_to_fen(start_position) == before

    def test_siblings_do_not_share_boards(self, start_position: Position) -> None:
        a = play(start_position, "e2e4")
        b = play(start_position, "d2d4")
        assert a.board[E4] is not None
        assert b.board[E4] is None

    def test_double_push_metadata(self, start_position: Position) -> None:
        pos = play(start_position, "e2e4")
        assert pos.side_to_move == Color.BLACK
        assert pos.en_passant == parse_square("e3")
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1
        assert (
            position_to_fen(pos)
            == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        )

    def test_fullmove_increments_after_black(self, start_position: Position) -> None:
        pos = play(start_position, "e2e4", "e7e5")
        assert pos.fullmove_number == 2
        assert pos.side_to_move == Color.WHITE
        assert pos.en_passant == parse_square("e6")

    def test_quiet_piece_move_advances_halfmove_clock(
        self, start_position: Position
    ) -> None:
        pos = play(start_position, "g1f3", "g8f6")
        assert pos.halfmove_clock == 2
        assert pos.en_passant is None

    def test_capture_resets_halfmove_clock(self) -> None:
        pos = position_from_fen("4k3/8/8/3q4/8/8/3R4/4K3 w - - 7 30")
        after = play(pos, "d2d5")
        assert after.halfmove_clock == 0
        assert after.board[parse_square("d5")] == Piece(Color.WHITE, PieceType.ROOK)

    def test_promotion_places_chosen_piece(self) -> None:
        pos = position_from_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        after = pos.apply(Move(48, 56, promotion=PieceType.KNIGHT))
        assert after.board[56] == Piece(Color.WHITE, PieceType.KNIGHT)
        assert after.board[48] is None

    def test_promotion_defaults_to_queen(self) -> None:
        pos = position_from_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        after = pos.apply(Move(48, 56))
        assert after.board[56] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_empty_origin_is_a_contract_violation(
        self, start_position: Position
    ) -> None:
        with pytest.raises(InvariantViolation):
            start_position.apply(Move(E4, E5))


class TestCastlingRights:
    FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_castling_relocates_rook(self) -> None:
        pos = play(position_from_fen(self.FEN), "e1g1")
        assert pos.board[parse_square("g1")] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[parse_square("f1")] == Piece(Color.WHITE, PieceType.ROOK)
        assert pos.board[parse_square("h1")] is None
        assert pos.castling == CastlingRights.BLACK_BOTH

    def test_queenside_castling_relocates_rook(self) -> None:
        pos = play(position_from_fen(self.FEN), "e1g1", "e8c8")
        assert pos.board[parse_square("c8")] == Piece(Color.BLACK, PieceType.KING)
        assert pos.board[parse_square("d8")] == Piece(Color.BLACK, PieceType.ROOK)
        assert pos.board[parse_square("a8")] is None
        assert pos.castling == CastlingRights.NONE

    def test_king_move_clears_both_rights(self) -> None:
        pos = play(position_from_fen(self.FEN), "e1e2")
        assert pos.castling == CastlingRights.BLACK_BOTH

    def test_rook_move_clears_its_right(self) -> None:
        pos = play(position_from_fen(self.FEN), "h1h2")
        assert pos.castling == (
            CastlingRights.WHITE_QUEENSIDE | CastlingRights.BLACK_BOTH
        )

    def test_capturing_rook_on_home_square_clears_opponent_right(self) -> None:
        pos = play(position_from_fen(self.FEN), "a1a8")
        assert pos.castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_KINGSIDE
        )

    def test_rights_never_come_back(self) -> None:
        pos = play(position_from_fen(self.FEN), "h1h2", "a8a7", "h2h1", "a7a8")
        assert pos.castling == (
            CastlingRights.WHITE_QUEENSIDE | CastlingRights.BLACK_KINGSIDE
        )


class TestValueSemantics:
    def test_frozen(self, start_position: Position) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            start_position.side_to_move = Color.BLACK  # type: ignore[misc]

    def test_equal_positions_compare_equal(self) -> None:
        assert position_from_fen(STARTING_FEN) == Position.initial()

    def test_positions_are_hashable(self, start_position: Position) -> None:
        same = position_from_fen(STARTING_FEN)
        moved = play(start_position, "e2e4")
        assert hash(start_position) == hash(same)
        assert len({start_position, same, moved}) == 2

    def test_with_side_to_move_clears_en_passant(
        self, start_position: Position
    ) -> None:
        pos = play(start_position, "e2e4")
        flipped = pos.with_side_to_move(Color.WHITE)
        assert flipped.side_to_move == Color.WHITE
        assert flipped.en_passant is None
        assert flipped.board == pos.board
        assert pos.with_side_to_move(Color.BLACK) is pos

    def test_fen_round_trip_after_moves(self, start_position: Position) -> None:
        pos = play(start_position, "e2e4", "c7c5", "g1f3", "d7d6", "f1b5")
        assert position_from_fen(position_to_fen(pos)) == pos
