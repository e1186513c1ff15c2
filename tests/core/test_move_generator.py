"""Move generation tests: perft counts plus targeted rule cases.

Perft reference values: https://www.chessprogramming.org/Perft_Results
"""

import pytest

from rookery.core.attacks import is_in_check
from rookery.core.enums import CastlingRights, MoveKind, PieceType
from rookery.core.move_generator import MoveGenerator
from rookery.core.notation import STARTING_FEN, parse_uci, position_from_fen
from rookery.core.perft import perft
from rookery.core.position import Position
from rookery.core.types import parse_square

ALL_PROMOTIONS = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


def legal_uci(pos: Position) -> set[str]:
    return {m.uci for m in MoveGenerator(pos).generate_legal_moves()}


def play(pos: Position, *ucis: str) -> Position:
    for text in ucis:
        pos = pos.apply(parse_uci(pos, text))
    return pos


# ── Perft ────────────────────────────────────────────────────────────────────


class TestPerftStarting:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 1) == 20

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 2) == 400

    def test_depth_3(self) -> None:
        assert perft(position_from_fen(STARTING_FEN), 3) == 8_902


KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


class TestPerftKiwipete:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 1) == 48

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 2) == 2_039

    @pytest.mark.slow
    def test_depth_3(self) -> None:
        assert perft(position_from_fen(KIWIPETE), 3) == 97_862


POS3 = "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1"


class TestPerftPos3:
    def test_depth_1(self) -> None:
        assert perft(position_from_fen(POS3), 1) == 14

    def test_depth_2(self) -> None:
        assert perft(position_from_fen(POS3), 2) == 191

    def test_depth_3(self) -> None:
        assert perft(position_from_fen(POS3), 3) == 2_812


POS4 = "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1"
POS5 = "rnbq1k1r/pp1Pbppp/2p5/8/2B5/8/PPP1NnPP/RNBQK2R w KQ - 1 8"


class TestPerftWithUnderpromotion:
    """Reference tables count all four promotion kinds."""

    def test_pos4_depth_2(self) -> None:
        assert perft(position_from_fen(POS4), 2, ALL_PROMOTIONS) == 264

    def test_pos5_depth_1(self) -> None:
        assert perft(position_from_fen(POS5), 1, ALL_PROMOTIONS) == 44

    def test_pos5_depth_2(self) -> None:
        assert perft(position_from_fen(POS5), 2, ALL_PROMOTIONS) == 1_486

    def test_pos5_queen_only_drops_underpromotions(self) -> None:
        # d7xc8 offers four kinds with the full policy, one by default.
        assert perft(position_from_fen(POS5), 1) == 41


# ── Targeted rules ───────────────────────────────────────────────────────────


class TestBasics:
    def test_twenty_moves_from_start(self) -> None:
        moves = MoveGenerator(position_from_fen(STARTING_FEN)).generate_legal_moves()
        assert len(moves) == 20
        assert len(set(moves)) == 20

    def test_generation_order_is_stable(self) -> None:
        pos = position_from_fen(KIWIPETE)
        first = MoveGenerator(pos).generate_legal_moves()
        second = MoveGenerator(pos).generate_legal_moves()
        assert first == second

    def test_double_push_records_skipped_square(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        move = parse_uci(pos, "e2e4")
        assert move.kind == MoveKind.DOUBLE_PUSH
        assert move.en_passant_set == parse_square("e3")

    def test_no_legal_move_leaves_mover_in_check(self) -> None:
        for fen in (STARTING_FEN, KIWIPETE, POS3, POS4, POS5):
            pos = position_from_fen(fen)
            mover = pos.side_to_move
            for move, child in MoveGenerator(pos).legal_successors():
                assert not is_in_check(child, mover), move

    def test_pinned_piece_cannot_move(self) -> None:
        pos = position_from_fen("4k3/4r3/8/8/8/8/4B3/4K3 w - - 0 1")
        assert not any(m.startswith("e2") for m in legal_uci(pos))

    def test_captures_are_flagged(self) -> None:
        pos = position_from_fen("4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1")
        capture = parse_uci(pos, "d2d5")
        quiet = parse_uci(pos, "d2d4")
        assert capture.captured and capture.is_capture
        assert not quiet.is_capture


class TestEnPassant:
    def test_available_after_double_push(self) -> None:
        pos = play(position_from_fen(STARTING_FEN), "e2e4", "a7a6", "e4e5", "d7d5")
        assert pos.en_passant == parse_square("d6")
        move = parse_uci(pos, "e5d6")
        assert move.kind == MoveKind.EN_PASSANT
        after = pos.apply(move)
        assert after.board[parse_square("d5")] is None
        assert after.board[parse_square("d6")] is not None

    def test_expires_after_one_ply(self) -> None:
        pos = play(
            position_from_fen(STARTING_FEN),
            "e2e4", "a7a6", "e4e5", "d7d5", "h2h3", "h7h6",
        )
        assert pos.en_passant is None
        assert "e5d6" not in legal_uci(pos)

    def test_not_offered_to_non_adjacent_pawn(self) -> None:
        pos = play(position_from_fen(STARTING_FEN), "e2e4", "a7a6", "e4e5", "b7b5")
        assert all(not m.startswith("e5") or m == "e5e6" for m in legal_uci(pos))

    def test_illegal_when_it_exposes_king_on_rank(self) -> None:
        pos = position_from_fen("8/8/8/K2pP2r/8/8/8/7k w - d6 0 1")
        assert "e5d6" not in legal_uci(pos)

    def test_target_without_pushed_pawn_is_ignored(self) -> None:
        board = position_from_fen("4k3/8/8/3NP3/8/8/8/4K3 w - - 0 1").board
        pos = Position(
            board=board,
            castling=CastlingRights.NONE,
            en_passant=parse_square("d6"),
        )
        assert not any(
            m.kind == MoveKind.EN_PASSANT
            for m in MoveGenerator(pos).generate_pseudo_legal_moves()
        )

    def test_black_captures_en_passant(self) -> None:
        pos = position_from_fen("4k3/8/8/8/3p4/8/4P3/4K3 w - - 0 1")
        pos = play(pos, "e2e4")
        assert pos.en_passant == parse_square("e3")
        after = play(pos, "d4e3")
        assert after.board[parse_square("e4")] is None


class TestCastling:
    def test_kingside_offered_when_clear_and_safe(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K2R w K - 0 1")
        move = parse_uci(pos, "e1g1")
        assert move.kind == MoveKind.CASTLE_KINGSIDE

    @pytest.mark.parametrize(
        "fen",
        [
            "k3r3/8/8/8/8/8/8/4K2R w K - 0 1",  # e1 attacked (in check)
            "k4r2/8/8/8/8/8/8/4K2R w K - 0 1",  # f1 attacked (crossing)
            "k5r1/8/8/8/8/8/8/4K2R w K - 0 1",  # g1 attacked (landing)
        ],
    )
    def test_kingside_absent_when_path_attacked(self, fen: str) -> None:
        assert "e1g1" not in legal_uci(position_from_fen(fen))

    def test_blocked_by_piece(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K1NR w K - 0 1")
        assert "e1g1" not in legal_uci(pos)

    def test_requires_right(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K2R w - - 0 1")
        assert "e1g1" not in legal_uci(pos)

    def test_queenside_allows_attacked_b_file_square(self) -> None:
        pos = position_from_fen("1r2k3/8/8/8/8/8/8/R3K3 w Q - 0 1")
        assert parse_uci(pos, "e1c1").kind == MoveKind.CASTLE_QUEENSIDE

    def test_queenside_needs_b_file_empty(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/RN2K3 w Q - 0 1")
        assert "e1c1" not in legal_uci(pos)

    def test_black_both_sides(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/4K3 b kq - 0 1")
        moves = legal_uci(pos)
        assert {"e8g8", "e8c8"} <= moves


class TestPromotion:
    def test_queen_only_by_default(self) -> None:
        pos = position_from_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        promos = [
            m for m in MoveGenerator(pos).generate_legal_moves() if m.from_sq == 48
        ]
        assert len(promos) == 1
        assert promos[0].promotion == PieceType.QUEEN

    def test_policy_can_offer_underpromotion(self) -> None:
        pos = position_from_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        gen = MoveGenerator(pos, promotion_types=ALL_PROMOTIONS)
        promos = {m.promotion for m in gen.generate_legal_moves() if m.from_sq == 48}
        assert promos == set(ALL_PROMOTIONS)

    def test_capture_promotion(self) -> None:
        pos = position_from_fen("1n6/P7/8/8/8/8/8/k6K w - - 0 1")
        move = parse_uci(pos, "a7b8")
        assert move.captured
        assert move.promotion == PieceType.QUEEN
