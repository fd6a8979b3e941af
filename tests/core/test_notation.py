"""Tests for FEN and SAN notation."""

import pytest

from pgnreader.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from pgnreader.core.move import NULL_MOVE, Move
from pgnreader.core.notation import (
    STARTING_FEN,
    move_to_san,
    position_from_fen,
    position_to_fen,
)
from pgnreader.core.piece import Piece
from pgnreader.core.types import E1, E2, E3, E4, E8, parse_square


class TestFenParsing:
    def test_starting_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.side_to_move == Color.WHITE
        assert pos.castling == CastlingRights.ALL
        assert pos.en_passant is None
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1

    def test_starting_kings(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.board[E1] == Piece(Color.WHITE, PieceType.KING)
        assert pos.board[E8] == Piece(Color.BLACK, PieceType.KING)

    def test_en_passant_square(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        assert position_from_fen(fen).en_passant == E3

    def test_partial_castling(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w Kq - 0 1"
        assert position_from_fen(fen).castling == (
            CastlingRights.WHITE_KINGSIDE | CastlingRights.BLACK_QUEENSIDE
        )

    def test_clocks_are_optional(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/8/8 w - -")
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1

    @pytest.mark.parametrize(
        ("fen", "message"),
        [
            ("invalid", "4 to 6 fields"),
            ("8/8/8/8/8/8/8/8 x - - 0 1", "side to move"),
            ("8/8/8/8/8/8/8 w - - 0 1", "8 ranks"),
            ("9/8/8/8/8/8/8/8 w - - 0 1", "Invalid piece character"),
            ("ppppppppp/8/8/8/8/8/8/8 w - - 0 1", "more than 8 squares"),
            ("8/8/8/8/8/8/8/8 w Kx - 0 1", "castling"),
            ("8/8/8/8/8/8/8/8 w - e3 0 1", "en passant"),
            ("8/8/8/8/8/8/8/8 w - - x 1", "counter"),
            ("8/8/8/8/8/8/8/8 w - - 0 0", "below 1"),
        ],
    )
    def test_invalid_fen_raises(self, fen: str, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            position_from_fen(fen)


class TestFenSerialisation:
    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1",
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "8/8/4k3/8/8/4K3/8/8 w - - 0 1",
        ],
    )
    def test_roundtrip(self, fen: str) -> None:
        assert position_to_fen(position_from_fen(fen)) == fen


class TestSAN:
    def test_pawn_push(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert move_to_san(pos, Move(E2, E4, MoveFlag.DOUBLE_PAWN)) == "e4"

    def test_knight_move(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert move_to_san(pos, Move(parse_square("g1"), parse_square("f3"))) == "Nf3"

    def test_rendering_leaves_position_untouched(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        move_to_san(pos, Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert position_to_fen(pos) == STARTING_FEN

    def test_knight_disambiguation_file(self) -> None:
        pos = position_from_fen("7k/8/8/8/8/8/8/K1N3N1 w - - 0 1")
        assert move_to_san(pos, Move(parse_square("c1"), E2)) == "Nce2"

    def test_rook_disambiguation_rank(self) -> None:
        pos = position_from_fen("7k/8/8/R7/8/8/8/R6K w - - 0 1")
        move = Move(parse_square("a1"), parse_square("a3"))
        assert move_to_san(pos, move) == "R1a3"

    def test_castling_both_sides(self) -> None:
        pos = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        king_side = Move(E1, parse_square("g1"), MoveFlag.CASTLE_KINGSIDE)
        queen_side = Move(E1, parse_square("c1"), MoveFlag.CASTLE_QUEENSIDE)
        assert move_to_san(pos, king_side) == "O-O"
        assert move_to_san(pos, queen_side) == "O-O-O"

    def test_pawn_capture_and_promotion(self) -> None:
        pos_capture = position_from_fen("7k/8/8/4p3/3P4/8/8/4K3 w - - 0 1")
        capture = Move(parse_square("d4"), parse_square("e5"))
        assert move_to_san(pos_capture, capture) == "dxe5"

        pos_promo = position_from_fen("7k/6P1/8/8/8/8/8/4K3 w - - 0 1")
        promo = Move(parse_square("g7"), parse_square("g8"), MoveFlag.PROMOTION, PieceType.QUEEN)
        assert move_to_san(pos_promo, promo) == "g8=Q+"

    def test_mate_suffix(self) -> None:
        pos = position_from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        move = Move(parse_square("a1"), parse_square("a8"))
        assert move_to_san(pos, move) == "Ra8#"

    def test_null_move(self) -> None:
        assert move_to_san(position_from_fen(STARTING_FEN), NULL_MOVE) == "--"


class TestResultTokens:
    @pytest.mark.parametrize(
        ("token", "result"),
        [
            ("1-0", GameResult.WHITE_WINS),
            ("0-1", GameResult.BLACK_WINS),
            ("1/2-1/2", GameResult.DRAW),
            ("1/2", GameResult.DRAW),
            ("*", GameResult.IN_PROGRESS),
        ],
    )
    def test_from_token(self, token: str, result: GameResult) -> None:
        assert GameResult.from_token(token) == result

    def test_unknown_token(self) -> None:
        assert GameResult.from_token("2-0") is None

    def test_token_roundtrip(self) -> None:
        for result in GameResult:
            assert GameResult.from_token(result.token) == result
