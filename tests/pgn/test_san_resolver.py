"""Tests for turning movetext identifiers into moves."""

import pytest

from pgnreader.core.enums import MoveFlag, PieceType
from pgnreader.core.move import NULL_MOVE, Move
from pgnreader.core.position import IllegalMoveError
from pgnreader.core.types import E2, E4, parse_square
from pgnreader.game import Game, nag
from pgnreader.pgn.san_resolver import SanError, SanResolver

CASTLING_FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"
TWO_KNIGHTS_FEN = "7k/8/8/8/8/8/8/K1N3N1 w - - 0 1"
PROMOTION_FEN = "7k/4P3/8/8/8/8/8/4K3 w - - 0 1"


@pytest.fixture
def warnings() -> list[str]:
    return []


@pytest.fixture
def resolver(warnings: list[str]) -> SanResolver:
    return SanResolver(warnings.append)


def game_from(fen: str | None = None) -> Game:
    game = Game()
    if fen is not None:
        game.set_tag("FEN", fen)
    return game


def play(resolver: SanResolver, game: Game, *sans: str) -> None:
    for san in sans:
        move = resolver.resolve(san, game)
        assert move is not None
        game.apply_move(move)


class TestPawnMoves:
    def test_push(self, resolver: SanResolver) -> None:
        move = resolver.resolve("e4", game_from())
        assert move == Move(E2, E4, MoveFlag.DOUBLE_PAWN)

    @pytest.mark.parametrize("san", ["e2e4", "e2-e4"])
    def test_long_algebraic_push(self, resolver: SanResolver, san: str) -> None:
        assert resolver.resolve(san, game_from()) == Move(E2, E4, MoveFlag.DOUBLE_PAWN)

    @pytest.mark.parametrize("san", ["exd5", "e4xd5", "e4d5"])
    def test_capture(self, resolver: SanResolver, san: str) -> None:
        game = game_from()
        play(resolver, game, "e4", "d5", "c4", "Nf6")
        game.goto_node(game.root.children[0].children[0])
        move = resolver.resolve(san, game)
        assert move is not None
        assert move.from_sq == E4
        assert move.to_sq == parse_square("d5")

    @pytest.mark.parametrize(
        ("san", "piece"),
        [("e8=Q", PieceType.QUEEN), ("e8Q", PieceType.QUEEN), ("e8=N", PieceType.KNIGHT), ("e8r", PieceType.ROOK)],
    )
    def test_promotion(self, resolver: SanResolver, san: str, piece: PieceType) -> None:
        move = resolver.resolve(san, game_from(PROMOTION_FEN))
        assert move is not None
        assert move.flag == MoveFlag.PROMOTION
        assert move.promotion == piece

    def test_promotion_with_check_suffix(self, resolver: SanResolver) -> None:
        move = resolver.resolve("g8=Q+", game_from("7k/6P1/8/8/8/8/8/4K3 w - - 0 1"))
        assert move is not None
        assert move.to_sq == parse_square("g8")
        assert move.promotion == PieceType.QUEEN

    def test_missing_promotion_is_illegal(self, resolver: SanResolver) -> None:
        with pytest.raises(IllegalMoveError):
            resolver.resolve("e8", game_from(PROMOTION_FEN))

    @pytest.mark.parametrize(
        ("san", "message"),
        [
            ("e", "Illegal pawn move"),
            ("exd", "no destination square"),
            ("e9", "Illegal move: e9"),
        ],
    )
    def test_malformed(self, resolver: SanResolver, san: str, message: str) -> None:
        with pytest.raises(SanError, match=message):
            resolver.resolve(san, game_from())


class TestPieceMoves:
    def test_knight(self, resolver: SanResolver) -> None:
        move = resolver.resolve("Nf3", game_from())
        assert move == Move(parse_square("g1"), parse_square("f3"))

    def test_check_suffix_and_capture_mark_are_ignored(self, resolver: SanResolver) -> None:
        move = resolver.resolve("Ncxe2+", game_from(TWO_KNIGHTS_FEN))
        assert move is not None
        assert move.from_sq == parse_square("c1")

    def test_ambiguous(self, resolver: SanResolver) -> None:
        with pytest.raises(IllegalMoveError, match="Ambiguous"):
            resolver.resolve("Ne2", game_from(TWO_KNIGHTS_FEN))

    def test_square_disambiguation(self, resolver: SanResolver) -> None:
        move = resolver.resolve("Ng1e2", game_from(TWO_KNIGHTS_FEN))
        assert move is not None
        assert move.from_sq == parse_square("g1")

    def test_illegal(self, resolver: SanResolver) -> None:
        with pytest.raises(IllegalMoveError, match="Illegal move: Ke5"):
            resolver.resolve("Ke5", game_from())

    def test_unknown_disambiguation_char_warns(
        self, resolver: SanResolver, warnings: list[str]
    ) -> None:
        move = resolver.resolve("Nqf3", game_from())
        assert move is not None
        assert move.from_sq == parse_square("g1")
        assert warnings == ["Unknown char 'q', row / column expected"]

    @pytest.mark.parametrize(
        ("san", "error"),
        [("Xf3", "Illegal move: Xf3"), ("Nf", "Wrong move, no destination square")],
    )
    def test_malformed(self, resolver: SanResolver, san: str, error: str) -> None:
        with pytest.raises(SanError, match=error):
            resolver.resolve(san, game_from())


class TestCastling:
    @pytest.mark.parametrize(
        ("san", "flag"),
        [
            ("O-O", MoveFlag.CASTLE_KINGSIDE),
            ("O-O-O", MoveFlag.CASTLE_QUEENSIDE),
            ("O-O+", MoveFlag.CASTLE_KINGSIDE),
        ],
    )
    def test_letters(
        self, resolver: SanResolver, warnings: list[str], san: str, flag: MoveFlag
    ) -> None:
        move = resolver.resolve(san, game_from(CASTLING_FEN))
        assert move is not None
        assert move.flag == flag
        assert warnings == []

    @pytest.mark.parametrize(
        ("san", "flag"),
        [("0-0", MoveFlag.CASTLE_KINGSIDE), ("0-0-0", MoveFlag.CASTLE_QUEENSIDE)],
    )
    def test_zeros_warn_once(
        self, resolver: SanResolver, warnings: list[str], san: str, flag: MoveFlag
    ) -> None:
        move = resolver.resolve(san, game_from(CASTLING_FEN))
        assert move is not None
        assert move.flag == flag
        assert warnings == ["Castles with zeros"]

    def test_malformed(self, resolver: SanResolver) -> None:
        with pytest.raises(SanError, match="Illegal castle move"):
            resolver.resolve("O-X", game_from(CASTLING_FEN))

    def test_not_available(self, resolver: SanResolver) -> None:
        with pytest.raises(IllegalMoveError):
            resolver.resolve("O-O", game_from())


class TestSpecialTokens:
    @pytest.mark.parametrize("san", ["--", "Z0"])
    def test_null_move(self, resolver: SanResolver, san: str) -> None:
        assert resolver.resolve(san, game_from()) == NULL_MOVE

    @pytest.mark.parametrize(("san", "code"), [("N", nag.NOVELTY), ("D", nag.DIAGRAM)])
    def test_annotation_letters_add_nag(self, resolver: SanResolver, san: str, code: int) -> None:
        game = game_from()
        play(resolver, game, "e4")
        assert resolver.resolve(san, game) is None
        assert game.current_node.nags == [code]

    @pytest.mark.parametrize("san", ["~", "=", "+-", "-+", "=+", "+="])
    def test_evaluation_tokens_are_ignored(self, resolver: SanResolver, san: str) -> None:
        game = game_from()
        assert resolver.resolve(san, game) is None
        assert game.root.nags == []
