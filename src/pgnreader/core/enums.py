"""Core enumerations and flags for the position model."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """English SAN letter, e.g. ``N`` for a knight."""
        return _PIECE_LETTERS[self]

    @classmethod
    def from_letter(cls, char: str) -> PieceType | None:
        """Map an upper-case SAN letter to a piece type (``None`` if unknown)."""
        return _LETTER_PIECES.get(char)


_PIECE_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}
_LETTER_PIECES: dict[str, PieceType] = {v: k for k, v in _PIECE_LETTERS.items()}


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5
    NULL = 6


class CastlingRights(IntFlag):
    """Bitmask for castling availability."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH


class GameResult(IntEnum):
    """Outcome recorded by a PGN result token.

    ``IN_PROGRESS`` is the ``*`` token: the game is not finished.
    """

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @property
    def token(self) -> str:
        """PGN result token for this outcome."""
        return _RESULT_TOKENS[self]

    @classmethod
    def from_token(cls, token: str) -> GameResult | None:
        """Outcome for a PGN result token, or ``None`` if *token* is not one.

        Accepts the legacy ``1/2`` spelling of a draw.
        """
        if token == "1/2":
            return cls.DRAW
        return _TOKEN_RESULTS.get(token)


_RESULT_TOKENS: dict[GameResult, str] = {
    GameResult.IN_PROGRESS: "*",
    GameResult.WHITE_WINS: "1-0",
    GameResult.BLACK_WINS: "0-1",
    GameResult.DRAW: "1/2-1/2",
}
_TOKEN_RESULTS: dict[str, GameResult] = {v: k for k, v in _RESULT_TOKENS.items()}
