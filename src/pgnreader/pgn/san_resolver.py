"""Turn a movetext identifier into a concrete move.

Besides SAN proper (``e4``, ``exd5``, ``Nbd7``, ``e8=Q``, ``O-O``) the
resolver accepts what PGN producers emit in practice: long algebraic pawn
moves (``e2e4``, ``e2-e4``, ``e5xd4``), castling with zeros, null moves
(``--``, ``Z0``) and a few one-letter annotation tokens.
"""

from __future__ import annotations

from collections.abc import Callable

from pgnreader.core.enums import PieceType
from pgnreader.core.move import Move
from pgnreader.core.types import (
    FILE_CHARS,
    RANK_CHARS,
    Square,
    file_from_char,
    parse_square,
    rank_from_char,
)
from pgnreader.game import nag
from pgnreader.game.tree import Game

# Single-letter tokens that annotate instead of moving; None = ignored.
_ANNOTATION_TOKENS: dict[str, int | None] = {
    "N": nag.NOVELTY,
    "D": nag.DIAGRAM,
    "~": None,
    "=": None,
}


class SanError(ValueError):
    """A move token whose shape cannot be interpreted."""


class SanResolver:
    """Resolves move tokens against the position of a :class:`Game`.

    Args:
        warn: Receives non-fatal remarks (castling written with zeros,
            unexpected disambiguation characters).
    """

    def __init__(self, warn: Callable[[str], None]) -> None:
        self._warn = warn

    def resolve(self, san: str, game: Game) -> Move | None:
        """Move for *san* in the current position of *game*.

        Returns ``None`` for annotation-like tokens that are not moves; the
        novelty (``N``) and diagram (``D``) tokens add their NAG to the
        current node of *game*.

        Raises:
            SanError: the token has no recognizable move shape.
            IllegalMoveError: the position has no (or no unique) such move.
        """
        text = san[:-1] if san.endswith(("+", "#")) else san
        position = game.position

        if text.startswith(("O-", "0-")):
            return self._resolve_castle(text, game)
        if san in ("--", "Z0"):
            return position.null_move()
        if san in _ANNOTATION_TOKENS:
            code = _ANNOTATION_TOKENS[san]
            if code is not None:
                game.add_nag(code)
            return None
        if len(san) >= 2 and san[0] in "+-=":
            return None

        if text and text[0] in FILE_CHARS:
            return self._resolve_pawn_move(text, san, game)
        return self._resolve_piece_move(text, san, game)

    def _resolve_castle(self, text: str, game: Game) -> Move:
        letter = text[0]
        if text.startswith(f"{letter}-{letter}-{letter}"):
            long = True
        elif text.startswith(f"{letter}-{letter}"):
            long = False
        else:
            raise SanError("Illegal castle move")
        if letter == "0":
            self._warn("Castles with zeros")
        return game.position.castle_move(long=long)

    def _resolve_pawn_move(self, text: str, san: str, game: Game) -> Move:
        last = len(text) - 1
        if last < 1:
            raise SanError("Illegal pawn move")

        from_file: int | None = None
        start = 0
        if last >= 3 and text[1] in RANK_CHARS and text[2] in FILE_CHARS:
            # long algebraic: b2b4, e5d6
            start = 2
            if text[0] != text[2]:
                from_file = file_from_char(text[0])
        elif last >= 4 and text[2] in "-x" and text[3] in FILE_CHARS:
            # long algebraic with separator: b2-b4, e5xd4
            start = 3
            if text[0] != text[3]:
                from_file = file_from_char(text[0])
        elif text[1] == "x":
            start = 2
            from_file = file_from_char(text[0])

        if start + 1 > last:
            raise SanError("Illegal pawn move, no destination square")
        to_sq = self._square(text[start : start + 2], san)

        promotion: PieceType | None = None
        rest = text[start + 2 :]
        if rest.startswith("=") and len(rest) > 1:
            promotion = PieceType.from_letter(rest[1].upper())
        elif rest:
            promotion = PieceType.from_letter(rest[0].upper())

        return game.position.find_pawn_move(from_file, to_sq, promotion)

    def _resolve_piece_move(self, text: str, san: str, game: Game) -> Move:
        last = len(text) - 1
        if last < 2:
            raise SanError("Wrong move, no destination square")
        piece_type = PieceType.from_letter(text[0])
        if piece_type is None:
            raise SanError(f"Illegal move: {san}")

        to_sq = self._square(text[last - 1 : last + 1], san)
        last -= 2
        if text[last] == "x":
            last -= 1

        from_file: int | None = None
        from_rank: int | None = None
        while last >= 1:
            ch = text[last]
            rank = rank_from_char(ch)
            file = file_from_char(ch)
            if rank is not None:
                from_rank = rank
            elif file is not None:
                from_file = file
            else:
                self._warn(f"Unknown char '{ch}', row / column expected")
            last -= 1

        return game.position.find_piece_move(piece_type, from_file, from_rank, to_sq)

    @staticmethod
    def _square(name: str, san: str) -> Square:
        try:
            return parse_square(name)
        except ValueError:
            raise SanError(f"Illegal move: {san}") from None
