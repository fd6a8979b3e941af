"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from pgnreader.core.enums import MoveFlag, PieceType
from pgnreader.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    A null move (``--`` in PGN) keeps both squares at 0 and carries
    :attr:`MoveFlag.NULL`.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    @property
    def is_null(self) -> bool:
        return self.flag == MoveFlag.NULL

    def __str__(self) -> str:
        if self.is_null:
            return "0000"
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += self.promotion.letter.lower()
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)


NULL_MOVE = Move(0, 0, MoveFlag.NULL)
