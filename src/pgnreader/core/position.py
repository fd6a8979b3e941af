"""Position: board state with make/unmake and PGN move lookups.

Besides the make/unmake primitives used by the move generator, a
:class:`Position` answers the questions a PGN reader asks when it turns
abbreviated algebraic notation into a concrete move: "which pawn move lands
on *d5*, coming from the *e*-file?", "which knight can reach *f3*?".
Lookups that match nothing or more than one legal move raise
:class:`IllegalMoveError`.
"""

from __future__ import annotations

from dataclasses import dataclass

from pgnreader.core.enums import CastlingRights, Color, MoveFlag, PieceType
from pgnreader.core.move import NULL_MOVE, Move
from pgnreader.core.move_generator import MoveGenerator
from pgnreader.core.piece import Piece
from pgnreader.core.types import (
    FILE_CHARS,
    RANK_CHARS,
    Square,
    file_of,
    make_square,
    rank_of,
    square_name,
)


class IllegalMoveError(ValueError):
    """No legal move (or more than one) matches a lookup."""


@dataclass(slots=True)
class _Undo:
    move: Move
    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int
    captured: Piece | None


_START_RANK = "RNBQKBNR"

# Rook home and castled files per castling flag.
_CASTLING_ROOK_FILES: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}

# A move touching one of these squares loses the matching right.
_RIGHTS_BY_SQUARE: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(4, 0): CastlingRights.WHITE_BOTH,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
    make_square(4, 7): CastlingRights.BLACK_BOTH,
}


def _captured_square(move: Move) -> Square:
    if move.flag == MoveFlag.EN_PASSANT:
        return make_square(file_of(move.to_sq), rank_of(move.from_sq))
    return move.to_sq


def _start_board() -> list[Piece | None]:
    board: list[Piece | None] = [None] * 64
    for file, letter in enumerate(_START_RANK):
        board[make_square(file, 0)] = Piece.from_char(letter)
        board[make_square(file, 1)] = Piece.from_char("P")
        board[make_square(file, 6)] = Piece.from_char("p")
        board[make_square(file, 7)] = Piece.from_char(letter.lower())
    return board


class Position:
    """Board, side to move, castling rights, en passant square and clocks.

    Every :meth:`make_move` records what it changed, so the last move can
    be taken back with :meth:`unmake_move` or :meth:`undo_move`.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_history",
    )

    def __init__(
        self,
        board: list[Piece | None] | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board: list[Piece | None] = board if board is not None else _start_board()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._history: list[_Undo] = []

    # ── Make / unmake ────────────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply *move* and remember how to take it back."""
        board = self.board
        mover: Piece | None = None
        captured: Piece | None = None
        if not move.is_null:
            mover = board[move.from_sq]
            if mover is None:
                raise ValueError(f"No piece on {square_name(move.from_sq)}")
            captured = board[_captured_square(move)]

        self._history.append(
            _Undo(move, self.castling, self.en_passant, self.halfmove_clock, captured)
        )
        self.en_passant = None
        self.halfmove_clock += 1

        if mover is not None:
            board[_captured_square(move)] = None
            board[move.from_sq] = None
            if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
                board[move.to_sq] = Piece(mover.color, move.promotion)
            else:
                board[move.to_sq] = mover
            self._shift_castling_rook(move, undo=False)

            if move.flag == MoveFlag.DOUBLE_PAWN:
                self.en_passant = (move.from_sq + move.to_sq) // 2
            for sq in (move.from_sq, move.to_sq):
                self.castling &= ~_RIGHTS_BY_SQUARE.get(sq, CastlingRights.NONE)
            if mover.piece_type == PieceType.PAWN or captured is not None:
                self.halfmove_clock = 0

        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opposite

    def unmake_move(self, move: Move) -> None:
        """Take back *move*, which must be the last one made."""
        undo = self._history.pop()
        self.side_to_move = self.side_to_move.opposite
        if self.side_to_move == Color.BLACK:
            self.fullmove_number -= 1
        self.castling = undo.castling
        self.en_passant = undo.en_passant
        self.halfmove_clock = undo.halfmove_clock
        if move.is_null:
            return

        board = self.board
        mover = board[move.to_sq]
        assert mover is not None
        if move.flag == MoveFlag.PROMOTION:
            mover = Piece(mover.color, PieceType.PAWN)
        board[move.to_sq] = None
        board[move.from_sq] = mover
        board[_captured_square(move)] = undo.captured
        self._shift_castling_rook(move, undo=True)

    def undo_move(self) -> Move | None:
        """Take back the most recent move. Returns it, or ``None`` if none."""
        if not self._history:
            return None
        move = self._history[-1].move
        self.unmake_move(move)
        return move

    @property
    def last_move(self) -> Move | None:
        return self._history[-1].move if self._history else None

    @property
    def ply(self) -> int:
        """Number of moves applied since construction."""
        return len(self._history)

    def _shift_castling_rook(self, move: Move, undo: bool) -> None:
        files = _CASTLING_ROOK_FILES.get(move.flag)
        if files is None:
            return
        rank = rank_of(move.from_sq)
        home, castled = (make_square(f, rank) for f in files)
        src, dst = (castled, home) if undo else (home, castled)
        self.board[dst] = self.board[src]
        self.board[src] = None

    # ── PGN lookups ──────────────────────────────────────────────────────

    def legal_moves(self) -> list[Move]:
        return MoveGenerator(self).generate_legal_moves()

    def find_pawn_move(
        self,
        from_file: int | None,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> Move:
        """Legal pawn move to *to_sq*, optionally from *from_file*.

        A pawn reaching the last rank without a *promotion* piece is an
        error; so is a *promotion* on any other rank.
        """
        candidates = [
            m
            for m in self.legal_moves()
            if m.to_sq == to_sq
            and self._piece_type_at(m.from_sq) == PieceType.PAWN
            and (from_file is None or file_of(m.from_sq) == from_file)
            and m.promotion == promotion
        ]
        description = self._describe(PieceType.PAWN, from_file, None, to_sq)
        if promotion is not None:
            description += "=" + promotion.letter
        return self._single(candidates, description)

    def find_piece_move(
        self,
        piece_type: PieceType,
        from_file: int | None,
        from_rank: int | None,
        to_sq: Square,
    ) -> Move:
        """Legal move of a *piece_type* to *to_sq*, disambiguated by file/rank."""
        candidates = [
            m
            for m in self.legal_moves()
            if m.to_sq == to_sq
            and self._piece_type_at(m.from_sq) == piece_type
            and m.flag not in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)
            and (from_file is None or file_of(m.from_sq) == from_file)
            and (from_rank is None or rank_of(m.from_sq) == from_rank)
            and m.promotion is None
        ]
        description = self._describe(piece_type, from_file, from_rank, to_sq)
        return self._single(candidates, description)

    def castle_move(self, long: bool) -> Move:
        """Castling move for the side to move (``long`` for queenside)."""
        flag = MoveFlag.CASTLE_QUEENSIDE if long else MoveFlag.CASTLE_KINGSIDE
        candidates = [m for m in self.legal_moves() if m.flag == flag]
        return self._single(candidates, "O-O-O" if long else "O-O")

    def null_move(self) -> Move:
        """The null move; always available."""
        return NULL_MOVE

    def _piece_type_at(self, sq: Square) -> PieceType | None:
        piece = self.board[sq]
        return piece.piece_type if piece is not None else None

    def _single(self, candidates: list[Move], description: str) -> Move:
        if len(candidates) == 1:
            return candidates[0]
        side = str(self.side_to_move)
        if not candidates:
            raise IllegalMoveError(f"Illegal move: {description} ({side} to play)")
        moves = ", ".join(str(m) for m in candidates)
        raise IllegalMoveError(f"Ambiguous move: {description} -> {moves}")

    @staticmethod
    def _describe(
        piece_type: PieceType,
        from_file: int | None,
        from_rank: int | None,
        to_sq: Square,
    ) -> str:
        text = "" if piece_type == PieceType.PAWN else piece_type.letter
        if from_file is not None:
            text += FILE_CHARS[from_file]
        if from_rank is not None:
            text += RANK_CHARS[from_rank]
        return text + square_name(to_sq)

    # ── Utilities ────────────────────────────────────────────────────────

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` when it has none."""
        return next(
            (
                sq
                for sq, piece in enumerate(self.board)
                if piece is not None
                and piece.color == color
                and piece.piece_type == PieceType.KING
            ),
            None,
        )

    def is_in_check(self) -> bool:
        return MoveGenerator(self).is_in_check(self.side_to_move)

    def copy(self) -> Position:
        """Copy without history."""
        return Position(
            list(self.board),
            self.side_to_move,
            self.castling,
            self.en_passant,
            self.halfmove_clock,
            self.fullmove_number,
        )

    def __repr__(self) -> str:
        squares = [str(piece) if piece else "." for piece in self.board]
        rows = [" ".join(squares[rank * 8 : rank * 8 + 8]) for rank in range(8)]
        return "\n".join(reversed(rows))
