"""FEN parsing and serialization (used by the ``FEN`` / ``SetUp`` tags)."""

from __future__ import annotations

from itertools import groupby

from pgnreader.core.enums import CastlingRights, Color
from pgnreader.core.piece import Piece
from pgnreader.core.position import Position
from pgnreader.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_SIDES = {"w": Color.WHITE, "b": Color.BLACK}

_RIGHTS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


# ── Parsing ──────────────────────────────────────────────────────────────


def _board(field: str) -> list[Piece | None]:
    rows = field.split("/")
    if len(rows) != 8:
        raise ValueError(f"FEN board needs 8 ranks, got {len(rows)}: {field!r}")
    board: list[Piece | None] = [None] * 64
    for rank, row in zip(range(7, -1, -1), rows):
        file = 0
        for ch in row:
            if ch in "12345678":
                file += int(ch)
                continue
            if file > 7:
                raise ValueError(f"FEN rank {rank + 1} holds more than 8 squares: {row!r}")
            board[make_square(file, rank)] = Piece.from_char(ch)
            file += 1
        if file != 8:
            raise ValueError(f"FEN rank {rank + 1} does not hold 8 squares: {row!r}")
    return board


def _side(field: str) -> Color:
    try:
        return _SIDES[field]
    except KeyError:
        raise ValueError(f"FEN side to move must be 'w' or 'b': {field!r}") from None


def _castling(field: str) -> CastlingRights:
    if field == "-":
        return CastlingRights.NONE
    if len(set(field)) != len(field) or not set(field) <= _RIGHTS.keys():
        raise ValueError(f"Invalid FEN castling field: {field!r}")
    rights = CastlingRights.NONE
    for ch in field:
        rights |= _RIGHTS[ch]
    return rights


def _en_passant(field: str, side: Color) -> Square | None:
    if field == "-":
        return None
    sq = parse_square(field)
    # Behind a pawn of the side that just moved.
    if rank_of(sq) != (5 if side == Color.WHITE else 2):
        raise ValueError(f"FEN en passant square {field!r} does not fit the side to move")
    return sq


def _counter(fields: list[str], index: int, default: int, minimum: int) -> int:
    if len(fields) <= index:
        return default
    try:
        value = int(fields[index])
    except ValueError:
        raise ValueError(f"FEN move counter is not a number: {fields[index]!r}") from None
    if value < minimum:
        raise ValueError(f"FEN move counter below {minimum}: {value}")
    return value


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    The two clock fields may be omitted.

    Raises:
        ValueError: the string is not a valid FEN record.
    """
    fields = fen.split()
    if not 4 <= len(fields) <= 6:
        raise ValueError(f"FEN needs 4 to 6 fields, got {len(fields)}: {fen!r}")
    side = _side(fields[1])
    return Position(
        _board(fields[0]),
        side,
        _castling(fields[2]),
        _en_passant(fields[3], side),
        _counter(fields, 4, 0, 0),
        _counter(fields, 5, 1, 1),
    )


# ── Serialization ────────────────────────────────────────────────────────


def _rank_text(pieces: list[Piece | None]) -> str:
    parts: list[str] = []
    for empty, run in groupby(pieces, key=lambda piece: piece is None):
        if empty:
            parts.append(str(len(list(run))))
        else:
            parts.extend(str(piece) for piece in run)
    return "".join(parts)


def position_to_fen(pos: Position) -> str:
    """Serialize a :class:`Position` to FEN."""
    board = "/".join(
        _rank_text(pos.board[rank * 8 : rank * 8 + 8]) for rank in range(7, -1, -1)
    )
    side = "w" if pos.side_to_move == Color.WHITE else "b"
    castling = "".join(ch for ch, right in _RIGHTS.items() if pos.castling & right) or "-"
    ep = "-" if pos.en_passant is None else square_name(pos.en_passant)
    return f"{board} {side} {castling} {ep} {pos.halfmove_clock} {pos.fullmove_number}"
