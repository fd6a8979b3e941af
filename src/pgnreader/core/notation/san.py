"""SAN rendering for moves stored in the game tree."""

from __future__ import annotations

from pgnreader.core.enums import MoveFlag, PieceType
from pgnreader.core.move import Move
from pgnreader.core.move_generator import MoveGenerator
from pgnreader.core.position import Position
from pgnreader.core.types import FILE_CHARS, RANK_CHARS, file_of, rank_of, square_name

_CASTLES = {MoveFlag.CASTLE_KINGSIDE: "O-O", MoveFlag.CASTLE_QUEENSIDE: "O-O-O"}


def _origin(position: Position, move: Move) -> str:
    """Shortest origin hint telling *move* apart from same-piece rivals."""
    piece = position.board[move.from_sq]
    rivals = [
        m.from_sq
        for m in MoveGenerator(position).generate_legal_moves()
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and position.board[m.from_sq] == piece
    ]
    if not rivals:
        return ""
    file, rank = file_of(move.from_sq), rank_of(move.from_sq)
    if file not in {file_of(sq) for sq in rivals}:
        return FILE_CHARS[file]
    if rank not in {rank_of(sq) for sq in rivals}:
        return RANK_CHARS[rank]
    return square_name(move.from_sq)


def _check_suffix(position: Position, move: Move) -> str:
    position.make_move(move)
    try:
        generator = MoveGenerator(position)
        if not generator.is_in_check(position.side_to_move):
            return ""
        return "+" if generator.generate_legal_moves() else "#"
    finally:
        position.unmake_move(move)


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move."""
    if move.is_null:
        return "--"

    piece = position.board[move.from_sq]
    assert piece is not None

    if move.flag in _CASTLES:
        body = _CASTLES[move.flag]
    else:
        captures = (
            position.board[move.to_sq] is not None or move.flag == MoveFlag.EN_PASSANT
        )
        if piece.piece_type == PieceType.PAWN:
            prefix = FILE_CHARS[file_of(move.from_sq)] if captures else ""
        else:
            prefix = piece.piece_type.letter + _origin(position, move)
        body = prefix + ("x" if captures else "") + square_name(move.to_sq)
        if move.promotion is not None:
            body += "=" + move.promotion.letter

    return body + _check_suffix(position, move)
