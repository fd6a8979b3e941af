"""Core domain layer: the position model behind the PGN reader.

Quick start::

    from pgnreader.core import PieceType, Position, parse_square

    pos = Position()
    move = pos.find_piece_move(PieceType.KNIGHT, None, None, parse_square("f3"))
    pos.make_move(move)
"""

from pgnreader.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceType
from pgnreader.core.move import NULL_MOVE, Move
from pgnreader.core.move_generator import MoveGenerator
from pgnreader.core.notation import (
    STARTING_FEN,
    move_to_san,
    position_from_fen,
    position_to_fen,
)
from pgnreader.core.piece import Piece
from pgnreader.core.position import IllegalMoveError, Position
from pgnreader.core.types import (
    Square,
    file_from_char,
    file_of,
    make_square,
    parse_square,
    rank_from_char,
    rank_of,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "file_from_char",
    "file_of",
    "make_square",
    "parse_square",
    "rank_from_char",
    "rank_of",
    "square_name",
    # Domain objects
    "IllegalMoveError",
    "Move",
    "MoveGenerator",
    "NULL_MOVE",
    "Piece",
    "Position",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "position_from_fen",
    "position_to_fen",
]
