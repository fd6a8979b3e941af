"""Move generation for the PGN position model.

Pseudo-legal moves come from precomputed per-square tables; a move is legal
when making it does not leave the mover's king attacked.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pgnreader.core.enums import CastlingRights, Color, MoveFlag, PieceType
from pgnreader.core.move import Move
from pgnreader.core.types import Square, file_of, make_square, rank_of

if TYPE_CHECKING:
    from pgnreader.core.position import Position

Direction = tuple[int, int]
Rays = tuple[tuple[Square, ...], ...]

_DIAGONAL: tuple[Direction, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
_ORTHOGONAL: tuple[Direction, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
_KNIGHT_JUMPS: tuple[Direction, ...] = (
    (1, 2), (2, 1), (2, -1), (1, -2), (-1, -2), (-2, -1), (-2, 1), (-1, 2),
)

_PROMOTION_PIECES = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)

_CASTLING_SIDES: dict[Color, tuple[CastlingRights, CastlingRights]] = {
    Color.WHITE: (CastlingRights.WHITE_KINGSIDE, CastlingRights.WHITE_QUEENSIDE),
    Color.BLACK: (CastlingRights.BLACK_KINGSIDE, CastlingRights.BLACK_QUEENSIDE),
}


# ── Lookup tables ────────────────────────────────────────────────────────


def _rays(sq: Square, directions: tuple[Direction, ...], reach: int) -> Rays:
    """Squares seen from *sq* along each direction, at most *reach* steps."""
    result: list[tuple[Square, ...]] = []
    for df, dr in directions:
        ray: list[Square] = []
        f, r = file_of(sq) + df, rank_of(sq) + dr
        while 0 <= f < 8 and 0 <= r < 8 and len(ray) < reach:
            ray.append(make_square(f, r))
            f, r = f + df, r + dr
        if ray:
            result.append(tuple(ray))
    return tuple(result)


def _table(directions: tuple[Direction, ...], reach: int) -> tuple[Rays, ...]:
    return tuple(_rays(sq, directions, reach) for sq in range(64))


_KNIGHT = _table(_KNIGHT_JUMPS, 1)
_KING = _table(_DIAGONAL + _ORTHOGONAL, 1)
_BISHOP = _table(_DIAGONAL, 7)
_ROOK = _table(_ORTHOGONAL, 7)
_QUEEN = _table(_DIAGONAL + _ORTHOGONAL, 7)

_PIECE_RAYS: dict[PieceType, tuple[Rays, ...]] = {
    PieceType.KNIGHT: _KNIGHT,
    PieceType.BISHOP: _BISHOP,
    PieceType.ROOK: _ROOK,
    PieceType.QUEEN: _QUEEN,
    PieceType.KING: _KING,
}


class MoveGenerator:
    """Generates moves for a :class:`Position`.

    Legality is checked by making each candidate on the position and
    taking it back, so the position is unchanged once a call returns.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    def generate_legal_moves(self) -> list[Move]:
        pos = self._pos
        mover = pos.side_to_move
        legal: list[Move] = []
        for move in self.generate_pseudo_legal_moves():
            pos.make_move(move)
            if not self.is_in_check(mover):
                legal.append(move)
            pos.unmake_move(move)
        return legal

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """Moves that obey piece movement but may expose the own king."""
        color = self._pos.side_to_move
        moves: list[Move] = []
        for sq, piece in enumerate(self._board):
            if piece is None or piece.color != color:
                continue
            if piece.piece_type == PieceType.PAWN:
                self._pawn_moves(sq, color, moves)
                continue
            self._ray_moves(sq, color, _PIECE_RAYS[piece.piece_type][sq], moves)
            if piece.piece_type == PieceType.KING:
                self._castling_moves(sq, color, moves)
        return moves

    # ── Attacks ──────────────────────────────────────────────────────────

    def is_in_check(self, color: Color) -> bool:
        """Whether *color*'s king is attacked; ``False`` without a king."""
        king = self._pos.king_square(color)
        return king is not None and self.is_square_attacked(king, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        board = self._board

        # A pawn attacks sq from one rank behind it (seen from the attacker).
        pawn_rank = rank_of(sq) - 1 if by_color == Color.WHITE else rank_of(sq) + 1
        if 0 <= pawn_rank < 8:
            for f in (file_of(sq) - 1, file_of(sq) + 1):
                if 0 <= f < 8:
                    piece = board[make_square(f, pawn_rank)]
                    if piece is not None and piece.color == by_color and piece.piece_type == PieceType.PAWN:
                        return True

        for attackers, table in (
            ((PieceType.KNIGHT,), _KNIGHT),
            ((PieceType.KING,), _KING),
            ((PieceType.BISHOP, PieceType.QUEEN), _BISHOP),
            ((PieceType.ROOK, PieceType.QUEEN), _ROOK),
        ):
            for ray in table[sq]:
                for from_sq in ray:
                    piece = board[from_sq]
                    if piece is None:
                        continue
                    if piece.color == by_color and piece.piece_type in attackers:
                        return True
                    break
        return False

    # ── Generators ───────────────────────────────────────────────────────

    def _ray_moves(self, sq: Square, color: Color, rays: Rays, moves: list[Move]) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None or target.color != color:
                    moves.append(Move(sq, to_sq))
                if target is not None:
                    break

    def _pawn_moves(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        forward = 1 if color == Color.WHITE else -1
        home_rank = 1 if color == Color.WHITE else 6
        file, rank = file_of(sq), rank_of(sq)
        next_rank = rank + forward
        if not 0 <= next_rank < 8:
            return
        promotes = next_rank in (0, 7)

        def push(to_sq: Square) -> None:
            if promotes:
                moves.extend(Move(sq, to_sq, MoveFlag.PROMOTION, pt) for pt in _PROMOTION_PIECES)
            else:
                moves.append(Move(sq, to_sq))

        ahead = make_square(file, next_rank)
        if board[ahead] is None:
            push(ahead)
            if rank == home_rank:
                two_ahead = make_square(file, rank + 2 * forward)
                if board[two_ahead] is None:
                    moves.append(Move(sq, two_ahead, MoveFlag.DOUBLE_PAWN))

        for f in (file - 1, file + 1):
            if not 0 <= f < 8:
                continue
            target_sq = make_square(f, next_rank)
            target = board[target_sq]
            if target is not None:
                if target.color != color:
                    push(target_sq)
            elif target_sq == self._pos.en_passant:
                moves.append(Move(sq, target_sq, MoveFlag.EN_PASSANT))

    def _castling_moves(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        back_rank = 0 if color == Color.WHITE else 7
        if king_sq != make_square(4, back_rank) or self.is_in_check(color):
            return
        kingside, queenside = _CASTLING_SIDES[color]
        rights = self._pos.castling

        # (right, rook file, squares that must be empty, squares the king crosses, flag)
        for right, rook_file, empty, crossed, flag in (
            (kingside, 7, (5, 6), (5, 6), MoveFlag.CASTLE_KINGSIDE),
            (queenside, 0, (1, 2, 3), (3, 2), MoveFlag.CASTLE_QUEENSIDE),
        ):
            if not rights & right or not self._is_own_rook(make_square(rook_file, back_rank), color):
                continue
            if any(self._board[make_square(f, back_rank)] is not None for f in empty):
                continue
            if any(self.is_square_attacked(make_square(f, back_rank), color.opposite) for f in crossed):
                continue
            moves.append(Move(king_sq, make_square(crossed[-1], back_rank), flag))

    def _is_own_rook(self, sq: Square, color: Color) -> bool:
        piece = self._board[sq]
        return piece is not None and piece.color == color and piece.piece_type == PieceType.ROOK
