"""Game layer: the move tree the PGN reader fills in, and NAG helpers.

Quick start::

    from pgnreader.core import parse_square
    from pgnreader.game import Game

    game = Game()
    game.set_tag("White", "Alice")
    game.apply_move(game.position.find_pawn_move(None, parse_square("e4")))
"""

from pgnreader.game.nag import nag_description, nag_from_glyph, nag_to_string
from pgnreader.game.tree import Game, GameNode, TagError

__all__ = [
    "Game",
    "GameNode",
    "TagError",
    "nag_description",
    "nag_from_glyph",
    "nag_to_string",
]
