"""pgnreader: read chess games from PGN text into move trees.

Quick start::

    from pgnreader import LoggingErrorHandler, PgnReader

    with PgnReader.from_path("games.pgn") as reader:
        reader.set_error_handler(LoggingErrorHandler())
        for game in reader.games():
            print(game, game.mainline_sans()[:4])
"""

from pgnreader.core import GameResult, Position
from pgnreader.game import Game, GameNode
from pgnreader.pgn import (
    CollectingErrorHandler,
    LoggingErrorHandler,
    PgnReader,
    PgnSyntaxError,
    ReaderConfig,
    Severity,
)

__all__ = [
    "CollectingErrorHandler",
    "Game",
    "GameNode",
    "GameResult",
    "LoggingErrorHandler",
    "PgnReader",
    "PgnSyntaxError",
    "Position",
    "ReaderConfig",
    "Severity",
]

__version__ = "0.1.0"
