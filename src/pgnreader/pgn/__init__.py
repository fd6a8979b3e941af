"""PGN layer: lexer, reader and diagnostics.

Quick start::

    from pgnreader.pgn import CollectingErrorHandler, PgnReader

    reader = PgnReader.from_string('[Event "Casual"]\n1. e4 e5 2. Nf3 1-0\n')
    handler = CollectingErrorHandler()
    reader.set_error_handler(handler)
    game = reader.parse_game()
    assert game is not None and game.mainline_sans() == ["e4", "e5", "Nf3"]
"""

from pgnreader.pgn.config import MAX_TOKEN_SIZE, ReaderConfig
from pgnreader.pgn.errors import (
    CollectingErrorHandler,
    ErrorHandler,
    LoggingErrorHandler,
    PgnSyntaxError,
    Severity,
)
from pgnreader.pgn.lexer import LexerError, PgnLexer, TokenKind, classify_char
from pgnreader.pgn.reader import PgnReader
from pgnreader.pgn.san_resolver import SanError, SanResolver
from pgnreader.pgn.source import is_pgn_file, is_pgn_file_or_zipped, open_pgn_text

__all__ = [
    # Reader
    "PgnReader",
    "ReaderConfig",
    "MAX_TOKEN_SIZE",
    # Lexer
    "LexerError",
    "PgnLexer",
    "TokenKind",
    "classify_char",
    # Moves
    "SanError",
    "SanResolver",
    # Diagnostics
    "CollectingErrorHandler",
    "ErrorHandler",
    "LoggingErrorHandler",
    "PgnSyntaxError",
    "Severity",
    # Sources
    "is_pgn_file",
    "is_pgn_file_or_zipped",
    "open_pgn_text",
]
