"""PGN reader: tag-pair section, movetext state machine and per-game driver.

Typical use::

    with PgnReader.from_path("games.pgn") as reader:
        reader.set_error_handler(LoggingErrorHandler())
        for game in reader.games():
            print(game)

A malformed game does not stop the reader: :meth:`PgnReader.parse_game`
returns what it built so far (flagged with :attr:`Game.has_error`) and the
next call resumes at the following tag section.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType
from typing import NoReturn, TextIO

from pgnreader.core.enums import GameResult
from pgnreader.core.position import IllegalMoveError
from pgnreader.game import nag
from pgnreader.game.tree import Game, GameNode, TagError
from pgnreader.pgn.config import ReaderConfig
from pgnreader.pgn.errors import ErrorHandler, PgnSyntaxError, Severity
from pgnreader.pgn.lexer import LexerError, PgnLexer, TokenKind
from pgnreader.pgn.san_resolver import SanError, SanResolver
from pgnreader.pgn.source import open_pgn_text

_LOGGER = logging.getLogger(__name__)

_NAG_STARTS = (TokenKind.NAG_BEGIN, TokenKind.EXCLAM, TokenKind.QUESTION)
_GLYPHS = {TokenKind.EXCLAM: "!", TokenKind.QUESTION: "?"}
_ERROR_COMMENT = "-error"
_TEXT_TOKENS = (TokenKind.IDENT, TokenKind.STRING, TokenKind.COMMENT)


class PgnReader:
    """Reads games one at a time from a PGN text stream.

    Args:
        stream: Text source; read character by character, never rewound.
        name: Source name used in diagnostics (e.g. the file path).
        config: Reader tuning; defaults to :class:`ReaderConfig`.

    A reader built with :meth:`from_path` owns its stream; use it as a
    context manager or call :meth:`close` when done.
    """

    def __init__(
        self,
        stream: TextIO,
        name: str | None = None,
        config: ReaderConfig | None = None,
    ) -> None:
        self.name = name
        self.config = config or ReaderConfig()
        self.error_handler: ErrorHandler | None = None
        self._stream = stream
        self._owns_stream = False
        self._lexer = PgnLexer(
            stream,
            max_token_size=self.config.max_token_size,
            header_escape_after_ident=self.config.header_escape_after_ident,
        )
        self._resolver = SanResolver(self._warning)
        self._game: Game | None = None

    @classmethod
    def from_string(
        cls, text: str, name: str | None = None, config: ReaderConfig | None = None
    ) -> PgnReader:
        return cls(io.StringIO(text), name, config)

    @classmethod
    def from_path(cls, path: str | Path, config: ReaderConfig | None = None) -> PgnReader:
        """Open a ``.pgn``, ``.pgn.gz`` or ``.zip`` file."""
        reader = cls(open_pgn_text(path), str(path), config)
        reader._owns_stream = True
        return reader

    def close(self) -> None:
        """Close the stream if this reader opened it."""
        if self._owns_stream:
            self._stream.close()

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def __enter__(self) -> PgnReader:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def set_error_handler(self, handler: ErrorHandler | None) -> None:
        self.error_handler = handler

    @property
    def lexer(self) -> PgnLexer:
        return self._lexer

    # ── Diagnostics ──────────────────────────────────────────────────────

    def _diagnostic(self, severity: Severity, message: str) -> PgnSyntaxError:
        return PgnSyntaxError(
            severity,
            message,
            self.name,
            self._lexer.line_number,
            self._lexer.describe_token(),
        )

    def _syntax_error(self, message: str) -> NoReturn:
        error = self._diagnostic(Severity.ERROR, message)
        if self.error_handler is not None:
            self.error_handler.handle_error(error)
        raise error

    def _warning(self, message: str) -> None:
        if self.error_handler is not None:
            self.error_handler.handle_warning(self._diagnostic(Severity.WARNING, message))

    # ── Token helpers ────────────────────────────────────────────────────

    def _next_token(self) -> TokenKind:
        try:
            return self._lexer.next_token()
        except LexerError as exc:
            self._syntax_error(str(exc))

    def _token_is_int(self) -> bool:
        lexer = self._lexer
        return lexer.kind == TokenKind.IDENT and lexer.text.isascii() and lexer.text.isdigit()

    def _token_as_result(self) -> GameResult | None:
        lexer = self._lexer
        if lexer.kind == TokenKind.ASTERISK:
            return GameResult.IN_PROGRESS
        if lexer.kind != TokenKind.IDENT:
            return None
        return GameResult.from_token(lexer.text)

    @property
    def _current_game(self) -> Game:
        assert self._game is not None
        return self._game

    # ── Tag-pair section ─────────────────────────────────────────────────

    def _find_game_start(self) -> bool:
        while True:
            kind = self._lexer.kind
            if kind == TokenKind.EOF:
                return False
            if kind == TokenKind.TAG_BEGIN:
                return True
            self._next_token()

    def _parse_tag_pair(self) -> bool:
        if self._lexer.kind != TokenKind.TAG_BEGIN:
            return False

        if self._next_token() != TokenKind.IDENT:
            self._syntax_error("Tag name expected")
        name = self._lexer.text

        if self._next_token() != TokenKind.STRING:
            self._syntax_error("Tag value expected")
        value = self._lexer.text

        # Values with unescaped quotes arrive as several tokens.
        while self._next_token() not in (TokenKind.TAG_END, TokenKind.EOF):
            lexer = self._lexer
            part = lexer.text if lexer.kind in _TEXT_TOKENS else lexer.kind.value
            value = f"{value} {part}"
        if self._lexer.kind != TokenKind.TAG_END:
            self._syntax_error("] expected")

        try:
            self._current_game.set_tag(name, value.strip())
        except TagError as exc:
            self._syntax_error(str(exc))
        return True

    def _parse_header_section(self) -> None:
        self._lexer.in_movetext = False
        self._find_game_start()
        while self._parse_tag_pair():
            self._next_token()

    # ── Movetext section ─────────────────────────────────────────────────

    def _parse_nag(self) -> None:
        game = self._current_game
        if self._lexer.kind == TokenKind.NAG_BEGIN:
            self._next_token()
            if not self._token_is_int():
                self._syntax_error("Illegal NAG: number expected")
            code = int(self._lexer.text)
            if code > 0:
                game.add_nag(code)
            self._next_token()
            return

        glyphs = ""
        while self._lexer.kind in _GLYPHS:
            glyphs += _GLYPHS[self._lexer.kind]
            self._next_token()
        try:
            code = nag.nag_from_glyph(glyphs)
        except ValueError:
            self._syntax_error(f"Illegal direct NAG {glyphs}")
        self._warning(f"Direct NAG used {glyphs} -> ${code}")
        game.add_nag(code)

    def _parse_half_move(self) -> bool:
        """Parse an optional move number and the move after it.

        Returns ``False`` when the move number is not followed by a move
        (a comment or the result comes next); the current token is then
        left for the movetext loop.
        """
        if self._token_is_int():
            while self._next_token() == TokenKind.PERIOD:
                pass
            if self._lexer.kind != TokenKind.IDENT or self._token_as_result() is not None:
                return False
        elif self._lexer.kind != TokenKind.IDENT:
            self._syntax_error("Move expected")

        game = self._current_game
        try:
            move = self._resolver.resolve(self._lexer.text, game)
        except (SanError, IllegalMoveError) as exc:
            self._syntax_error(str(exc))
        if move is not None:
            game.apply_move(move)
        return True

    def _parse_movetext_section(self) -> None:
        self._lexer.in_movetext = True
        game = self._current_game
        comment = ""
        lines: list[GameNode] = []
        new_line = False
        gone_back = False
        after_move_number = False

        while (result := self._token_as_result()) is None:
            kind = self._lexer.kind
            if kind == TokenKind.EOF:
                self._syntax_error("Unexpected end of game, result expected")

            if kind == TokenKind.VARIATION_BEGIN:
                _add_post_move_comment(game, comment)
                comment = ""
                lines.append(game.current_node)
                game.undo_last_move()
                new_line = True
                after_move_number = False
                self._next_token()
            elif kind == TokenKind.VARIATION_END:
                _add_post_move_comment(game, comment)
                comment = ""
                new_line = after_move_number = False
                if not lines:
                    self._syntax_error("Unexpected variation end")
                branch = lines.pop()
                game.go_back_to_main_line()
                if game.current_node is not branch:
                    game.goto_node(branch)
                gone_back = True
                self._next_token()
            elif kind == TokenKind.COMMENT:
                comment = f"{comment} {self._lexer.text}" if comment else self._lexer.text
                if not (new_line or gone_back or after_move_number):
                    _add_post_move_comment(game, comment)
                    comment = ""
                # Held until the next move after a line start or move number.
                gone_back = False
                self._next_token()
            elif kind in _NAG_STARTS:
                self._parse_nag()
            elif self._parse_half_move():
                new_line = gone_back = after_move_number = False
                _add_pre_move_comment(game, comment)
                comment = ""
                self._next_token()
            else:
                after_move_number = True

        _add_post_move_comment(game, comment)
        game.result = result
        if lines:
            self._syntax_error(f"Unfinished variations in game: {len(lines)}")

    # ── Games ────────────────────────────────────────────────────────────

    def parse_game(self) -> Game | None:
        """Read the next game; ``None`` once the stream holds no more games."""
        self._game = None
        try:
            if not self._find_game_start():
                return None
            self._game = Game(always_add_line=self.config.always_add_line)
            _LOGGER.debug("Game starts at %s:%d", self.name, self._lexer.line_number)
            self._parse_header_section()
            self._parse_movetext_section()
            self._game.finalize()
        except PgnSyntaxError as exc:
            if self._game is None:
                return None
            if exc.last_token == TokenKind.EOF.value:
                _LOGGER.debug("Game cut short by end of input: %s", exc.message)
                self._game.finalize()
                return self._game
            _LOGGER.info("Keeping partial game after error: %s", exc)
            self._game.set_error(True)
            self._game.add_post_move_comment(_ERROR_COMMENT)
            self._game.finalize()
        return self._game

    def games(self) -> Iterator[Game]:
        """Iterate over the remaining games of the stream."""
        while (game := self.parse_game()) is not None:
            yield game


def _normalize_comment(text: str) -> str:
    return " ".join(part for part in text.split(" ") if part)


def _add_pre_move_comment(game: Game, comment: str) -> None:
    if text := _normalize_comment(comment):
        game.add_pre_move_comment(text)


def _add_post_move_comment(game: Game, comment: str) -> None:
    if text := _normalize_comment(comment):
        game.add_post_move_comment(text)
