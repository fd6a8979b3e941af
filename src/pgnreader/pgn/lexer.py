"""PGN lexer: character stream → token stream.

Line breaks collapse into a single separator, ``%`` escape lines and ``;``
line comments are dropped before tokenization, and the remaining
characters are grouped into strings, brace comments, identifiers and
single-character punctuation tokens.
"""

from __future__ import annotations

from enum import Enum
from typing import TextIO

from pgnreader.pgn.config import MAX_TOKEN_SIZE

_NEWLINES = frozenset("\r\n")
_LINE_SKIPPERS = frozenset("%;")  # escape line, line comment


class TokenKind(Enum):
    """Kinds of token produced by :class:`PgnLexer`."""

    EOF = "EOF"
    EOL = "EOL"
    IDENT = "IDENT"
    STRING = "STRING"
    COMMENT = "{"
    COMMENT_END = "}"
    VARIATION_BEGIN = "("
    VARIATION_END = ")"
    TAG_BEGIN = "["
    TAG_END = "]"
    NAG_BEGIN = "$"
    PERIOD = "."
    ASTERISK = "*"
    QUOTE = '"'  # classified only; a quote always starts a STRING token
    EXCLAM = "!"
    QUESTION = "?"


_PUNCTUATION: dict[str, TokenKind] = {
    kind.value: kind
    for kind in TokenKind
    if kind not in (TokenKind.EOF, TokenKind.EOL, TokenKind.IDENT, TokenKind.STRING)
}


def classify_char(ch: str) -> TokenKind | None:
    """Punctuation kind a single character starts, or ``None``.

    ``None`` means the character is a separator or belongs to an identifier.
    """
    return _PUNCTUATION.get(ch)


def is_separator(ch: str) -> bool:
    return ch != "" and ch <= " "


class LexerError(ValueError):
    """Malformed input at the character level."""


class PgnLexer:
    """Pull-based tokenizer over a text stream.

    After :meth:`next_token`, :attr:`kind` holds the token kind and
    :attr:`text` the payload of identifiers, strings and comments. At most
    one raw character is pushed back between calls.
    """

    def __init__(
        self,
        stream: TextIO,
        max_token_size: int = MAX_TOKEN_SIZE,
        header_escape_after_ident: bool = False,
    ) -> None:
        self._stream = stream
        self._max_token_size = max_token_size
        self._header_escape_after_ident = header_escape_after_ident
        self._pushed_back: str | None = None
        self._newlines = 0
        self._last_raw = ""
        self._in_string = False
        self._in_comment = False
        self.kind = TokenKind.EOL
        self.text = ""
        self.in_movetext = False

    @property
    def line_number(self) -> int:
        """1-based number of the line being read."""
        return self._newlines + 1

    # -- Characters ---------------------------------------------------------

    def _read(self) -> str:
        ch = self._stream.read(1)
        if ch == "\r" or (ch == "\n" and self._last_raw != "\r"):
            self._newlines += 1
        self._last_raw = ch
        return ch

    def _skip_line(self) -> str:
        ch = self._read()
        while ch and ch not in _NEWLINES:
            ch = self._read()
        return ch

    def _skips_line_mid(self, ch: str) -> bool:
        if ch not in _LINE_SKIPPERS or self._in_string or self._in_comment:
            return False
        return (
            self.in_movetext
            or self._header_escape_after_ident
            or self.kind != TokenKind.IDENT
        )

    def _skips_line_at_start(self, ch: str) -> bool:
        return ch in _LINE_SKIPPERS and not self._in_string and not self._in_comment

    def next_char(self) -> str:
        """Next character after line folding and escape removal.

        Any run of line breaks comes back as one ``"\\n"``; ``""`` is the
        end of the stream.
        """
        if self._pushed_back is not None:
            ch, self._pushed_back = self._pushed_back, None
            return ch

        ch = self._read()
        while ch and (ch in _NEWLINES or self._skips_line_mid(ch)):
            if ch in _NEWLINES:
                while ch and ch in _NEWLINES:
                    ch = self._read()
                if not self._skips_line_at_start(ch):
                    self._pushed_back = ch
                    return "\n"
            ch = self._skip_line()
        return ch

    def _skip_separators(self) -> str:
        ch = self.next_char()
        while is_separator(ch):
            ch = self.next_char()
        return ch

    # -- Tokens -------------------------------------------------------------

    def next_token(self) -> TokenKind:
        """Advance by one token and return its kind.

        Raises:
            LexerError: unterminated string or comment, or a token reaching
                the maximum length.
        """
        self.text = ""
        ch = self._skip_separators()
        if ch == "":
            self.kind = TokenKind.EOF
            return self.kind

        if ch == '"':
            self._read_string()
            return self.kind

        kind = classify_char(ch)
        if kind == TokenKind.COMMENT:
            self._read_comment()
        elif kind is not None:
            self.kind = kind
        else:
            self._read_identifier(ch)
        return self.kind

    def _append(self, buf: list[str], ch: str) -> None:
        buf.append(ch)
        if len(buf) >= self._max_token_size:
            self.text = "".join(buf)
            raise LexerError("Token too long")

    def _read_string(self) -> None:
        self.kind = TokenKind.STRING
        buf: list[str] = []
        self._in_string = True
        try:
            while True:
                ch = self.next_char()
                if ch == '"':
                    break
                if ch == "":
                    self.text = "".join(buf)
                    raise LexerError("Unfinished string")
                self._append(buf, ch)
        finally:
            self._in_string = False
        self.text = "".join(buf)

    def _read_comment(self) -> None:
        self.kind = TokenKind.COMMENT
        start = self.line_number
        buf: list[str] = []
        self._in_comment = True
        try:
            while True:
                ch = self.next_char()
                if ch == "}":
                    break
                if ch == "":
                    self.text = "".join(buf)
                    raise LexerError(f"Unfinished comment, started at line {start}")
                self._append(buf, " " if ch == "\n" else ch)
        finally:
            self._in_comment = False
        self.text = "".join(buf)

    def _read_identifier(self, first: str) -> None:
        buf: list[str] = []
        ch = first
        while ch and not is_separator(ch) and classify_char(ch) is None:
            self._append(buf, ch)
            ch = self.next_char()
        # A folded line break already holds the next character in the
        # pushback slot; separators are never needed again anyway.
        if classify_char(ch) is not None:
            self._pushed_back = ch
        self.kind = TokenKind.IDENT
        self.text = "".join(buf)

    def describe_token(self) -> str:
        """Render the current token for diagnostics."""
        if self.kind in (TokenKind.EOF, TokenKind.EOL):
            return self.kind.value
        if self.kind == TokenKind.IDENT:
            return self.text
        if self.kind == TokenKind.COMMENT:
            return "{" + self.text + "}"
        if self.kind == TokenKind.STRING:
            return '"' + self.text + '"'
        return self.kind.value
