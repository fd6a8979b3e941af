"""Tests for the PGN lexer."""

import io

import pytest

from pgnreader.pgn.lexer import LexerError, PgnLexer, TokenKind, classify_char, is_separator


def lex(text: str, **kwargs: object) -> PgnLexer:
    return PgnLexer(io.StringIO(text), **kwargs)  # type: ignore[arg-type]


def tokens(text: str, in_movetext: bool = True, **kwargs: object) -> list[tuple[TokenKind, str]]:
    lexer = lex(text, **kwargs)
    lexer.in_movetext = in_movetext
    result = []
    while lexer.next_token() != TokenKind.EOF:
        result.append((lexer.kind, lexer.text))
    return result


def chars(text: str) -> list[str]:
    lexer = lex(text)
    result = []
    while (ch := lexer.next_char()) != "":
        result.append(ch)
    return result


class TestClassification:
    @pytest.mark.parametrize(
        ("ch", "kind"),
        [
            ("(", TokenKind.VARIATION_BEGIN),
            (")", TokenKind.VARIATION_END),
            ("{", TokenKind.COMMENT),
            ("}", TokenKind.COMMENT_END),
            ("[", TokenKind.TAG_BEGIN),
            ("]", TokenKind.TAG_END),
            ("$", TokenKind.NAG_BEGIN),
            (".", TokenKind.PERIOD),
            ("*", TokenKind.ASTERISK),
            ('"', TokenKind.QUOTE),
            ("!", TokenKind.EXCLAM),
            ("?", TokenKind.QUESTION),
        ],
    )
    def test_punctuation(self, ch: str, kind: TokenKind) -> None:
        assert classify_char(ch) == kind

    @pytest.mark.parametrize("ch", ["e", "4", "-", "/", "=", "+", "#", "%", ";", " "])
    def test_not_punctuation(self, ch: str) -> None:
        assert classify_char(ch) is None

    def test_separators(self) -> None:
        assert is_separator(" ") and is_separator("\t") and is_separator("\n")
        assert not is_separator("a")
        assert not is_separator("")


class TestCharacters:
    def test_line_breaks_fold_into_one(self) -> None:
        assert chars("a\r\n\r\nb\n\n\nc") == ["a", "\n", "b", "\n", "c"]

    def test_line_numbers(self) -> None:
        lexer = lex("a\r\nb\rc\nd")
        seen = []
        while (ch := lexer.next_char()) != "":
            if ch != "\n":
                seen.append((ch, lexer.line_number))
        assert seen == [("a", 1), ("b", 2), ("c", 3), ("d", 4)]

    def test_escape_line_is_dropped(self) -> None:
        assert chars("a\n% engine output\nb") == ["a", "\n", "b"]

    def test_escape_on_first_line_is_dropped(self) -> None:
        assert chars("%x\ny") == ["\n", "y"]

    def test_line_comment_mid_line(self) -> None:
        lexer = lex("e4 ; good\ne5")
        lexer.in_movetext = True
        out = []
        while (ch := lexer.next_char()) != "":
            out.append(ch)
        assert "".join(out) == "e4 \ne5"


class TestTokens:
    def test_tag_pair(self) -> None:
        assert tokens('[Event "Casual game"]', in_movetext=False) == [
            (TokenKind.TAG_BEGIN, ""),
            (TokenKind.IDENT, "Event"),
            (TokenKind.STRING, "Casual game"),
            (TokenKind.TAG_END, ""),
        ]

    def test_quote_never_comes_back_as_its_own_token(self) -> None:
        assert tokens('"" "x"') == [(TokenKind.STRING, ""), (TokenKind.STRING, "x")]

    def test_movetext(self) -> None:
        kinds = [kind for kind, _ in tokens("1. e4 {best} (1. d4) $1 !? *")]
        assert kinds == [
            TokenKind.IDENT,
            TokenKind.PERIOD,
            TokenKind.IDENT,
            TokenKind.COMMENT,
            TokenKind.VARIATION_BEGIN,
            TokenKind.IDENT,
            TokenKind.PERIOD,
            TokenKind.IDENT,
            TokenKind.VARIATION_END,
            TokenKind.NAG_BEGIN,
            TokenKind.IDENT,
            TokenKind.EXCLAM,
            TokenKind.QUESTION,
            TokenKind.ASTERISK,
        ]

    def test_move_number_glued_to_move(self) -> None:
        assert tokens("12...Nxe5+") == [
            (TokenKind.IDENT, "12"),
            (TokenKind.PERIOD, ""),
            (TokenKind.PERIOD, ""),
            (TokenKind.PERIOD, ""),
            (TokenKind.IDENT, "Nxe5+"),
        ]

    def test_identifier_ending_at_line_break(self) -> None:
        assert tokens("e4\ne5\r\nNf3") == [
            (TokenKind.IDENT, "e4"),
            (TokenKind.IDENT, "e5"),
            (TokenKind.IDENT, "Nf3"),
        ]

    def test_comment_folds_line_breaks(self) -> None:
        assert tokens("{a long\ncomment}") == [(TokenKind.COMMENT, "a long comment")]

    def test_escape_chars_inside_comment_and_string_are_kept(self) -> None:
        assert tokens('{50% ; sure}') == [(TokenKind.COMMENT, "50% ; sure")]
        assert tokens('"a\n%b"') == [(TokenKind.STRING, "a\n%b")]

    def test_escape_line_between_moves(self) -> None:
        assert tokens("e4\n%eval 0.3\ne5") == [
            (TokenKind.IDENT, "e4"),
            (TokenKind.IDENT, "e5"),
        ]

    def test_semicolon_after_ident_in_header(self) -> None:
        assert tokens("abc ;def", in_movetext=False) == [
            (TokenKind.IDENT, "abc"),
            (TokenKind.IDENT, ";def"),
        ]
        assert tokens("abc ;def", in_movetext=False, header_escape_after_ident=True) == [
            (TokenKind.IDENT, "abc"),
        ]
        assert tokens("abc ;def") == [(TokenKind.IDENT, "abc")]

    def test_eof_is_idempotent(self) -> None:
        lexer = lex("e4")
        assert lexer.next_token() == TokenKind.IDENT
        assert lexer.next_token() == TokenKind.EOF
        assert lexer.next_token() == TokenKind.EOF


class TestLexerErrors:
    def test_unfinished_string(self) -> None:
        with pytest.raises(LexerError, match="Unfinished string"):
            tokens('"abc')

    def test_unfinished_comment_reports_start_line(self) -> None:
        with pytest.raises(LexerError, match="started at line 2"):
            tokens("e4\n{never\nclosed")

    def test_token_too_long(self) -> None:
        with pytest.raises(LexerError, match="Token too long"):
            tokens("{" + "x" * 20 + "}", max_token_size=8)

    def test_token_below_limit(self) -> None:
        assert tokens("abcdefg", max_token_size=8) == [(TokenKind.IDENT, "abcdefg")]

    def test_token_at_limit(self) -> None:
        with pytest.raises(LexerError, match="Token too long"):
            tokens("abcdefgh", max_token_size=8)


class TestDescribeToken:
    @pytest.mark.parametrize(
        ("text", "rendered"),
        [
            ("e4", "e4"),
            ("{hi}", "{hi}"),
            ('"x"', '"x"'),
            ("(", "("),
            ("", "EOF"),
        ],
    )
    def test_rendering(self, text: str, rendered: str) -> None:
        lexer = lex(text)
        lexer.next_token()
        assert lexer.describe_token() == rendered

    def test_before_first_token(self) -> None:
        assert lex("e4").describe_token() == "EOL"
