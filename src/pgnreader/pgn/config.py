"""Reader configuration."""

from __future__ import annotations

from dataclasses import dataclass

MAX_TOKEN_SIZE = 16384


@dataclass(slots=True, frozen=True)
class ReaderConfig:
    """Tunable PGN reader behaviour.

    Args:
        max_token_size: Length limit for strings, comments and
            identifiers; a token reaching it is a fatal error.
        header_escape_after_ident: In the tag section a ``%`` or ``;`` that
            directly follows an identifier is read as an ordinary character.
            Set to treat it as an escape / line-comment start there too, as
            in movetext.
        always_add_line: Passed to each new :class:`~pgnreader.game.Game`;
            a move repeated in a variation opens a new line instead of
            merging with the existing continuation.
    """

    max_token_size: int = MAX_TOKEN_SIZE
    header_escape_after_ident: bool = False
    always_add_line: bool = True

    def __post_init__(self) -> None:
        if self.max_token_size < 1:
            raise ValueError(f"max_token_size must be positive: {self.max_token_size}")
