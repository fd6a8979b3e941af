"""Numeric Annotation Glyphs (NAGs) and their direct-glyph spellings."""

from __future__ import annotations

from typing import Final

GOOD_MOVE: Final = 1
POOR_MOVE: Final = 2
VERY_GOOD_MOVE: Final = 3
VERY_POOR_MOVE: Final = 4
SPECULATIVE_MOVE: Final = 5
QUESTIONABLE_MOVE: Final = 6
NOVELTY: Final = 146
DIAGRAM: Final = 201

# Only runs of "!" and "?" can reach this table: the lexer emits those
# characters as individual punctuation tokens.
_DIRECT_GLYPHS: dict[str, int] = {
    "!": GOOD_MOVE,
    "?": POOR_MOVE,
    "!!": VERY_GOOD_MOVE,
    "??": VERY_POOR_MOVE,
    "!?": SPECULATIVE_MOVE,
    "?!": QUESTIONABLE_MOVE,
}
_GLYPHS_BY_NAG: dict[int, str] = {v: k for k, v in _DIRECT_GLYPHS.items()}

_DESCRIPTIONS: dict[int, str] = {
    0: "null annotation",
    GOOD_MOVE: "good move",
    POOR_MOVE: "poor move",
    VERY_GOOD_MOVE: "very good move",
    VERY_POOR_MOVE: "very poor move",
    SPECULATIVE_MOVE: "speculative move",
    QUESTIONABLE_MOVE: "questionable move",
    7: "forced move",
    8: "singular move",
    9: "worst move",
    10: "drawish position",
    11: "equal chances, quiet position",
    12: "equal chances, active position",
    13: "unclear position",
    14: "White has a slight advantage",
    15: "Black has a slight advantage",
    16: "White has a moderate advantage",
    17: "Black has a moderate advantage",
    18: "White has a decisive advantage",
    19: "Black has a decisive advantage",
    20: "White has a crushing advantage",
    21: "Black has a crushing advantage",
    22: "White is in zugzwang",
    23: "Black is in zugzwang",
    NOVELTY: "novelty",
    DIAGRAM: "diagram",
}


def nag_from_glyph(glyph: str) -> int:
    """Map a direct glyph such as ``"?!"`` to its NAG.

    Raises:
        ValueError: *glyph* has no NAG equivalent.
    """
    try:
        return _DIRECT_GLYPHS[glyph]
    except KeyError:
        raise ValueError(f"Unknown direct NAG: {glyph!r}") from None


def nag_to_string(nag: int) -> str:
    """Short display form: the direct glyph when one exists, else ``$n``."""
    return _GLYPHS_BY_NAG.get(nag, f"${nag}")


def nag_description(nag: int) -> str:
    return _DESCRIPTIONS.get(nag, f"annotation ${nag}")
