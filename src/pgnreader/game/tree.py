"""Game tree: tags, a move tree with variations, annotations and a cursor.

The tree is navigated through a cursor (:attr:`Game.current_node`). The
position (:attr:`Game.position`) always reflects the cursor: moving the
cursor replays the moves from the start position.

Children of a node are ordered; the first child continues the line the node
belongs to, the others start variations.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from pgnreader.core.enums import GameResult
from pgnreader.core.move import Move
from pgnreader.core.notation import STARTING_FEN, move_to_san, position_from_fen
from pgnreader.core.position import Position

_TAG_NAME_RE = re.compile(r"^[A-Za-z0-9_]+$")


class TagError(ValueError):
    """A tag pair the game refuses to store."""


@dataclass(eq=False)
class GameNode:
    """A single move in the tree (the root holds no move)."""

    move: Move | None = None
    san: str = ""
    parent: GameNode | None = field(default=None, repr=False)
    children: list[GameNode] = field(default_factory=list, repr=False)
    nags: list[int] = field(default_factory=list)
    pre_move_comment: str = ""
    post_move_comment: str = ""
    ply: int = 0

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def starts_variation(self) -> bool:
        """Whether this node is an alternative to its parent's main child."""
        return self.parent is not None and self.parent.children[0] is not self

    @property
    def variations(self) -> list[GameNode]:
        """Alternatives to the main continuation of this node."""
        return self.children[1:]

    @property
    def level(self) -> int:
        """Variation nesting depth; 0 on the main line."""
        depth = 0
        node: GameNode | None = self
        while node is not None:
            if node.starts_variation:
                depth += 1
            node = node.parent
        return depth

    def path(self) -> list[GameNode]:
        """Nodes from the first move down to this one (root excluded)."""
        nodes: list[GameNode] = []
        node: GameNode | None = self
        while node is not None and node.parent is not None:
            nodes.append(node)
            node = node.parent
        nodes.reverse()
        return nodes

    def __str__(self) -> str:
        return self.san or "<start>"


class Game:
    """Mutable game tree built by the PGN reader.

    Args:
        always_add_line: When ``True`` every applied move opens a new line,
            even if the same move already continues the current node.
    """

    def __init__(self, always_add_line: bool = False) -> None:
        self.always_add_line = always_add_line
        self.root = GameNode()
        self.start_fen = STARTING_FEN
        self.position = Position()
        self.result: GameResult | None = None
        self.has_error = False
        self.finalized = False
        self._tags: dict[str, str] = {}
        self._cursor = self.root

    # ── Tags ─────────────────────────────────────────────────────────────

    def set_tag(self, key: str, value: str) -> None:
        """Store a tag pair; ``FEN`` also sets the start position.

        Raises:
            TagError: malformed name, or an unusable ``FEN`` value.
        """
        if not _TAG_NAME_RE.match(key):
            raise TagError(f"Illegal tag name: {key!r}")
        if key == "FEN":
            if self.root.children:
                raise TagError("FEN tag must precede the moves")
            try:
                self.position = position_from_fen(value)
            except ValueError as exc:
                raise TagError(str(exc)) from exc
            self.start_fen = value
        self._tags[key] = value

    def get_tag(self, key: str, default: str | None = None) -> str | None:
        return self._tags.get(key, default)

    @property
    def tags(self) -> dict[str, str]:
        return dict(self._tags)

    # ── Cursor navigation ────────────────────────────────────────────────

    @property
    def current_node(self) -> GameNode:
        return self._cursor

    def goto_node(self, node: GameNode) -> None:
        """Move the cursor to *node* and replay the position up to it."""
        position = position_from_fen(self.start_fen)
        for step in node.path():
            assert step.move is not None
            position.make_move(step.move)
        self.position = position
        self._cursor = node

    def undo_last_move(self) -> bool:
        """Step the cursor back to the parent node. False at the root."""
        node = self._cursor
        if node.parent is None or node.move is None:
            return False
        self.position.unmake_move(node.move)
        self._cursor = node.parent
        return True

    def go_back_to_main_line(self) -> bool:
        """Leave the current variation for the move it is an alternative to.

        Returns ``False`` (cursor unchanged) when already on the main line.
        """
        node: GameNode | None = self._cursor
        while node is not None and not node.starts_variation:
            node = node.parent
        if node is None:
            return False
        assert node.parent is not None
        self.goto_node(node.parent.children[0])
        return True

    def goto_start(self) -> None:
        self.goto_node(self.root)

    # ── Building ─────────────────────────────────────────────────────────

    def apply_move(self, move: Move) -> GameNode:
        """Play *move* from the cursor and advance the cursor onto it."""
        if not self.always_add_line:
            for child in self._cursor.children:
                if child.move == move:
                    self.position.make_move(move)
                    self._cursor = child
                    return child

        node = GameNode(
            move=move,
            san=move_to_san(self.position, move),
            parent=self._cursor,
            ply=self._cursor.ply + 1,
        )
        self._cursor.children.append(node)
        self.position.make_move(move)
        self._cursor = node
        return node

    def add_nag(self, nag: int) -> None:
        if nag not in self._cursor.nags:
            self._cursor.nags.append(nag)

    def add_pre_move_comment(self, text: str) -> None:
        node = self._cursor
        node.pre_move_comment = _join(node.pre_move_comment, text)

    def add_post_move_comment(self, text: str) -> None:
        node = self._cursor
        node.post_move_comment = _join(node.post_move_comment, text)

    def set_error(self, flag: bool = True) -> None:
        self.has_error = flag

    def finalize(self) -> None:
        """Rewind to the start and settle the result.

        A game whose movetext carried no result falls back to its
        ``Result`` tag.
        """
        self.goto_start()
        if self.result is None:
            self.result = GameResult.from_token(self._tags.get("Result", ""))
        self.finalized = True

    # ── Queries ──────────────────────────────────────────────────────────

    def mainline(self) -> list[GameNode]:
        nodes: list[GameNode] = []
        node = self.root
        while node.children:
            node = node.children[0]
            nodes.append(node)
        return nodes

    def mainline_sans(self) -> list[str]:
        return [node.san for node in self.mainline()]

    def walk(self) -> Iterator[GameNode]:
        """All move nodes, depth first, main continuation before variations."""
        stack = list(reversed(self.root.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @property
    def ply_count(self) -> int:
        """Number of half-moves on the main line."""
        return len(self.mainline())

    @property
    def variation_count(self) -> int:
        return sum(1 for node in self.walk() if node.starts_variation)

    def __str__(self) -> str:
        white = self._tags.get("White", "?")
        black = self._tags.get("Black", "?")
        details = ", ".join(
            self._tags[key] for key in ("Event", "Site", "Date") if key in self._tags
        )
        result = self.result.token if self.result is not None else "*"
        text = f"{white} - {black} {result}"
        if details:
            text += f" ({details})"
        return f"{text}, {self.ply_count} plies"


def _join(existing: str, text: str) -> str:
    return f"{existing} {text}" if existing else text
