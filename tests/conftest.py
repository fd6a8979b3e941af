"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from pgnreader.game import Game
from pgnreader.pgn import CollectingErrorHandler, PgnReader, ReaderConfig

ReadGames = Callable[..., list[Game]]


@pytest.fixture
def handler() -> CollectingErrorHandler:
    """Collects the diagnostics of one test."""
    return CollectingErrorHandler()


@pytest.fixture
def make_reader(handler: CollectingErrorHandler) -> Callable[..., PgnReader]:
    """Build a reader over a string, wired to :func:`handler`."""

    def _make(text: str, config: ReaderConfig | None = None) -> PgnReader:
        reader = PgnReader.from_string(text, "test.pgn", config)
        reader.set_error_handler(handler)
        return reader

    return _make


@pytest.fixture
def read_games(make_reader: Callable[..., PgnReader]) -> ReadGames:
    """Parse every game of a PGN string."""

    def _read(text: str, config: ReaderConfig | None = None) -> list[Game]:
        return list(make_reader(text, config).games())

    return _read
