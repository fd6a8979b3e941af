"""Command-line batch reader: ``python -m pgnreader [mode] FILE...``."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence

from pgnreader.core.enums import GameResult
from pgnreader.pgn.errors import LoggingErrorHandler
from pgnreader.pgn.lexer import TokenKind
from pgnreader.pgn.reader import PgnReader

_LOGGER = logging.getLogger(__name__)

_FINISHED = (GameResult.WHITE_WINS, GameResult.BLACK_WINS, GameResult.DRAW)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pgnreader",
        description="Read PGN files (.pgn, .pgn.gz, .zip) and report on their games.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--chars",
        dest="mode",
        action="store_const",
        const="chars",
        help="print the character stream after line folding and escape removal",
    )
    mode.add_argument(
        "--tokens",
        dest="mode",
        action="store_const",
        const="tokens",
        help="print one token per line",
    )
    mode.add_argument(
        "--direct",
        dest="mode",
        action="store_const",
        const="direct",
        help="parse games (default)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="print every game instead of dots"
    )
    parser.add_argument("files", nargs="+", metavar="FILE", help="PGN files to read")
    parser.set_defaults(mode="direct")
    return parser


def dump_chars(reader: PgnReader) -> None:
    lexer = reader.lexer
    while (ch := lexer.next_char()) != "":
        print(ch)


def dump_tokens(reader: PgnReader) -> None:
    lexer = reader.lexer
    while lexer.next_token() != TokenKind.EOF:
        print(lexer.describe_token())
    print(lexer.describe_token())


def read_games(reader: PgnReader, verbose: bool = False) -> tuple[int, int]:
    """Parse every game; return ``(games, games_with_result)``."""
    games = with_result = 0
    for game in reader.games():
        if verbose:
            print(game)
        else:
            print(".", end="", flush=True)
        games += 1
        if game.result in _FINISHED:
            with_result += 1
    if not verbose:
        print()
    return games, with_result


def _run_file(path: str, mode: str, verbose: bool) -> None:
    with PgnReader.from_path(path) as reader:
        reader.set_error_handler(LoggingErrorHandler())
        if mode == "chars":
            dump_chars(reader)
            return
        if mode == "tokens":
            dump_tokens(reader)
            return

        start = time.perf_counter()
        games, with_result = read_games(reader, verbose)
        elapsed = time.perf_counter() - start
    print(f"{games} games found, {with_result} with result")
    rate = games / elapsed if elapsed > 0 else 0.0
    print(f"{elapsed * 1000:.0f}ms  {rate:.0f} games / s")


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    status = 0
    for path in args.files:
        _LOGGER.info("Reading %s", path)
        try:
            _run_file(path, args.mode, args.verbose)
        except (OSError, ValueError) as exc:
            _LOGGER.error("Cannot read %s: %s", path, exc)
            status = 1
    return status


if __name__ == "__main__":
    sys.exit(main())
