"""Opening PGN files: plain, gzip-compressed or inside a zip archive."""

from __future__ import annotations

import gzip
import io
import logging
import zipfile
from pathlib import Path
from typing import TextIO

_LOGGER = logging.getLogger(__name__)

ENCODING = "utf-8"


def is_pgn_file(name: str | Path | None) -> bool:
    return name is not None and str(name).lower().endswith(".pgn")


def is_pgn_file_or_zipped(name: str | Path | None) -> bool:
    if name is None:
        return False
    return str(name).lower().endswith((".pgn", ".pgn.gz", ".zip"))


def open_pgn_text(path: str | Path) -> TextIO:
    """Open *path* for reading as PGN text.

    ``.gz`` files are decompressed on the fly; for ``.zip`` archives the
    first ``.pgn`` member is read. Undecodable bytes are replaced rather
    than failing the whole file.

    Raises:
        OSError: the file cannot be opened.
        ValueError: a zip archive holds no ``.pgn`` member.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".gz":
        return gzip.open(path, "rt", encoding=ENCODING, errors="replace")

    if suffix == ".zip":
        archive = zipfile.ZipFile(path)
        try:
            member = next(
                (info for info in archive.infolist() if is_pgn_file(info.filename)),
                None,
            )
            if member is None:
                raise ValueError(f"No .pgn file in archive: {path}")
            _LOGGER.debug("Reading %s from %s", member.filename, path)
            raw = archive.open(member)
        finally:
            # The member stream keeps the archive file open until it is closed.
            archive.close()
        return io.TextIOWrapper(raw, encoding=ENCODING, errors="replace")

    return open(path, encoding=ENCODING, errors="replace")
