"""Syntax diagnostics and the handlers that receive them."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Protocol


class Severity(IntEnum):
    ERROR = 0
    WARNING = 1

    def __str__(self) -> str:
        return self.name.lower()


class PgnSyntaxError(Exception):
    """A problem found while reading PGN text.

    Errors abort the game being read; warnings are only reported to the
    installed :class:`ErrorHandler`.
    """

    def __init__(
        self,
        severity: Severity,
        message: str,
        source_name: str | None,
        line_number: int,
        last_token: str,
    ) -> None:
        super().__init__(message)
        self.severity = severity
        self.message = message
        self.source_name = source_name
        self.line_number = line_number
        self.last_token = last_token

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def __str__(self) -> str:
        source = self.source_name or "<pgn>"
        return (
            f"{source}:{self.line_number}: {self.severity!s}: {self.message}"
            f" (last token: {self.last_token})"
        )


class ErrorHandler(Protocol):
    """Receives diagnostics as they are produced."""

    def handle_error(self, error: PgnSyntaxError) -> None: ...

    def handle_warning(self, warning: PgnSyntaxError) -> None: ...


class LoggingErrorHandler:
    """Forwards diagnostics to a :mod:`logging` logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("pgnreader.diagnostics")

    def handle_error(self, error: PgnSyntaxError) -> None:
        self._logger.error("%s", error)

    def handle_warning(self, warning: PgnSyntaxError) -> None:
        self._logger.warning("%s", warning)


class CollectingErrorHandler:
    """Keeps every diagnostic; handy for batch reports and tests."""

    def __init__(self) -> None:
        self.errors: list[PgnSyntaxError] = []
        self.warnings: list[PgnSyntaxError] = []

    def handle_error(self, error: PgnSyntaxError) -> None:
        self.errors.append(error)

    def handle_warning(self, warning: PgnSyntaxError) -> None:
        self.warnings.append(warning)
