from __future__ import annotations

from typing import Optional


class EnvLinesError(Exception):
    """Base class for every error raised by envlines."""


class ParseError(EnvLinesError, ValueError):
    """A line of env input could not be turned into a key/value pair."""

    reason = "invalid line"

    def __init__(self, lineno: int, line: str, source: Optional[str] = None) -> None:
        self.lineno = lineno
        self.line = line
        self.source = source
        where = f"{source}:{lineno}" if source else f"line {lineno}"
        super().__init__(f"{where}: {self.reason}: {line!r}")


class NoSeparatorError(ParseError):
    reason = "line is not a key value pair"


class InvalidPairError(ParseError):
    reason = "key or value is empty"


class EnvironmentSetError(EnvLinesError, RuntimeError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"unable to set environment variable {key!r}")
