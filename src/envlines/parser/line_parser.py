from __future__ import annotations

import io
from typing import Dict, Iterable, Optional, Tuple

from envlines.parser.errors import InvalidPairError, NoSeparatorError

EXPORT_PREFIX = "export"
COMMENT = "#"
SEPARATORS = ("=", ":")  # in order of preference


def parse(stream: Iterable[str], source: Optional[str] = None) -> Dict[str, str]:
    """Parse env declarations from a text stream into a fresh dict.

    Accepts anything that iterates over lines: an open text file, ``io.StringIO``
    or a plain list of strings. Blank lines and lines starting with ``#`` are
    skipped. The first malformed line raises and nothing is returned.
    """
    if isinstance(stream, str):
        raise TypeError("parse() expects a stream of lines, use unmarshal() for a string")
    out: Dict[str, str] = {}
    for lineno, raw in enumerate(stream, start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT):
            continue
        key, val = _split_line(line, lineno, source)
        out[key] = val
    return out


def unmarshal(text: str, source: Optional[str] = None) -> Dict[str, str]:
    """Parse env declarations held in a string."""
    return parse(io.StringIO(text), source=source)


def _split_line(line: str, lineno: int, source: Optional[str]) -> Tuple[str, str]:
    sep = next((s for s in SEPARATORS if s in line), None)
    if sep is None:
        raise NoSeparatorError(lineno, line, source)
    key, val = line.split(sep, 1)
    # No word boundary: "exportFOO=1" yields key "FOO".
    if key.startswith(EXPORT_PREFIX):
        key = key[len(EXPORT_PREFIX) :]
    if COMMENT in val:
        val = val[: val.index(COMMENT)]
    key = key.strip()
    val = val.strip()
    if not key or not val:
        raise InvalidPairError(lineno, line, source)
    return key, val
