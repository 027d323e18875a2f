from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from envlines.environment.process_env import Environment, OsEnvironment
from envlines.parser.errors import ParseError
from envlines.parser.line_parser import parse
from envlines.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_FILENAME = ".env"


@dataclass
class LoaderConfig:
    default_filename: str = DEFAULT_FILENAME
    encoding: str = "utf-8"
    # Undecodable bytes survive as lone surrogates; os.environ turns them back into the same bytes.
    errors: str = "surrogateescape"


def _resolve(filenames: Sequence[str | Path], config: LoaderConfig) -> List[Path]:
    if not filenames:
        return [Path(config.default_filename)]
    return [Path(name) for name in filenames]


def _read_file(path: Path, config: LoaderConfig) -> Dict[str, str]:
    # OSError from open() propagates untouched.
    with path.open("r", encoding=config.encoding, errors=config.errors) as f:
        try:
            values = parse(f, source=str(path))
        except ParseError as exc:
            logger.warning("env_parse_failed", path=str(path), lineno=exc.lineno, error=type(exc).__name__)
            raise
    logger.debug("env_file_parsed", path=str(path), keys=len(values))
    return values


def read(*filenames: str | Path, config: Optional[LoaderConfig] = None) -> Dict[str, str]:
    """Parse env files in order and merge them without touching the environment.

    With no filenames the default ``.env`` in the working directory is read.
    A key defined by several files keeps the value from the first one.
    """
    cfg = config or LoaderConfig()
    return _read_paths(_resolve(filenames, cfg), cfg)


def _read_paths(paths: List[Path], config: LoaderConfig) -> Dict[str, str]:
    merged: Dict[str, str] = {}
    for path in paths:
        for key, value in _read_file(path, config).items():
            merged.setdefault(key, value)
    return merged


def load(
    *filenames: str | Path,
    config: Optional[LoaderConfig] = None,
    environ: Optional[Environment] = None,
) -> None:
    """Read env file(s) and set their variables in the process environment.

    Call this as close as possible to program start. Existing variables are
    never overridden, so env files act as development values or defaults.
    Nothing is applied unless every file opens and parses.
    """
    cfg = config or LoaderConfig()
    env = environ if environ is not None else OsEnvironment()
    paths = _resolve(filenames, cfg)
    values = _read_paths(paths, cfg)
    applied = 0
    for key, value in values.items():
        if env.set_if_absent(key, value):
            applied += 1
        else:
            logger.debug("env_key_kept", key=key)
    logger.info(
        "env_loaded",
        files=[str(p) for p in paths],
        keys=len(values),
        applied=applied,
        skipped=len(values) - applied,
    )
