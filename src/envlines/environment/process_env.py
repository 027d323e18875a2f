from __future__ import annotations

import os
from typing import Dict, MutableMapping, Optional, Protocol

from envlines.parser.errors import EnvironmentSetError


class Environment(Protocol):
    """Key/value store that loaded pairs are applied to."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set_if_absent(self, key: str, value: str) -> bool:
        """Store ``value`` unless ``key`` is already present. Returns True if written."""
        ...


class OsEnvironment:
    """The real process environment.

    Not synchronised: load it once, early, before other threads touch ``os.environ``.
    """

    def __init__(self, environ: Optional[MutableMapping[str, str]] = None) -> None:
        self.environ = os.environ if environ is None else environ

    def get(self, key: str) -> Optional[str]:
        return self.environ.get(key)

    def set_if_absent(self, key: str, value: str) -> bool:
        if key in self.environ:
            return False
        try:
            self.environ[key] = value
        except (OSError, ValueError) as exc:
            raise EnvironmentSetError(key) from exc
        return True


class MemoryEnvironment:
    """Dict-backed environment for tests and dry runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set_if_absent(self, key: str, value: str) -> bool:
        if key in self._values:
            return False
        self._values[key] = value
        return True

    def as_dict(self) -> Dict[str, str]:
        return dict(self._values)
