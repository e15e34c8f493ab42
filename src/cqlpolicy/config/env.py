"""Access to CQLPOLICY_* environment variables.

Variables are addressed by the part after the prefix, so
``EnvReader().integer("LOG_MAX_BYTES")`` reads ``CQLPOLICY_LOG_MAX_BYTES``.
Tests hand EnvReader a plain dict instead of patching os.environ.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

ENV_PREFIX = "CQLPOLICY_"

_TRUE_WORDS = frozenset({"true", "1", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "0", "no", "off"})


class EnvReader:
    """Typed reads of CQLPOLICY_* variables.

    Unset and blank variables read as None. A variable that is set but
    cannot be converted raises ValueError naming the variable, so a bad
    value in the environment fails the same way as one in the config file.
    """

    def __init__(
        self, env: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX
    ) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env
        self._prefix = prefix

    def variable(self, key: str) -> str:
        """Full variable name for ``key``."""
        return self._prefix + key

    def text(self, key: str) -> str | None:
        value = self._env.get(self.variable(key), "").strip()
        return value or None

    def integer(self, key: str) -> int | None:
        value = self.text(key)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            raise ValueError(
                f"{self.variable(key)} must be an integer, got {value!r}"
            ) from None

    def flag(self, key: str) -> bool | None:
        value = self.text(key)
        if value is None:
            return None
        word = value.lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"{self.variable(key)} must be true or false, got {value!r}")

    def path(self, key: str) -> Path | None:
        """Path with ``~`` expanded; the path does not need to exist."""
        value = self.text(key)
        return Path(value).expanduser() if value is not None else None
