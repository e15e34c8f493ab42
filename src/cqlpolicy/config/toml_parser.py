"""TOML parsing for configuration files."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class TomlParseError(Exception):
    """Raised when a config file exists but cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load TOML file {path}: {reason}")


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML content into a dictionary.

    Raises:
        tomllib.TOMLDecodeError: If the content is not valid TOML.
    """
    return tomllib.loads(content)


def load_toml_file(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file.

    Returns:
        Parsed dictionary, or an empty dict if the file doesn't exist.

    Raises:
        TomlParseError: If the file exists but cannot be read or parsed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No config file at %s", path)
        return {}
    except (OSError, UnicodeDecodeError) as e:
        raise TomlParseError(path, str(e)) from e

    try:
        config = parse_toml(content)
    except tomllib.TOMLDecodeError as e:
        raise TomlParseError(path, str(e)) from e

    logger.debug("Loaded config from %s", path)
    return config
