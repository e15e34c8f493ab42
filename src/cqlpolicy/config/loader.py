"""Configuration loading with precedence handling.

Each layer is turned into a ConfigSource and applied in order, later
layers winning:

1. Config file (``[resolver]`` and ``[logging]`` tables)
2. Environment variables (CQLPOLICY_DEFAULT_NAMESPACE, CQLPOLICY_LOG_*)
3. Overrides given by the caller, normally the CLI flags

Values no layer sets keep their model defaults. The file location is
CQLPOLICY_CONFIG_PATH when set, else ~/.cqlpolicy/config.toml.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

from cqlpolicy.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from cqlpolicy.config.env import EnvReader
from cqlpolicy.config.models import CqlPolicyConfig
from cqlpolicy.config.toml_parser import TomlParseError, load_toml_file

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".cqlpolicy"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# path -> (parsed dict, mtime or None for a missing file)
_config_cache: dict[Path, tuple[dict[str, Any], float | None]] = {}
_config_cache_lock = threading.Lock()


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Config file location: CQLPOLICY_CONFIG_PATH, else the default file."""
    reader = env_reader or EnvReader()
    return reader.path("CONFIG_PATH") or DEFAULT_CONFIG_FILE


def load_config_file(
    path: Path | None = None, *, strict: bool = False
) -> dict[str, Any]:
    """Load the TOML config file, reusing the last read while it is unchanged.

    Only successful reads are cached, so a broken file is read (and
    reported) again on every call until it is fixed.

    Args:
        path: Path to config file. If None, uses the default location.
        strict: If True, raise TomlParseError when the file cannot be read
            or parsed. Otherwise log a warning and return an empty dict.

    Returns:
        Parsed configuration dict; empty if the file doesn't exist.

    Raises:
        TomlParseError: When strict=True and the file cannot be parsed.
    """
    if path is None:
        path = get_default_config_path()

    try:
        mtime: float | None = path.stat().st_mtime
    except FileNotFoundError:
        mtime = None

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == mtime:
            return cached[0]

        try:
            result = load_toml_file(path)
        except TomlParseError as e:
            _config_cache.pop(path, None)
            if strict:
                raise
            logger.warning("Ignoring config file: %s", e)
            return {}

        _config_cache[path] = (result, mtime)
        return result


def clear_config_cache() -> None:
    """Forget every cached config file."""
    with _config_cache_lock:
        _config_cache.clear()


def get_config(
    config_path: Path | None = None,
    overrides: ConfigSource | None = None,
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> CqlPolicyConfig:
    """Merge config file, environment and overrides into a CqlPolicyConfig.

    Args:
        config_path: Config file to read instead of the default location.
        overrides: Highest-precedence values, normally from CLI flags.
        env_reader: Reader for CQLPOLICY_* variables (os.environ if None).
        strict: If True, an unreadable config file raises instead of being
            ignored.

    Raises:
        TomlParseError: When strict=True and the config file cannot be parsed.
        ValueError: If any layer holds a value of the wrong type or one that
            fails validation.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)

    builder = ConfigBuilder()
    builder.apply(source_from_file(load_config_file(path, strict=strict)), "file")
    builder.apply(source_from_env(reader), "env")
    if overrides is not None:
        builder.apply(overrides, "cli")

    for key, source_name in sorted(builder.sources.items()):
        logger.debug("Config %s set from %s", key, source_name)

    return builder.build()
