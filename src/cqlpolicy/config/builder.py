"""Layered configuration sources.

A ConfigSource holds what one layer (file, environment, CLI flags) says;
ConfigBuilder stacks them and produces a CqlPolicyConfig. Anything no
layer sets falls back to the model defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from cqlpolicy.config.env import EnvReader
from cqlpolicy.config.models import CqlPolicyConfig, LoggingConfig, ResolverConfig


@dataclass
class ConfigSource:
    """Settings from one layer; None means the layer leaves it alone."""

    default_namespace: str | None = None

    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


# ConfigSource field -> LoggingConfig field
_LOGGING_FIELDS = {
    "logging_level": "level",
    "logging_file": "file",
    "logging_format": "format",
    "logging_include_stderr": "include_stderr",
    "logging_max_bytes": "max_bytes",
    "logging_backup_count": "backup_count",
}


class ConfigBuilder:
    """Stacks ConfigSources, later ones winning for the values they set.

    The name of the source that last set each value is remembered so the
    loader can log where a setting came from.

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config), source_name="file")
        builder.apply(source_from_env(reader), source_name="env")
        builder.apply(cli_source, source_name="cli")
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._sources: dict[str, str] = {}

    @property
    def sources(self) -> dict[str, str]:
        """Map of field name to the name of the source that set it."""
        return dict(self._sources)

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Layer ``source`` over everything applied so far.

        Args:
            source: Values from one layer.
            source_name: Label recorded for each value this source sets.
        """
        for source_field in fields(source):
            value = getattr(source, source_field.name)
            if value is not None:
                self._values[source_field.name] = value
                self._sources[source_field.name] = source_name

    def build(self) -> CqlPolicyConfig:
        """Build the final CqlPolicyConfig; unset values keep model defaults.

        Raises:
            ValueError: If a layered value fails model validation.
        """
        logging_values = {
            model_field: self._values[source_field]
            for source_field, model_field in _LOGGING_FIELDS.items()
            if source_field in self._values
        }
        resolver_values: dict[str, Any] = {}
        if "default_namespace" in self._values:
            resolver_values["default_namespace"] = self._values["default_namespace"]
        return CqlPolicyConfig(
            logging=LoggingConfig(**logging_values),
            resolver=ResolverConfig(**resolver_values),
        )


_TOML_TYPE_NAMES = {str: "a string", int: "an integer", bool: "a boolean"}


def source_from_file(file_config: Mapping[str, Any]) -> ConfigSource:
    """Read the ``[resolver]`` and ``[logging]`` tables of a parsed TOML file.

    Unknown keys are ignored.

    Raises:
        ValueError: If a table or value has the wrong TOML type.
    """
    resolver = _table(file_config, "resolver")
    log = _table(file_config, "logging")
    log_file = _value(log, "logging", "file", str)

    return ConfigSource(
        default_namespace=_value(resolver, "resolver", "default_namespace", str),
        logging_level=_value(log, "logging", "level", str),
        logging_file=Path(log_file).expanduser() if log_file else None,
        logging_format=_value(log, "logging", "format", str),
        logging_include_stderr=_value(log, "logging", "include_stderr", bool),
        logging_max_bytes=_value(log, "logging", "max_bytes", int),
        logging_backup_count=_value(log, "logging", "backup_count", int),
    )


def _table(file_config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    table = file_config.get(name, {})
    if not isinstance(table, Mapping):
        raise ValueError(f"[{name}] must be a table, got {table!r}")
    return table


def _value(table: Mapping[str, Any], table_name: str, key: str, expected: type) -> Any:
    value = table.get(key)
    if value is None:
        return None
    # TOML booleans are not integers
    wrong_bool = expected is not bool and isinstance(value, bool)
    if wrong_bool or not isinstance(value, expected):
        raise ValueError(
            f"[{table_name}] {key} must be {_TOML_TYPE_NAMES[expected]}, "
            f"got {value!r}"
        )
    return value


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from CQLPOLICY_* environment variables.

    Raises:
        ValueError: If an integer or boolean variable cannot be converted.
    """
    return ConfigSource(
        default_namespace=reader.text("DEFAULT_NAMESPACE"),
        logging_level=reader.text("LOG_LEVEL"),
        logging_file=reader.path("LOG_FILE"),
        logging_format=reader.text("LOG_FORMAT"),
        logging_include_stderr=reader.flag("LOG_INCLUDE_STDERR"),
        logging_max_bytes=reader.integer("LOG_MAX_BYTES"),
        logging_backup_count=reader.integer("LOG_BACKUP_COUNT"),
    )
