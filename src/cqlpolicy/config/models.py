"""Configuration data models.

This module defines dataclasses for cqlpolicy configuration options.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from cqlpolicy.registry import DEFAULT_NAMESPACE

_NAMESPACE_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*")


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )
        if self.max_bytes < 0:
            raise ValueError(f"max_bytes must be >= 0, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(f"backup_count must be >= 0, got {self.backup_count}")


@dataclass
class ResolverConfig:
    """Configuration for policy resolution."""

    default_namespace: str = DEFAULT_NAMESPACE
    """Namespace prefixed to policy names that are not already dotted."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not _NAMESPACE_RE.fullmatch(self.default_namespace):
            raise ValueError(
                "default_namespace must be a dotted name, "
                f"got {self.default_namespace!r}"
            )


@dataclass
class CqlPolicyConfig:
    """Main configuration for cqlpolicy."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
