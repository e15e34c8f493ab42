"""Configuration management for cqlpolicy.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (CQLPOLICY_*)
3. Config file (~/.cqlpolicy/config.toml)
4. Default values (lowest priority)
"""

from cqlpolicy.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from cqlpolicy.config.env import EnvReader
from cqlpolicy.config.loader import (
    DEFAULT_CONFIG_FILE,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from cqlpolicy.config.models import CqlPolicyConfig, LoggingConfig, ResolverConfig
from cqlpolicy.config.toml_parser import TomlParseError, load_toml_file, parse_toml

__all__ = [
    # Models
    "CqlPolicyConfig",
    "LoggingConfig",
    "ResolverConfig",
    # Loader
    "DEFAULT_CONFIG_FILE",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Layering
    "ConfigBuilder",
    "ConfigSource",
    "EnvReader",
    "source_from_env",
    "source_from_file",
    # TOML
    "TomlParseError",
    "load_toml_file",
    "parse_toml",
]
