"""CLI module for cqlpolicy."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from cqlpolicy.cli.exit_codes import ExitCode
from cqlpolicy.cli.output import error_exit
from cqlpolicy.config import ConfigSource, CqlPolicyConfig, TomlParseError, get_config
from cqlpolicy.logging import configure_logging

logger = logging.getLogger(__name__)


def _load_config(
    config_path: Path | None, overrides: ConfigSource
) -> CqlPolicyConfig:
    """Load configuration, exiting with CONFIG_ERROR if it is invalid."""
    try:
        return get_config(config_path, overrides, strict=True)
    except TomlParseError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)
    except ValueError as e:
        error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR)


@click.group()
@click.version_option(package_name="cqlpolicy")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.cqlpolicy/config.toml).",
)
@click.option(
    "--namespace",
    default=None,
    help="Namespace prefixed to undotted policy names.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    namespace: str | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """cqlpolicy - Build driver policies from configuration expressions."""
    from cqlpolicy.resolver import build_resolvers

    ctx.ensure_object(dict)

    overrides = ConfigSource(
        default_namespace=namespace,
        logging_level=log_level,
        logging_file=log_file,
        logging_format="json" if log_json else None,
    )
    config = _load_config(config_path, overrides)
    configure_logging(config.logging)
    logger.debug(
        "cqlpolicy starting: default_namespace=%s, log_level=%s",
        config.resolver.default_namespace,
        config.logging.level,
    )

    ctx.obj["config"] = config
    # Preserve resolvers injected by tests
    if "resolvers" not in ctx.obj:
        ctx.obj["resolvers"] = build_resolvers(
            default_namespace=config.resolver.default_namespace
        )


# Defer import to avoid circular dependency
def _register_commands():
    from cqlpolicy.cli.expression import parse_command, resolve_command
    from cqlpolicy.cli.policies import policies_command

    main.add_command(parse_command)
    main.add_command(resolve_command)
    main.add_command(policies_command)


_register_commands()
