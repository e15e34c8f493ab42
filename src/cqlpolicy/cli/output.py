"""CLI output formatting for JSON and human-readable output."""

from __future__ import annotations

import json
import sys
from typing import Any, NoReturn

import click

from cqlpolicy.cli.exit_codes import ExitCode, exit_code_for
from cqlpolicy.exceptions import ExpressionError, PolicyResolutionError


def echo_json(data: Any) -> None:
    """Print ``data`` as indented JSON on stdout."""
    click.echo(json.dumps(data, indent=2))


def error_exit(
    message: str,
    code: ExitCode,
    json_output: bool = False,
) -> NoReturn:
    """Exit with formatted error message.

    Args:
        message: Error message to display.
        code: Exit code to use.
        json_output: Whether to format output as JSON.
    """
    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed",
                    "error": {
                        "code": code.name,
                        "message": message,
                    },
                }
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(int(code))


def resolution_error_exit(
    error: PolicyResolutionError, json_output: bool = False
) -> NoReturn:
    """Exit for a resolution failure with its mapped exit code.

    Expression errors are shown with a caret under the failing position.
    """
    if isinstance(error, ExpressionError) and not json_output:
        message = error.format_error()
    else:
        message = str(error)
    error_exit(message, exit_code_for(error), json_output)
