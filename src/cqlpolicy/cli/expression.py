"""CLI commands for parsing and resolving policy expressions."""

from __future__ import annotations

import itertools
from collections.abc import Iterator

import click

from cqlpolicy.cli.exit_codes import ExitCode
from cqlpolicy.cli.output import echo_json, error_exit, resolution_error_exit
from cqlpolicy.exceptions import PolicyResolutionError
from cqlpolicy.expressions import CallExpression, parse_call_expression
from cqlpolicy.policies import PolicyFamily, ReconnectionPolicy

FAMILY_CHOICES = [family.value for family in PolicyFamily]

_TOO_DEEP = "Result is nested too deeply to display"


def _render_tree(call: CallExpression) -> Iterator[str]:
    """Yield one line per node of a call tree, indented by depth."""
    pending: list[tuple[int, CallExpression | str]] = [(0, call)]
    while pending:
        indent, item = pending.pop()
        pad = "  " * indent
        if isinstance(item, str):
            yield f"{pad}{item}"
            continue
        yield f"{pad}{item.name}"
        lines: list[tuple[int, CallExpression | str]] = []
        for argument in item.arguments:
            if argument.is_call:
                lines.append((indent + 1, argument.value))
            else:
                lines.append(
                    (indent + 1, f"{argument.value!r} ({argument.kind.value})")
                )
        pending.extend(reversed(lines))


@click.command("parse")
@click.argument("expression")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def parse_command(expression: str, output_json: bool) -> None:
    """Parse EXPRESSION and print its call tree without building anything.

    Examples:

        cqlpolicy parse 'TokenAwarePolicy(DCAwareRoundRobinPolicy("dc1"))'

        cqlpolicy parse 'ExponentialReconnectionPolicy((long)10,(long)100)' --json
    """
    try:
        tree = parse_call_expression(expression)
    except PolicyResolutionError as e:
        resolution_error_exit(e, output_json)

    if output_json:
        try:
            echo_json(tree.to_dict())
        except RecursionError:
            error_exit(_TOO_DEEP, ExitCode.GENERAL_ERROR, json_output=True)
        return

    for line in _render_tree(tree):
        click.echo(line)


@click.command("resolve")
@click.argument("family", type=click.Choice(FAMILY_CHOICES))
@click.argument("expression")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.option(
    "--schedule",
    "schedule_count",
    type=click.IntRange(min=1),
    default=None,
    help="Also show the first N delays of a reconnection policy.",
)
@click.pass_context
def resolve_command(
    ctx: click.Context,
    family: str,
    expression: str,
    output_json: bool,
    schedule_count: int | None,
) -> None:
    """Resolve EXPRESSION into a policy of FAMILY and describe it.

    FAMILY is one of load-balancing, retry or reconnection.

    Exit codes:
        0: Expression resolved
        10-11: Expression is malformed or has a bad number
        20-23: No policy could be built from it

    Examples:

        cqlpolicy resolve load-balancing 'TokenAwarePolicy(RoundRobinPolicy())'

        cqlpolicy resolve retry DefaultRetryPolicy

        cqlpolicy resolve reconnection 'ConstantReconnectionPolicy((long)500)'
    """
    policy_family = PolicyFamily(family)
    if schedule_count is not None and policy_family is not PolicyFamily.RECONNECTION:
        raise click.UsageError("--schedule applies to reconnection policies only")

    resolver = ctx.obj["resolvers"].for_family(policy_family)
    try:
        policy = resolver.resolve(expression)
    except PolicyResolutionError as e:
        resolution_error_exit(e, output_json)

    schedule: list[int] | None = None
    if schedule_count is not None and isinstance(policy, ReconnectionPolicy):
        schedule = list(itertools.islice(policy.new_schedule(), schedule_count))

    if output_json:
        try:
            output = {
                "family": policy_family.value,
                "expression": expression,
                "policy": policy.describe(),
            }
            if schedule is not None:
                output["schedule"] = schedule
            echo_json(output)
        except RecursionError:
            error_exit(_TOO_DEEP, ExitCode.GENERAL_ERROR, json_output=True)
        return

    try:
        click.echo(repr(policy))
    except RecursionError:
        error_exit(_TOO_DEEP, ExitCode.GENERAL_ERROR)
    if schedule is not None:
        click.echo("Schedule (ms): " + ", ".join(str(delay) for delay in schedule))
