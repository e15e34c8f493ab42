"""CLI command listing the policies the registry can build."""

from __future__ import annotations

import click

from cqlpolicy.cli.expression import FAMILY_CHOICES
from cqlpolicy.cli.output import echo_json
from cqlpolicy.policies import PolicyFamily
from cqlpolicy.registry import PolicyType, format_signature


def _signature_text(signature: tuple[str, ...]) -> str:
    return f"({', '.join(signature)})"


def _policy_type_to_dict(policy_type: PolicyType) -> dict:
    return {
        "name": policy_type.qualified_name,
        "family": policy_type.family.value,
        "signatures": [
            list(format_signature(signature)) for signature in policy_type.signatures
        ],
        "singleton": policy_type.instance is not None,
    }


@click.command("policies")
@click.option(
    "--family",
    type=click.Choice(FAMILY_CHOICES),
    default=None,
    help="Only list policies of this family.",
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def policies_command(ctx: click.Context, family: str | None, output_json: bool) -> None:
    """List registered policy types and the arguments they accept.

    Retry policies are listed as INSTANCE when they expose a shared
    instance; those are the only ones the retry resolver can return.
    """
    registry = ctx.obj["resolvers"].load_balancing.registry
    policy_types = registry.types(PolicyFamily(family) if family else None)

    if output_json:
        echo_json({"policies": [_policy_type_to_dict(t) for t in policy_types]})
        return

    click.echo(f"{'NAME':<36} {'FAMILY':<16} {'ARGUMENTS'}")
    click.echo("-" * 80)
    for policy_type in policy_types:
        forms = [
            _signature_text(format_signature(signature))
            for signature in policy_type.signatures
        ]
        if policy_type.instance is not None:
            forms.append("INSTANCE")
        click.echo(
            f"{policy_type.short_name:<36} {policy_type.family.value:<16} "
            f"{' '.join(forms) or '-'}"
        )

    click.echo()
    click.echo(f"Found {len(policy_types)} policy type(s)")
