"""Resolvers turning expression strings into policy objects.

Resolution runs in two phases. The expression is first parsed into a
CallExpression tree, with no objects built. The tree is then reduced
bottom-up through the registry: children are built before the call that
receives them, and any failure aborts the whole resolution.

There is one resolver per policy family. Load-balancing and reconnection
resolvers accept the full call syntax; the retry resolver accepts a policy
name only and hands out the type's shared instance.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from cqlpolicy.exceptions import MalformedExpressionError
from cqlpolicy.expressions import CallExpression, parse_call_expression
from cqlpolicy.logging.context import resolution_context
from cqlpolicy.policies.base import (
    LoadBalancingPolicy,
    Policy,
    PolicyFamily,
    ReconnectionPolicy,
    RetryPolicy,
)
from cqlpolicy.registry import (
    DEFAULT_NAMESPACE,
    DEFAULT_REGISTRY,
    ParameterKind,
    PolicyRegistry,
    PolicyType,
    TypedValue,
    qualify_name,
)

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"[A-Za-z.]+")


@dataclass
class _PendingCall:
    """A looked-up call whose arguments are still being reduced."""

    call: CallExpression
    policy_type: PolicyType
    values: list[TypedValue] = field(default_factory=list)


class PolicyResolver:
    """Resolves call expressions of one policy family.

    Resolvers hold no mutable state, so one instance can serve any number
    of concurrent callers.
    """

    def __init__(
        self,
        family: PolicyFamily,
        registry: PolicyRegistry = DEFAULT_REGISTRY,
        default_namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        """Initialize the resolver.

        Args:
            family: Policy family this resolver builds.
            registry: Registry to construct policies from.
            default_namespace: Prefix for names that are not dotted.
        """
        self._family = family
        self._registry = registry
        self._default_namespace = default_namespace

    @property
    def family(self) -> PolicyFamily:
        return self._family

    @property
    def registry(self) -> PolicyRegistry:
        return self._registry

    @property
    def default_namespace(self) -> str:
        return self._default_namespace

    def parse(self, expression: str) -> CallExpression:
        """Parse an expression without building anything.

        Raises:
            MalformedExpressionError: If the expression is malformed.
            NumericFormatError: If a numeric argument is invalid.
        """
        return parse_call_expression(expression)

    def resolve(self, expression: str) -> Policy:
        """Parse and build the policy described by ``expression``.

        Args:
            expression: Expression such as "TokenAwarePolicy(RoundRobinPolicy())".

        Returns:
            A new policy object (or a shared instance for retry policies).

        Raises:
            PolicyResolutionError: Any parsing or construction failure.
        """
        with resolution_context(self._family.value, expression):
            tree = self.parse(expression)
            policy = self.build(tree)
            logger.debug("Resolved '%s' to %s", expression, policy.name)
            return policy

    def build(self, call: CallExpression) -> Policy:
        """Build the policy for a parsed call, children first.

        A call's name is looked up before any of its children are built.
        Open calls are kept on an explicit stack, so nesting depth is not
        limited by the interpreter's recursion limit.

        Raises:
            UnknownPolicyError: If a name is not registered for this family.
            NoMatchingConstructorError: If no constructor fits the arguments.
            PolicyConstructionError: If a policy rejects its values.
        """
        stack = [self._open(call)]
        while True:
            current = stack[-1]
            if len(current.values) < len(current.call.arguments):
                argument = current.call.arguments[len(current.values)]
                if argument.is_call:
                    stack.append(self._open(argument.value))
                else:
                    current.values.append(
                        TypedValue(
                            ParameterKind.for_argument(argument.kind), argument.value
                        )
                    )
                continue

            stack.pop()
            policy = self._registry.construct(current.policy_type, current.values)
            if not stack:
                return policy
            stack[-1].values.append(TypedValue(ParameterKind.POLICY, policy))

    def _open(self, call: CallExpression) -> _PendingCall:
        qualified_name = qualify_name(call.name, self._default_namespace)
        policy_type = self._registry.lookup(qualified_name, self._family)
        return _PendingCall(call, policy_type)


class RetryPolicyResolver(PolicyResolver):
    """Resolves retry policy names to their shared instances.

    Only a bare name (optionally dotted) is accepted; retry policies
    cannot be given arguments or children.
    """

    def __init__(
        self,
        registry: PolicyRegistry = DEFAULT_REGISTRY,
        default_namespace: str = DEFAULT_NAMESPACE,
    ) -> None:
        super().__init__(PolicyFamily.RETRY, registry, default_namespace)

    def parse(self, expression: str) -> CallExpression:
        """Parse a retry policy name.

        Raises:
            MalformedExpressionError: If the text is not a bare name.
        """
        name = expression.strip()
        if not _NAME_RE.fullmatch(name):
            if "(" in name:
                message = f"Retry policies take no arguments: '{name}'"
                position = expression.index("(")
            else:
                message = f"Not a policy name: '{name}'"
                position = 0
            raise MalformedExpressionError(
                message, source=expression, position=position
            )
        return CallExpression(name)

    def build(self, call: CallExpression) -> Policy:
        """Return the shared instance of the named retry policy.

        Raises:
            UnknownPolicyError: If the name is not a registered retry policy.
            MissingSingletonError: If the type has no shared instance.
        """
        qualified_name = qualify_name(call.name, self._default_namespace)
        policy_type = self._registry.lookup(qualified_name, self._family)
        return self._registry.singleton(policy_type)


@dataclass(frozen=True)
class PolicyResolvers:
    """One resolver per policy family."""

    load_balancing: PolicyResolver
    retry: RetryPolicyResolver
    reconnection: PolicyResolver

    def for_family(self, family: PolicyFamily) -> PolicyResolver:
        """Return the resolver for ``family``."""
        if family is PolicyFamily.LOAD_BALANCING:
            return self.load_balancing
        if family is PolicyFamily.RETRY:
            return self.retry
        return self.reconnection


def build_resolvers(
    registry: PolicyRegistry = DEFAULT_REGISTRY,
    default_namespace: str = DEFAULT_NAMESPACE,
) -> PolicyResolvers:
    """Create the three resolvers over one registry and namespace."""
    return PolicyResolvers(
        load_balancing=PolicyResolver(
            PolicyFamily.LOAD_BALANCING, registry, default_namespace
        ),
        retry=RetryPolicyResolver(registry, default_namespace),
        reconnection=PolicyResolver(
            PolicyFamily.RECONNECTION, registry, default_namespace
        ),
    )


_DEFAULT_RESOLVERS = build_resolvers()


def resolve_load_balancing_policy(expression: str) -> LoadBalancingPolicy:
    """Resolve a load-balancing expression with the default registry."""
    return _DEFAULT_RESOLVERS.load_balancing.resolve(expression)  # type: ignore[return-value]


def resolve_retry_policy(expression: str) -> RetryPolicy:
    """Resolve a retry policy name with the default registry."""
    return _DEFAULT_RESOLVERS.retry.resolve(expression)  # type: ignore[return-value]


def resolve_reconnection_policy(expression: str) -> ReconnectionPolicy:
    """Resolve a reconnection expression with the default registry."""
    return _DEFAULT_RESOLVERS.reconnection.resolve(expression)  # type: ignore[return-value]
