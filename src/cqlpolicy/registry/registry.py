"""Read-only registry of constructible policies.

A PolicyRegistry is assembled once with a RegistryBuilder and never changes
afterwards; resolvers on any thread can share it. To add policies, build a
new registry from an existing one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType

from cqlpolicy.exceptions import (
    MissingSingletonError,
    NoMatchingConstructorError,
    PolicyConstructionError,
    PolicyFamilyMismatchError,
    UnknownPolicyError,
)
from cqlpolicy.policies.base import Policy, PolicyFamily
from cqlpolicy.registry.entries import PolicyType, TypedValue, format_signature

logger = logging.getLogger(__name__)


def qualify_name(name: str, namespace: str) -> str:
    """Prefix ``name`` with ``namespace`` unless it is already dotted.

    Args:
        name: Policy name from an expression.
        namespace: Default namespace, e.g. "cqlpolicy.policies".

    Returns:
        Fully qualified name.
    """
    if "." in name or not namespace:
        return name
    return f"{namespace}.{name}"


class PolicyRegistry:
    """Immutable mapping of qualified names to policy types."""

    def __init__(self, types: Mapping[str, PolicyType]) -> None:
        self._types: Mapping[str, PolicyType] = MappingProxyType(dict(types))

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self) -> Iterator[PolicyType]:
        return iter(self.types())

    def types(self, family: PolicyFamily | None = None) -> list[PolicyType]:
        """List registered types sorted by name, optionally for one family."""
        return sorted(
            (t for t in self._types.values() if family is None or t.family is family),
            key=lambda t: t.qualified_name,
        )

    def get(self, qualified_name: str) -> PolicyType:
        """Get a policy type by qualified name.

        Raises:
            UnknownPolicyError: If the name is not registered.
        """
        try:
            return self._types[qualified_name]
        except KeyError:
            raise UnknownPolicyError(qualified_name) from None

    def lookup(self, qualified_name: str, family: PolicyFamily) -> PolicyType:
        """Get a policy type that must belong to ``family``.

        Raises:
            UnknownPolicyError: If the name is not registered.
            PolicyFamilyMismatchError: If it belongs to another family.
        """
        policy_type = self.get(qualified_name)
        if policy_type.family is not family:
            raise PolicyFamilyMismatchError(
                qualified_name, family.value, policy_type.family.value
            )
        return policy_type

    def construct(
        self, policy_type: PolicyType, arguments: Sequence[TypedValue]
    ) -> Policy:
        """Build a new policy from reduced arguments.

        The constructor is chosen by exact match of arity and parameter
        kinds, in order. No arguments selects the no-argument constructor.

        Args:
            policy_type: Type to construct.
            arguments: Reduced argument values with their kinds.

        Returns:
            Newly constructed policy.

        Raises:
            NoMatchingConstructorError: If no constructor accepts the kinds.
            PolicyConstructionError: If the policy rejects the values.
        """
        signature = tuple(arg.kind for arg in arguments)
        ctor = policy_type.find_constructor(signature)
        if ctor is None:
            raise NoMatchingConstructorError(
                policy_type.qualified_name,
                format_signature(signature),
                [format_signature(sig) for sig in policy_type.signatures],
            )

        try:
            policy = ctor.build([arg.value for arg in arguments])
        except (ValueError, TypeError) as e:
            raise PolicyConstructionError(policy_type.qualified_name, str(e)) from e

        logger.debug(
            "Constructed %s(%s)",
            policy_type.qualified_name,
            ", ".join(format_signature(signature)),
        )
        return policy

    def singleton(self, policy_type: PolicyType) -> Policy:
        """Return the shared instance of ``policy_type``.

        Raises:
            MissingSingletonError: If the type has no shared instance.
        """
        if policy_type.instance is None:
            raise MissingSingletonError(policy_type.qualified_name)
        return policy_type.instance


class RegistryBuilder:
    """Accumulates policy types, then freezes them into a PolicyRegistry.

    Example:
        builder = RegistryBuilder(DEFAULT_REGISTRY)
        builder.register(PolicyType.from_class(MyPolicy, (), namespace="acme"))
        registry = builder.build()
    """

    def __init__(self, base: PolicyRegistry | None = None) -> None:
        """Initialize the builder.

        Args:
            base: Registry whose types are copied in first.
        """
        self._types: dict[str, PolicyType] = {}
        if base is not None:
            for policy_type in base.types():
                self._types[policy_type.qualified_name] = policy_type

    def register(self, policy_type: PolicyType) -> RegistryBuilder:
        """Add a policy type.

        Raises:
            ValueError: If the qualified name is already registered.
        """
        if policy_type.qualified_name in self._types:
            raise ValueError(f"Policy already registered: {policy_type.qualified_name}")
        self._types[policy_type.qualified_name] = policy_type
        return self

    def build(self) -> PolicyRegistry:
        """Create the immutable registry."""
        registry = PolicyRegistry(self._types)
        logger.debug("Built policy registry with %d type(s)", len(registry))
        return registry
