"""The default registry of built-in driver policies."""

from __future__ import annotations

from datetime import timedelta

from cqlpolicy.policies import (
    ConstantReconnectionPolicy,
    DCAwareRoundRobinPolicy,
    DefaultRetryPolicy,
    DowngradingConsistencyRetryPolicy,
    ExponentialReconnectionPolicy,
    FallthroughRetryPolicy,
    LatencyAwarePolicy,
    LoggingRetryPolicy,
    PolicyFamily,
    RoundRobinPolicy,
    TokenAwarePolicy,
)
from cqlpolicy.registry.entries import (
    BuilderStep,
    FixedPositionalConstructor,
    ParameterKind,
    PolicyType,
)
from cqlpolicy.registry.registry import PolicyRegistry, RegistryBuilder

# Namespace prefixed to names that are not already dotted
DEFAULT_NAMESPACE = "cqlpolicy.policies"

POLICY = ParameterKind.POLICY
STRING = ParameterKind.STRING
DOUBLE = ParameterKind.DOUBLE
LONG = ParameterKind.LONG
INT = ParameterKind.INT


def _milliseconds(value: int) -> timedelta:
    return timedelta(milliseconds=value)


# LatencyAwarePolicy(child, threshold, scale_ms, retry_period_ms,
#                    update_rate_ms, minimum_measurements)
LATENCY_AWARE_CONTRACT = FixedPositionalConstructor(
    builder=LatencyAwarePolicy.builder,
    first=POLICY,
    steps=(
        BuilderStep(DOUBLE, "with_exclusion_threshold"),
        BuilderStep(LONG, "with_scale", _milliseconds),
        BuilderStep(LONG, "with_retry_period", _milliseconds),
        BuilderStep(LONG, "with_update_rate", _milliseconds),
        BuilderStep(INT, "with_minimum_measurements"),
    ),
)


def build_default_registry(namespace: str = DEFAULT_NAMESPACE) -> PolicyRegistry:
    """Build the registry of built-in policies.

    Args:
        namespace: Namespace the built-in types are registered under.

    Returns:
        Immutable registry.
    """
    builder = RegistryBuilder()

    # Load balancing
    builder.register(PolicyType.from_class(RoundRobinPolicy, (), namespace=namespace))
    builder.register(
        PolicyType.from_class(
            DCAwareRoundRobinPolicy,
            (),
            (STRING,),
            (STRING, INT),
            namespace=namespace,
        )
    )
    builder.register(
        PolicyType.from_class(TokenAwarePolicy, (POLICY,), namespace=namespace)
    )
    builder.register(
        PolicyType(
            qualified_name=f"{namespace}.{LatencyAwarePolicy.__name__}",
            family=PolicyFamily.LOAD_BALANCING,
            constructors=(LATENCY_AWARE_CONTRACT,),
        )
    )

    # Retry
    for retry_class in (
        DefaultRetryPolicy,
        DowngradingConsistencyRetryPolicy,
        FallthroughRetryPolicy,
    ):
        builder.register(
            PolicyType.from_class(
                retry_class, namespace=namespace, instance=retry_class.INSTANCE
            )
        )
    # no constructors: retry expressions are bare names
    builder.register(PolicyType.from_class(LoggingRetryPolicy, namespace=namespace))

    # Reconnection
    builder.register(
        PolicyType.from_class(ConstantReconnectionPolicy, (LONG,), namespace=namespace)
    )
    builder.register(
        PolicyType.from_class(
            ExponentialReconnectionPolicy, (LONG, LONG), namespace=namespace
        )
    )

    return builder.build()


DEFAULT_REGISTRY = build_default_registry()
