"""Driver policy implementations.

These are the classes the default registry knows how to build. Their
qualified names live under the ``cqlpolicy.policies`` namespace, which is
the default namespace applied to bare names in expressions.
"""

from cqlpolicy.policies.base import (
    LoadBalancingPolicy,
    Policy,
    PolicyFamily,
    ReconnectionPolicy,
    RetryPolicy,
)
from cqlpolicy.policies.load_balancing import (
    DCAwareRoundRobinPolicy,
    LatencyAwarePolicy,
    LatencyAwarePolicyBuilder,
    RoundRobinPolicy,
    TokenAwarePolicy,
)
from cqlpolicy.policies.reconnection import (
    ConstantReconnectionPolicy,
    ExponentialReconnectionPolicy,
)
from cqlpolicy.policies.retry import (
    DefaultRetryPolicy,
    DowngradingConsistencyRetryPolicy,
    FallthroughRetryPolicy,
    LoggingRetryPolicy,
)

__all__ = [
    # Base classes
    "LoadBalancingPolicy",
    "Policy",
    "PolicyFamily",
    "ReconnectionPolicy",
    "RetryPolicy",
    # Load balancing
    "DCAwareRoundRobinPolicy",
    "LatencyAwarePolicy",
    "LatencyAwarePolicyBuilder",
    "RoundRobinPolicy",
    "TokenAwarePolicy",
    # Reconnection
    "ConstantReconnectionPolicy",
    "ExponentialReconnectionPolicy",
    # Retry
    "DefaultRetryPolicy",
    "DowngradingConsistencyRetryPolicy",
    "FallthroughRetryPolicy",
    "LoggingRetryPolicy",
]
