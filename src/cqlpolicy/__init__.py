"""cqlpolicy - build driver policy objects from configuration strings.

Resolves expressions such as 'TokenAwarePolicy(DCAwareRoundRobinPolicy("dc1"))'
into load-balancing, retry and reconnection policy objects.
"""

from cqlpolicy.exceptions import (
    ExpressionError,
    MalformedExpressionError,
    MissingSingletonError,
    NoMatchingConstructorError,
    NumericFormatError,
    PolicyConstructionError,
    PolicyFamilyMismatchError,
    PolicyResolutionError,
    UnknownPolicyError,
)
from cqlpolicy.resolver import (
    PolicyResolver,
    PolicyResolvers,
    RetryPolicyResolver,
    build_resolvers,
    resolve_load_balancing_policy,
    resolve_reconnection_policy,
    resolve_retry_policy,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Resolvers
    "PolicyResolver",
    "PolicyResolvers",
    "RetryPolicyResolver",
    "build_resolvers",
    "resolve_load_balancing_policy",
    "resolve_reconnection_policy",
    "resolve_retry_policy",
    # Errors
    "ExpressionError",
    "MalformedExpressionError",
    "MissingSingletonError",
    "NoMatchingConstructorError",
    "NumericFormatError",
    "PolicyConstructionError",
    "PolicyFamilyMismatchError",
    "PolicyResolutionError",
    "UnknownPolicyError",
]
