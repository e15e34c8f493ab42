"""Construction registry for driver policies.

Maps qualified policy names and argument-kind signatures to factories.
The default registry is built once at import and is read-only.
"""

from cqlpolicy.registry.defaults import (
    DEFAULT_NAMESPACE,
    DEFAULT_REGISTRY,
    LATENCY_AWARE_CONTRACT,
    build_default_registry,
)
from cqlpolicy.registry.entries import (
    BuilderStep,
    Constructor,
    FixedPositionalConstructor,
    GenericConstructor,
    ParameterKind,
    PolicyType,
    Signature,
    TypedValue,
    format_signature,
)
from cqlpolicy.registry.registry import PolicyRegistry, RegistryBuilder, qualify_name

__all__ = [
    # Entries
    "BuilderStep",
    "Constructor",
    "FixedPositionalConstructor",
    "GenericConstructor",
    "ParameterKind",
    "PolicyType",
    "Signature",
    "TypedValue",
    "format_signature",
    # Registry
    "PolicyRegistry",
    "RegistryBuilder",
    "qualify_name",
    # Defaults
    "DEFAULT_NAMESPACE",
    "DEFAULT_REGISTRY",
    "LATENCY_AWARE_CONTRACT",
    "build_default_registry",
]
