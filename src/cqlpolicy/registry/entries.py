"""Registry entry types: parameter kinds, constructors and policy types.

A constructor is one of two variants:

- GenericConstructor: call a factory with the argument values, in order.
- FixedPositionalConstructor: create a builder from the first argument,
  apply one builder method per remaining argument, then call build().

Both expose ``signature`` (the ordered parameter kinds they accept) and
``build(values)``, so lookup does not care which variant it found.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple

from cqlpolicy.expressions.nodes import ArgumentKind
from cqlpolicy.policies.base import Policy, PolicyFamily


class ParameterKind(Enum):
    """Declared kind of a constructor parameter."""

    POLICY = "policy"
    STRING = "string"
    FLOAT = "float"
    DOUBLE = "double"
    LONG = "long"
    INT = "int"

    @classmethod
    def for_argument(cls, kind: ArgumentKind) -> ParameterKind:
        """Map a syntactic argument kind to the parameter kind it fills.

        A nested call fills a POLICY parameter; literals map by name.
        """
        if kind is ArgumentKind.CALL:
            return cls.POLICY
        return cls[kind.name]


Signature = tuple[ParameterKind, ...]


class TypedValue(NamedTuple):
    """An argument value reduced for construction."""

    kind: ParameterKind
    value: Any


def format_signature(signature: Signature) -> tuple[str, ...]:
    """Return the parameter kind names of a signature."""
    return tuple(kind.value for kind in signature)


@dataclass(frozen=True)
class GenericConstructor:
    """Construct by calling ``factory(*values)``."""

    signature: Signature
    factory: Callable[..., Policy]

    def build(self, values: Sequence[Any]) -> Policy:
        return self.factory(*values)


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class BuilderStep:
    """One positional argument applied through a builder method."""

    kind: ParameterKind
    method: str
    convert: Callable[[Any], Any] = _identity


@dataclass(frozen=True)
class FixedPositionalConstructor:
    """Construct through a builder with a fixed positional contract.

    Argument 0 is passed to ``builder`` to create the builder object. Every
    step is then applied with its argument before ``build()`` is called, so
    all positions are mandatory.
    """

    builder: Callable[[Any], Any]
    first: ParameterKind
    steps: tuple[BuilderStep, ...]

    @property
    def signature(self) -> Signature:
        return (self.first,) + tuple(step.kind for step in self.steps)

    def build(self, values: Sequence[Any]) -> Policy:
        builder = self.builder(values[0])
        for step, value in zip(self.steps, values[1:], strict=True):
            getattr(builder, step.method)(step.convert(value))
        return builder.build()


Constructor = GenericConstructor | FixedPositionalConstructor


@dataclass(frozen=True)
class PolicyType:
    """A constructible policy known to the registry.

    Attributes:
        qualified_name: Dotted name expressions resolve to.
        family: Policy family the type belongs to.
        constructors: Accepted constructors; signatures must be unique.
        instance: Shared singleton instance, if the type has one.
    """

    qualified_name: str
    family: PolicyFamily
    constructors: tuple[Constructor, ...] = field(default_factory=tuple)
    instance: Policy | None = None

    def __post_init__(self) -> None:
        """Validate entry."""
        signatures = self.signatures
        if len(set(signatures)) != len(signatures):
            raise ValueError(f"Duplicate constructor signature for {self.qualified_name}")
        if self.instance is not None and self.instance.family is not self.family:
            raise ValueError(
                f"Instance of {self.qualified_name} is a "
                f"{self.instance.family.value} policy, expected {self.family.value}"
            )

    @classmethod
    def from_class(
        cls,
        policy_class: type[Policy],
        *signatures: Signature,
        namespace: str,
        instance: Policy | None = None,
    ) -> PolicyType:
        """Register ``policy_class`` under ``namespace`` with generic constructors.

        Args:
            policy_class: Policy class; its family and name are used.
            *signatures: One signature per accepted constructor. The class
                itself is the factory.
            namespace: Namespace prefix of the qualified name.
            instance: Shared singleton instance, if any.
        """
        return cls(
            qualified_name=f"{namespace}.{policy_class.__name__}",
            family=policy_class.family,
            constructors=tuple(
                GenericConstructor(signature, policy_class) for signature in signatures
            ),
            instance=instance,
        )

    @property
    def short_name(self) -> str:
        """Name without its namespace."""
        return self.qualified_name.rsplit(".", 1)[-1]

    @property
    def signatures(self) -> tuple[Signature, ...]:
        return tuple(ctor.signature for ctor in self.constructors)

    def find_constructor(self, signature: Signature) -> Constructor | None:
        """Return the constructor accepting exactly ``signature``, if any."""
        for ctor in self.constructors:
            if ctor.signature == signature:
                return ctor
        return None
