"""Parse tree nodes for policy call expressions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ArgumentKind(Enum):
    """Syntactic kind of a single call argument."""

    CALL = "call"  # nested call expression: RoundRobinPolicy()
    STRING = "string"  # quoted string: "dc1", 'dc1'
    FLOAT = "float"  # 10.5, (float) 10
    DOUBLE = "double"  # (double) 10.5
    LONG = "long"  # (long) 10
    INT = "int"  # 10, (int) 10


@dataclass(frozen=True)
class Argument:
    """A classified argument of a call expression.

    For CALL arguments the value is the child CallExpression; for every
    other kind it is the converted Python value.
    """

    kind: ArgumentKind
    value: Any

    @property
    def is_call(self) -> bool:
        """True if this argument is a nested call."""
        return self.kind is ArgumentKind.CALL

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        if self.is_call:
            return {"kind": self.kind.value, "call": self.value.to_dict()}
        return {"kind": self.kind.value, "value": self.value}


@dataclass(frozen=True)
class CallExpression:
    """One node of a parsed call tree: ``name(arguments...)``."""

    name: str
    arguments: tuple[Argument, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("CallExpression name must not be empty")

    @property
    def arity(self) -> int:
        """Number of arguments."""
        return len(self.arguments)

    @property
    def children(self) -> tuple[CallExpression, ...]:
        """Nested call expressions, in argument order."""
        return tuple(arg.value for arg in self.arguments if arg.is_call)

    def depth(self) -> int:
        """Nesting depth of the tree rooted at this node (a leaf is 1)."""
        deepest = 0
        pending = [(self, 1)]
        while pending:
            node, level = pending.pop()
            deepest = max(deepest, level)
            pending.extend((child, level + 1) for child in node.children)
        return deepest

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        root: dict[str, Any] = {"name": self.name, "arguments": []}
        pending = [(self, root)]
        while pending:
            node, out = pending.pop()
            for arg in node.arguments:
                if not arg.is_call:
                    out["arguments"].append(arg.to_dict())
                    continue
                child = {"name": arg.value.name, "arguments": []}
                out["arguments"].append({"kind": arg.kind.value, "call": child})
                pending.append((arg.value, child))
        return root
