"""Exceptions raised while resolving policy expressions.

Every failure during parsing or construction is reported through a subclass
of PolicyResolutionError, so callers can catch the whole family at once or
handle a single kind.
"""

from __future__ import annotations

from collections.abc import Sequence


class PolicyResolutionError(Exception):
    """Base class for policy resolution errors."""

    pass


class ExpressionError(PolicyResolutionError):
    """Base class for errors in the text of an expression."""

    def __init__(
        self,
        message: str,
        source: str = "",
        position: int = 0,
    ) -> None:
        self.source = source
        self.position = position
        super().__init__(message)

    @property
    def column(self) -> int:
        """One-based column of the failing position."""
        return self.position + 1

    def format_error(self) -> str:
        """Format error with caret pointing at the problem position."""
        msg = str(self)
        if not self.source:
            return msg
        caret = " " * self.position + "^"
        return f"{msg}\n  {self.source}\n  {caret}"


class MalformedExpressionError(ExpressionError):
    """Raised when text does not have the shape of a call expression."""


class NumericFormatError(ExpressionError):
    """Raised when a numeric literal cannot be parsed as its classified kind."""

    def __init__(
        self,
        literal: str,
        kind: str,
        source: str = "",
        position: int = 0,
    ) -> None:
        self.literal = literal
        self.kind = kind
        super().__init__(
            f"Invalid {kind} literal: '{literal}'",
            source=source,
            position=position,
        )


class UnknownPolicyError(PolicyResolutionError):
    """Raised when a qualified name has no registered implementation."""

    def __init__(self, qualified_name: str, message: str | None = None) -> None:
        self.qualified_name = qualified_name
        super().__init__(message or f"Unknown policy: {qualified_name}")


class PolicyFamilyMismatchError(UnknownPolicyError):
    """Raised when a registered policy belongs to a different family.

    The name is unknown as far as the requesting resolver is concerned, so
    this is a kind of UnknownPolicyError.
    """

    def __init__(self, qualified_name: str, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            qualified_name,
            f"{qualified_name} is a {actual} policy, not a {expected} policy",
        )


class NoMatchingConstructorError(PolicyResolutionError):
    """Raised when no constructor matches the supplied argument kinds."""

    def __init__(
        self,
        qualified_name: str,
        requested: Sequence[str],
        available: Sequence[Sequence[str]],
    ) -> None:
        self.qualified_name = qualified_name
        self.requested = tuple(requested)
        self.available = tuple(tuple(sig) for sig in available)
        sig_list = ", ".join(f"({', '.join(sig)})" for sig in self.available)
        super().__init__(
            f"No constructor of {qualified_name} accepts "
            f"({', '.join(self.requested)}); "
            f"available: {sig_list or 'none'}"
        )


class MissingSingletonError(PolicyResolutionError):
    """Raised when a policy type has no shared instance to hand out."""

    def __init__(self, qualified_name: str) -> None:
        self.qualified_name = qualified_name
        super().__init__(f"{qualified_name} does not expose a shared INSTANCE")


class PolicyConstructionError(PolicyResolutionError):
    """Raised when a policy rejects the argument values it was given.

    The error raised by the policy itself is chained as __cause__.
    """

    def __init__(self, qualified_name: str, reason: str) -> None:
        self.qualified_name = qualified_name
        self.reason = reason
        super().__init__(f"Failed to construct {qualified_name}: {reason}")
