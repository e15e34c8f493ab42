"""Resolution context for structured logging.

Provides context propagation using contextvars, enabling automatic
injection of the policy family and expression being resolved into log
records. Nested resolutions (child policies) share the outer context.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_policy_family: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "policy_family", default=None
)
_expression: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "expression", default=None
)


def set_resolution_context(policy_family: str, expression: str | None = None) -> None:
    """Set the current resolution context.

    Args:
        policy_family: Family being resolved (e.g., "load-balancing").
        expression: Raw expression text, or None.
    """
    _policy_family.set(policy_family)
    _expression.set(expression)


def clear_resolution_context() -> None:
    """Clear the current resolution context."""
    _policy_family.set(None)
    _expression.set(None)


@contextmanager
def resolution_context(
    policy_family: str,
    expression: str | None = None,
) -> Generator[None, None, None]:
    """Context manager for a single resolution.

    Sets context on entry and restores the previous context on exit.

    Args:
        policy_family: Family being resolved.
        expression: Raw expression text.

    Yields:
        None

    Example:
        with resolution_context("retry", "DefaultRetryPolicy"):
            logger.info("Resolving")  # Automatically includes context
    """
    old_family = _policy_family.get()
    old_expression = _expression.get()
    try:
        set_resolution_context(policy_family, expression)
        yield
    finally:
        _policy_family.set(old_family)
        _expression.set(old_expression)


def get_resolution_context() -> tuple[str | None, str | None]:
    """Get current resolution context.

    Returns:
        Tuple of (policy_family, expression), either may be None.
    """
    return _policy_family.get(), _expression.get()


class ResolutionContextFilter(logging.Filter):
    """Logging filter that injects resolution context into log records.

    Adds policy_family and expression attributes to LogRecord from
    contextvars. For text format, also adds a compact resolution_tag
    like [load-balancing].
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject resolution context into log record.

        Args:
            record: The log record to process.

        Returns:
            Always True (does not filter, only enriches).
        """
        policy_family, expression = get_resolution_context()

        record.policy_family = policy_family
        record.expression = expression
        record.resolution_tag = f"[{policy_family}] " if policy_family else ""

        return True
