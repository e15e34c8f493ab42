"""Retry policies.

The stateless policies are shared: each exposes a single INSTANCE and
callers are expected to use it rather than create their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from cqlpolicy.policies.base import RetryPolicy


class DefaultRetryPolicy(RetryPolicy):
    """Retries only when it is very likely to succeed."""

    INSTANCE: ClassVar[DefaultRetryPolicy]

    def __repr__(self) -> str:
        return "DefaultRetryPolicy.INSTANCE"


class DowngradingConsistencyRetryPolicy(RetryPolicy):
    """Retries at a lower consistency level when replicas are missing."""

    INSTANCE: ClassVar[DowngradingConsistencyRetryPolicy]

    def __repr__(self) -> str:
        return "DowngradingConsistencyRetryPolicy.INSTANCE"


class FallthroughRetryPolicy(RetryPolicy):
    """Never retries; every failure is reported to the caller."""

    INSTANCE: ClassVar[FallthroughRetryPolicy]

    def __repr__(self) -> str:
        return "FallthroughRetryPolicy.INSTANCE"


DefaultRetryPolicy.INSTANCE = DefaultRetryPolicy()
DowngradingConsistencyRetryPolicy.INSTANCE = DowngradingConsistencyRetryPolicy()
FallthroughRetryPolicy.INSTANCE = FallthroughRetryPolicy()


@dataclass
class LoggingRetryPolicy(RetryPolicy):
    """Logs the decisions of another retry policy.

    Wraps a child, so there is no shared instance.
    """

    child: RetryPolicy

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not isinstance(self.child, RetryPolicy):
            raise TypeError(
                "LoggingRetryPolicy child must be a retry policy, "
                f"got {type(self.child).__name__}"
            )
