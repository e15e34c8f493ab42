"""Load-balancing policies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from cqlpolicy.policies.base import LoadBalancingPolicy


def _require_child(child: object, owner: str) -> None:
    if not isinstance(child, LoadBalancingPolicy):
        raise TypeError(
            f"{owner} child must be a load-balancing policy, "
            f"got {type(child).__name__}"
        )


@dataclass
class RoundRobinPolicy(LoadBalancingPolicy):
    """Cycles through all known hosts, ignoring data centers."""


@dataclass
class DCAwareRoundRobinPolicy(LoadBalancingPolicy):
    """Round-robin over the local data center, with optional remote fallback.

    With no ``local_dc`` the local data center is taken from the contact
    points when the driver connects.
    """

    local_dc: str | None = None
    used_hosts_per_remote_dc: int = 0

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.local_dc is not None and not self.local_dc.strip():
            raise ValueError("Null or empty data center specified")
        if self.used_hosts_per_remote_dc < 0:
            raise ValueError(
                "used_hosts_per_remote_dc must be >= 0, "
                f"got {self.used_hosts_per_remote_dc}"
            )


@dataclass
class TokenAwarePolicy(LoadBalancingPolicy):
    """Prefers replicas of the queried partition, delegating ordering to child."""

    child: LoadBalancingPolicy

    def __post_init__(self) -> None:
        """Validate configuration."""
        _require_child(self.child, "TokenAwarePolicy")


@dataclass
class LatencyAwarePolicy(LoadBalancingPolicy):
    """Excludes hosts whose latency is much worse than the fastest host.

    Instances are normally created through builder(), which starts from
    the driver's defaults.
    """

    child: LoadBalancingPolicy
    exclusion_threshold: float = 2.0
    scale: timedelta = timedelta(milliseconds=100)
    retry_period: timedelta = timedelta(seconds=10)
    update_rate: timedelta = timedelta(milliseconds=100)
    minimum_measurements: int = 50

    def __post_init__(self) -> None:
        """Validate configuration."""
        _require_child(self.child, "LatencyAwarePolicy")
        if self.exclusion_threshold < 1.0:
            raise ValueError(
                "Invalid exclusion threshold, must be greater than 1, "
                f"got {self.exclusion_threshold}"
            )
        if self.scale <= timedelta(0):
            raise ValueError(f"Invalid scale, must be positive, got {self.scale}")
        if self.retry_period < timedelta(0):
            raise ValueError(
                f"Invalid retry period, must be >= 0, got {self.retry_period}"
            )
        if self.update_rate <= timedelta(0):
            raise ValueError(
                f"Invalid update rate, must be positive, got {self.update_rate}"
            )
        if self.minimum_measurements < 0:
            raise ValueError(
                "Invalid minimum measurements, must be >= 0, "
                f"got {self.minimum_measurements}"
            )

    @classmethod
    def builder(cls, child: LoadBalancingPolicy) -> LatencyAwarePolicyBuilder:
        """Start building a LatencyAwarePolicy around ``child``."""
        return LatencyAwarePolicyBuilder(child)


class LatencyAwarePolicyBuilder:
    """Step-by-step construction of a LatencyAwarePolicy.

    Each ``with_*`` call returns the builder so calls can be chained;
    values are validated when build() is called.

    Example:
        policy = (
            LatencyAwarePolicy.builder(RoundRobinPolicy())
            .with_exclusion_threshold(2.5)
            .with_scale(timedelta(milliseconds=100))
            .build()
        )
    """

    def __init__(self, child: LoadBalancingPolicy) -> None:
        self._child = child
        self._exclusion_threshold = 2.0
        self._scale = timedelta(milliseconds=100)
        self._retry_period = timedelta(seconds=10)
        self._update_rate = timedelta(milliseconds=100)
        self._minimum_measurements = 50

    def with_exclusion_threshold(self, threshold: float) -> LatencyAwarePolicyBuilder:
        self._exclusion_threshold = threshold
        return self

    def with_scale(self, scale: timedelta) -> LatencyAwarePolicyBuilder:
        self._scale = scale
        return self

    def with_retry_period(self, retry_period: timedelta) -> LatencyAwarePolicyBuilder:
        self._retry_period = retry_period
        return self

    def with_update_rate(self, update_rate: timedelta) -> LatencyAwarePolicyBuilder:
        self._update_rate = update_rate
        return self

    def with_minimum_measurements(self, count: int) -> LatencyAwarePolicyBuilder:
        self._minimum_measurements = count
        return self

    def build(self) -> LatencyAwarePolicy:
        """Create the policy from the accumulated settings.

        Raises:
            ValueError: If any setting is out of range.
        """
        return LatencyAwarePolicy(
            child=self._child,
            exclusion_threshold=self._exclusion_threshold,
            scale=self._scale,
            retry_period=self._retry_period,
            update_rate=self._update_rate,
            minimum_measurements=self._minimum_measurements,
        )
