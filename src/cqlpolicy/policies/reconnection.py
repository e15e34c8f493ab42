"""Reconnection policies."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass

from cqlpolicy.policies.base import ReconnectionPolicy


@dataclass
class ConstantReconnectionPolicy(ReconnectionPolicy):
    """Waits the same delay before every reconnection attempt."""

    delay_ms: int

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.delay_ms < 0:
            raise ValueError(
                f"Invalid negative delay (got {self.delay_ms}) "
                "for ConstantReconnectionPolicy"
            )

    def new_schedule(self) -> Iterator[int]:
        """Yield ``delay_ms`` forever."""
        return itertools.repeat(self.delay_ms)


@dataclass
class ExponentialReconnectionPolicy(ReconnectionPolicy):
    """Doubles the delay after each attempt, up to ``max_delay_ms``."""

    base_delay_ms: int
    max_delay_ms: int

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.base_delay_ms < 0 or self.max_delay_ms < 0:
            raise ValueError("Invalid negative delay")
        if self.base_delay_ms == 0:
            raise ValueError("Invalid base delay, must be strictly positive")
        if self.max_delay_ms < self.base_delay_ms:
            raise ValueError(
                f"Invalid max delay ({self.max_delay_ms}) "
                f"lower than base delay ({self.base_delay_ms})"
            )

    def new_schedule(self) -> Iterator[int]:
        """Yield base, 2*base, 4*base, ... capped at ``max_delay_ms``."""
        delay = self.base_delay_ms
        while True:
            yield min(delay, self.max_delay_ms)
            if delay < self.max_delay_ms:
                delay *= 2
