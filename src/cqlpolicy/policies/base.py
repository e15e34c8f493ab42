"""Base classes shared by all driver policies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import fields, is_dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, ClassVar


class PolicyFamily(Enum):
    """The three kinds of pluggable driver policy."""

    LOAD_BALANCING = "load-balancing"
    RETRY = "retry"
    RECONNECTION = "reconnection"


class Policy:
    """Base class for every policy implementation.

    Subclasses set ``family``. Dataclass subclasses get a describe()
    built from their fields.
    """

    family: ClassVar[PolicyFamily]

    @property
    def name(self) -> str:
        """Short class name of the policy."""
        return type(self).__name__

    def describe(self) -> dict[str, Any]:
        """Return the observable configuration as a JSON-friendly dict.

        Nested policies are described recursively and durations are
        reported in milliseconds.
        """
        info: dict[str, Any] = {"policy": self.name}
        if is_dataclass(self):
            for f in fields(self):
                info[f.name] = _describe_value(getattr(self, f.name))
        return info


class LoadBalancingPolicy(Policy):
    """Decides which coordinator hosts a query is sent to."""

    family = PolicyFamily.LOAD_BALANCING


class RetryPolicy(Policy):
    """Decides what to do when a request times out or a replica is down."""

    family = PolicyFamily.RETRY


class ReconnectionPolicy(Policy, ABC):
    """Decides how long to wait between attempts to reconnect to a host."""

    family = PolicyFamily.RECONNECTION

    @abstractmethod
    def new_schedule(self) -> Iterator[int]:
        """Return an iterator over successive reconnection delays in ms."""


def _describe_value(value: Any) -> Any:
    if isinstance(value, Policy):
        return value.describe()
    if isinstance(value, timedelta):
        return value // timedelta(milliseconds=1)
    return value
