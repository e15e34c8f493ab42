"""Unit tests for load-balancing policies."""

from datetime import timedelta

import pytest

from cqlpolicy.policies import (
    DCAwareRoundRobinPolicy,
    DefaultRetryPolicy,
    LatencyAwarePolicy,
    PolicyFamily,
    RoundRobinPolicy,
    TokenAwarePolicy,
)


class TestDCAwareRoundRobinPolicy:
    """Tests for DCAwareRoundRobinPolicy."""

    def test_defaults(self) -> None:
        policy = DCAwareRoundRobinPolicy()
        assert policy.local_dc is None
        assert policy.used_hosts_per_remote_dc == 0

    def test_empty_data_center_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty data center"):
            DCAwareRoundRobinPolicy("  ")

    def test_negative_remote_hosts_rejected(self) -> None:
        with pytest.raises(ValueError, match="used_hosts_per_remote_dc"):
            DCAwareRoundRobinPolicy("dc1", -1)


class TestTokenAwarePolicy:
    """Tests for TokenAwarePolicy."""

    def test_wraps_child(self) -> None:
        child = RoundRobinPolicy()
        assert TokenAwarePolicy(child).child is child

    def test_child_must_be_load_balancing(self) -> None:
        with pytest.raises(TypeError, match="load-balancing"):
            TokenAwarePolicy(DefaultRetryPolicy.INSTANCE)


class TestLatencyAwarePolicy:
    """Tests for LatencyAwarePolicy and its builder."""

    def test_builder_defaults(self) -> None:
        policy = LatencyAwarePolicy.builder(RoundRobinPolicy()).build()
        assert policy.exclusion_threshold == 2.0
        assert policy.scale == timedelta(milliseconds=100)
        assert policy.retry_period == timedelta(seconds=10)
        assert policy.update_rate == timedelta(milliseconds=100)
        assert policy.minimum_measurements == 50

    def test_builder_chains(self) -> None:
        policy = (
            LatencyAwarePolicy.builder(RoundRobinPolicy())
            .with_exclusion_threshold(10.5)
            .with_scale(timedelta(milliseconds=1))
            .with_retry_period(timedelta(milliseconds=10))
            .with_update_rate(timedelta(milliseconds=1))
            .with_minimum_measurements(10)
            .build()
        )
        assert policy.exclusion_threshold == 10.5
        assert policy.retry_period == timedelta(milliseconds=10)
        assert policy.minimum_measurements == 10

    def test_threshold_below_one_rejected(self) -> None:
        builder = LatencyAwarePolicy.builder(RoundRobinPolicy())
        with pytest.raises(ValueError, match="exclusion threshold"):
            builder.with_exclusion_threshold(0.5).build()

    def test_zero_scale_rejected(self) -> None:
        builder = LatencyAwarePolicy.builder(RoundRobinPolicy())
        with pytest.raises(ValueError, match="scale"):
            builder.with_scale(timedelta(0)).build()

    def test_negative_measurements_rejected(self) -> None:
        builder = LatencyAwarePolicy.builder(RoundRobinPolicy())
        with pytest.raises(ValueError, match="minimum measurements"):
            builder.with_minimum_measurements(-1).build()

    def test_describe_reports_milliseconds(self) -> None:
        policy = LatencyAwarePolicy.builder(TokenAwarePolicy(RoundRobinPolicy())).build()
        assert policy.describe() == {
            "policy": "LatencyAwarePolicy",
            "child": {
                "policy": "TokenAwarePolicy",
                "child": {"policy": "RoundRobinPolicy"},
            },
            "exclusion_threshold": 2.0,
            "scale": 100,
            "retry_period": 10_000,
            "update_rate": 100,
            "minimum_measurements": 50,
        }


def test_family() -> None:
    """Every load-balancing policy reports its family."""
    for policy in (RoundRobinPolicy(), TokenAwarePolicy(RoundRobinPolicy())):
        assert policy.family is PolicyFamily.LOAD_BALANCING
