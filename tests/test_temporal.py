"""Unit tests for clustream_core.temporal."""

import pytest

from clustream_core.errors import EmptyClusterError
from clustream_core.temporal import (
    relevance_stamp,
    timestamp_deviation,
    timestamp_mean,
)
from clustream_core.types import MicroCluster


def _timed(n: int, mean: float, std: float) -> MicroCluster:
    """Cluster whose n timestamps have the given mean and std."""
    return MicroCluster.from_statistics(
        linear_sum=[0.0],
        squared_sum=[0.0],
        timestamp_sum=n * mean,
        timestamp_squared_sum=n * (std ** 2 + mean ** 2),
        point_count=n,
        boundary_factor=2.0,
        cluster_index=1,
    )


def test_timestamp_mean_and_deviation():
    mc = MicroCluster.new([0.0], 2, 2.0, 1)
    for ts in (4, 6, 8):
        mc.absorb([0.0], ts)
    assert timestamp_mean(mc) == pytest.approx(5.0)
    assert timestamp_deviation(mc) == pytest.approx(5.0 ** 0.5)


def test_single_point_deviation_is_zero():
    mc = MicroCluster.new([1.0, 2.0], 17, 2.0, 1)
    assert timestamp_mean(mc) == 17.0
    assert timestamp_deviation(mc) == 0.0


def test_relevance_stamp_small_cluster_is_mean():
    mc = _timed(n=10, mean=50.0, std=10.0)
    assert relevance_stamp(mc, m=10) == pytest.approx(50.0)


def test_relevance_stamp_uses_percentile():
    # m / (2n) = 0.25 -> upper quartile of N(50, 10): 50 + 0.67449 * 10
    mc = _timed(n=100, mean=50.0, std=10.0)
    assert relevance_stamp(mc, m=50) == pytest.approx(56.7449, abs=1e-3)


def test_relevance_stamp_recent_points_later_than_mean():
    mc = _timed(n=1000, mean=500.0, std=100.0)
    assert relevance_stamp(mc, m=10) > timestamp_mean(mc)


def test_relevance_stamp_bad_m():
    with pytest.raises(ValueError, match="m must be"):
        relevance_stamp(_timed(10, 1.0, 1.0), m=0)


def test_empty_cluster():
    mc = MicroCluster.from_statistics([0.0], [0.0], 0.0, 0.0, 0, 2.0, 1)
    with pytest.raises(EmptyClusterError):
        timestamp_mean(mc)
    with pytest.raises(EmptyClusterError):
        relevance_stamp(mc, m=5)
