"""Unit tests for clustream_core.clustering."""

import numpy as np
import pytest

from clustream_core.clustering import (
    merge,
    merge_all,
    nearest_cluster,
    resolve_boundary,
)
from clustream_core.errors import DimensionMismatchError
from clustream_core.types import MicroCluster


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _mc(center, index, t=2.0, timestamp=0) -> MicroCluster:
    return MicroCluster.new(center, timestamp, t, index)


@pytest.fixture
def clusters():
    a = _mc([0.0, 0.0], 1)
    a.absorb([2.0, 2.0], 1)            # centroid [1, 1], radius 2
    b = _mc([10.0, 10.0], 2)            # single point
    c = _mc([4.0, 5.0], 3)              # single point
    return [a, b, c]


# ---------------------------------------------------------------------------
# merge / merge_all
# ---------------------------------------------------------------------------


def test_merge_additive(clusters):
    a, b, _ = clusters
    m = merge(a, b)
    assert m.point_count == a.point_count + b.point_count
    np.testing.assert_array_equal(m.linear_sum, a.linear_sum + b.linear_sum)


def test_merge_keyword_overrides(clusters):
    a, b, _ = clusters
    m = merge(a, b, cluster_index=42, boundary_factor=1.5)
    assert m.cluster_index == 42
    assert m.boundary_factor == 1.5


def test_merge_dimension_mismatch(clusters):
    with pytest.raises(DimensionMismatchError):
        merge(clusters[0], _mc([1.0, 2.0, 3.0], 9))


def test_merge_all(clusters):
    m = merge_all(clusters, cluster_index=100)
    assert m.cluster_index == 100
    assert m.point_count == 4
    np.testing.assert_array_equal(m.linear_sum, [16.0, 17.0])
    np.testing.assert_array_equal(m.centroid(), [4.0, 4.25])


def test_merge_all_single_returns_copy(clusters):
    a = clusters[0]
    m = merge_all([a])
    assert m is not a
    assert m.point_count == a.point_count


def test_merge_all_empty():
    with pytest.raises(ValueError, match="empty"):
        merge_all([])


# ---------------------------------------------------------------------------
# nearest_cluster
# ---------------------------------------------------------------------------


def test_nearest_cluster(clusters):
    found = nearest_cluster(clusters, [5.0, 5.0])
    assert found is not None
    cluster, dist = found
    assert cluster.cluster_index == 3
    assert dist == pytest.approx(1.0)


def test_nearest_cluster_exclude(clusters):
    c = clusters[2]
    cluster, _ = nearest_cluster(clusters, [4.0, 5.0], exclude=c)
    assert cluster.cluster_index == 1


def test_nearest_cluster_none():
    assert nearest_cluster([], [1.0, 1.0]) is None


# ---------------------------------------------------------------------------
# resolve_boundary
# ---------------------------------------------------------------------------


def test_resolve_boundary_computed(clusters):
    assert resolve_boundary(clusters[0], clusters) == pytest.approx(2.0)


def test_resolve_boundary_single_point_uses_nearest(clusters):
    c = clusters[2]
    # nearest other centroid is cluster 1 at [1, 1]
    assert resolve_boundary(c, clusters) == pytest.approx(5.0)


def test_resolve_boundary_alone():
    only = _mc([1.0, 1.0], 1)
    assert resolve_boundary(only, [only]) is None
