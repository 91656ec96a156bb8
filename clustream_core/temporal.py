"""Temporal statistics derived from CF1t / CF2t.

An orchestrator uses these to decide which micro-clusters have gone
stale and can be deleted or merged to make room for new ones.
"""

from __future__ import annotations

import math

from scipy import special

from .errors import EmptyClusterError
from .types import MicroCluster


def timestamp_mean(cluster: MicroCluster) -> float:
    """Mean arrival timestamp of the absorbed points."""
    if cluster.point_count < 1:
        raise EmptyClusterError(
            f"Cannot compute the timestamp mean of empty micro-cluster "
            f"{cluster.cluster_index}."
        )
    return cluster.timestamp_sum / cluster.point_count


def timestamp_deviation(cluster: MicroCluster) -> float:
    """Standard deviation of the arrival timestamps."""
    mean = timestamp_mean(cluster)
    variance = cluster.timestamp_squared_sum / cluster.point_count - mean ** 2
    return math.sqrt(abs(variance))


def relevance_stamp(cluster: MicroCluster, m: int) -> float:
    """Estimated mean arrival time of the last ``m`` points of the cluster.

    Assuming normally distributed timestamps, this is the time of arrival
    of the ``m / (2n)``-th percentile of the points.  Clusters with fewer
    than ``2m`` points fall back to the mean timestamp.

    Parameters
    ----------
    cluster : non-empty micro-cluster.
    m       : number of recent points considered (>= 1).
    """
    if m < 1:
        raise ValueError(f"m must be >= 1, got {m}")
    mean = timestamp_mean(cluster)
    if cluster.point_count < 2 * m:
        return mean
    # Φ⁻¹(1 − q) = √2 · erfinv(1 − 2q) with q = m / (2n)
    z = math.sqrt(2.0) * float(special.erfinv(1.0 - m / cluster.point_count))
    return mean + z * timestamp_deviation(cluster)
