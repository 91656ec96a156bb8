"""Clustering helpers for clustream-core.

merge            — combine two micro-clusters by summing their statistics
merge_all        — fold a sequence of micro-clusters into one
nearest_cluster  — closest micro-cluster centroid to a point
resolve_boundary — effective assignment radius, resolving the
                   single-point case against the other micro-clusters
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Iterable, List, Optional, Sequence, Tuple

from .statistics import VectorLike, as_point
from .types import MicroCluster

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------


def merge(
    a: MicroCluster,
    b: MicroCluster,
    *,
    cluster_index: Optional[int] = None,
    boundary_factor: Optional[float] = None,
) -> MicroCluster:
    """Merge two micro-clusters into a new one.

    Parameters
    ----------
    a, b            : clusters of equal dimensionality; left unmodified.
    cluster_index   : index chosen by the orchestrator (default: ``a``'s).
    boundary_factor : radius multiplier for the result (default: ``a``'s).

    Returns
    -------
    MicroCluster whose CF1x, CF2x, CF1t, CF2t and point count are the
    sums of the operands'.  Raises DimensionMismatchError if the
    dimensionalities differ.
    """
    return a.merge(b, cluster_index=cluster_index, boundary_factor=boundary_factor)


def merge_all(
    clusters: Sequence[MicroCluster],
    *,
    cluster_index: Optional[int] = None,
) -> MicroCluster:
    """Merge a non-empty sequence of micro-clusters, left to right."""
    if not clusters:
        raise ValueError("clusters list is empty — nothing to merge.")
    merged = reduce(lambda acc, c: acc.merge(c), clusters[1:], clusters[0].copy())
    if cluster_index is not None:
        merged.cluster_index = cluster_index
    return merged


# ---------------------------------------------------------------------------
# Nearest-cluster lookup
# ---------------------------------------------------------------------------


def nearest_cluster(
    clusters: Iterable[MicroCluster],
    point: VectorLike,
    exclude: Optional[MicroCluster] = None,
) -> Optional[Tuple[MicroCluster, float]]:
    """Find the micro-cluster whose centroid is closest to ``point``.

    Parameters
    ----------
    clusters : candidate micro-clusters.
    point    : query vector; must match every candidate's dimensionality.
    exclude  : cluster to skip (compared by identity), typically the
               cluster the query point belongs to.

    Returns
    -------
    ``(cluster, distance)`` for the closest non-empty candidate, or None
    when there is no candidate.  Ties keep the earliest candidate.
    """
    q = as_point(point)
    scored: List[Tuple[MicroCluster, float]] = [
        (c, c.distance(q))
        for c in clusters
        if c is not exclude and c.point_count > 0
    ]
    if not scored:
        return None
    return min(scored, key=lambda x: x[1])


def resolve_boundary(
    cluster: MicroCluster,
    others: Iterable[MicroCluster],
) -> Optional[float]:
    """Effective maximum boundary of ``cluster``.

    A cluster with two or more points uses its computed radius.  A
    single-point cluster uses the distance from its centroid to the
    nearest other micro-cluster's centroid; None is returned when no
    other cluster exists to measure against.
    """
    boundary = cluster.boundary()
    if boundary.is_computed:
        return boundary.radius

    found = nearest_cluster(others, cluster.centroid(), exclude=cluster)
    if found is None:
        logger.debug(
            "No neighbour to bound single-point micro-cluster %s",
            cluster.cluster_index,
        )
        return None
    return found[1]
