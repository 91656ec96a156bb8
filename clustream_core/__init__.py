"""clustream-core — CluStream micro-cluster statistics.

Additive, memory-bounded summaries of a stream of feature vectors for
online clustering.

Public API::

    from clustream_core import MicroCluster, merge, nearest_cluster
"""

from .errors import (
    DimensionMismatchError,
    EmptyClusterError,
    InvalidDimensionError,
    MicroClusterError,
)
from .types import Boundary, MicroCluster
from .clustering import merge, merge_all, nearest_cluster, resolve_boundary
from .temporal import relevance_stamp, timestamp_deviation, timestamp_mean

__version__ = "0.1.0"
__all__ = [
    "MicroCluster",
    "Boundary",
    "MicroClusterError",
    "InvalidDimensionError",
    "DimensionMismatchError",
    "EmptyClusterError",
    "merge",
    "merge_all",
    "nearest_cluster",
    "resolve_boundary",
    "timestamp_mean",
    "timestamp_deviation",
    "relevance_stamp",
]
