"""Core record types for clustream-core.

MicroCluster — additive summary (CF1x, CF2x, CF1t, CF2t, n) of every
               feature vector absorbed so far, plus the derived geometry
               an online assignment step needs.
Boundary     — tagged maximum-boundary result distinguishing a computed
               radius from the single-point case, whose radius must come
               from the nearest other micro-cluster.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

import numpy as np

from .errors import DimensionMismatchError, EmptyClusterError
from .statistics import (
    VectorLike,
    as_point,
    as_vector,
    check_dimension,
    euclidean_distance,
    mean_deviation,
    per_dimension_variance,
)

logger = logging.getLogger(__name__)

BoundaryKind = Literal["computed", "nearest_cluster"]


def _is_int(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


# ---------------------------------------------------------------------------
# Boundary
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Boundary:
    """Maximum boundary of a micro-cluster.

    kind   : ``"computed"`` — ``radius`` holds dispersion × boundary factor
             (which may legitimately be 0.0 for identical points).
             ``"nearest_cluster"`` — the cluster holds a single point and
             the caller must use the distance to the nearest other
             micro-cluster instead; ``radius`` is None.
    """

    kind: BoundaryKind
    radius: Optional[float] = None

    def __post_init__(self) -> None:
        if self.kind == "computed":
            if self.radius is None or self.radius < 0:
                raise ValueError(
                    f"computed boundary needs a radius >= 0, got {self.radius!r}"
                )
        elif self.kind == "nearest_cluster":
            if self.radius is not None:
                raise ValueError("nearest_cluster boundary carries no radius")
        else:
            raise ValueError(
                f"Unknown boundary kind {self.kind!r}. "
                "Valid options: 'computed', 'nearest_cluster'."
            )

    @property
    def is_computed(self) -> bool:
        return self.kind == "computed"

    @classmethod
    def computed(cls, radius: float) -> "Boundary":
        return cls(kind="computed", radius=float(radius))

    @classmethod
    def nearest_cluster(cls) -> "Boundary":
        return cls(kind="nearest_cluster")


# ---------------------------------------------------------------------------
# MicroCluster
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class MicroCluster:
    """Micro-cluster maintained during the online phase of CluStream.

    The five statistics are purely additive: the statistics of the union
    of two disjoint point sets are the sums of the parts' statistics.

    Schema
    ------
    linear_sum            : CF1x, float64 vector of length d
    squared_sum           : CF2x, float64 vector of length d
    timestamp_sum         : CF1t, sum of arrival timestamps
    timestamp_squared_sum : CF2t, sum of squared arrival timestamps
    boundary_factor       : t, multiplier from dispersion to radius
    cluster_index         : m, orchestrator-assigned sequence number
    point_count           : n, number of absorbed vectors (seed included)

    Use ``MicroCluster.new`` to seed a cluster from its first point.
    Direct construction (or ``from_statistics``) rebuilds a cluster from
    existing sums and is the only route to an empty cluster.
    """

    linear_sum: np.ndarray
    squared_sum: np.ndarray
    timestamp_sum: float
    timestamp_squared_sum: float
    boundary_factor: float
    cluster_index: int
    point_count: int = 0

    def __post_init__(self) -> None:
        self.linear_sum = as_vector(self.linear_sum)
        self.squared_sum = as_vector(self.squared_sum)
        if len(self.squared_sum) != len(self.linear_sum):
            raise DimensionMismatchError(
                expected=len(self.linear_sum),
                actual=len(self.squared_sum),
                message=(
                    f"squared_sum has {len(self.squared_sum)} dimensions, "
                    f"linear_sum has {len(self.linear_sum)}."
                ),
            )
        if not _is_int(self.point_count):
            raise ValueError(
                f"point_count must be an integer, got {self.point_count!r}"
            )
        if not _is_int(self.cluster_index):
            raise ValueError(
                f"cluster_index must be an integer, got {self.cluster_index!r}"
            )
        if self.point_count < 0:
            raise ValueError(f"point_count must be >= 0, got {self.point_count}")
        if self.boundary_factor < 0:
            raise ValueError(
                f"boundary_factor must be >= 0, got {self.boundary_factor}"
            )
        self.timestamp_sum = float(self.timestamp_sum)
        self.timestamp_squared_sum = float(self.timestamp_squared_sum)
        self.boundary_factor = float(self.boundary_factor)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(
        cls,
        center: VectorLike,
        timestamp: float,
        boundary_factor: float,
        cluster_index: int,
    ) -> "MicroCluster":
        """Seed a micro-cluster from a single feature vector.

        The seed counts as the first absorbed point, so the new cluster
        has ``point_count == 1`` and its centroid equals ``center``.

        Raises InvalidDimensionError if ``center`` is empty.
        """
        seed = as_vector(center)
        return cls(
            linear_sum=seed,
            squared_sum=seed ** 2,
            timestamp_sum=timestamp,
            timestamp_squared_sum=float(timestamp) ** 2,
            boundary_factor=boundary_factor,
            cluster_index=cluster_index,
            point_count=1,
        )

    @classmethod
    def from_statistics(
        cls,
        linear_sum: VectorLike,
        squared_sum: VectorLike,
        timestamp_sum: float,
        timestamp_squared_sum: float,
        point_count: int,
        boundary_factor: float,
        cluster_index: int,
    ) -> "MicroCluster":
        """Rebuild a micro-cluster from raw additive statistics."""
        return cls(
            linear_sum=linear_sum,
            squared_sum=squared_sum,
            timestamp_sum=timestamp_sum,
            timestamp_squared_sum=timestamp_squared_sum,
            boundary_factor=boundary_factor,
            cluster_index=cluster_index,
            point_count=point_count,
        )

    def copy(self) -> "MicroCluster":
        """Independent snapshot; later absorbs do not affect the copy."""
        return MicroCluster(
            linear_sum=self.linear_sum.copy(),
            squared_sum=self.squared_sum.copy(),
            timestamp_sum=self.timestamp_sum,
            timestamp_squared_sum=self.timestamp_squared_sum,
            boundary_factor=self.boundary_factor,
            cluster_index=self.cluster_index,
            point_count=self.point_count,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    @property
    def dim(self) -> int:
        return len(self.linear_sum)

    def _require_points(self, what: str) -> None:
        if self.point_count < 1:
            raise EmptyClusterError(
                f"Cannot compute {what} of empty micro-cluster "
                f"{self.cluster_index}."
            )

    # ------------------------------------------------------------------
    # Incremental update
    # ------------------------------------------------------------------

    def absorb(self, feature_vector: VectorLike, timestamp: float) -> None:
        """Add one feature vector, arriving at ``timestamp``, to the cluster.

        Both inputs are converted before any statistic changes, so a
        DimensionMismatchError (length differs from the cluster's
        dimensionality, an empty vector included) or an unusable timestamp
        leaves the cluster untouched.
        """
        vec = as_point(feature_vector)
        check_dimension(vec, self.dim)
        ts = float(timestamp)

        self.linear_sum += vec
        self.squared_sum += vec ** 2
        self.timestamp_sum += ts
        self.timestamp_squared_sum += ts ** 2
        self.point_count += 1

    def merge(
        self,
        other: "MicroCluster",
        *,
        cluster_index: Optional[int] = None,
        boundary_factor: Optional[float] = None,
    ) -> "MicroCluster":
        """Return a new cluster summarising the points of both operands.

        Every additive statistic of the result is the exact sum of the
        operands' statistics; neither operand is modified.

        Parameters
        ----------
        other           : cluster of the same dimensionality.
        cluster_index   : index assigned by the orchestrator; defaults to
                          this cluster's index (``other`` is folded into it).
        boundary_factor : defaults to this cluster's boundary factor.
        """
        if other.dim != self.dim:
            raise DimensionMismatchError(
                expected=self.dim,
                actual=other.dim,
                message=(
                    f"Cannot merge micro-cluster {other.cluster_index} "
                    f"(d={other.dim}) into {self.cluster_index} (d={self.dim})."
                ),
            )
        merged = MicroCluster(
            linear_sum=self.linear_sum + other.linear_sum,
            squared_sum=self.squared_sum + other.squared_sum,
            timestamp_sum=self.timestamp_sum + other.timestamp_sum,
            timestamp_squared_sum=(
                self.timestamp_squared_sum + other.timestamp_squared_sum
            ),
            boundary_factor=(
                self.boundary_factor if boundary_factor is None else boundary_factor
            ),
            cluster_index=(
                self.cluster_index if cluster_index is None else cluster_index
            ),
            point_count=self.point_count + other.point_count,
        )
        logger.debug(
            "Merged micro-clusters %s and %s into %s (n=%d)",
            self.cluster_index,
            other.cluster_index,
            merged.cluster_index,
            merged.point_count,
        )
        return merged

    # ------------------------------------------------------------------
    # Derived geometry
    # ------------------------------------------------------------------

    def centroid(self) -> np.ndarray:
        """Mean of all absorbed vectors, as a new float64 array."""
        self._require_points("the centroid")
        return self.linear_sum / self.point_count

    def distance(self, point: VectorLike) -> float:
        """Euclidean distance from ``point`` to the centroid."""
        vec = as_point(point)
        check_dimension(vec, self.dim)
        return euclidean_distance(self.centroid(), vec)

    def variance(self) -> np.ndarray:
        """Per-dimension variance of the absorbed vectors."""
        self._require_points("the variance")
        return per_dimension_variance(
            self.linear_sum,
            self.squared_sum,
            self.point_count,
            label=f"micro-cluster {self.cluster_index}",
        )

    def dispersion(self) -> float:
        """Mean of the per-dimension standard deviations."""
        return mean_deviation(self.variance())

    def maximum_boundary(self) -> float:
        """Assignment radius: dispersion × boundary factor.

        Returns 0.0 for a single-point cluster.  That value is a signal,
        not a radius: the caller must use the distance to the nearest
        other micro-cluster.  ``boundary()`` exposes the same rule as a
        tagged result.
        """
        self._require_points("the maximum boundary")
        if self.point_count == 1:
            return 0.0
        return self.dispersion() * self.boundary_factor

    def boundary(self) -> Boundary:
        """Tagged form of ``maximum_boundary()``."""
        self._require_points("the maximum boundary")
        if self.point_count == 1:
            return Boundary.nearest_cluster()
        return Boundary.computed(self.dispersion() * self.boundary_factor)

    def __repr__(self) -> str:
        return (
            f"MicroCluster(index={self.cluster_index} d={self.dim} "
            f"n={self.point_count} t={self.boundary_factor})"
        )
