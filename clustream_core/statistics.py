"""Vectorised statistics helpers for clustream-core.

All functions operate on 1-D numpy float64 arrays.

Helpers
-------
as_vector             — copy numeric input into a non-empty float64 vector
as_point              — view numeric input as a 1-D float64 vector
check_dimension       — raise DimensionMismatchError on a length mismatch
euclidean_distance    — L2 distance between two vectors
per_dimension_variance — |E[x²] − E[x]²| per dimension from CF1x / CF2x
mean_deviation        — mean of per-dimension standard deviations
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

import numpy as np

from .errors import DimensionMismatchError, InvalidDimensionError

logger = logging.getLogger(__name__)

VectorLike = Union[np.ndarray, Iterable[float]]

# Relative tolerance below which a negative pre-clamp variance is treated as
# floating-point round-off rather than numerical instability.
VARIANCE_TOLERANCE: float = 1e-9


# ---------------------------------------------------------------------------
# Coercion and validation
# ---------------------------------------------------------------------------


def as_vector(values: VectorLike) -> np.ndarray:
    """Return ``values`` as a fresh 1-D float64 array.

    Raises InvalidDimensionError for scalars, nested input or empty input.
    """
    arr = np.array(values, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidDimensionError(
            f"Feature vector must be 1-D, got {arr.ndim}-D input."
        )
    if arr.size == 0:
        raise InvalidDimensionError("Feature vector must not be empty.")
    return arr


def as_point(values: VectorLike) -> np.ndarray:
    """Return ``values`` as a 1-D float64 array, possibly empty.

    Length is left to ``check_dimension`` so that a vector of the wrong
    size, including an empty one, reports a dimension mismatch.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.ndim != 1:
        raise InvalidDimensionError(
            f"Feature vector must be 1-D, got {arr.ndim}-D input."
        )
    return arr


def check_dimension(vector: np.ndarray, dim: int) -> None:
    if len(vector) != dim:
        raise DimensionMismatchError(expected=dim, actual=len(vector))


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


def euclidean_distance(a: np.ndarray, b: np.ndarray) -> float:
    """L2 (Euclidean) distance between two vectors."""
    return float(np.sqrt(np.sum((a - b) ** 2)))


def per_dimension_variance(
    linear_sum: np.ndarray,
    squared_sum: np.ndarray,
    count: int,
    label: Optional[str] = None,
) -> np.ndarray:
    """Per-dimension variance recovered from additive sums.

    ``variance[i] = |squared_sum[i]/count − (linear_sum[i]/count)²|``

    The absolute value absorbs round-off that leaves a tiny negative
    residue where the true variance is zero.  Residues more negative than
    ``VARIANCE_TOLERANCE`` (relative to the second moment) point at
    cancellation in the sums themselves; they are still clamped but are
    reported through the module logger.

    Parameters
    ----------
    linear_sum  : CF1x vector.
    squared_sum : CF2x vector of the same length.
    count       : number of points summarised (must be >= 1).
    label       : optional name of the owning cluster, used in the warning.
    """
    mean = linear_sum / count
    mean_of_squares = squared_sum / count
    raw = mean_of_squares - mean ** 2

    threshold = -VARIANCE_TOLERANCE * np.maximum(1.0, np.abs(mean_of_squares))
    unstable = np.flatnonzero(raw < threshold)
    if unstable.size:
        logger.warning(
            "Negative variance beyond round-off in %s at dimensions %s "
            "(min %.3e); clamping with abs()",
            label or "micro-cluster",
            unstable.tolist(),
            float(raw[unstable].min()),
        )
    return np.abs(raw)


def mean_deviation(variance: np.ndarray) -> float:
    """Mean, across dimensions, of the per-dimension standard deviation.

    This is deliberately not an RMS norm: each dimension contributes its
    own standard deviation with equal weight.
    """
    return float(np.sum(np.sqrt(variance)) / len(variance))
