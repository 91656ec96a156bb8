"""Exception taxonomy for clustream-core.

Every error is a contract violation by the caller, raised synchronously
and never retried.  All of them are ``ValueError`` subclasses so callers
that already guard vector input with ``except ValueError`` keep working.
"""

from __future__ import annotations

from typing import Optional


class MicroClusterError(ValueError):
    """Base class for all micro-cluster contract violations."""


class InvalidDimensionError(MicroClusterError):
    """A seed vector is empty or not one-dimensional."""


class DimensionMismatchError(MicroClusterError):
    """A vector or cluster does not match the dimensionality of a cluster."""

    def __init__(
        self,
        expected: int,
        actual: int,
        message: Optional[str] = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            message
            or f"Dimension mismatch: expected {expected}, got {actual}."
        )


class EmptyClusterError(MicroClusterError):
    """A derived statistic was requested from a cluster with no points."""
