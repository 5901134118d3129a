"""
Exceptions raised by vectorkit.

Every error derives from ``VectorKitError``, itself a ``ValueError``, so
callers can catch a single failure, the whole family, or any bad-argument
error at once.
"""

from typing import Optional, Sequence


class VectorKitError(ValueError):
    """Base class for all vectorkit errors."""


class DimensionMismatch(VectorKitError):
    """Vectors of unequal length were combined."""


class DegenerateVector(VectorKitError):
    """A zero-magnitude vector was given where a direction is required."""


class InvalidParameter(VectorKitError):
    """An argument is outside its valid range or of the wrong kind."""


class InsufficientData(VectorKitError):
    """Too few values for the requested statistic."""


class DegenerateCluster(VectorKitError):
    """One or more k-means clusters lost all of their members."""

    def __init__(self, clusters: Sequence[int], n_iter: int):
        self.clusters = list(clusters)
        self.n_iter = n_iter
        super().__init__(
            f"Cluster(s) {self.clusters} became empty at iteration {n_iter}"
        )


class NonConvergence(VectorKitError):
    """k-means did not stabilise within the iteration bound."""

    def __init__(self, n_iter: int, labels: Optional[Sequence[int]] = None):
        self.n_iter = n_iter
        self.labels = None if labels is None else list(labels)
        super().__init__(f"K-means did not converge after {n_iter} iterations")


class NotFittedError(VectorKitError):
    """An estimator was used before ``fit`` was called."""
