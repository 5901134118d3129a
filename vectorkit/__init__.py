"""
vectorkit
=========

Small vector analytics core: distance primitives, k-means clustering,
k-nearest-neighbours classification and descriptive statistics over
in-memory numeric vectors.

Example usage:
--------------
    >>> from vectorkit import cluster, classify, standard_deviation
    >>>
    >>> data = [[0, 0], [0, 1], [1, 3], [2, 0]]
    >>> cluster(data, k=2)
    [0, 1, 1, 0]
    >>> classify(data, [0, 1, 1, 0], [1, 2], k=2)
    1
    >>> round(standard_deviation([10, 2, 38, 23, 38, 23, 21]), 3)
    12.299
"""

from .version import __version__
from .errors import (
    VectorKitError,
    DimensionMismatch,
    DegenerateVector,
    InvalidParameter,
    InsufficientData,
    DegenerateCluster,
    NonConvergence,
    NotFittedError,
)
from .vector import (
    as_vector,
    as_dataset,
    dot,
    magnitude,
    distance,
    angle,
    planar_distance,
    pairwise_distances,
)
from .stats import mean, variance, standard_deviation
from .kmeans import KMeans, cluster
from .knn import KNearestNeighbors, classify

__all__ = [
    '__version__',
    'VectorKitError', 'DimensionMismatch', 'DegenerateVector', 'InvalidParameter',
    'InsufficientData', 'DegenerateCluster', 'NonConvergence', 'NotFittedError',
    'as_vector', 'as_dataset', 'dot', 'magnitude', 'distance', 'angle',
    'planar_distance', 'pairwise_distances',
    'mean', 'variance', 'standard_deviation',
    'KMeans', 'cluster',
    'KNearestNeighbors', 'classify',
]
