"""
K-means clustering (Lloyd's algorithm).

Seeding defaults to the first k points of the dataset, which makes every run
reproducible. Centroids are never rounded between iterations, and the loop
is bounded by ``max_iters``.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import numpy as np
from sklearn.utils import check_random_state

from .errors import (
    DegenerateCluster,
    DimensionMismatch,
    InvalidParameter,
    NonConvergence,
    NotFittedError,
)
from .vector import as_dataset, check_positive_int, check_same_dimension, pairwise_distances

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERS = 300
INIT_METHODS = ('first', 'random', 'k-means++')
EMPTY_CLUSTER_POLICIES = ('raise', 'farthest')


class KMeans:
    """
    K-means clustering with deterministic seeding and bounded iteration.

    Each iteration assigns every point to its nearest centroid (ties go to
    the lowest centroid index) and then moves every centroid to the mean of
    its members. The fit stops once an assignment step reproduces the
    previous assignment; at that point ``cluster_centers_`` are exactly the
    means of ``labels_``.
    """

    def __init__(
        self,
        n_clusters: int,
        max_iters: int = DEFAULT_MAX_ITERS,
        init: Union[str, np.ndarray] = 'first',
        random_state: Optional[Union[int, np.random.RandomState]] = None,
        empty_cluster: str = 'raise',
        verbose: bool = False
    ):
        """
        Initialize K-means clustering.

        Args:
            n_clusters: Number of clusters
            max_iters: Maximum number of centroid updates before giving up
            init: Seeding strategy: 'first' (first k points in dataset
                order), 'random', 'k-means++', or an array of shape
                (n_clusters, n_features) with explicit starting centroids
            random_state: Seed or RandomState used by 'random' and 'k-means++'
            empty_cluster: 'raise' to fail with DegenerateCluster when a
                cluster loses all members, 'farthest' to move its centroid
                onto the point farthest from its own centroid
            verbose: Whether to log progress at INFO level
        """
        self.n_clusters = check_positive_int('n_clusters', n_clusters)
        self.max_iters = check_positive_int('max_iters', max_iters)

        if isinstance(init, str) and init not in INIT_METHODS:
            raise InvalidParameter(
                f"Unknown initialization method: {init!r} (expected one of {INIT_METHODS})"
            )
        if empty_cluster not in EMPTY_CLUSTER_POLICIES:
            raise InvalidParameter(
                f"Unknown empty cluster policy: {empty_cluster!r} "
                f"(expected one of {EMPTY_CLUSTER_POLICIES})"
            )

        self.init = init
        self.random_state = random_state
        self.empty_cluster = empty_cluster
        self.verbose = verbose

        # Results
        self.cluster_centers_ = None
        self.labels_ = None
        self.inertia_ = None
        self.n_iter_ = None

    def _log(self, msg: str, *args) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, msg, *args)

    def _init_centroids(self, X: np.ndarray, rng: np.random.RandomState) -> np.ndarray:
        """Pick the starting centroids according to ``self.init``."""
        n_samples = X.shape[0]

        if not isinstance(self.init, str):
            centroids = as_dataset(self.init)
            if centroids.shape[0] != self.n_clusters:
                raise InvalidParameter(
                    f"init has {centroids.shape[0]} centroids, expected {self.n_clusters}"
                )
            check_same_dimension(X, centroids)
            return centroids.copy()

        if self.init == 'first':
            return X[:self.n_clusters].copy()
        if self.init == 'random':
            indices = rng.choice(n_samples, self.n_clusters, replace=False)
            return X[indices].copy()
        return self._kmeans_plus_plus_init(X, rng)

    def _kmeans_plus_plus_init(self, X: np.ndarray, rng: np.random.RandomState) -> np.ndarray:
        """K-means++ seeding: each new centroid is drawn with probability
        proportional to its squared distance from the nearest chosen one."""
        n_samples, n_features = X.shape
        centroids = np.zeros((self.n_clusters, n_features))
        centroids[0] = X[rng.randint(n_samples)]

        for c_id in range(1, self.n_clusters):
            min_distances_squared = np.min(
                pairwise_distances(X, centroids[:c_id]), axis=1
            ) ** 2
            total = min_distances_squared.sum()
            if total == 0.0:
                # Every point already coincides with a centroid
                centroids[c_id] = X[rng.randint(n_samples)]
                continue

            cumulative_probs = np.cumsum(min_distances_squared / total)
            next_centroid_idx = np.searchsorted(cumulative_probs, rng.rand())
            centroids[c_id] = X[min(next_centroid_idx, n_samples - 1)]

        return centroids

    def _assign_clusters(self, X: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        """Index of the nearest centroid for each point; argmin keeps the
        lowest index on ties."""
        return np.argmin(pairwise_distances(X, centroids), axis=1)

    def _update_centroids(self, X: np.ndarray, labels: np.ndarray, n_iter: int) -> np.ndarray:
        """Move every centroid to the mean of its members."""
        centroids = np.zeros((self.n_clusters, X.shape[1]))
        counts = np.bincount(labels, minlength=self.n_clusters)

        for k in range(self.n_clusters):
            if counts[k]:
                centroids[k] = X[labels == k].mean(axis=0)

        empty = np.flatnonzero(counts == 0)
        if empty.size:
            if self.empty_cluster == 'raise':
                raise DegenerateCluster(empty.tolist(), n_iter)
            self._relocate_empty(X, labels, counts, centroids, empty)

        return centroids

    def _relocate_empty(
        self,
        X: np.ndarray,
        labels: np.ndarray,
        counts: np.ndarray,
        centroids: np.ndarray,
        empty: np.ndarray
    ) -> None:
        """Place each empty centroid on the point farthest from its own
        centroid, taking points only from clusters that keep a member."""
        counts = counts.copy()
        owner = labels.copy()
        dists = np.sqrt(np.sum((X - centroids[labels]) ** 2, axis=1))

        for c in empty:
            candidates = counts[owner] > 1
            idx = int(np.argmax(np.where(candidates, dists, -1.0)))
            logger.warning("Cluster %d is empty, relocating its centroid to point %d", c, idx)
            counts[owner[idx]] -= 1
            counts[c] += 1
            owner[idx] = c
            dists[idx] = -1.0
            centroids[c] = X[idx]

    def _calculate_inertia(self, X: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> float:
        """Within-cluster sum of squared distances."""
        return float(np.sum((X - centroids[labels]) ** 2))

    def fit(self, X) -> 'KMeans':
        """
        Fit K-means clustering to the data.

        Args:
            X: Input data of shape (n_samples, n_features)

        Returns:
            self

        Raises:
            InvalidParameter: If n_clusters exceeds the number of samples
            DimensionMismatch: If rows differ in length
            DegenerateCluster: If a cluster empties under empty_cluster='raise'
            NonConvergence: If the assignment keeps changing after max_iters
                centroid updates
        """
        X = as_dataset(X)
        n_samples = X.shape[0]
        if self.n_clusters > n_samples:
            raise InvalidParameter(
                f"n_clusters={self.n_clusters} must not exceed the number of samples ({n_samples})"
            )

        self._log("Fitting K-means with %d clusters on %d samples...", self.n_clusters, n_samples)

        rng = check_random_state(self.random_state)
        centroids = self._init_centroids(X, rng)
        labels = self._assign_clusters(X, centroids)

        for iteration in range(1, self.max_iters + 1):
            centroids = self._update_centroids(X, labels, iteration)
            new_labels = self._assign_clusters(X, centroids)
            changed = int(np.count_nonzero(new_labels != labels))
            logger.debug("Iteration %d: %d assignments changed", iteration, changed)

            if changed == 0:
                self._log("Converged after %d iterations", iteration)
                break
            labels = new_labels
        else:
            raise NonConvergence(self.max_iters, labels.tolist())

        self.cluster_centers_ = centroids
        self.labels_ = labels
        self.inertia_ = self._calculate_inertia(X, labels, centroids)
        self.n_iter_ = iteration

        self._log("Final inertia: %.4f", self.inertia_)
        return self

    def predict(self, X) -> np.ndarray:
        """
        Assign new data to the fitted clusters.

        Args:
            X: Input data of shape (n_samples, n_features)

        Returns:
            Cluster labels
        """
        if self.cluster_centers_ is None:
            raise NotFittedError("Model must be fitted before prediction")

        X = as_dataset(X)
        if X.shape[0] == 0:
            return np.empty(0, dtype=np.intp)
        if X.shape[1] != self.cluster_centers_.shape[1]:
            raise DimensionMismatch(
                f"Expected {self.cluster_centers_.shape[1]} features, got {X.shape[1]}"
            )
        return self._assign_clusters(X, self.cluster_centers_)

    def fit_predict(self, X) -> np.ndarray:
        """Fit the model and return the cluster label of each sample."""
        return self.fit(X).labels_

    def get_cluster_info(self) -> Dict[str, Any]:
        """Get information about the clustering results."""
        if self.cluster_centers_ is None:
            raise NotFittedError("Model must be fitted first")

        cluster_sizes = np.bincount(self.labels_, minlength=self.n_clusters)

        return {
            'n_clusters': self.n_clusters,
            'inertia': self.inertia_,
            'n_iterations': self.n_iter_,
            'cluster_sizes': {k: int(size) for k, size in enumerate(cluster_sizes)},
            'avg_cluster_size': float(np.mean(cluster_sizes)),
            'std_cluster_size': float(np.std(cluster_sizes)),
            'min_cluster_size': int(np.min(cluster_sizes)),
            'max_cluster_size': int(np.max(cluster_sizes))
        }


def cluster(
    dataset,
    k: int,
    max_iters: int = DEFAULT_MAX_ITERS,
    init: Union[str, np.ndarray] = 'first',
    random_state: Optional[Union[int, np.random.RandomState]] = None,
    empty_cluster: str = 'raise'
) -> List[int]:
    """
    Group ``dataset`` into ``k`` clusters.

    Returns one cluster index per row, in dataset order.

    Example:
        >>> cluster([[0, 0], [0, 1], [1, 3], [2, 0]], 2)
        [0, 1, 1, 0]
    """
    model = KMeans(
        n_clusters=k,
        max_iters=max_iters,
        init=init,
        random_state=random_state,
        empty_cluster=empty_cluster,
    )
    return model.fit_predict(dataset).tolist()
