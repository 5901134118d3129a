"""
k-nearest-neighbours classification.
"""

import logging
from typing import Any, List, Sequence, Tuple

import numpy as np

from .errors import InvalidParameter, NotFittedError
from .vector import (
    as_dataset,
    as_vector,
    check_positive_int,
    check_same_dimension,
    pairwise_distances,
)

logger = logging.getLogger(__name__)

DEFAULT_NEIGHBORS = 3


def _majority_vote(labels: Sequence[Any]) -> Any:
    """
    Most frequent label, scanning in the given order.

    A label takes the lead only with a strictly higher tally, so among
    equally frequent labels the one that reached that tally first wins.
    Labels are compared with ``==`` and need not be hashable.
    """
    votes: List[List[Any]] = []
    top_label, top_count = labels[0], 0

    for label in labels:
        for vote in votes:
            if vote[0] == label:
                vote[1] += 1
                count = vote[1]
                break
        else:
            votes.append([label, 1])
            count = 1

        if count > top_count:
            top_label, top_count = label, count

    return top_label


class KNearestNeighbors:
    """
    Nearest-neighbour classifier over a labelled training set.

    Neighbours are ranked by Euclidean distance with a stable sort, so equal
    distances keep training-set order and results are reproducible.

    Example:
        >>> model = KNearestNeighbors(k=2).fit([[0, 0], [0, 1], [1, 3], [2, 0]], [0, 1, 1, 0])
        >>> model.predict([1, 2])
        1
    """

    def __init__(self, k: int = DEFAULT_NEIGHBORS):
        self.k = check_positive_int('k', k)
        self.training_set_ = None
        self.labels_ = None

    def fit(self, training_set, labels: Sequence[Any]) -> 'KNearestNeighbors':
        """
        Store the training data.

        Args:
            training_set: Vectors of shape (n_samples, n_features)
            labels: One label per training vector

        Returns:
            self
        """
        X = as_dataset(training_set)
        labels = list(labels)

        if X.shape[0] != len(labels):
            raise InvalidParameter(
                f"Got {X.shape[0]} training vectors but {len(labels)} labels"
            )
        if self.k > X.shape[0]:
            raise InvalidParameter(
                f"k={self.k} must not exceed the number of training vectors ({X.shape[0]})"
            )

        self.training_set_ = X
        self.labels_ = labels
        logger.debug("Fitted %d-NN classifier on %d vectors", self.k, X.shape[0])
        return self

    def kneighbors(self, query_point) -> Tuple[np.ndarray, np.ndarray]:
        """
        Distances and indices of the k training vectors nearest to the query.

        Returns:
            Tuple of (distances, indices), both of length k, nearest first
        """
        if self.training_set_ is None:
            raise NotFittedError("Model must be fitted before querying neighbours")

        query = as_vector(query_point)
        check_same_dimension(self.training_set_, query)

        dists = pairwise_distances(query[np.newaxis, :], self.training_set_)[0]
        order = np.argsort(dists, kind='stable')[:self.k]
        return dists[order], order

    def predict(self, query_point) -> Any:
        """Label with the most votes among the k nearest neighbours."""
        _, indices = self.kneighbors(query_point)
        return _majority_vote([self.labels_[i] for i in indices])

    def predict_many(self, query_points) -> List[Any]:
        """Predict a label for each row of ``query_points``."""
        return [self.predict(q) for q in as_dataset(query_points)]


def classify(training_set, labels: Sequence[Any], query_point, k: int = DEFAULT_NEIGHBORS) -> Any:
    """
    Classify ``query_point`` by majority vote of its k nearest neighbours.

    Example:
        >>> data = [[0, 0], [0, 1], [1, 3], [2, 0]]
        >>> classify(data, [0, 1, 1, 0], [1, 0], k=2)
        0
    """
    return KNearestNeighbors(k=k).fit(training_set, labels).predict(query_point)
