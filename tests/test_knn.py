import os
import sys

import numpy as np
import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from vectorkit import (
    DimensionMismatch,
    InvalidParameter,
    KNearestNeighbors,
    NotFittedError,
    classify,
    distance,
)

DATA = [[0, 0], [0, 1], [1, 3], [2, 0]]
LABELS = [0, 1, 1, 0]


def test_classify_known_queries():
    assert classify(DATA, LABELS, [1, 2], k=2) == 1
    assert classify(DATA, LABELS, [1, 0], k=2) == 0


def test_classify_default_k():
    # Three nearest to [0, 0.4] are [0,0], [0,1], [2,0]
    assert classify(DATA, LABELS, [0, 0.4]) == 0


def test_k1_returns_label_of_nearest_point():
    rng = np.random.default_rng(5)
    X = rng.normal(size=(30, 4))
    labels = [f"label-{i}" for i in range(30)]
    for q in rng.normal(size=(10, 4)):
        nearest = min(range(30), key=lambda i: distance(q, X[i]))
        assert classify(X, labels, q, k=1) == labels[nearest]


def test_tie_goes_to_label_reaching_max_first():
    training = [[1], [-1], [2], [-2]]
    labels = ['a', 'b', 'b', 'a']
    # Order by distance: a(1), b(1), b(2), a(2); 'b' is first to reach two votes
    assert classify(training, labels, [0], k=4) == 'b'
    # One vote each: the nearest label wins
    assert classify(training, labels, [0], k=2) == 'a'


def test_equal_distances_keep_training_order():
    model = KNearestNeighbors(k=3).fit([[1], [-1], [1]], ['x', 'y', 'z'])
    dists, indices = model.kneighbors([0])
    assert indices.tolist() == [0, 1, 2]
    np.testing.assert_allclose(dists, [1.0, 1.0, 1.0])


def test_unhashable_labels():
    labels = [['red'], ['blue'], ['blue'], ['red']]
    assert classify(DATA, labels, [1, 2], k=2) == ['blue']


def test_kneighbors_sorted_ascending():
    model = KNearestNeighbors(k=4).fit(DATA, LABELS)
    dists, indices = model.kneighbors([1, 2])
    assert indices.tolist() == [2, 1, 0, 3]
    assert np.all(np.diff(dists) >= 0)


def test_predict_many():
    model = KNearestNeighbors(k=2).fit(DATA, LABELS)
    assert model.predict_many([[1, 2], [1, 0]]) == [1, 0]


def test_label_count_mismatch():
    with pytest.raises(InvalidParameter):
        classify(DATA, [0, 1, 1], [1, 2], k=2)


@pytest.mark.parametrize("k", [0, 5, -3, 1.5])
def test_invalid_k(k):
    with pytest.raises(InvalidParameter):
        classify(DATA, LABELS, [1, 2], k=k)


def test_query_dimension_mismatch():
    with pytest.raises(DimensionMismatch):
        classify(DATA, LABELS, [1, 2, 3], k=2)


def test_ragged_training_set():
    with pytest.raises(DimensionMismatch):
        classify([[0, 0], [1]], [0, 1], [0, 0], k=1)


def test_predict_before_fit():
    with pytest.raises(NotFittedError):
        KNearestNeighbors(k=1).predict([0, 0])
