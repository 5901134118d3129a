"""
Vector primitives: validation, Euclidean distance and angles.

Vectors are represented as read-only one-dimensional float64 numpy arrays.
Anything that enters the library goes through ``as_vector`` or
``as_dataset`` first, so shape problems surface as typed errors instead of
``NaN`` further down.
"""

import math
import numbers
from typing import Any, Iterable, Sequence, Union

import numpy as np

from .errors import DegenerateVector, DimensionMismatch, InvalidParameter

VectorLike = Union[Sequence[float], np.ndarray]


def _freeze(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def _real_array(values, what: str) -> np.ndarray:
    """Float64 copy of ``values``; strings, bools and complex numbers are rejected."""
    try:
        arr = np.asarray(values)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"{what} must contain only numbers: {e}") from e

    if not np.issubdtype(arr.dtype, np.number) or np.issubdtype(arr.dtype, np.complexfloating):
        raise InvalidParameter(f"{what} must contain only real numbers, got dtype {arr.dtype}")
    return arr.astype(np.float64)


def _pow2_scale(*arrays: np.ndarray) -> float:
    """
    Power of two close to the largest magnitude in ``arrays``.

    Dividing by it is exact, so equal distances stay exactly equal, and it
    keeps squares of the scaled values away from overflow and underflow.
    """
    peak = max((float(np.max(np.abs(arr))) for arr in arrays if arr.size), default=0.0)
    _, exp = math.frexp(peak)
    return math.ldexp(1.0, exp - 1)


def _check_finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise InvalidParameter(f"{what} exceeds the floating point range")
    return value


def as_vector(values: VectorLike) -> np.ndarray:
    """
    Convert ``values`` into an immutable Vector.

    Args:
        values: Sequence of real numbers

    Returns:
        Read-only float64 array of shape (d,)

    Raises:
        InvalidParameter: If the input is not a non-empty, flat sequence of
            finite numbers
    """
    arr = _real_array(values, "Vector")

    if arr.ndim != 1:
        raise InvalidParameter(f"Vector must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidParameter("Vector must have at least one component")
    if not np.all(np.isfinite(arr)):
        raise InvalidParameter("Vector components must be finite")
    return _freeze(arr)


def as_dataset(rows: Union[Iterable[VectorLike], np.ndarray]) -> np.ndarray:
    """
    Convert ``rows`` into an immutable Dataset of shape (n, d).

    Row order is preserved; it is the identity used to associate points with
    clusters and labels. An empty input gives an array of shape (0, 0).

    Raises:
        DimensionMismatch: If the rows do not all have the same length
        InvalidParameter: If a row is not a flat sequence of finite numbers
    """
    if isinstance(rows, np.ndarray):
        if rows.ndim != 2:
            raise InvalidParameter(f"Dataset must be two-dimensional, got shape {rows.shape}")
        rows = list(rows)
    else:
        try:
            rows = list(rows)
        except TypeError as e:
            raise InvalidParameter("Dataset must be a sequence of vectors") from e

    if not rows:
        return _freeze(np.empty((0, 0), dtype=np.float64))

    lengths = []
    for i, row in enumerate(rows):
        try:
            lengths.append(len(row))
        except TypeError as e:
            raise InvalidParameter(f"Row {i} is not a sequence") from e

    if len(set(lengths)) > 1:
        expected = lengths[0]
        bad = next(i for i, n in enumerate(lengths) if n != expected)
        raise DimensionMismatch(
            f"Row {bad} has {lengths[bad]} components, expected {expected}"
        )
    if lengths[0] == 0:
        raise InvalidParameter("Dataset rows must have at least one component")

    arr = _real_array(rows, "Dataset")

    if arr.ndim != 2:
        raise InvalidParameter(f"Dataset rows must be flat, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidParameter("Dataset values must be finite")
    return _freeze(arr)


def check_positive_int(name: str, value: Any) -> int:
    """Return ``value`` as an int, or raise ``InvalidParameter`` unless it is >= 1."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise InvalidParameter(f"{name} must be a positive integer, got {value!r}")
    return int(value)


def check_same_dimension(a: np.ndarray, b: np.ndarray) -> None:
    """Raise ``DimensionMismatch`` unless both vectors have the same length."""
    if a.shape[-1] != b.shape[-1]:
        raise DimensionMismatch(
            f"Vector dimension mismatch: {a.shape[-1]} vs {b.shape[-1]}"
        )


def dot(vector_a: VectorLike, vector_b: VectorLike) -> float:
    """Dot product of two vectors."""
    a, b = as_vector(vector_a), as_vector(vector_b)
    check_same_dimension(a, b)
    scale_a, scale_b = _pow2_scale(a), _pow2_scale(b)
    with np.errstate(over='ignore'):
        value = float(np.dot(a / scale_a, b / scale_b)) * scale_a * scale_b
    return _check_finite(value, "Dot product")


def magnitude(vector: VectorLike) -> float:
    """L2 norm of a vector."""
    a = as_vector(vector)
    scale = _pow2_scale(a)
    return _check_finite(float(np.linalg.norm(a / scale)) * scale, "Magnitude")


def distance(vector_a: VectorLike, vector_b: VectorLike) -> float:
    """
    Euclidean distance between two vectors.

    Example:
        >>> distance([10, 0, 5], [20, 0, 10])
        11.180339887498949
    """
    a, b = as_vector(vector_a), as_vector(vector_b)
    check_same_dimension(a, b)
    scale = _pow2_scale(a, b)
    diff = a / scale - b / scale
    return _check_finite(float(np.sqrt(np.sum(diff ** 2))) * scale, "Distance")


def angle(vector_a: VectorLike, vector_b: VectorLike) -> float:
    """
    Angle in radians between two vectors.

    The cosine is clipped to [-1, 1] so that rounding on (anti)parallel
    vectors cannot push ``acos`` outside its domain.

    Raises:
        DegenerateVector: If either vector has zero magnitude
        DimensionMismatch: If the vectors differ in length

    Example:
        >>> round(angle([3, 4], [4, 3]), 6)
        0.283794
    """
    a, b = as_vector(vector_a), as_vector(vector_b)
    check_same_dimension(a, b)

    if not np.any(a) or not np.any(b):
        raise DegenerateVector("Angle is undefined for a zero-magnitude vector")

    # Largest component of each becomes 1 or -1, so the norms stay in [1, sqrt(d)]
    unit_a = a / np.max(np.abs(a))
    unit_b = b / np.max(np.abs(b))
    cos = float(np.dot(unit_a, unit_b) / (np.linalg.norm(unit_a) * np.linalg.norm(unit_b)))
    if not math.isfinite(cos):
        raise DegenerateVector(f"Cosine between the vectors is not finite ({cos})")
    return math.acos(max(-1.0, min(1.0, cos)))


def planar_distance(point_a: VectorLike, point_b: VectorLike) -> float:
    """Euclidean distance between two 2-D points ``[x, y]``."""
    a, b = as_vector(point_a), as_vector(point_b)
    for p in (a, b):
        if p.shape[0] != 2:
            raise DimensionMismatch(f"Planar points need 2 components, got {p.shape[0]}")
    return math.hypot(b[0] - a[0], b[1] - a[1])


def pairwise_distances(points: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """
    Euclidean distance from every point to every center.

    Args:
        points: Array of shape (n, d)
        centers: Array of shape (m, d)

    Returns:
        Array of shape (n, m)
    """
    check_same_dimension(points, centers)
    scale = _pow2_scale(points, centers)
    diff = (points / scale)[:, np.newaxis, :] - (centers / scale)[np.newaxis, :, :]
    with np.errstate(over='ignore'):
        dists = np.sqrt(np.sum(diff ** 2, axis=2)) * scale
    if not np.all(np.isfinite(dists)):
        raise InvalidParameter("Distance exceeds the floating point range")
    return dists
