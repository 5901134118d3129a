"""
Descriptive statistics over flat numeric sequences.
"""

from typing import Sequence

import numpy as np

from .errors import InsufficientData, InvalidParameter


def _as_values(values: Sequence[float]) -> np.ndarray:
    try:
        arr = np.asarray(values)
    except (TypeError, ValueError) as e:
        raise InvalidParameter(f"Values must be numbers: {e}") from e
    if not np.issubdtype(arr.dtype, np.number) or np.issubdtype(arr.dtype, np.complexfloating):
        raise InvalidParameter(f"Values must be real numbers, got dtype {arr.dtype}")
    arr = arr.astype(np.float64)
    if arr.ndim != 1:
        raise InvalidParameter(f"Values must be a flat sequence, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidParameter("Values must be finite")
    return arr


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; ``InsufficientData`` on an empty sequence."""
    arr = _as_values(values)
    if arr.size == 0:
        raise InsufficientData("Mean of an empty sequence is undefined")
    return float(np.mean(arr))


def variance(values: Sequence[float], use_population: bool = True) -> float:
    """
    Mean squared deviation from the mean.

    Args:
        values: Flat sequence of numbers
        use_population: Divide by n when True (the data is the whole
            population), by n - 1 when False (the data is a sample)

    Raises:
        InsufficientData: If the sequence is empty, or holds a single value
            and the sample form is requested
    """
    arr = _as_values(values)
    n = arr.size
    if n == 0:
        raise InsufficientData("Variance of an empty sequence is undefined")
    if not use_population and n == 1:
        raise InsufficientData("Sample variance needs at least two values")

    ddof = 0 if use_population else 1
    return float(np.sum((arr - arr.mean()) ** 2) / (n - ddof))


def standard_deviation(values: Sequence[float], use_population: bool = True) -> float:
    """
    Standard deviation of ``values``.

    Example:
        >>> standard_deviation([10, 2, 38, 23, 38, 23, 21])
        12.29899614287479
        >>> standard_deviation([10, 2, 38, 23, 38, 23, 21], use_population=False)
        13.284434142114991
    """
    return float(np.sqrt(variance(values, use_population)))
