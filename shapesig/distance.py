"""Distance metrics between feature vectors.

Provides:
    - ``euclidean``: sqrt(sum((a_i - b_i)^2))
    - ``manhattan``: sum(|a_i - b_i|)
    - ``minkowski``: (sum(|a_i - b_i|^p))^(1/p), p > 0

Each function accepts FeatureRecords or plain array-likes and raises
``DimensionMismatchError`` when the two vectors differ in length.
"""

import sys
from typing import Sequence, Union

import numpy as np

from .data.records import FeatureRecord
from .exceptions import DimensionMismatchError, InvalidNormOrderError


EUCLIDEAN = "euclidean"
MANHATTAN = "manhattan"
MINKOWSKI = "minkowski"
METRICS = (EUCLIDEAN, MANHATTAN, MINKOWSKI)

# Returned by classifiers for every pair when the metric is not recognized.
MAX_DISTANCE = sys.float_info.max

VectorLike = Union[FeatureRecord, np.ndarray, Sequence[float]]


def as_array(vector: VectorLike) -> np.ndarray:
    """Get the values of a record (or array-like) as a float array."""
    if isinstance(vector, FeatureRecord):
        return vector.to_array()
    return np.asarray(vector, dtype=float)


def _difference(a: VectorLike, b: VectorLike) -> np.ndarray:
    x = as_array(a)
    y = as_array(b)
    if x.shape != y.shape:
        raise DimensionMismatchError(f"Vectors are not the same size ! ({x.size} != {y.size})")
    return x - y


def euclidean(a: VectorLike, b: VectorLike) -> float:
    """Euclidean (L2) distance."""
    diff = _difference(a, b)
    return float(np.sqrt(np.sum(diff ** 2)))


def manhattan(a: VectorLike, b: VectorLike) -> float:
    """Manhattan (L1) distance."""
    diff = _difference(a, b)
    return float(np.sum(np.abs(diff)))


def minkowski(a: VectorLike, b: VectorLike, p: float) -> float:
    """Minkowski distance of order ``p``.

    Args:
        a: First vector.
        b: Second vector.
        p: Order of the norm. ``p=1`` is Manhattan, ``p=2`` Euclidean.

    Returns:
        The distance.

    Raises:
        InvalidNormOrderError: If ``p <= 0``.
        DimensionMismatchError: If the vectors differ in length.
    """
    if p <= 0:
        raise InvalidNormOrderError(f"Order of the norm should be a positive integer p={p}")
    diff = _difference(a, b)
    total = float(np.sum(np.abs(diff) ** p))
    return total ** (1.0 / p)


def squared_euclidean(a: VectorLike, b: VectorLike) -> float:
    """Squared Euclidean distance (no square root)."""
    diff = _difference(a, b)
    return float(np.sum(diff ** 2))
