"""Preprocessing of feature records before classification.

Normalization is owned by the caller of the evaluation harness, never by
a classifier: rescale once, then hand the records to LOOCV or k-fold.
"""

from typing import List, Sequence, Tuple

import numpy as np

from .records import FeatureRecord


# ---------------------------------------------------------------------------
# Min-max normalization
# ---------------------------------------------------------------------------

def global_range(records: Sequence[FeatureRecord]) -> Tuple[float, float]:
    """Smallest and largest scalar across every vector.

    Args:
        records: Records to scan.

    Returns:
        ``(global_min, global_max)``; ``(nan, nan)`` if there are no values.
    """
    values = [v for r in records for v in r.values]
    if not values:
        return float("nan"), float("nan")
    return float(np.min(values)), float(np.max(values))


def normalize_records(
    records: Sequence[FeatureRecord],
    min_value: float = 0.0,
    max_value: float = 1.0,
) -> List[FeatureRecord]:
    """Min-max rescale all vectors into ``[min_value, max_value]``.

    A single global minimum and maximum (over every value of every vector)
    is used, so relative magnitudes between features are preserved.

    Args:
        records: Records to rescale.
        min_value: Lower bound of the target range.
        max_value: Upper bound of the target range.

    Returns:
        New records with the same label, method and sample. Constant data
        maps to the middle of the range.
    """
    if not records:
        return []

    global_min, global_max = global_range(records)
    span = global_max - global_min

    result = []
    for record in records:
        arr = record.to_array()
        if not span > 0:
            scaled = np.full(arr.shape, (min_value + max_value) / 2.0)
        else:
            scaled = min_value + (arr - global_min) * (max_value - min_value) / span
        result.append(record.with_values(scaled.tolist()))
    return result
