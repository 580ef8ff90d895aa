"""Internal validity metrics for a clustering.

Provides:
- Sum of squared errors (SSE) - compactness, lower is better
- Silhouette score - separation, in [-1, 1], higher is better

Both operate on the bucket layout kept by ``KMeansClassifier``: a list of
clusters, each a list of FeatureRecords.
"""

from typing import Callable, List, Sequence

import numpy as np

from ..data.records import FeatureRecord
from ..distance import euclidean, squared_euclidean


DistanceFn = Callable[[FeatureRecord, FeatureRecord], float]


def sum_squared_errors(
    clusters: Sequence[Sequence[FeatureRecord]],
    centroids: Sequence[FeatureRecord],
) -> float:
    """Compute the SSE of a clustering.

    SSE = sum_k sum_{x in C_k} ||x - c_k||^2

    Always Euclidean, whatever metric built the clusters.

    Args:
        clusters: Records per cluster.
        centroids: One centroid per cluster.

    Returns:
        Sum of squared errors.
    """
    if len(clusters) != len(centroids):
        raise ValueError(
            f"Got {len(clusters)} clusters but {len(centroids)} centroids"
        )

    total = 0.0
    for members, centroid in zip(clusters, centroids):
        for record in members:
            total += squared_euclidean(record, centroid)
    return total


def _mean_distance(record: FeatureRecord, others: Sequence[FeatureRecord], distance: DistanceFn) -> float:
    return float(np.mean([distance(record, o) for o in others]))


def silhouette_score(
    clusters: Sequence[Sequence[FeatureRecord]],
    distance: DistanceFn = euclidean,
) -> float:
    """Compute the mean silhouette coefficient.

    For each record:
        a = mean distance to the other members of its cluster (0 if alone)
        b = smallest mean distance to the members of another non-empty cluster
        s = (b - a) / max(a, b), or 0 when both are 0

    Args:
        clusters: Records per cluster; empty clusters are ignored.
        distance: Pairwise distance function.

    Returns:
        Mean silhouette over all records. ``nan`` if there are no records,
        0.0 if fewer than two clusters are populated.
    """
    populated: List[Sequence[FeatureRecord]] = [c for c in clusters if len(c) > 0]
    n_records = sum(len(c) for c in populated)

    if n_records == 0:
        return float("nan")
    if len(populated) < 2:
        return 0.0

    scores = []
    for ci, members in enumerate(populated):
        for i, record in enumerate(members):
            # a(i): same cluster, excluding the record itself (by position)
            same = [m for j, m in enumerate(members) if j != i]
            a_i = _mean_distance(record, same, distance) if same else 0.0

            # b(i): nearest other cluster on average
            b_i = min(
                _mean_distance(record, other, distance)
                for cj, other in enumerate(populated)
                if cj != ci
            )

            denom = max(a_i, b_i)
            scores.append((b_i - a_i) / denom if denom > 0 else 0.0)

    return float(np.mean(scores))
