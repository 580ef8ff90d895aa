"""Clustering module for k-means and its validity metrics."""

from .kmeans import (
    KMeansClassifier,
    KMeansResult,
    cluster_label,
)
from .metrics import (
    sum_squared_errors,
    silhouette_score,
)

__all__ = [
    "KMeansClassifier",
    "KMeansResult",
    "cluster_label",
    "sum_squared_errors",
    "silhouette_score",
]
