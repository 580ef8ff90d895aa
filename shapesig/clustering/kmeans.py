"""K-Means clustering of shape signatures.

K-Means++ seeding followed by Lloyd refinement, exposed through the same
train/predict contract as the KNN classifier. Predictions are cluster
identifiers ("Cluster 0", "Cluster 1", ...), not input labels.
"""

import logging
import numpy as np
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..classification.base import Classifier
from ..config import KMeansConfig
from ..data.records import FeatureRecord
from ..distance import EUCLIDEAN
from ..exceptions import DimensionMismatchError, UntrainedModelError
from .metrics import silhouette_score, sum_squared_errors


logger = logging.getLogger(__name__)

EmptyClusterHook = Callable[[int, int], None]


@dataclass
class KMeansResult:
    """Result from k-means training.

    Attributes:
        centroids: Final centroids, labeled "Cluster <i>".
        clusters: Training records per cluster (may contain empty lists).
        sse: Sum of squared Euclidean errors of the final clustering.
        n_iterations: Number of Lloyd iterations used.
        converged: Whether centroids settled before the iteration cap.
        n_empty_reseeds: How many times an empty cluster was reseeded.
    """
    centroids: List[FeatureRecord]
    clusters: List[List[FeatureRecord]]
    sse: float
    n_iterations: int
    converged: bool
    n_empty_reseeds: int = 0
    cluster_sizes: List[int] = field(default_factory=list)


def cluster_label(index: int) -> str:
    """Synthetic label of the cluster at ``index``."""
    return f"Cluster {index}"


class KMeansClassifier(Classifier):
    """K-Means with K-Means++ initialization.

    Cluster identity is arbitrary: the input labels are ignored during
    training.
    """

    def __init__(
        self,
        n_clusters: int = 3,
        metric: str = EUCLIDEAN,
        norm: int = 2,
        convergence_threshold: float = 1e-6,
        max_iter: int = 300,
        seed: Optional[int] = None,
        on_empty_cluster: Optional[EmptyClusterHook] = None,
    ):
        """Initialize k-means.

        Args:
            n_clusters: Number of clusters (k).
            metric: Distance metric name.
            norm: Minkowski order (only used with ``"minkowski"``).
            convergence_threshold: Stop once no centroid coordinate moves
                by more than this.
            max_iter: Maximum Lloyd iterations.
            seed: Random seed for seeding and empty-cluster recovery.
            on_empty_cluster: Called with ``(cluster_index, iteration)``
                whenever an empty cluster is reseeded.
        """
        if n_clusters < 1:
            raise ValueError(f"n_clusters must be at least 1, got {n_clusters}")
        if max_iter < 1:
            raise ValueError(f"max_iter must be at least 1, got {max_iter}")
        super().__init__(metric=metric, norm=norm)
        self.n_clusters = n_clusters
        self.convergence_threshold = convergence_threshold
        self.max_iter = max_iter
        self.rng = np.random.default_rng(seed)
        self.on_empty_cluster = on_empty_cluster
        self._n_empty_reseeds = 0

        self.result_: Optional[KMeansResult] = None
        logger.info("Initializing KMeansClassifier with k=%d, metric=%s, norm=%d",
                    n_clusters, self.metric, self.norm)

    @classmethod
    def from_config(cls, config: KMeansConfig) -> "KMeansClassifier":
        return cls(
            n_clusters=config.n_clusters,
            metric=config.metric,
            norm=config.norm,
            convergence_threshold=config.convergence_threshold,
            max_iter=config.max_iter,
            seed=config.seed,
        )

    @property
    def is_trained(self) -> bool:
        return self.result_ is not None

    def _require_trained(self) -> KMeansResult:
        if self.result_ is None:
            raise UntrainedModelError()
        return self.result_

    @property
    def clusters(self) -> List[List[FeatureRecord]]:
        """Training records per cluster."""
        return self._require_trained().clusters

    @property
    def centroids(self) -> List[FeatureRecord]:
        """Cluster centroids."""
        return self._require_trained().centroids

    def _nearest(self, point, centroids: np.ndarray) -> int:
        """Index of the nearest centroid, lowest index on ties."""
        distances = [self._distance(point, c) for c in centroids]
        return int(np.argmin(distances))

    def _assign_clusters(self, data: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        """Assign each point to its nearest centroid.

        Args:
            data: Data points (n x d).
            centroids: Centroids (k x d).

        Returns:
            Cluster assignments (n,).
        """
        return np.array([self._nearest(point, centroids) for point in data], dtype=int)

    def _update_centroids(
        self,
        data: np.ndarray,
        labels: np.ndarray,
        iteration: int,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Update centroids as mean of assigned points.

        Args:
            data: Data points (n x d).
            labels: Cluster assignments.
            iteration: Current iteration, for reporting.
            rng: Random generator for empty-cluster recovery.

        Returns:
            New centroids (k x d).
        """
        new_centroids = np.zeros((self.n_clusters, data.shape[1]))

        for k in range(self.n_clusters):
            mask = labels == k
            if np.any(mask):
                new_centroids[k] = data[mask].mean(axis=0)
            else:
                # Empty cluster: reseed from a random training point
                new_centroids[k] = data[rng.integers(len(data))]
                self._n_empty_reseeds += 1
                logger.warning("Cluster %d is empty at iteration %d, reseeding from a random record.",
                               k, iteration)
                if self.on_empty_cluster is not None:
                    self.on_empty_cluster(k, iteration)

        return new_centroids

    def _initialize_centroids(self, data: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        """Initialize centroids using k-means++.

        Each new centroid is drawn with probability proportional to the
        distance between a point and its nearest already chosen centroid.

        Args:
            data: Data points (n x d).
            rng: Random generator.

        Returns:
            Initial centroids (k x d).
        """
        n_samples = len(data)
        centroids = [data[rng.integers(n_samples)]]

        for _ in range(1, self.n_clusters):
            distances = np.array([
                min(self._distance(point, c) for c in centroids)
                for point in data
            ])

            # Rescale before summing so MAX_DISTANCE values cannot overflow
            scale = distances.max()
            if scale > 0 and np.isfinite(scale):
                cumulative = np.cumsum(distances / scale)
                target = rng.random() * cumulative[-1]
                new_idx = int(np.searchsorted(cumulative, target, side="right"))
                new_idx = min(new_idx, n_samples - 1)
            else:
                new_idx = int(rng.integers(n_samples))

            centroids.append(data[new_idx])

        return np.array(centroids, dtype=float)

    def train(
        self,
        records: Sequence[FeatureRecord],
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """Cluster ``records``, replacing any previous clustering.

        Args:
            records: Training records (same dimension).
            rng: Random generator; defaults to the one seeded at construction.

        Raises:
            ValueError: If ``records`` is empty.
            DimensionMismatchError: If records differ in dimension.
        """
        records = list(records)
        if not records:
            raise ValueError("Cannot train k-means on an empty dataset")
        dims = {r.dimension for r in records}
        if len(dims) > 1:
            raise DimensionMismatchError(
                f"Vectors are not the same size ! (dimensions found: {sorted(dims)})"
            )
        rng = rng if rng is not None else self.rng
        logger.debug("Training k-means (k=%d) on %d samples.", self.n_clusters, len(records))

        data = np.array([r.values for r in records], dtype=float).reshape(len(records), dims.pop())
        self._n_empty_reseeds = 0

        centroids = self._initialize_centroids(data, rng)
        labels = self._assign_clusters(data, centroids)

        converged = False
        iteration = 0
        for iteration in range(1, self.max_iter + 1):
            new_centroids = self._update_centroids(data, labels, iteration, rng)

            # Check convergence coordinate by coordinate
            shift = np.abs(new_centroids - centroids)
            centroids = new_centroids

            if np.all(shift <= self.convergence_threshold):
                converged = True
                break

            labels = self._assign_clusters(data, centroids)

        if not converged:
            logger.warning("k-means stopped after %d iterations without converging.", self.max_iter)

        clusters: List[List[FeatureRecord]] = [[] for _ in range(self.n_clusters)]
        for record, label in zip(records, labels):
            clusters[label].append(record)
        centroid_records = [
            FeatureRecord.from_array(c, label=cluster_label(i))
            for i, c in enumerate(centroids)
        ]

        self.result_ = KMeansResult(
            centroids=centroid_records,
            clusters=clusters,
            sse=sum_squared_errors(clusters, centroid_records),
            n_iterations=iteration,
            converged=converged,
            n_empty_reseeds=self._n_empty_reseeds,
            cluster_sizes=[len(c) for c in clusters],
        )
        logger.debug("k-means finished in %d iterations (converged=%s), sizes=%s",
                     iteration, converged, self.result_.cluster_sizes)

    def predict(self, record: FeatureRecord) -> str:
        """Label of the nearest centroid's cluster."""
        result = self._require_trained()
        index = self._nearest(record, np.array([c.values for c in result.centroids]))
        return cluster_label(index)

    def calculate_sse(self) -> float:
        """Sum of squared Euclidean distances to the cluster centroids."""
        result = self._require_trained()
        return sum_squared_errors(result.clusters, result.centroids)

    def calculate_silhouette_score(self) -> float:
        """Mean silhouette over the training records.

        Uses the configured metric. Returns ``nan`` when there are no
        records and 0.0 when fewer than two clusters are populated.
        """
        result = self._require_trained()
        return silhouette_score(result.clusters, distance=self._distance)
