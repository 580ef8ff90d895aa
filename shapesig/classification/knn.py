"""k-Nearest Neighbors classification of shape signatures.

Lazy learner: ``train`` only stores the records; all the work happens in
``predict``, which sorts the training set by distance to the query and
takes a majority vote over the ``k`` closest records.
"""

import logging
from collections import Counter
from typing import List, Optional, Sequence

import numpy as np

from ..config import KNNConfig
from ..data.records import FeatureRecord
from ..distance import EUCLIDEAN
from ..exceptions import UntrainedModelError
from .base import Classifier, copy_records


logger = logging.getLogger(__name__)


class KNNClassifier(Classifier):
    """Majority-vote KNN over a configurable distance metric.

    Example:
        knn = KNNClassifier(k=3, metric="euclidean")
        knn.train(records)
        label = knn.predict(query)
    """

    def __init__(self, k: int = 5, metric: str = EUCLIDEAN, norm: int = 2):
        """Initialize the classifier.

        Args:
            k: Number of neighbors taking part in the vote.
            metric: Distance metric name.
            norm: Minkowski order (only used with ``"minkowski"``).
        """
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")
        super().__init__(metric=metric, norm=norm)
        self.k = k
        self.train_data_: Optional[List[FeatureRecord]] = None
        logger.info("Initializing KNNClassifier with k=%d, metric=%s, norm=%d",
                    k, self.metric, self.norm)

    @classmethod
    def from_config(cls, config: KNNConfig) -> "KNNClassifier":
        return cls(k=config.k, metric=config.metric, norm=config.norm)

    @property
    def is_trained(self) -> bool:
        return self.train_data_ is not None

    def train(self, records: Sequence[FeatureRecord]) -> None:
        """Store a copy of the training records.

        Raises:
            ValueError: If ``records`` is empty.
        """
        if len(records) == 0:
            raise ValueError("Cannot train KNN on an empty dataset")
        logger.debug("Training KNN classifier with %d samples.", len(records))
        self.train_data_ = copy_records(records)

    def get_neighbors(
        self,
        record: FeatureRecord,
        limit: Optional[int] = None,
    ) -> List[FeatureRecord]:
        """Training records ordered by increasing distance to ``record``.

        Equal distances keep training-set order.

        Args:
            record: Query record.
            limit: Keep only the ``min(limit, n)`` closest records.

        Returns:
            Sorted list of training records.

        Raises:
            UntrainedModelError: If ``train`` has not been called.
            ValueError: If ``limit < 1``.
        """
        if limit is not None and limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        if self.train_data_ is None:
            logger.error("Training data not set. Cannot look up neighbors.")
            raise UntrainedModelError()

        distances = np.array([self._distance(r, record) for r in self.train_data_], dtype=float)
        order = np.argsort(distances, kind="stable")
        if limit is not None:
            order = order[:limit]
        return [self.train_data_[i] for i in order]

    def predict(self, record: FeatureRecord) -> str:
        """Label with the most votes among the ``k`` nearest neighbors.

        On a tied vote the label seen first in neighbor order wins.
        """
        if self.train_data_ is None:
            logger.error("Training data not set. Cannot proceed with prediction.")
            raise UntrainedModelError()

        nearest = self.get_neighbors(record, self.k)
        label = majority_vote(nearest)
        logger.debug("Predicted label: %s", label)
        return label


def majority_vote(neighbors: Sequence[FeatureRecord]) -> Optional[str]:
    """Most common label, earliest neighbor first on ties."""
    if not neighbors:
        return None
    # most_common keeps first-encountered order among equal counts
    counts = Counter(n.label for n in neighbors)
    label, votes = counts.most_common(1)[0]
    logger.debug("Neighbor label counts: %s; selected %s with %d votes",
                 dict(counts), label, votes)
    return label
