"""Common interface for the shapesig classifiers.

Every classifier is trained on a list of FeatureRecords and predicts a
label for a single record. Distance selection is shared here so KNN and
K-Means resolve metrics the same way.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Sequence

from ..data.records import FeatureRecord
from ..distance import (
    EUCLIDEAN,
    MANHATTAN,
    MINKOWSKI,
    MAX_DISTANCE,
    METRICS,
    VectorLike,
    euclidean,
    manhattan,
    minkowski,
)


logger = logging.getLogger(__name__)


class Classifier(ABC):
    """Train/predict contract with metric dispatch.

    Unrecognized metric names are accepted: every distance then evaluates
    to ``MAX_DISTANCE`` so all candidates are equidistant.
    """

    EUCLIDEAN = EUCLIDEAN
    MANHATTAN = MANHATTAN
    MINKOWSKI = MINKOWSKI

    def __init__(self, metric: str = EUCLIDEAN, norm: int = 2):
        """Initialize the distance configuration.

        Args:
            metric: One of ``"euclidean"``, ``"manhattan"``, ``"minkowski"``.
            norm: Minkowski order; values below 1 are clamped to 1.
        """
        self.metric = str(metric).lower()
        if norm < 1:
            logger.warning("Invalid Minkowski norm %s, clamping to 1.", norm)
            norm = 1
        self.norm = norm

        if self.metric not in METRICS:
            logger.warning(
                "Unknown distance metric: %s. Defaulting to maximum distance.", metric
            )

    def _distance(self, a: VectorLike, b: VectorLike) -> float:
        """Distance between two vectors under the configured metric."""
        if self.metric == EUCLIDEAN:
            return euclidean(a, b)
        if self.metric == MANHATTAN:
            return manhattan(a, b)
        if self.metric == MINKOWSKI:
            return minkowski(a, b, self.norm)
        return MAX_DISTANCE

    @property
    @abstractmethod
    def is_trained(self) -> bool:
        """Whether ``train`` has been called."""

    @abstractmethod
    def train(self, records: Sequence[FeatureRecord]) -> None:
        """Fit on ``records``, replacing any previous training state."""

    @abstractmethod
    def predict(self, record: FeatureRecord) -> str:
        """Predict the label of ``record``.

        Raises:
            UntrainedModelError: If ``train`` has not been called.
        """


def copy_records(records: Sequence[FeatureRecord]) -> List[FeatureRecord]:
    """Snapshot a training set so later caller mutations do not leak in."""
    return list(records)
