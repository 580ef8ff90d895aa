"""Classification module: classifier interface and KNN."""

from .base import Classifier
from .knn import KNNClassifier, majority_vote

__all__ = [
    "Classifier",
    "KNNClassifier",
    "majority_vote",
]
