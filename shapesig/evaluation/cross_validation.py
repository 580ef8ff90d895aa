"""Cross-validation of classifiers on feature records.

Works with any classifier implementing ``train(records)`` and
``predict(record)``. Each held-out evaluation retrains from scratch, so
LOOCV costs one full training per record.
"""

import logging
from typing import List, Optional, Sequence, Union

import numpy as np

from ..classification.base import Classifier
from ..data.categories import get_category_name
from ..data.records import FeatureRecord
from .confusion_matrix import ConfusionMatrix


logger = logging.getLogger(__name__)

RandomLike = Union[None, int, np.random.Generator]


def create_k_folds(
    dataset: Sequence[FeatureRecord],
    k: int,
    rng: RandomLike = None,
) -> List[List[FeatureRecord]]:
    """Shuffle the dataset and deal it round-robin into ``k`` folds.

    Fold sizes differ by at most one.

    Args:
        dataset: Records to split.
        k: Number of folds.
        rng: Generator or integer seed for the shuffle.

    Returns:
        List of ``k`` folds.
    """
    if k < 1:
        raise ValueError(f"Number of folds must be at least 1, got {k}")
    rng = np.random.default_rng(rng)

    order = rng.permutation(len(dataset))
    folds: List[List[FeatureRecord]] = [[] for _ in range(k)]
    for position, idx in enumerate(order):
        folds[position % k].append(dataset[idx])
    return folds


def perform_loocv(
    dataset: Sequence[FeatureRecord],
    classifier: Classifier,
    confusion_matrix: ConfusionMatrix,
) -> None:
    """Leave-one-out cross-validation into a confusion matrix.

    For every record: train on all the others, predict the held-out
    record and count ``(actual, predicted)``.

    Args:
        dataset: Labeled records.
        classifier: Classifier to retrain for each held-out record.
        confusion_matrix: Receives one increment per record.
    """
    if not dataset:
        logger.error("Dataset is empty. LOO-CV cannot proceed.")
        return

    logger.debug("Starting LOO-CV with classifier %s on %d records",
                 type(classifier).__name__, len(dataset))
    for i, held_out in enumerate(dataset):
        training_set = list(dataset[:i]) + list(dataset[i + 1:])
        classifier.train(training_set)
        predicted = classifier.predict(held_out)
        logger.debug("Processed point %d. Actual: %s (%s) | Predicted: %s (%s)",
                     i + 1,
                     held_out.label, get_category_name(held_out.label),
                     predicted, get_category_name(predicted))
        confusion_matrix.increment(held_out.label, predicted)


def loocv_accuracy(
    dataset: Sequence[FeatureRecord],
    classifier: Classifier,
) -> float:
    """Leave-one-out accuracy, without building a matrix.

    Returns:
        Fraction of held-out records predicted correctly, 0.0 if empty.
    """
    if not dataset:
        logger.error("Dataset is empty. LOO-CV cannot proceed.")
        return 0.0

    correct = 0
    for i, held_out in enumerate(dataset):
        classifier.train(list(dataset[:i]) + list(dataset[i + 1:]))
        if classifier.predict(held_out) == held_out.label:
            correct += 1
    return correct / len(dataset)


def k_fold_cross_validation(
    dataset: Sequence[FeatureRecord],
    classifier: Classifier,
    k: int,
    confusion_matrix: ConfusionMatrix,
    rng: RandomLike = None,
) -> List[float]:
    """k-fold cross-validation into a confusion matrix.

    Each fold is held out once while the classifier trains on the others.
    Empty folds (``k`` larger than the dataset) are skipped.

    Args:
        dataset: Labeled records.
        classifier: Classifier to retrain per fold.
        k: Number of folds.
        confusion_matrix: Receives one increment per record.
        rng: Generator or integer seed for the shuffle.

    Returns:
        Accuracy of each evaluated fold.
    """
    folds = create_k_folds(dataset, k, rng)
    fold_accuracies = []
    for i, test_fold in enumerate(folds):
        if not test_fold:
            continue
        training_set = [r for j, fold in enumerate(folds) if j != i for r in fold]
        if not training_set:
            logger.warning("Fold %d has no training data, skipping.", i)
            continue
        classifier.train(training_set)

        correct = 0
        for record in test_fold:
            predicted = classifier.predict(record)
            confusion_matrix.increment(record.label, predicted)
            correct += predicted == record.label
        fold_accuracies.append(correct / len(test_fold))
        logger.debug("Fold %d/%d accuracy: %.4f", i + 1, k, fold_accuracies[-1])

    return fold_accuracies
