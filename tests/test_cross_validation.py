"""Tests for fold creation and the cross-validation loops."""

from collections import Counter

import numpy as np
import pytest

from shapesig.classification.knn import KNNClassifier
from shapesig.data.records import FeatureRecord
from shapesig.evaluation.confusion_matrix import ConfusionMatrix
from shapesig.evaluation.cross_validation import (
    create_k_folds,
    k_fold_cross_validation,
    loocv_accuracy,
    perform_loocv,
)


def _dataset():
    return [
        FeatureRecord([1.0, 1.0], label="A"),
        FeatureRecord([2.0, 2.0], label="A"),
        FeatureRecord([3.0, 3.0], label="B"),
        FeatureRecord([6.0, 6.0], label="B"),
    ]


class TestCreateKFolds:
    """Shuffled round-robin folds."""

    def test_sizes_balanced(self):
        data = [FeatureRecord([float(i)], label=str(i)) for i in range(10)]
        folds = create_k_folds(data, 3, rng=0)
        assert sorted(len(f) for f in folds) == [3, 3, 4]

    def test_partition_of_dataset(self):
        data = [FeatureRecord([float(i % 4)], label=str(i % 4)) for i in range(10)]
        folds = create_k_folds(data, 4, rng=1)
        merged = [r for f in folds for r in f]
        assert Counter(merged) == Counter(data)

    def test_more_folds_than_records(self):
        folds = create_k_folds(_dataset(), 6, rng=0)
        assert len(folds) == 6
        assert sorted(len(f) for f in folds) == [0, 0, 1, 1, 1, 1]

    def test_seed_reproducible(self):
        data = [FeatureRecord([float(i)]) for i in range(20)]
        assert create_k_folds(data, 5, rng=7) == create_k_folds(data, 5, rng=7)

    def test_accepts_generator(self):
        folds = create_k_folds(_dataset(), 2, rng=np.random.default_rng(0))
        assert sum(len(f) for f in folds) == 4

    def test_invalid_k(self):
        with pytest.raises(ValueError):
            create_k_folds(_dataset(), 0)


class TestLOOCV:
    """Leave-one-out evaluation."""

    def test_counts(self):
        """(3,3) has (2,2) as nearest neighbor once held out; the rest are correct."""
        matrix = ConfusionMatrix(["A", "B"])
        perform_loocv(_dataset(), KNNClassifier(k=1), matrix)

        assert matrix.total == 4
        assert matrix.get("A", "A") == 2
        assert matrix.get("B", "A") == 1
        assert matrix.get("B", "B") == 1
        assert matrix.accuracy() == pytest.approx(0.75)

    def test_accuracy_helper(self):
        assert loocv_accuracy(_dataset(), KNNClassifier(k=1)) == pytest.approx(0.75)

    def test_single_record_has_no_training_data(self):
        matrix = ConfusionMatrix(["A", "B"])
        with pytest.raises(ValueError):
            perform_loocv([FeatureRecord([1.0], label="A")], KNNClassifier(k=1), matrix)
        assert matrix.total == 0

    def test_empty_dataset(self):
        matrix = ConfusionMatrix(["A", "B"])
        perform_loocv([], KNNClassifier(k=1), matrix)
        assert matrix.total == 0
        assert loocv_accuracy([], KNNClassifier(k=1)) == 0.0


class TestKFold:
    """k-fold evaluation."""

    def test_every_record_evaluated_once(self):
        matrix = ConfusionMatrix(["A", "B"])
        accuracies = k_fold_cross_validation(_dataset(), KNNClassifier(k=1), 2, matrix, rng=0)

        assert matrix.total == 4
        assert len(accuracies) == 2
        assert all(0.0 <= a <= 1.0 for a in accuracies)

    def test_empty_folds_skipped(self):
        matrix = ConfusionMatrix(["A", "B"])
        accuracies = k_fold_cross_validation(_dataset(), KNNClassifier(k=1), 10, matrix, rng=0)
        assert len(accuracies) == 4
        assert matrix.total == 4

    def test_n_folds_matches_loocv(self):
        """With one record per fold, k-fold is leave-one-out."""
        matrix = ConfusionMatrix(["A", "B"])
        k_fold_cross_validation(_dataset(), KNNClassifier(k=1), 4, matrix, rng=0)
        assert matrix.total == 4
        assert matrix.get("B", "A") == 1

    def test_single_fold_has_no_training_data(self):
        matrix = ConfusionMatrix(["A", "B"])
        accuracies = k_fold_cross_validation(_dataset(), KNNClassifier(k=1), 1, matrix)
        assert accuracies == []
        assert matrix.total == 0


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
