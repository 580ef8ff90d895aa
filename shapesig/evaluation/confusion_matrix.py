"""Confusion matrix over a fixed label set.

Rows are actual labels, columns predicted labels. Provides accuracy,
per-class precision/recall, and their macro averages.
"""

import numpy as np
from typing import Iterable, List


# Returned by ``get`` for a label pair outside the matrix.
NOT_FOUND = -1


class ConfusionMatrix:
    """Counts of (actual, predicted) label pairs.

    The label set is fixed at construction. Pairs involving any other label
    are ignored by ``increment`` and reported as ``NOT_FOUND`` by ``get``.
    """

    def __init__(self, labels: Iterable[str]):
        """Initialize an all-zero matrix.

        Args:
            labels: Possible classes, in display order. Duplicates are dropped.
        """
        self._labels: List[str] = list(dict.fromkeys(labels))
        self._index = {label: i for i, label in enumerate(self._labels)}
        self._counts = np.zeros((len(self._labels), len(self._labels)), dtype=int)

    @property
    def labels(self) -> List[str]:
        return list(self._labels)

    @property
    def total(self) -> int:
        """Number of recorded predictions."""
        return int(self._counts.sum())

    def increment(self, actual: str, predicted: str) -> None:
        """Record one prediction; no-op if either label is unknown."""
        if actual in self._index and predicted in self._index:
            self._counts[self._index[actual], self._index[predicted]] += 1

    def get(self, actual: str, predicted: str) -> int:
        """Count for a pair, or ``NOT_FOUND`` if either label is unknown."""
        if actual in self._index and predicted in self._index:
            return int(self._counts[self._index[actual], self._index[predicted]])
        return NOT_FOUND

    def to_array(self) -> np.ndarray:
        """Copy of the counts (rows actual, columns predicted)."""
        return self._counts.copy()

    def accuracy(self) -> float:
        """Correct predictions over all predictions, 0.0 when empty."""
        total = self._counts.sum()
        if total == 0:
            return 0.0
        return float(np.trace(self._counts)) / float(total)

    def precision(self, label: str) -> float:
        """TP / (TP + FP) for one class, 0.0 when TP is 0."""
        i = self._index[label]
        true_positive = self._counts[i, i]
        if true_positive == 0:
            return 0.0
        # Column sum holds TP plus every false positive
        return float(true_positive) / float(self._counts[:, i].sum())

    def recall(self, label: str) -> float:
        """TP / (TP + FN) for one class, 0.0 when TP is 0."""
        i = self._index[label]
        true_positive = self._counts[i, i]
        if true_positive == 0:
            return 0.0
        return float(true_positive) / float(self._counts[i, :].sum())

    def global_precision(self) -> float:
        """Macro-averaged precision over the whole label set."""
        if not self._labels:
            return 0.0
        total = sum(self.precision(label) for label in self._labels)
        if total == 0:
            return 0.0
        return total / len(self._labels)

    def global_recall(self) -> float:
        """Macro-averaged recall over the whole label set."""
        if not self._labels:
            return 0.0
        total = sum(self.recall(label) for label in self._labels)
        if total == 0:
            return 0.0
        return total / len(self._labels)

    def global_f1_score(self) -> float:
        """Harmonic mean of global precision and global recall."""
        precision = self.global_precision()
        recall = self.global_recall()
        if precision + recall == 0:
            return 0.0
        return 2 * precision * recall / (precision + recall)

    def format_table(self) -> str:
        """Tab separated grid, actual labels down, predicted across."""
        lines = ["A\\P\t" + "".join(f"{label}\t" for label in self._labels)]
        for i, row in enumerate(self._labels):
            cells = "".join(f"{int(c)}\t" for c in self._counts[i])
            lines.append(f"{row}\t{cells}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format_table()

    def __repr__(self) -> str:
        return f"ConfusionMatrix(labels={self._labels!r}, total={self.total})"
