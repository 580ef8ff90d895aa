"""Evaluation module: confusion matrix and cross-validation."""

from .confusion_matrix import ConfusionMatrix, NOT_FOUND
from .cross_validation import (
    create_k_folds,
    perform_loocv,
    loocv_accuracy,
    k_fold_cross_validation,
)

__all__ = [
    "ConfusionMatrix",
    "NOT_FOUND",
    "create_k_folds",
    "perform_loocv",
    "loocv_accuracy",
    "k_fold_cross_validation",
]
