"""
Visualization module for shapesig evaluations.

Provides plotting utilities for:
- Confusion matrix heatmaps
- K-Means SSE / silhouette sweeps over k
- Cluster assignment scatter plots
"""

from .plot_utils import (
    plot_confusion_matrix,
    plot_kmeans_sweep,
    plot_cluster_assignments,
    save_results_json,
    STYLE_CONFIG,
)

__all__ = [
    "plot_confusion_matrix",
    "plot_kmeans_sweep",
    "plot_cluster_assignments",
    "save_results_json",
    "STYLE_CONFIG",
]
