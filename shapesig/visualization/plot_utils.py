"""
Plotting utilities for shapesig evaluations.

All plots are 150 DPI, bbox_inches='tight', with consistent style.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np
import matplotlib
matplotlib.use("Agg")  # non-interactive backend
import matplotlib.pyplot as plt

from ..data.categories import get_category_name
from ..data.records import FeatureRecord
from ..evaluation.confusion_matrix import ConfusionMatrix


# ── Style config ──────────────────────────────────────────────────────
STYLE_CONFIG = {
    "figure.figsize": (10, 6),
    "figure.dpi": 150,
    "figure.facecolor": "white",
    "axes.grid": True,
    "grid.alpha": 0.3,
    "font.size": 10,
    "axes.titlesize": 14,
    "axes.labelsize": 12,
    "legend.fontsize": 10,
    "lines.linewidth": 2,
    "lines.markersize": 8,
}

COLORS = {
    "sse": "#4363d8",          # blue
    "silhouette": "#e6194B",   # red
    "centroid": "#000000",
}


def _apply_style():
    """Apply rcParams."""
    plt.rcParams.update(STYLE_CONFIG)


def _add_info_box(ax: plt.Axes, text: str, loc: str = "upper right"):
    """Add a semi-transparent info box to the axes."""
    props = dict(boxstyle="round,pad=0.4", facecolor="white", alpha=0.85,
                 edgecolor="#cccccc")
    anchors = {
        "upper right": (0.98, 0.98, "right", "top"),
        "upper left": (0.02, 0.98, "left", "top"),
        "lower right": (0.98, 0.02, "right", "bottom"),
    }
    x, y, ha, va = anchors.get(loc, anchors["upper right"])
    ax.text(x, y, text, transform=ax.transAxes, fontsize=8,
            verticalalignment=va, horizontalalignment=ha, bbox=props,
            family="monospace")


def _save(fig: plt.Figure, out_path: Union[str, Path]) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(str(out_path), dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path


# ─────────────────────────────────────────────────────────────────────
# Plot Functions
# ─────────────────────────────────────────────────────────────────────

def plot_confusion_matrix(
    matrix: ConfusionMatrix,
    out_path: Union[str, Path] = "confusion_matrix.png",
    title: str = "Confusion Matrix",
    show_names: bool = False,
) -> Path:
    """Heatmap of a confusion matrix with per-cell counts.

    Args:
        matrix: Filled confusion matrix.
        out_path: Output file path.
        title: Plot title.
        show_names: Label the axes with category names instead of codes.

    Returns:
        Path of the written image.
    """
    _apply_style()

    counts = matrix.to_array()
    labels = matrix.labels
    tick_labels = [get_category_name(label) if show_names else label for label in labels]

    size = max(6, 0.5 * len(labels) + 2)
    fig, ax = plt.subplots(figsize=(size, size))
    im = ax.imshow(counts, cmap="Blues")
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    threshold = counts.max() / 2 if counts.size else 0
    for i in range(counts.shape[0]):
        for j in range(counts.shape[1]):
            if counts[i, j] > 0:
                ax.text(j, i, str(counts[i, j]), ha="center", va="center",
                        fontsize=8,
                        color="white" if counts[i, j] > threshold else "black")

    ax.set_xticks(range(len(labels)))
    ax.set_yticks(range(len(labels)))
    ax.set_xticklabels(tick_labels, rotation=45, ha="right")
    ax.set_yticklabels(tick_labels)
    ax.set_xlabel("Predicted")
    ax.set_ylabel("Actual")
    ax.grid(False)

    info = (f"Acc = {matrix.accuracy():.3f}\n"
            f"P   = {matrix.global_precision():.3f}\n"
            f"R   = {matrix.global_recall():.3f}\n"
            f"F1  = {matrix.global_f1_score():.3f}")
    _add_info_box(ax, info, loc="upper right")

    ax.set_title(title)
    return _save(fig, out_path)


def plot_kmeans_sweep(
    ks: Sequence[int],
    sse_values: Sequence[float],
    silhouette_values: Sequence[float],
    out_path: Union[str, Path] = "kmeans_sweep.png",
    title: str = "K-Means: SSE and Silhouette vs k",
) -> Path:
    """Dual-axis elbow plot: SSE (left) and silhouette (right) per k.

    Args:
        ks: Cluster counts evaluated.
        sse_values: SSE for each k.
        silhouette_values: Silhouette score for each k.
        out_path: Output file path.
        title: Plot title.

    Returns:
        Path of the written image.
    """
    _apply_style()

    fig, ax1 = plt.subplots(figsize=(10, 6))
    ax1.plot(ks, sse_values, "o-", color=COLORS["sse"], label="SSE")
    ax1.set_xlabel("k (clusters)")
    ax1.set_ylabel("SSE", color=COLORS["sse"])
    ax1.tick_params(axis="y", labelcolor=COLORS["sse"])

    ax2 = ax1.twinx()
    ax2.plot(ks, silhouette_values, "s--", color=COLORS["silhouette"], label="Silhouette")
    ax2.set_ylabel("Silhouette", color=COLORS["silhouette"])
    ax2.tick_params(axis="y", labelcolor=COLORS["silhouette"])
    ax2.set_ylim(-1.05, 1.05)
    ax2.grid(False)

    finite = [(k, s) for k, s in zip(ks, silhouette_values) if np.isfinite(s)]
    if finite:
        best_k, best_s = max(finite, key=lambda ks_: ks_[1])
        _add_info_box(ax1, f"Best silhouette: k={best_k} ({best_s:.3f})")

    ax1.set_title(title)
    return _save(fig, out_path)


def plot_cluster_assignments(
    clusters: Sequence[Sequence[FeatureRecord]],
    centroids: Optional[Sequence[FeatureRecord]] = None,
    out_path: Union[str, Path] = "cluster_assignments.png",
    title: str = "Cluster Assignments",
    dims: Sequence[int] = (0, 1),
) -> Path:
    """Scatter plot of records coloured by cluster, on two feature axes.

    Args:
        clusters: Records per cluster.
        centroids: One centroid per cluster (optional).
        out_path: Output file path.
        title: Plot title.
        dims: Indices of the two features to plot.

    Returns:
        Path of the written image.
    """
    _apply_style()

    dx, dy = dims
    n_clusters = len(clusters)
    cmap = matplotlib.colormaps["tab20"].resampled(max(n_clusters, 2))

    fig, ax = plt.subplots(figsize=(10, 8))
    n_points = 0
    for i, members in enumerate(clusters):
        if not members:
            continue
        pts = np.array([m.values for m in members], dtype=float)
        n_points += len(pts)
        ax.scatter(pts[:, dx], pts[:, dy], c=[cmap(i)], s=20, alpha=0.7,
                   label=f"Cluster {i} ({len(pts)})")

    if centroids is not None and len(centroids) > 0:
        cpts = np.array([c.values for c in centroids], dtype=float)
        ax.scatter(
            cpts[:, dx], cpts[:, dy],
            c=COLORS["centroid"], marker="X", s=120, edgecolors="white",
            linewidths=1.5, zorder=10, label="Centroids",
        )

    _add_info_box(ax, f"K = {n_clusters}  |  N = {n_points}")

    ax.set_xlabel(f"Feature {dx}")
    ax.set_ylabel(f"Feature {dy}")
    ax.legend(loc="upper left", fontsize=7, ncol=max(1, n_clusters // 8), markerscale=1.5)
    ax.set_title(title)
    return _save(fig, out_path)


# ─────────────────────────────────────────────────────────────────────
# Results I/O
# ─────────────────────────────────────────────────────────────────────

def _make_serializable(obj: Any) -> Any:
    """Recursively convert numpy types for JSON."""
    if isinstance(obj, dict):
        return {str(k): _make_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_make_serializable(v) for v in obj]
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    return obj


def save_results_json(
    results: Dict[str, Any],
    out_path: Union[str, Path],
) -> Path:
    """Save evaluation results to JSON with numpy-safe conversion."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w") as f:
        json.dump(_make_serializable(results), f, indent=2)
    return out_path
