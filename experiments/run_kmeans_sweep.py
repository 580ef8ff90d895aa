#!/usr/bin/env python3
"""Sweep the number of K-Means clusters over a folder of signatures.

For each k, trains K-Means and reports SSE and silhouette score, so the
elbow and the best-separated k can be read off.

Usage:
    python experiments/run_kmeans_sweep.py --folder data/E34 --k-min 2 --k-max 18
    python experiments/run_kmeans_sweep.py --folder data/ART --normalize --plot outputs/sweep.png
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse

import numpy as np

from shapesig.clustering.kmeans import KMeansClassifier
from shapesig.config import KMeansConfig
from shapesig.data.load_dataset import extract_from_folder
from shapesig.data.preprocessing import normalize_records
from shapesig.distance import METRICS
from shapesig.logging_utils import setup_logging
from shapesig.visualization import plot_cluster_assignments, plot_kmeans_sweep


def run_sweep(
    folder: str,
    k_min: int,
    k_max: int,
    metric: str = "euclidean",
    norm: int = 2,
    normalize: bool = False,
    seed: int = 42,
    max_iter: int = 300,
):
    """Train K-Means for every k in ``[k_min, k_max]``.

    Returns:
        Tuple of (ks, sse list, silhouette list, trained classifiers).
    """
    records = extract_from_folder(folder)
    if not records:
        raise SystemExit(f"No signature files found in {folder}")
    if normalize:
        records = normalize_records(records)

    print(f"Records: {len(records)}  |  Dimension: {records[0].dimension}")
    print(f"{'k':>4}  {'SSE':>14}  {'Silhouette':>10}  {'Iter':>5}  {'Empty':>5}")
    print("-" * 46)

    ks, sse_values, silhouettes, models = [], [], [], []
    rng = np.random.default_rng(seed)
    for k in range(k_min, k_max + 1):
        config = KMeansConfig(n_clusters=k, metric=metric, norm=norm, max_iter=max_iter)
        kmeans = KMeansClassifier.from_config(config)
        kmeans.train(records, rng=rng)

        sse = kmeans.calculate_sse()
        sil = kmeans.calculate_silhouette_score()
        result = kmeans.result_
        print(f"{k:>4}  {sse:>14.4f}  {sil:>10.4f}  {result.n_iterations:>5}  "
              f"{sum(1 for c in result.clusters if not c):>5}")

        ks.append(k)
        sse_values.append(sse)
        silhouettes.append(sil)
        models.append(kmeans)

    return ks, sse_values, silhouettes, models


def main():
    parser = argparse.ArgumentParser(description="shapesig K-Means sweep")
    parser.add_argument("--folder", type=str, required=True, help="Folder of signature files")
    parser.add_argument("--k-min", type=int, default=2, help="Smallest k")
    parser.add_argument("--k-max", type=int, default=18, help="Largest k")
    parser.add_argument("--metric", type=str, default="euclidean", choices=list(METRICS),
                        help="Distance metric")
    parser.add_argument("--norm", type=int, default=2, help="Minkowski norm order")
    parser.add_argument("--normalize", action="store_true", help="Min-max normalize first")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--max-iter", type=int, default=300, help="Lloyd iteration cap")
    parser.add_argument("--plot", type=str, default=None, help="Save the sweep plot here")
    parser.add_argument("--scatter", type=str, default=None,
                        help="Save a cluster scatter of the best-silhouette k here")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")

    args = parser.parse_args()
    if args.k_min < 1 or args.k_max < args.k_min:
        parser.error("need 1 <= --k-min <= --k-max")

    setup_logging(args.log_level)

    ks, sse_values, silhouettes, models = run_sweep(
        args.folder, args.k_min, args.k_max,
        metric=args.metric, norm=args.norm, normalize=args.normalize,
        seed=args.seed, max_iter=args.max_iter,
    )

    finite = [i for i, s in enumerate(silhouettes) if np.isfinite(s)]
    if finite:
        best = max(finite, key=lambda i: silhouettes[i])
        print(f"\nBest silhouette: k={ks[best]} ({silhouettes[best]:.4f})")
        if args.scatter:
            model = models[best]
            out = plot_cluster_assignments(model.clusters, model.centroids, args.scatter,
                                           title=f"K-Means clusters (k={ks[best]})")
            print(f"Cluster scatter saved to: {out}")

    if args.plot:
        out = plot_kmeans_sweep(ks, sse_values, silhouettes, args.plot)
        print(f"Sweep plot saved to: {out}")


if __name__ == "__main__":
    main()
