#!/usr/bin/env python3
"""Evaluate KNN on a folder of shape signatures.

Loads every signature file of a folder, optionally normalizes them, and
runs leave-one-out or k-fold cross-validation, reporting accuracy and
macro precision/recall/F1.

Usage:
    python experiments/run_classification.py --folder data/E34 -k 5
    python experiments/run_classification.py --folder data/ART --metric minkowski --norm 3
    python experiments/run_classification.py --folder data/GFD --protocol kfold --folds 10 --seed 1
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
import time
from datetime import datetime

from shapesig.classification.knn import KNNClassifier
from shapesig.config import ShapeSigConfig
from shapesig.data.load_dataset import extract_from_folder
from shapesig.data.preprocessing import normalize_records
from shapesig.distance import METRICS
from shapesig.evaluation.confusion_matrix import ConfusionMatrix
from shapesig.evaluation.cross_validation import k_fold_cross_validation, perform_loocv
from shapesig.logging_utils import setup_logging
from shapesig.visualization import plot_confusion_matrix, save_results_json


def run_classification(config: ShapeSigConfig, plot_path: str = None, output_dir: Path = None) -> dict:
    """Run one KNN evaluation described by ``config``.

    Returns:
        Dict of metrics.
    """
    records = extract_from_folder(config.data.folder, config.data.methods)
    if not records:
        raise SystemExit(f"No signature files found in {config.data.folder}")

    if config.evaluation.normalize:
        records = normalize_records(
            records, config.evaluation.scale_min, config.evaluation.scale_max
        )

    labels = sorted({r.label for r in records})
    matrix = ConfusionMatrix(labels)
    knn = KNNClassifier.from_config(config.knn)

    print(f"Records: {len(records)}  |  Labels: {len(labels)}  |  Dimension: {records[0].dimension}")
    print(f"KNN: k={knn.k}, metric={knn.metric}, norm={knn.norm}")
    print(f"Protocol: {config.evaluation.protocol}")
    print()

    start = time.time()
    if config.evaluation.protocol == "loocv":
        perform_loocv(records, knn, matrix)
    else:
        fold_acc = k_fold_cross_validation(
            records, knn, config.evaluation.n_folds, matrix, rng=config.evaluation.seed
        )
        print("Fold accuracies: " + ", ".join(f"{a:.4f}" for a in fold_acc))
    runtime = time.time() - start

    metrics = {
        "folder": str(config.data.folder),
        "n_records": len(records),
        "k": knn.k,
        "metric": knn.metric,
        "norm": knn.norm,
        "protocol": config.evaluation.protocol,
        "normalized": config.evaluation.normalize,
        "accuracy": matrix.accuracy(),
        "global_precision": matrix.global_precision(),
        "global_recall": matrix.global_recall(),
        "global_f1": matrix.global_f1_score(),
        "runtime_seconds": runtime,
        "confusion_matrix": matrix.to_array(),
        "labels": matrix.labels,
        "config": config.to_dict(),
        "timestamp": datetime.now().isoformat(),
    }

    print("--- Results ---")
    print(f"  Accuracy:  {metrics['accuracy']:.4f}")
    print(f"  Precision: {metrics['global_precision']:.4f}")
    print(f"  Recall:    {metrics['global_recall']:.4f}")
    print(f"  F1:        {metrics['global_f1']:.4f}")
    print(f"  Runtime:   {runtime:.2f}s")
    print()
    print(matrix.format_table())

    if plot_path:
        out = plot_confusion_matrix(matrix, plot_path, title=f"KNN (k={knn.k}, {knn.metric})")
        print(f"\nConfusion matrix plot saved to: {out}")
    if output_dir is not None:
        out = save_results_json(metrics, output_dir / "metrics.json")
        print(f"Metrics saved to: {out}")

    return metrics


def main():
    parser = argparse.ArgumentParser(description="shapesig KNN evaluation")
    parser.add_argument("--folder", type=str, required=True,
                        help="Folder of signature files")
    parser.add_argument("-k", type=int, default=5, help="Number of neighbors")
    parser.add_argument("--metric", type=str, default="euclidean", choices=list(METRICS),
                        help="Distance metric")
    parser.add_argument("--norm", type=int, default=2, help="Minkowski norm order")
    parser.add_argument("--protocol", type=str, default="loocv", choices=["loocv", "kfold"],
                        help="Cross-validation protocol")
    parser.add_argument("--folds", type=int, default=5, help="Folds for k-fold")
    parser.add_argument("--normalize", action="store_true",
                        help="Min-max normalize records to [0, 1] first")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for fold shuffling")
    parser.add_argument("--plot", type=str, default=None,
                        help="Save a confusion matrix heatmap to this path")
    parser.add_argument("--output-dir", type=str, default=None,
                        help="Write metrics.json into this directory")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level")
    parser.add_argument("--log-file", type=str, default=None, help="Also log to this file")

    args = parser.parse_args()

    config = ShapeSigConfig.from_dict({
        "log_level": args.log_level,
        "log_file": args.log_file,
        "knn": {"k": args.k, "metric": args.metric, "norm": args.norm},
        "evaluation": {
            "protocol": args.protocol,
            "n_folds": args.folds,
            "normalize": args.normalize,
            "seed": args.seed,
        },
        "data": {"folder": args.folder},
    })
    setup_logging(config.log_level, config.log_file)

    run_classification(
        config,
        plot_path=args.plot,
        output_dir=Path(args.output_dir) if args.output_dir else None,
    )


if __name__ == "__main__":
    main()
