"""Agreement with ground truth: ARI and B³."""

from typing import Dict, Hashable, List, Sequence, Tuple
from collections import defaultdict

import numpy as np
import pandas as pd

from ..core.types import Point


def _comb2(n: int) -> float:
    """Compute n choose 2 as a float."""
    if n < 2:
        return 0.0
    return float(n * (n - 1) / 2)


def adjusted_rand_index(true_arr: Sequence[Hashable], pred_arr: Sequence[Hashable]) -> float:
    """
    Compute Adjusted Rand Index (ARI) for two labelings.

    Labels may be any hashable values; only co-membership matters.

    Returns:
        ARI score in [-1, 1].
    """
    if len(true_arr) < 2:
        return 0.0

    t_idx, _ = pd.factorize(pd.Series(list(true_arr), dtype=object))
    p_idx, _ = pd.factorize(pd.Series(list(pred_arr), dtype=object))

    contingency = np.zeros((int(t_idx.max()) + 1, int(p_idx.max()) + 1), dtype=int)
    np.add.at(contingency, (t_idx, p_idx), 1)

    sum_comb = float(np.sum([_comb2(int(x)) for x in contingency.ravel()]))
    sum_true = float(np.sum([_comb2(int(x)) for x in contingency.sum(axis=1)]))
    sum_pred = float(np.sum([_comb2(int(x)) for x in contingency.sum(axis=0)]))

    total = _comb2(int(contingency.sum()))
    if total == 0.0:
        return 0.0

    expected = (sum_true * sum_pred) / total
    max_index = 0.5 * (sum_true + sum_pred)
    denom = max_index - expected
    if denom == 0.0:
        return 1.0 if sum_comb == expected else 0.0

    return float((sum_comb - expected) / denom)


def compute_clustering_metrics(
    true_labels: Dict[Point, Hashable],
    predicted_clusters: List[List[Point]]
) -> Dict[str, float]:
    """
    Compare predicted clusters against ground-truth labels.

    Args:
        true_labels: Ground truth mapping {point: label}.
        predicted_clusters: Predicted clusters as lists of points.

    Returns:
        Dict with ARI, B³ precision/recall/F1 and cluster counts.
    """
    pred_labels = {}
    for cluster_id, members in enumerate(predicted_clusters):
        for point in members:
            pred_labels[point] = cluster_id

    common = [p for p in true_labels if p in pred_labels]

    if len(common) < 2:
        return {
            "ari": 0.0,
            "b3_precision": 0.0,
            "b3_recall": 0.0,
            "b3_f1": 0.0,
            "n_common_points": len(common),
        }

    true_arr = [true_labels[p] for p in common]
    pred_arr = [pred_labels[p] for p in common]

    b3_p, b3_r, b3_f1 = compute_b3_metrics(true_labels, pred_labels, common)

    return {
        "ari": adjusted_rand_index(true_arr, pred_arr),
        "b3_precision": b3_p,
        "b3_recall": b3_r,
        "b3_f1": b3_f1,
        "n_common_points": len(common),
        "n_true_clusters": len(set(true_arr)),
        "n_pred_clusters": len(set(pred_arr)),
    }


def compute_b3_metrics(
    true_labels: Dict[Point, Hashable],
    pred_labels: Dict[Point, int],
    points: List[Point]
) -> Tuple[float, float, float]:
    """
    Compute B-cubed precision, recall, and F1.

    Per-point precision and recall averaged over ``points``.
    """
    true_clusters = defaultdict(set)
    pred_clusters = defaultdict(set)

    for p in points:
        true_clusters[true_labels[p]].add(p)
        pred_clusters[pred_labels[p]].add(p)

    precisions = []
    recalls = []

    for p in points:
        true_cluster = true_clusters[true_labels[p]]
        pred_cluster = pred_clusters[pred_labels[p]]

        intersection = len(true_cluster & pred_cluster)
        precisions.append(intersection / len(pred_cluster))
        recalls.append(intersection / len(true_cluster))

    avg_precision = float(np.mean(precisions)) if precisions else 0.0
    avg_recall = float(np.mean(recalls)) if recalls else 0.0

    if avg_precision + avg_recall > 0:
        f1 = 2 * avg_precision * avg_recall / (avg_precision + avg_recall)
    else:
        f1 = 0.0

    return avg_precision, avg_recall, f1
