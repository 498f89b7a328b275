"""Run a single clustering experiment."""

import os
import time
import json
from dataclasses import asdict
from datetime import datetime
from typing import Dict, Any, List, Optional, Tuple

import pandas as pd

from ..clustering.kmedoids import refine, validate_arguments
from ..config.schema import ExperimentConfig, save_config, validate_config
from ..core.errors import InvalidArgumentError
from ..core.random import set_seed, get_rng
from ..core.types import ExperimentResult, Point
from ..dissimilarity.cache import DissimilarityCache
from ..dissimilarity.distances import get_distance
from ..metrics import compute_clustering_metrics, compute_cost_metrics, run_sanity_checks


def load_points(
    path: str,
    columns: Optional[List[str]] = None,
    id_column: Optional[str] = None,
    exclude: Optional[List[str]] = None,
) -> Tuple[List[Any], List[Point]]:
    """
    Read points from a CSV file.

    Args:
        path: CSV file with a header row.
        columns: Columns making up each point. Defaults to every numeric
            column other than ``id_column`` and those in ``exclude``.
        id_column: Column holding row identifiers; row numbers otherwise.

    Returns:
        Tuple of (ids, points). A point is a tuple of column values, or the
        bare value when a single column is selected.
    """
    df = pd.read_csv(path)

    if columns is None:
        columns = [
            c for c in df.select_dtypes(include="number").columns
            if c != id_column and c not in (exclude or [])
        ]
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise InvalidArgumentError(f"Columns not found in {path}: {missing}")
    if not columns:
        raise InvalidArgumentError(f"No point columns selected from {path}")

    ids = df[id_column].tolist() if id_column else list(range(len(df)))

    if len(columns) == 1:
        points = df[columns[0]].tolist()
    else:
        points = list(df[columns].itertuples(index=False, name=None))

    return ids, points


def run_experiment(
    config: Dict[str, Any],
    output_dir: str = None,
    verbose: bool = True
) -> ExperimentResult:
    """
    Run a single experiment from configuration.

    Args:
        config: Experiment configuration dict.
        output_dir: Directory to save results.
        verbose: Print progress.

    Returns:
        ExperimentResult with cost, agreement, and sanity metrics.
    """
    errors = validate_config(config)
    if errors:
        raise InvalidArgumentError("Invalid configuration: " + "; ".join(errors))

    cfg = ExperimentConfig.from_dict(config)
    set_seed(cfg.seed)

    start_time = time.time()

    if verbose:
        print(f"Running experiment: {cfg.name}")

    ids, points = load_points(
        cfg.data.path,
        cfg.data.columns,
        cfg.data.id_column,
        exclude=[cfg.data.label_column] if cfg.data.label_column else None,
    )

    if verbose:
        print(f"  Loaded {len(points)} points from {cfg.data.path}")

    distance_fn = get_distance(cfg.distance.name)

    validate_arguments(points, cfg.clustering.k, cfg.clustering.max_iter)
    cache = DissimilarityCache.build(
        points, distance_fn, validate_symmetry=cfg.distance.validate_symmetry
    )

    if verbose:
        print(f"  Cached dissimilarities with {cache.n_calls} distance calls")

    run = refine(
        points,
        cache,
        cfg.clustering.k,
        max_iter=cfg.clustering.max_iter,
        rng=get_rng(),
        reseed=cfg.clustering.reseed,
    )

    if verbose:
        status = "converged" if run.converged else "stopped at max_iter"
        print(f"  {len(run.clusters)} clusters after {run.n_iter} iterations ({status})")

    cost = compute_cost_metrics(run.clusters, run.medoids, cache)

    labels = run.labels(points)

    clustering = {}
    if cfg.data.label_column:
        truth = pd.read_csv(cfg.data.path)[cfg.data.label_column].tolist()
        by_cluster: Dict[int, List[int]] = {}
        for row, cluster_id in enumerate(labels):
            by_cluster.setdefault(cluster_id, []).append(row)
        clustering = compute_clustering_metrics(
            dict(enumerate(truth)), list(by_cluster.values())
        )

    sanity = run_sanity_checks(points, run.clusters, run.medoids, k=cfg.clustering.k)

    elapsed = time.time() - start_time

    result = ExperimentResult(
        cost=cost,
        clustering=clustering,
        sanity_checks=sanity,
        run={
            "n_iter": run.n_iter,
            "converged": run.converged,
            "n_clusters": len(run.clusters),
            "n_distance_calls": run.n_distance_calls,
            "medoids": run.medoids,
            "history": run.history,
        },
        metadata={
            "config": cfg.to_dict(),
            "elapsed_seconds": elapsed,
            "timestamp": datetime.now().isoformat(),
            "n_points": len(points),
        }
    )

    if verbose:
        print(f"\nResults:")
        print(f"  Total cost: {cost['total_cost']:.4f}")
        print(f"  Silhouette: {cost['silhouette']:.4f}")
        if 'ari' in clustering:
            print(f"  ARI: {clustering['ari']:.4f}, B³ F1: {clustering['b3_f1']:.4f}")
        print(f"  Time: {elapsed:.1f}s")
        print(f"  Sanity checks passed: {sanity.get('all_passed', False)}")

    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        with open(os.path.join(output_dir, "results.json"), "w") as f:
            json.dump(asdict(result), f, indent=2, default=str)
        pd.DataFrame({
            "id": ids,
            "cluster": labels,
            "medoid": [run.medoids[label] for label in labels],
        }).to_csv(os.path.join(output_dir, "assignments.csv"), index=False)
        save_config(cfg.to_dict(), os.path.join(output_dir, "config.yaml"))

    return result
