"""Tests for the experiment runner and CLI."""

import json
import os

import pandas as pd
import pytest
import yaml

from medoids.cli import main
from medoids.core.errors import InvalidArgumentError
from medoids.runner import load_points, run_experiment, run_grid


@pytest.fixture
def points_csv(tmp_path):
    path = tmp_path / "points.csv"
    pd.DataFrame({
        "id": ["p1", "p2", "p3", "p4"],
        "x": [0, 0, 10, 10],
        "y": [0, 1, 10, 11],
        "label": ["a", "a", "b", "b"],
    }).to_csv(path, index=False)
    return str(path)


def _config(path, **clustering):
    return {
        "name": "two-blobs",
        "seed": 3,
        "data": {"path": path, "id_column": "id", "label_column": "label"},
        "distance": {"name": "euclidean"},
        "clustering": {"k": 2, **clustering},
    }


def test_load_points(points_csv):
    ids, points = load_points(points_csv, id_column="id")

    assert ids == ["p1", "p2", "p3", "p4"]
    assert points == [(0, 0), (0, 1), (10, 10), (10, 11)]


def test_load_points_single_column(points_csv):
    ids, points = load_points(points_csv, columns=["y"])

    assert ids == [0, 1, 2, 3]
    assert points == [0, 1, 10, 11]


def test_load_points_excludes_columns(tmp_path):
    path = tmp_path / "numeric.csv"
    pd.DataFrame({"x": [1, 2], "truth": [0, 1]}).to_csv(path, index=False)

    _, points = load_points(str(path), exclude=["truth"])

    assert points == [1, 2]


def test_load_points_missing_column(points_csv):
    with pytest.raises(InvalidArgumentError):
        load_points(points_csv, columns=["z"])


def test_run_experiment(points_csv, tmp_path):
    out = tmp_path / "out"

    result = run_experiment(_config(points_csv), str(out), verbose=False)

    assert result.run["converged"]
    assert result.run["n_clusters"] == 2
    assert result.run["n_distance_calls"] == 10
    assert result.cost["total_cost"] == pytest.approx(2.0)
    assert result.clustering["ari"] == pytest.approx(1.0)
    assert result.sanity_checks["all_passed"]

    assert os.path.exists(out / "results.json")
    assert os.path.exists(out / "config.yaml")
    with open(out / "results.json") as f:
        saved = json.load(f)
    assert saved["run"]["n_clusters"] == 2

    assignments = pd.read_csv(out / "assignments.csv")
    assert assignments["id"].tolist() == ["p1", "p2", "p3", "p4"]
    assert assignments["cluster"].tolist() == [0, 0, 1, 1]


def test_run_experiment_verbose_prints(points_csv, capsys):
    run_experiment(_config(points_csv), verbose=True)

    out = capsys.readouterr().out
    assert "Running experiment: two-blobs" in out
    assert "Total cost" in out


def test_run_experiment_rejects_invalid_config(points_csv):
    config = _config(points_csv)
    del config["clustering"]["k"]

    with pytest.raises(InvalidArgumentError, match="clustering.k"):
        run_experiment(config, verbose=False)


def test_run_experiment_rejects_k_above_points(points_csv):
    with pytest.raises(InvalidArgumentError):
        run_experiment(_config(points_csv, k=9), verbose=False)


def test_run_grid(points_csv, tmp_path):
    grid = {
        "base": _config(points_csv),
        "grid": {"clustering.k": [1, 2, 9]},
    }

    df = run_grid(grid, str(tmp_path / "grid"), verbose=False)

    assert len(df) == 3
    assert df["param_clustering.k"].tolist() == [1, 2, 9]
    assert df["run_n_clusters"].tolist()[:2] == [1, 2]
    assert pd.isna(df["error"].iloc[0])
    assert isinstance(df["error"].iloc[2], str)
    assert os.path.exists(tmp_path / "grid" / "grid_results.csv")


def test_cli_list(capsys):
    main(["list", "distances"])

    out = capsys.readouterr().out
    assert "euclidean" in out
    assert "levenshtein" in out


def test_cli_run(points_csv, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump(_config(points_csv)))
    out = tmp_path / "cli-out"

    main(["run", str(config_path), "-o", str(out)])

    assert os.path.exists(out / "results.json")


def test_cli_run_invalid_config(tmp_path, capsys):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"clustering": {"k": 2}}))

    with pytest.raises(SystemExit) as excinfo:
        main(["run", str(config_path)])

    assert excinfo.value.code == 1
    assert "Missing 'data.path'" in capsys.readouterr().out
