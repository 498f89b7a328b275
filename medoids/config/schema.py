"""Configuration schema and validation."""

from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field, asdict
import yaml

from ..core.registry import get_registry


@dataclass
class DataConfig:
    path: str = None
    columns: Optional[List[str]] = None
    id_column: Optional[str] = None
    label_column: Optional[str] = None


@dataclass
class DistanceConfig:
    name: str = "euclidean"
    validate_symmetry: bool = False


@dataclass
class ClusteringConfig:
    name: str = "kmedoids"
    k: int = None
    max_iter: Optional[int] = None
    reseed: bool = False


@dataclass
class ExperimentConfig:
    name: str = "unnamed"
    seed: int = 42
    data: DataConfig = field(default_factory=DataConfig)
    distance: DistanceConfig = field(default_factory=DistanceConfig)
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "ExperimentConfig":
        """Build a typed config, filling unspecified fields with defaults."""
        return cls(
            name=config.get("name", "unnamed"),
            seed=config.get("seed", 42),
            data=DataConfig(**config.get("data", {})),
            distance=DistanceConfig(**config.get("distance", {})),
            clustering=ClusteringConfig(**config.get("clustering", {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(path: str) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def save_config(config: Dict[str, Any], path: str):
    """Write configuration to a YAML file."""
    with open(path, "w") as f:
        yaml.safe_dump(config, f, sort_keys=False)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """Validate configuration, return list of errors."""
    errors = []

    for section, schema in (
        ("data", DataConfig),
        ("distance", DistanceConfig),
        ("clustering", ClusteringConfig),
    ):
        value = config.get(section, {})
        if not isinstance(value, dict):
            errors.append(f"'{section}' must be a mapping")
            continue
        known = schema.__dataclass_fields__.keys()
        for key in value:
            if key not in known:
                errors.append(f"Unknown key '{section}.{key}'")

    data = config.get("data")
    if not isinstance(data, dict) or not data.get("path"):
        errors.append("Missing 'data.path'")

    distance = config.get("distance")
    if isinstance(distance, dict) and "name" in distance:
        if distance["name"] not in get_registry("distances"):
            errors.append(
                f"Unknown distance '{distance['name']}'. "
                f"Available: {get_registry('distances').list()}"
            )

    clustering = config.get("clustering")
    if not isinstance(clustering, dict) or "k" not in clustering:
        errors.append("Missing 'clustering.k'")
    else:
        k = clustering["k"]
        if not _is_int(k) or k <= 0:
            errors.append(f"'clustering.k' must be a positive integer, got {k!r}")
        name = clustering.get("name", "kmedoids")
        if name not in get_registry("clusterers"):
            errors.append(
                f"Unknown clusterer '{name}'. "
                f"Available: {get_registry('clusterers').list()}"
            )
        max_iter = clustering.get("max_iter")
        if max_iter is not None and (not _is_int(max_iter) or max_iter <= 0):
            errors.append(
                f"'clustering.max_iter' must be a positive integer or null, got {max_iter!r}"
            )

    if "seed" in config and not _is_int(config["seed"]):
        errors.append(f"'seed' must be an integer, got {config['seed']!r}")

    return errors
