"""Configuration dataclasses for shapesig."""

from dataclasses import dataclass, field, asdict
from typing import Literal, Optional, Dict, Any, Tuple


@dataclass
class KNNConfig:
    """Configuration for the KNN classifier.

    Attributes:
        k: Number of neighbors in the vote.
        metric: "euclidean", "manhattan" or "minkowski".
        norm: Minkowski order (clamped to >= 1 by the classifier).
    """
    k: int = 5
    metric: str = "euclidean"
    norm: int = 2


@dataclass
class KMeansConfig:
    """Configuration for K-Means clustering.

    Attributes:
        n_clusters: Number of clusters (k).
        metric: Distance used for seeding, assignment and silhouette.
        norm: Minkowski order.
        convergence_threshold: Max per-coordinate centroid shift at convergence.
        max_iter: Safety cap on Lloyd iterations.
        seed: Random seed for seeding and empty-cluster recovery.
    """
    n_clusters: int = 3
    metric: str = "euclidean"
    norm: int = 2
    convergence_threshold: float = 1e-6
    max_iter: int = 300
    seed: Optional[int] = None


@dataclass
class EvaluationConfig:
    """Configuration for classifier evaluation.

    Attributes:
        protocol: "loocv" (leave-one-out) or "kfold".
        n_folds: Number of folds for the k-fold protocol.
        normalize: Min-max rescale the records before evaluation.
        scale_min: Lower bound of the normalized range.
        scale_max: Upper bound of the normalized range.
        seed: Random seed for fold shuffling.
    """
    protocol: Literal["loocv", "kfold"] = "loocv"
    n_folds: int = 5
    normalize: bool = False
    scale_min: float = 0.0
    scale_max: float = 1.0
    seed: Optional[int] = None


@dataclass
class DataConfig:
    """Configuration for loading signature files.

    Attributes:
        folder: Directory holding one signature file per shape.
        methods: Descriptor identifiers recognized in filenames.
    """
    folder: str = "./data"
    methods: Tuple[str, ...] = ("ART", "ZRK", "E34", "GFD", "YNG")


@dataclass
class ShapeSigConfig:
    """Master configuration for shapesig.

    Combines all sub-configurations into a single object.

    Attributes:
        log_level: Logging level name for scripts.
        log_file: Optional file that receives a copy of the log.
    """
    log_level: str = "INFO"
    log_file: Optional[str] = None
    knn: KNNConfig = field(default_factory=KNNConfig)
    kmeans: KMeansConfig = field(default_factory=KMeansConfig)
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    data: DataConfig = field(default_factory=DataConfig)

    def __post_init__(self):
        """Normalize names and reject unknown choices."""
        if self.evaluation.protocol not in ("loocv", "kfold"):
            raise ValueError(f"Unknown evaluation protocol: {self.evaluation.protocol}")
        self.log_level = self.log_level.upper()

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to nested dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ShapeSigConfig":
        """Create config from dictionary."""
        data = dict(d.get("data", {}))
        if "methods" in data:
            data["methods"] = tuple(data["methods"])
        return cls(
            log_level=d.get("log_level", "INFO"),
            log_file=d.get("log_file"),
            knn=KNNConfig(**d.get("knn", {})),
            kmeans=KMeansConfig(**d.get("kmeans", {})),
            evaluation=EvaluationConfig(**d.get("evaluation", {})),
            data=DataConfig(**data),
        )
