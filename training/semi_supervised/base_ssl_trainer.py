"""Base class for semi-supervised trial runners.

Provides common infrastructure:
  - Hyperparameter config (confidence threshold, per-round cap, labeled set size)
  - Labeled/unlabeled split drawn from an explicit random generator
  - Rank precondition on the labeled design matrix
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
from loguru import logger

from feature_engineering.feature_registry import LABELED_SIZE_OFFSET, validate_shape
from models.base import has_full_column_rank
from models.factory import RegressorFactory, get_regressor_factory


class SSLConfig:
    """Configuration for a co-training trial."""

    def __init__(
        self,
        method: str = "linear",
        confidence_threshold: float = 0.1,
        max_update: int = 500,
        labeled_size_offset: int = LABELED_SIZE_OFFSET,
    ):
        if confidence_threshold <= 0:
            raise ValueError(f"confidence_threshold must be positive, got {confidence_threshold}")
        if max_update < 1:
            raise ValueError(f"max_update must be >= 1, got {max_update}")
        if labeled_size_offset < 0:
            raise ValueError(f"labeled_size_offset must be >= 0, got {labeled_size_offset}")
        self.method = method
        self.confidence_threshold = confidence_threshold
        self.max_update = max_update
        self.labeled_size_offset = labeled_size_offset

    def labeled_size(self, n_features: int) -> int:
        return n_features + self.labeled_size_offset


@dataclass(frozen=True)
class Split:
    """Index partition for one trial. Both arrays are disjoint and cover range(n)."""

    labeled: np.ndarray
    unlabeled: np.ndarray


class BaseSSLTrainer(ABC):
    """Abstract base class for SSL trial runners."""

    technique_name: str = "base_ssl"

    def __init__(self, config: SSLConfig | None = None, regressor_factory: RegressorFactory | None = None):
        self.config = config or SSLConfig()
        self._regressor_factory = regressor_factory or get_regressor_factory(self.config.method)

    def validate_data(self, X: np.ndarray, y: np.ndarray) -> None:
        """Structural checks on the full dataset. Raises ShapeError or ValueError."""
        if X.ndim != 2:
            raise ValueError(f"X must be 2-dimensional, got shape {X.shape}")
        if X.shape[0] != y.shape[0]:
            raise ValueError(f"X has {X.shape[0]} rows but y has {y.shape[0]} values")
        validate_shape(X.shape[0], X.shape[1], self.config.labeled_size_offset)

    def draw_split(self, n_samples: int, n_features: int, rng: np.random.Generator) -> Split:
        """Uniform random labeled/unlabeled partition of range(n_samples)."""
        permutation = rng.permutation(n_samples)
        n_labeled = self.config.labeled_size(n_features)
        labeled = permutation[:n_labeled]
        unlabeled = np.sort(permutation[n_labeled:])
        return Split(labeled=labeled, unlabeled=unlabeled)

    def check_labeled_rank(self, X_labeled: np.ndarray) -> bool:
        """True if the labeled design matrix can support a full-rank fit."""
        if has_full_column_rank(X_labeled):
            return True
        logger.warning(
            f"[{self.technique_name}] Labeled matrix {X_labeled.shape[0]}x{X_labeled.shape[1]} "
            f"is rank deficient, trial is degenerate"
        )
        return False

    @abstractmethod
    def run(self, X: np.ndarray, y: np.ndarray, seed: int):
        """Run one trial on (X, y) with a deterministic seed."""
        ...
