"""Base regressor class for the co-training experiment."""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np


class RankDeficiencyError(ValueError):
    """Design matrix column rank is below its column count."""


def has_full_column_rank(X: np.ndarray) -> bool:
    """True if X (n x p) has column rank p."""
    X = np.atleast_2d(np.asarray(X, dtype=float))
    if X.shape[0] < X.shape[1]:
        return False
    return int(np.linalg.matrix_rank(X)) == X.shape[1]


class BaseRegressor(ABC):
    """Abstract base class for regressors used as co-training view members.

    Implementations must raise RankDeficiencyError from fit() instead of
    silently returning a degenerate fit.
    """

    method_name: str = "base"

    def __init__(self) -> None:
        self._model: Any = None
        self._n_obs: int = 0
        self._n_features: int = 0
        self._sse: float | None = None

    @property
    def is_fitted(self) -> bool:
        return self._model is not None

    @abstractmethod
    def fit(self, X: np.ndarray, y: np.ndarray) -> "BaseRegressor":
        """Fit on design matrix X (n x p) and target y (n)."""
        ...

    @abstractmethod
    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict targets for X."""
        ...

    def rmse(self, X: np.ndarray, y: np.ndarray) -> float:
        """Root-mean-square prediction error on (possibly new) data."""
        residuals = np.asarray(y, dtype=float) - self.predict(X)
        return float(np.sqrt(np.mean(residuals**2)))

    @property
    def residual_rmse(self) -> float:
        """Degrees-of-freedom adjusted RMSE of the fit: sqrt(SSE / (n - p - 1)).

        NaN when the fit has no residual degrees of freedom.
        """
        if self._sse is None:
            raise RuntimeError(f"{self.method_name} regressor is not fitted")
        dfe = self._n_obs - self._n_features - 1
        if dfe <= 0:
            return float("nan")
        return float(np.sqrt(self._sse / dfe))

    def get_metadata(self) -> dict:
        return {
            "method": self.method_name,
            "is_fitted": self.is_fitted,
            "n_obs": self._n_obs,
            "n_features": self._n_features,
        }
