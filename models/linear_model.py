"""Linear regressor — OLS with intercept on top of scikit-learn's LinearRegression."""

import numpy as np
from sklearn.linear_model import LinearRegression

from models.base import BaseRegressor, RankDeficiencyError, has_full_column_rank


class LinearRegressor(BaseRegressor):
    """Ordinary least squares with an intercept term and residual statistics."""

    method_name = "linear"

    def fit(self, X: np.ndarray, y: np.ndarray) -> "LinearRegressor":
        X = np.atleast_2d(np.asarray(X, dtype=float))
        y = np.asarray(y, dtype=float).ravel()

        if X.shape[0] != y.shape[0]:
            raise ValueError(f"X has {X.shape[0]} rows but y has {y.shape[0]} values")
        if not has_full_column_rank(X):
            raise RankDeficiencyError(
                f"Design matrix {X.shape[0]}x{X.shape[1]} has rank "
                f"{int(np.linalg.matrix_rank(X))} < {X.shape[1]}"
            )

        model = LinearRegression(fit_intercept=True)
        model.fit(X, y)

        residuals = y - model.predict(X)
        self._model = model
        self._n_obs, self._n_features = X.shape
        self._sse = float(np.dot(residuals, residuals))
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        if self._model is None:
            raise RuntimeError("LinearRegressor is not fitted")
        return self._model.predict(np.atleast_2d(np.asarray(X, dtype=float)))

    @property
    def coefficients(self) -> np.ndarray:
        return self._model.coef_

    @property
    def intercept(self) -> float:
        return float(self._model.intercept_)
