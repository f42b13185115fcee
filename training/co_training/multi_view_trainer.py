"""Multi-View Co-Training Trial — Supervised vs. semi-supervised RMSE on one random split.

Algorithm:
  1. Draw a labeled set of P+5 rows; the remaining rows are unlabeled
  2. Fit the base pair on labeled rows (one regressor per feature view)
  3. Predict the unlabeled pool with both SSL members; confidence = |pred_A - pred_B|
  4. Pseudo-label rows with confidence below min(K-th smallest confidence, tau)
     using the mean of the two predictions, move them into the training set
  5. Refit the SSL pair and repeat until a round promotes nothing
  6. On the original unlabeled rows, regress the true target on each pair's
     predictions and report the residual RMSE of that second-stage fit
"""

from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from loguru import logger

from models.base import BaseRegressor, RankDeficiencyError
from models.factory import RegressorFactory, get_regressor_factory
from training.co_training.view_definitions import DEFAULT_VIEWS, View
from training.semi_supervised.base_ssl_trainer import BaseSSLTrainer, SSLConfig


class TrialStatus(str, Enum):
    VALID = "VALID"
    DEGENERATE = "DEGENERATE"  # labeled split or evaluation blend was unusable


class LoopState(str, Enum):
    GROWING = "GROWING"
    CONVERGED = "CONVERGED"


@dataclass(frozen=True)
class TrialOutcome:
    """Result of one co-training trial."""

    status: TrialStatus
    seed: int
    rmse_supervised: float = 0.0
    rmse_ssl: float = 0.0
    rounds: int = 0
    pseudo_labeled_count: int = 0
    promotions_per_round: tuple[int, ...] = field(default_factory=tuple)

    @property
    def is_degenerate(self) -> bool:
        return self.status is TrialStatus.DEGENERATE

    @property
    def errors(self) -> tuple[float, float]:
        """(supervised, ssl) RMSE pair; (0, 0) for degenerate trials."""
        return self.rmse_supervised, self.rmse_ssl

    @classmethod
    def degenerate(cls, seed: int) -> "TrialOutcome":
        return cls(status=TrialStatus.DEGENERATE, seed=seed)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "seed": self.seed,
            "rmse_supervised": self.rmse_supervised,
            "rmse_ssl": self.rmse_ssl,
            "rounds": self.rounds,
            "pseudo_labeled_count": self.pseudo_labeled_count,
        }


def select_confident(confidence: np.ndarray, max_update: int, threshold: float) -> np.ndarray:
    """Indices of rows to promote in one co-training round.

    Rows qualify when confidence < min(kth, threshold), where kth is the max_update-th
    smallest confidence, or the largest confidence when fewer rows remain.
    """
    if confidence.size == 0:
        return np.empty(0, dtype=int)
    k = min(max_update, confidence.size)
    kth = np.partition(confidence, k - 1)[k - 1]
    bound = min(kth, threshold)
    return np.flatnonzero(confidence < bound)


class CoTrainingTrial(BaseSSLTrainer):
    """Two-view co-training on a single labeled/unlabeled split."""

    technique_name = "co_training"

    def __init__(
        self,
        config: SSLConfig | None = None,
        regressor_factory: RegressorFactory | None = None,
        views: tuple[View, View] = DEFAULT_VIEWS,
    ):
        super().__init__(config, regressor_factory)
        self.views = views

    def fit_pair(self, X: np.ndarray, y: np.ndarray) -> tuple[BaseRegressor, ...]:
        """Fit one regressor per view on (X, y)."""
        return tuple(self._regressor_factory().fit(view.select(X), y) for view in self.views)

    def predict_pair(self, models: tuple[BaseRegressor, ...], X: np.ndarray) -> np.ndarray:
        """Predictions of every pair member on X, shape (n, n_views)."""
        return np.column_stack([model.predict(view.select(X)) for model, view in zip(models, self.views)])

    def combined_rmse(self, models: tuple[BaseRegressor, ...], X_test: np.ndarray, y_test: np.ndarray) -> float:
        """Residual RMSE of a linear blend of the pair's predictions fitted on the test rows."""
        blend = self._regressor_factory().fit(self.predict_pair(models, X_test), y_test)
        return blend.residual_rmse

    def run(self, X: np.ndarray, y: np.ndarray, seed: int) -> TrialOutcome:
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float).ravel()
        self.validate_data(X, y)

        rng = np.random.default_rng(seed)
        split = self.draw_split(X.shape[0], X.shape[1], rng)

        X_labeled, y_labeled = X[split.labeled], y[split.labeled]
        if not self.check_labeled_rank(X_labeled):
            return TrialOutcome.degenerate(seed)

        base_models = self.fit_pair(X_labeled, y_labeled)
        ssl_models = base_models

        current_X, current_y = X_labeled, y_labeled
        pool_X = X[split.unlabeled]
        promotions: list[int] = []
        state = LoopState.GROWING

        while state is LoopState.GROWING:
            if pool_X.shape[0] == 0:
                state = LoopState.CONVERGED
                continue

            preds = self.predict_pair(ssl_models, pool_X)
            confidence = np.abs(preds[:, 1] - preds[:, 0])
            promoted = select_confident(confidence, self.config.max_update, self.config.confidence_threshold)

            if promoted.size == 0:
                state = LoopState.CONVERGED
                continue

            pseudo_labels = preds[promoted].mean(axis=1)
            current_X = np.vstack([current_X, pool_X[promoted]])
            current_y = np.concatenate([current_y, pseudo_labels])

            keep = np.ones(pool_X.shape[0], dtype=bool)
            keep[promoted] = False
            pool_X = pool_X[keep]

            ssl_models = self.fit_pair(current_X, current_y)
            promotions.append(int(promoted.size))

            logger.debug(
                f"[{self.technique_name}] seed={seed} round {len(promotions)}: "
                f"promoted={promoted.size}, current={current_X.shape[0]}, pool={pool_X.shape[0]}"
            )

        X_test, y_test = X[split.unlabeled], y[split.unlabeled]
        try:
            rmse_supervised = self.combined_rmse(base_models, X_test, y_test)
            rmse_ssl = self.combined_rmse(ssl_models, X_test, y_test)
        except RankDeficiencyError as e:
            logger.warning(f"[{self.technique_name}] seed={seed} evaluation design is rank deficient: {e}")
            return TrialOutcome.degenerate(seed)

        if not (np.isfinite(rmse_supervised) and np.isfinite(rmse_ssl)):
            logger.warning(
                f"[{self.technique_name}] seed={seed} evaluation blend has no residual degrees of freedom "
                f"({X_test.shape[0]} test rows)"
            )
            return TrialOutcome.degenerate(seed)

        return TrialOutcome(
            status=TrialStatus.VALID,
            seed=seed,
            rmse_supervised=rmse_supervised,
            rmse_ssl=rmse_ssl,
            rounds=len(promotions),
            pseudo_labeled_count=int(sum(promotions)),
            promotions_per_round=tuple(promotions),
        )


def run_trial(X: np.ndarray, y: np.ndarray, method: str, seed: int, config: SSLConfig | None = None) -> TrialOutcome:
    """Run one co-training trial with the regressor selected by `method`."""
    config = config or SSLConfig(method=method)
    return CoTrainingTrial(config, get_regressor_factory(method)).run(X, y, seed)
