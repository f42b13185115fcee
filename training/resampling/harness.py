"""Resampling Harness — Repeats the co-training trial over independent random splits and tallies wins."""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

import numpy as np
from loguru import logger

from models.factory import get_regressor_factory
from training.co_training.multi_view_trainer import CoTrainingTrial, TrialOutcome
from training.semi_supervised.base_ssl_trainer import SSLConfig

TrialFn = Callable[[int], TrialOutcome]

# Trial seeds are drawn uniformly from [1, MAX_TRIAL_SEED]
MAX_TRIAL_SEED = 1_000_000_000


class DegeneratePolicy(str, Enum):
    """How rank-deficient (degenerate) trials enter the tallies."""

    COUNT_AS_TIE = "count_as_tie"  # (0, 0) compares equal: counted as a tie
    EXCLUDE = "exclude"  # counted only as degenerate, left out of every n
    RETRY = "retry"  # redraw the split, exclude if retries run out


@dataclass
class AggregateOutcome:
    """Win/loss/tie tallies and per-trial results of one harness run."""

    n_resamples: int
    policy: DegeneratePolicy
    ssl_wins: int = 0
    supervised_wins: int = 0
    ties: int = 0
    degenerate: int = 0
    retries: int = 0
    elapsed_seconds: float = 0.0
    outcomes: list[TrialOutcome] = field(default_factory=list)

    @property
    def n_counted(self) -> int:
        """Trials entering the tie-inclusive test."""
        return self.ssl_wins + self.supervised_wins + self.ties

    @property
    def n_excluding_ties(self) -> int:
        return self.ssl_wins + self.supervised_wins

    @property
    def valid_outcomes(self) -> list[TrialOutcome]:
        return [o for o in self.outcomes if not o.is_degenerate]

    @property
    def rmse_supervised(self) -> np.ndarray:
        return np.array([o.rmse_supervised for o in self.valid_outcomes], dtype=float)

    @property
    def rmse_ssl(self) -> np.ndarray:
        return np.array([o.rmse_ssl for o in self.valid_outcomes], dtype=float)

    def rate(self, count: int) -> float:
        return count / self.n_resamples if self.n_resamples else float("nan")

    def rmse_summary(self) -> dict:
        """Mean and sample SD of both arms plus mean relative improvement (%), valid trials only."""
        sup = self.rmse_supervised
        ssl = self.rmse_ssl
        nonzero = sup > 0
        return {
            "n_valid": int(sup.size),
            "supervised_mean": _mean(sup),
            "supervised_std": _std(sup),
            "ssl_mean": _mean(ssl),
            "ssl_std": _std(ssl),
            "improvement_pct_mean": _mean((sup[nonzero] - ssl[nonzero]) / sup[nonzero] * 100.0),
        }

    def to_dict(self) -> dict:
        return {
            "n_resamples": self.n_resamples,
            "policy": self.policy.value,
            "ssl_wins": self.ssl_wins,
            "supervised_wins": self.supervised_wins,
            "ties": self.ties,
            "degenerate": self.degenerate,
            "retries": self.retries,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "rmse": self.rmse_summary(),
        }


def _mean(values: np.ndarray) -> float:
    return float(np.mean(values)) if values.size else float("nan")


def _std(values: np.ndarray) -> float:
    return float(np.std(values, ddof=1)) if values.size > 1 else float("nan")


class ResamplingHarness:
    """Runs a trial function n_resamples times with seeds from one run-level generator."""

    def __init__(
        self,
        trial_fn: TrialFn,
        n_resamples: int = 1000,
        seed: int = 42,
        degenerate_policy: DegeneratePolicy = DegeneratePolicy.COUNT_AS_TIE,
        max_degenerate_retries: int = 10,
        progress_every: int = 100,
    ):
        if n_resamples < 1:
            raise ValueError(f"n_resamples must be >= 1, got {n_resamples}")
        self._trial_fn = trial_fn
        self.n_resamples = n_resamples
        self.seed = seed
        self.degenerate_policy = DegeneratePolicy(degenerate_policy)
        self.max_degenerate_retries = max_degenerate_retries
        self.progress_every = progress_every

    @classmethod
    def for_dataset(
        cls,
        X: np.ndarray,
        y: np.ndarray,
        method: str = "linear",
        config: SSLConfig | None = None,
        **kwargs,
    ) -> "ResamplingHarness":
        """Harness over co-training trials on a fixed dataset. Raises ShapeError up front."""
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float).ravel()
        config = config or SSLConfig(method=method)
        trial = CoTrainingTrial(config, get_regressor_factory(method))
        trial.validate_data(X, y)
        return cls(lambda trial_seed: trial.run(X, y, trial_seed), **kwargs)

    def _draw_seed(self, rng: np.random.Generator) -> int:
        return int(rng.integers(1, MAX_TRIAL_SEED, endpoint=True))

    def _run_one(self, rng: np.random.Generator, aggregate: AggregateOutcome) -> TrialOutcome:
        outcome = self._trial_fn(self._draw_seed(rng))
        if self.degenerate_policy is not DegeneratePolicy.RETRY:
            return outcome

        attempts = 0
        while outcome.is_degenerate and attempts < self.max_degenerate_retries:
            attempts += 1
            aggregate.retries += 1
            outcome = self._trial_fn(self._draw_seed(rng))
        return outcome

    def _tally(self, outcome: TrialOutcome, aggregate: AggregateOutcome) -> None:
        aggregate.outcomes.append(outcome)

        if outcome.is_degenerate:
            aggregate.degenerate += 1
            if self.degenerate_policy is DegeneratePolicy.COUNT_AS_TIE:
                aggregate.ties += 1
            return

        if outcome.rmse_ssl < outcome.rmse_supervised:
            aggregate.ssl_wins += 1
        elif outcome.rmse_ssl > outcome.rmse_supervised:
            aggregate.supervised_wins += 1
        else:
            aggregate.ties += 1

    def run(self) -> AggregateOutcome:
        rng = np.random.default_rng(self.seed)
        aggregate = AggregateOutcome(n_resamples=self.n_resamples, policy=self.degenerate_policy)

        logger.info(
            f"[resampling] Running {self.n_resamples} resamples "
            f"(seed={self.seed}, degenerate_policy={self.degenerate_policy.value})"
        )
        start = time.perf_counter()

        for i in range(1, self.n_resamples + 1):
            self._tally(self._run_one(rng, aggregate), aggregate)

            if self.progress_every and i % self.progress_every == 0:
                logger.info(
                    f"[resampling] {i}/{self.n_resamples}: ssl_wins={aggregate.ssl_wins}, "
                    f"supervised_wins={aggregate.supervised_wins}, ties={aggregate.ties}"
                )

        aggregate.elapsed_seconds = time.perf_counter() - start

        if aggregate.degenerate:
            logger.warning(
                f"[resampling] {aggregate.degenerate} degenerate trial(s) "
                f"handled with policy '{self.degenerate_policy.value}'"
            )
        logger.info(f"[resampling] Completed in {aggregate.elapsed_seconds:.2f} seconds")
        return aggregate
