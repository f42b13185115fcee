"""SSL Metrics — Pseudo-labeling diagnostics across co-training trials.

Monitors:
  - Growth rounds until convergence
  - Pseudo-labels admitted per trial and per round
  - Share of trials whose loop never promoted a row
  - Degenerate (rank deficient) trials
"""

import numpy as np
from loguru import logger

from training.co_training.multi_view_trainer import TrialOutcome


class SSLMetricsCollector:
    """Collects and summarizes pseudo-labeling behaviour over a harness run."""

    def __init__(self, max_update: int | None = None):
        self._max_update = max_update
        self._outcomes: list[TrialOutcome] = []

    def record(self, outcome: TrialOutcome) -> None:
        self._outcomes.append(outcome)

    def record_many(self, outcomes: list[TrialOutcome]) -> None:
        self._outcomes.extend(outcomes)

    def summary(self) -> dict:
        valid = [o for o in self._outcomes if not o.is_degenerate]
        rounds = np.array([o.rounds for o in valid], dtype=float)
        pseudo = np.array([o.pseudo_labeled_count for o in valid], dtype=float)
        per_round = [n for o in valid for n in o.promotions_per_round]

        result = {
            "trials": len(self._outcomes),
            "valid_trials": len(valid),
            "degenerate_trials": len(self._outcomes) - len(valid),
            "mean_rounds": float(rounds.mean()) if rounds.size else None,
            "max_rounds": int(rounds.max()) if rounds.size else None,
            "mean_pseudo_labeled": float(pseudo.mean()) if pseudo.size else None,
            "no_promotion_rate": float(np.mean(rounds == 0)) if rounds.size else None,
            "max_promoted_per_round": max(per_round) if per_round else 0,
        }

        if self._max_update is not None and result["max_promoted_per_round"] > self._max_update:
            logger.warning(
                f"Promotion cap exceeded: {result['max_promoted_per_round']} rows in one round "
                f"(cap {self._max_update})"
            )

        return result
