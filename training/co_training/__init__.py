"""Co-training for the SSL vs. supervised experiment.

Provides the two-view co-training trial:
  - Feature views (drop-first / drop-last slices of the design matrix)
  - Confidence-gated pseudo-labeling loop run to convergence on one random split
  - Supervised vs. SSL evaluation through a second-stage linear blend
"""

from training.co_training.multi_view_trainer import (
    CoTrainingTrial,
    TrialOutcome,
    TrialStatus,
    run_trial,
    select_confident,
)
from training.co_training.view_definitions import View

__all__ = [
    "CoTrainingTrial",
    "TrialOutcome",
    "TrialStatus",
    "View",
    "run_trial",
    "select_confident",
]
