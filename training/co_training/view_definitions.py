"""Feature view definitions for two-view co-training.

Each ensemble member sees a (P-1)-feature slice of the design matrix: one view drops
the first feature, the other drops the last. The views overlap in P-2 features, so
they are structurally distinct rather than independent; the disagreement between
their predictions is used as the confidence signal.
"""

from enum import Enum

import numpy as np


class View(str, Enum):
    """Feature-subset strategies for the two ensemble members."""

    DROP_FIRST = "drop_first"
    DROP_LAST = "drop_last"

    def feature_indices(self, n_features: int) -> list[int]:
        if n_features < 2:
            raise ValueError(f"View {self.value} needs at least 2 features, got {n_features}")
        if self is View.DROP_FIRST:
            return list(range(1, n_features))
        return list(range(0, n_features - 1))

    def select(self, X: np.ndarray) -> np.ndarray:
        return X[:, self.feature_indices(X.shape[1])]


# Member order within a model pair: (A, B)
DEFAULT_VIEWS: tuple[View, View] = (View.DROP_FIRST, View.DROP_LAST)


def get_view_features(X: np.ndarray, view: View | str) -> np.ndarray:
    """Extract the feature subset for a view."""
    return View(view).select(X)


def get_view_names(views: tuple[View, ...] = DEFAULT_VIEWS) -> list[str]:
    return [v.value for v in views]
