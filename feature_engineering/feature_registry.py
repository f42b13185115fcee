"""Feature Registry — Variable selection schema and dataset shape checks for the SSL experiment."""

import hashlib
import json
from dataclasses import dataclass

# Labeled set size = number of features + LABELED_SIZE_OFFSET
LABELED_SIZE_OFFSET = 5


class ShapeError(ValueError):
    """Dataset is structurally unusable for co-training (too narrow or too short)."""


@dataclass
class FeatureSchema:
    name: str
    target_name: str
    feature_names: list[str]
    description: str = ""
    labeled_size_offset: int = LABELED_SIZE_OFFSET

    @property
    def feature_count(self) -> int:
        return len(self.feature_names)

    @property
    def labeled_size(self) -> int:
        return self.feature_count + self.labeled_size_offset

    @property
    def schema_hash(self) -> str:
        payload = json.dumps({"name": self.name, "target": self.target_name, "features": self.feature_names})
        return hashlib.sha256(payload.encode()).hexdigest()[:16]

    @property
    def columns(self) -> list[str]:
        return [self.target_name, *self.feature_names]

    def get_metadata(self) -> dict:
        return {
            "schema_name": self.name,
            "target": self.target_name,
            "features": list(self.feature_names),
            "feature_count": self.feature_count,
            "labeled_size": self.labeled_size,
            "schema_hash": self.schema_hash,
        }


def validate_shape(n_samples: int, n_features: int, labeled_size_offset: int = LABELED_SIZE_OFFSET) -> None:
    """Raise ShapeError unless the data can support a two-view co-training split.

    Two views need at least 2 features, and the labeled subset (n_features + offset rows)
    must leave at least one unlabeled row behind.
    """
    if n_features <= 1:
        raise ShapeError(f"X is too narrow: {n_features} feature(s), co-training needs at least 2")
    if n_samples <= n_features + labeled_size_offset:
        raise ShapeError(
            f"X is too wide: {n_samples} samples for {n_features} features "
            f"(need more than {n_features + labeled_size_offset})"
        )


