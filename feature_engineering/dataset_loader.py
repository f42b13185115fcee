"""Dataset Loader — Reads a tabular file, selects target/feature columns, zero-fills missing values."""

from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd
from loguru import logger

from feature_engineering.feature_registry import FeatureSchema, validate_shape


@dataclass
class PreparedDataset:
    """Target vector and feature matrix ready for co-training, plus imputation counts."""

    schema: FeatureSchema
    X: np.ndarray
    y: np.ndarray
    n_missing_y: int
    n_missing_x: int

    @property
    def n_samples(self) -> int:
        return self.X.shape[0]

    @property
    def n_features(self) -> int:
        return self.X.shape[1]


def read_table(path: str | Path) -> pd.DataFrame:
    """Read a CSV or parquet file into a DataFrame."""
    path = Path(path)
    if path.suffix.lower() in (".parquet", ".pq"):
        return pd.read_parquet(path)
    return pd.read_csv(path)


def prepare_dataset(df: pd.DataFrame, schema: FeatureSchema) -> PreparedDataset:
    """Select schema columns from a frame and replace missing values with 0.

    No rows are dropped. The number of replaced cells is reported separately for
    the target and for the features.
    """
    missing_cols = [c for c in schema.columns if c not in df.columns]
    if missing_cols:
        raise KeyError(f"Columns not found in dataset: {missing_cols}")

    y_frame = pd.to_numeric(df[schema.target_name], errors="coerce")
    x_frame = df[schema.feature_names].apply(pd.to_numeric, errors="coerce")

    n_missing_y = int(y_frame.isna().sum())
    n_missing_x = int(x_frame.isna().sum().sum())

    y = y_frame.fillna(0.0).to_numpy(dtype=float)
    X = x_frame.fillna(0.0).to_numpy(dtype=float)

    if n_missing_y or n_missing_x:
        logger.warning(
            f"Missing values replaced with 0: {n_missing_y} in Y ({schema.target_name}), "
            f"{n_missing_x} in X"
        )

    validate_shape(X.shape[0], X.shape[1], schema.labeled_size_offset)

    logger.info(
        f"Prepared dataset '{schema.name}': {X.shape[0]} observations, {X.shape[1]} predictors "
        f"(target={schema.target_name})"
    )

    return PreparedDataset(schema=schema, X=X, y=y, n_missing_y=n_missing_y, n_missing_x=n_missing_x)


def load_dataset(path: str | Path, schema: FeatureSchema) -> PreparedDataset:
    """Read a tabular file and prepare it for the experiment."""
    df = read_table(path)
    logger.info(f"Loaded {len(df)} rows from {path}")
    return prepare_dataset(df, schema)
