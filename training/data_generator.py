"""Synthetic Data Generator — Creates panel-style tabular data for running the SSL experiment end to end."""

import os

import numpy as np
import pandas as pd
from loguru import logger


def generate_regression_dataset(
    n_samples: int = 500,
    n_features: int = 3,
    noise: float = 0.5,
    missing_rate: float = 0.0,
    seed: int = 42,
    target_name: str = "y",
    feature_prefix: str = "x",
) -> pd.DataFrame:
    """Generate a linear target over correlated predictors.

    Predictors share a common latent factor (like repeated waves of one survey
    scale), so neighbouring feature views stay informative about the target.
    Optionally blanks out a fraction of cells to exercise zero-imputation.
    """
    rng = np.random.default_rng(seed)

    latent = rng.normal(0.0, 1.0, n_samples)
    X = np.column_stack(
        [0.7 * latent + rng.normal(0.0, 0.7, n_samples) for _ in range(n_features)]
    )
    weights = rng.uniform(0.3, 1.0, n_features)
    y = 2.0 + X @ weights + rng.normal(0.0, noise, n_samples)

    df = pd.DataFrame(X, columns=[f"{feature_prefix}{i + 1}" for i in range(n_features)])
    df.insert(0, target_name, y)

    if missing_rate > 0:
        mask = rng.random(df.shape) < missing_rate
        df = df.mask(mask)

    logger.info(
        f"Generated regression dataset: {n_samples} samples, {n_features} features, "
        f"missing_rate={missing_rate:.2%}"
    )
    return df


def save_dataset(output_dir: str = "./training/data", **kwargs) -> str:
    """Generate and save a synthetic dataset as CSV."""
    os.makedirs(output_dir, exist_ok=True)
    df = generate_regression_dataset(**kwargs)
    path = os.path.join(output_dir, "ssl_experiment_data.csv")
    df.to_csv(path, index=False)
    logger.info(f"Saved synthetic data: {path}")
    return path


if __name__ == "__main__":
    save_dataset()
