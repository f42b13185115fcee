"""Unit tests for dataset loading and zero-imputation."""

import numpy as np
import pandas as pd
import pytest

from feature_engineering.dataset_loader import load_dataset, prepare_dataset
from feature_engineering.feature_registry import FeatureSchema, ShapeError, validate_shape
from training.data_generator import generate_regression_dataset


class TestPrepareDataset:
    def setup_method(self):
        self.schema = FeatureSchema(name="test", target_name="jsm_w6", feature_names=["w7", "w8", "w9"])

    def _frame(self, n: int = 20) -> pd.DataFrame:
        rng = np.random.default_rng(0)
        return pd.DataFrame(
            {
                "jsm_w6": rng.normal(size=n),
                "w7": rng.normal(size=n),
                "w8": rng.normal(size=n),
                "w9": rng.normal(size=n),
                "unused": rng.normal(size=n),
            }
        )

    def test_selects_columns_in_order(self):
        df = self._frame()
        dataset = prepare_dataset(df, self.schema)
        assert dataset.X.shape == (20, 3)
        assert np.array_equal(dataset.X[:, 2], df["w9"].to_numpy())
        assert np.array_equal(dataset.y, df["jsm_w6"].to_numpy())

    def test_missing_values_replaced_and_counted(self):
        df = self._frame()
        df.loc[[0, 1], "jsm_w6"] = np.nan
        df.loc[[2], "w7"] = np.nan
        df.loc[[3, 4, 5], "w9"] = np.nan

        dataset = prepare_dataset(df, self.schema)
        assert dataset.n_missing_y == 2
        assert dataset.n_missing_x == 4
        assert dataset.y[0] == 0.0
        assert dataset.X[2, 0] == 0.0
        assert dataset.n_samples == 20

    def test_missing_column_raises(self):
        df = self._frame().drop(columns="w8")
        with pytest.raises(KeyError):
            prepare_dataset(df, self.schema)

    def test_too_few_rows_raises(self):
        with pytest.raises(ShapeError):
            prepare_dataset(self._frame(n=8), self.schema)

    def test_load_csv(self, tmp_path):
        path = tmp_path / "data.csv"
        generate_regression_dataset(n_samples=30, n_features=3, missing_rate=0.1, seed=1).to_csv(path, index=False)
        schema = FeatureSchema(name="csv", target_name="y", feature_names=["x1", "x2", "x3"])

        dataset = load_dataset(path, schema)
        assert dataset.n_features == 3
        assert not np.isnan(dataset.X).any()
        assert not np.isnan(dataset.y).any()


class TestValidateShape:
    def test_narrow(self):
        with pytest.raises(ShapeError):
            validate_shape(100, 1)

    def test_short(self):
        with pytest.raises(ShapeError):
            validate_shape(8, 3)

    def test_minimum_viable(self):
        validate_shape(9, 3)

    def test_schema_labeled_size(self):
        schema = FeatureSchema(name="s", target_name="y", feature_names=["a", "b"])
        assert schema.labeled_size == 7
        assert len(schema.schema_hash) == 16
