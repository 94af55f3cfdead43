"""Tests for regression metrics and evaluate()."""

import math

import numpy as np
import pytest

from taxifare.errors import EmptyDataset
from taxifare.pipeline import RegressionMetrics, evaluate


class TestRegressionMetrics:
    def test_perfect_predictions(self):
        y = np.array([3.0, 7.5, 12.0, 40.0])
        metrics = RegressionMetrics.from_predictions(y, y)
        assert metrics.rmse == 0.0
        assert metrics.r_squared == 1.0
        assert metrics.mae == 0.0

    def test_perfect_predictions_constant_label(self):
        y = np.array([5.0, 5.0, 5.0])
        assert RegressionMetrics.from_predictions(y, y).r_squared == 1.0

    def test_single_row(self):
        metrics = RegressionMetrics.from_predictions(np.array([9.0]), np.array([9.0]))
        assert metrics.r_squared == 1.0
        assert metrics.n_samples == 1

    def test_known_values(self):
        y = np.array([1.0, 2.0, 3.0])
        pred = np.array([1.0, 2.0, 5.0])
        metrics = RegressionMetrics.from_predictions(y, pred)

        assert math.isclose(metrics.mse, 4 / 3)
        assert math.isclose(metrics.rmse, math.sqrt(4 / 3))
        assert math.isclose(metrics.mae, 2 / 3)
        # SSE = 4, SST = 2
        assert math.isclose(metrics.r_squared, -1.0)
        assert metrics.loss == metrics.mse

    def test_empty(self):
        with pytest.raises(EmptyDataset):
            RegressionMetrics.from_predictions(np.array([]), np.array([]))

    def test_to_dict(self):
        metrics = RegressionMetrics.from_predictions(np.array([1.0, 2.0]), np.array([1.0, 3.0]))
        d = metrics.to_dict()
        assert d["dataset"] == "test"
        assert d["n_samples"] == 2
        assert set(d) >= {"rmse", "r_squared", "mae", "mse", "loss"}

    def test_print_summary(self, capsys):
        y = np.array([1.0, 2.0, 3.0])
        RegressionMetrics.from_predictions(y, y).print_summary("SGDRegressor")
        out = capsys.readouterr().out
        assert "SGDRegressor" in out
        assert "RMS loss" in out
        assert "R2 Score" in out


class TestEvaluate:
    def test_metrics_on_held_out_data(self, trained_model, trip_factory):
        metrics = evaluate(trained_model, trip_factory(200, seed=11))
        assert metrics.n_samples == 200
        assert metrics.r_squared > 0.8
        assert metrics.rmse < 6.0

    def test_matches_manual_rmse(self, trained_model, trip_factory):
        df = trip_factory(50, seed=12)
        pred = trained_model.predict(df)
        expected = np.sqrt(np.mean((pred - df["fare_amount"].to_numpy()) ** 2))
        assert math.isclose(evaluate(trained_model, df).rmse, expected, rel_tol=1e-9)

    def test_empty_table(self, trained_model, trips_df):
        with pytest.raises(EmptyDataset):
            evaluate(trained_model, trips_df.iloc[0:0])

    def test_dataset_name(self, trained_model, trips_df):
        assert evaluate(trained_model, trips_df, dataset_name="train").dataset_name == "train"
