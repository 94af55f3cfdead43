"""Pytest fixtures/config for taxifare tests."""

import os
import sys

import numpy as np
import pandas as pd
import pytest


def pytest_sessionstart(session) -> None:  # type: ignore[unused-argument]
    repo_root = os.path.dirname(os.path.dirname(__file__))
    src_path = os.path.join(repo_root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


CSV_HEADER = [
    "vendor_id",
    "rate_code",
    "passenger_count",
    "trip_time_in_secs",
    "trip_distance",
    "payment_type",
    "fare_amount",
]


def make_trips(n: int = 400, seed: int = 0) -> pd.DataFrame:
    """Synthetic trips with a known linear fare structure.

    fare = 2.5 + 2.0 * distance + 0.005 * seconds + 45 if rate_code == "2",
    plus small noise. Column names follow the loaded-table schema.
    """
    rng = np.random.default_rng(seed)
    distance = np.round(rng.uniform(0.5, 12.0, n), 2)
    seconds = np.round(120 + distance * 180 + rng.uniform(0, 400, n))
    rate_code = np.where(rng.random(n) < 0.1, "2", "1")
    fare = 2.5 + 2.0 * distance + 0.005 * seconds + np.where(rate_code == "2", 45.0, 0.0)
    fare = np.round(fare + rng.normal(0, 0.5, n), 1)

    return pd.DataFrame({
        "vendor_id": rng.choice(["VTS", "CMT"], n).astype(object),
        "rate_code": rate_code.astype(object),
        "passenger_count": rng.integers(1, 5, n).astype(float),
        "trip_time_seconds": seconds.astype(float),
        "trip_distance": distance.astype(float),
        "payment_type": rng.choice(["CRD", "CSH"], n).astype(object),
        "fare_amount": fare.astype(float),
    })


@pytest.fixture
def trip_factory():
    """Build synthetic trip tables: trip_factory(n=..., seed=...)."""
    return make_trips


@pytest.fixture
def trips_df():
    return make_trips(400, seed=0)


@pytest.fixture
def write_csv(tmp_path):
    """Write a trip table to a CSV in tmp_path and return its path."""
    def _write(df: pd.DataFrame, name: str = "trips.csv", header: bool = True, sep: str = ","):
        path = tmp_path / name
        df.to_csv(path, index=False, header=CSV_HEADER if header else False, sep=sep)
        return path
    return _write


@pytest.fixture
def train_csv(write_csv):
    return write_csv(make_trips(400, seed=1), "taxi-fare-train.csv")


@pytest.fixture
def test_csv(write_csv):
    return write_csv(make_trips(100, seed=2), "taxi-fare-test.csv")


@pytest.fixture
def sample_trip():
    return {
        "vendor_id": "VTS",
        "rate_code": "1",
        "passenger_count": 1.0,
        "trip_time_seconds": 1140.0,
        "trip_distance": 3.75,
        "payment_type": "CRD",
    }


@pytest.fixture
def trained_model(trips_df):
    from taxifare.features import build_fare_pipeline
    from taxifare.pipeline import RegressionTrainer

    return build_fare_pipeline().append(RegressionTrainer(seed=0)).fit(trips_df)
