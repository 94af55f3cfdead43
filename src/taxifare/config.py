"""Centralized configuration for taxifare.

All paths, training parameters, and settings in one place.
Environment variables can override default paths.

Path Constants:
    PROJECT_ROOT - Root directory of the project
    STORAGE_DIR - Storage for datasets and model artifacts
    DATA_DIR - Training/test CSVs
    MODELS_DIR - Trained model artifacts
    DEFAULT_TRAIN_DATA_PATH - Training CSV (overridable via TAXIFARE_TRAIN_DATA_PATH)
    DEFAULT_TEST_DATA_PATH - Test CSV (overridable via TAXIFARE_TEST_DATA_PATH)
    DEFAULT_MODEL_PATH - Model artifact (overridable via TAXIFARE_MODEL_PATH)

Training Constants:
    FARE_LOWER_BOUND / FARE_UPPER_BOUND - Admissible fare range for training rows
    SEED - Random seed for stochastic trainers

Usage:
    from taxifare.config import LifecycleConfig

    config = LifecycleConfig.from_env()
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

# Project root (src/taxifare/config.py -> taxifare -> src -> project_root)
PROJECT_ROOT = Path(__file__).parent.parent.parent
STORAGE_DIR = PROJECT_ROOT / "storage"
DATA_DIR = STORAGE_DIR / "data"
MODELS_DIR = STORAGE_DIR / "models"

DEFAULT_TRAIN_DATA_PATH = Path(
    os.environ.get("TAXIFARE_TRAIN_DATA_PATH", str(DATA_DIR / "taxi-fare-train.csv"))
)
DEFAULT_TEST_DATA_PATH = Path(
    os.environ.get("TAXIFARE_TEST_DATA_PATH", str(DATA_DIR / "taxi-fare-test.csv"))
)
DEFAULT_MODEL_PATH = Path(
    os.environ.get("TAXIFARE_MODEL_PATH", str(MODELS_DIR / "taxi_fare_model.joblib"))
)

# Fares outside [1, 150] are treated as data-entry errors in training data
FARE_LOWER_BOUND = 1.0
FARE_UPPER_BOUND = 150.0

SEED = 0
DEFAULT_ALGORITHM = "sgd"

# Reference trip scored at the end of a run
# vendor_id,rate_code,passenger_count,trip_time_in_secs,trip_distance,payment_type,fare_amount
# VTS,1,1,1140,3.75,CRD,15.5
SAMPLE_TRIP: Dict[str, Any] = {
    "vendor_id": "VTS",
    "rate_code": "1",
    "passenger_count": 1.0,
    "trip_time_seconds": 1140.0,
    "trip_distance": 3.75,
    "payment_type": "CRD",
    "fare_amount": 0.0,
}
SAMPLE_TRIP_ACTUAL_FARE = 15.5


@dataclass(frozen=True)
class LifecycleConfig:
    """Explicit configuration for one train → evaluate → persist → predict run."""

    train_data_path: Path = field(default_factory=lambda: DEFAULT_TRAIN_DATA_PATH)
    test_data_path: Path = field(default_factory=lambda: DEFAULT_TEST_DATA_PATH)
    model_path: Path = field(default_factory=lambda: DEFAULT_MODEL_PATH)
    has_header: bool = True
    separator: str = ","
    seed: int = SEED
    algorithm: str = DEFAULT_ALGORITHM

    @classmethod
    def from_env(cls, **overrides: Any) -> "LifecycleConfig":
        """Build config from environment variables, then apply overrides.

        Re-reads the environment at call time so tests and shells can change
        paths without re-importing this module. Overrides that are None are ignored.
        """
        values: Dict[str, Any] = {
            "train_data_path": Path(
                os.environ.get("TAXIFARE_TRAIN_DATA_PATH", str(DEFAULT_TRAIN_DATA_PATH))
            ),
            "test_data_path": Path(
                os.environ.get("TAXIFARE_TEST_DATA_PATH", str(DEFAULT_TEST_DATA_PATH))
            ),
            "model_path": Path(
                os.environ.get("TAXIFARE_MODEL_PATH", str(DEFAULT_MODEL_PATH))
            ),
        }
        for key, value in overrides.items():
            if value is None:
                continue
            if key.endswith("_path"):
                value = Path(value)
            values[key] = value
        return cls(**values)
