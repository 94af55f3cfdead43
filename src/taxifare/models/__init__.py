"""Models module - fitted model, regressors, persistence, and scoring.

This module contains:
- trained_model: TrainedModel (fitted transforms + regressor)
- registry: Regression algorithm lookup by name
- persistence: Artifact save/load with structural checks
- predict: Single-trip scoring
"""

from taxifare.models.trained_model import TrainedModel
from taxifare.models.registry import REGRESSORS, get_regressor
from taxifare.models.persistence import dumps, load_model, loads, save_model
from taxifare.models.predict import PredictionEngine, predict

__all__ = [
    "TrainedModel",
    "REGRESSORS",
    "get_regressor",
    "dumps",
    "loads",
    "save_model",
    "load_model",
    "PredictionEngine",
    "predict",
]
