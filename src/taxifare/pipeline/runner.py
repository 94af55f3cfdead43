"""Taxi fare lifecycle.

End-to-end run that orchestrates:
1. Data loading (load_trips)
2. Outlier filtering on fare_amount
3. Pipeline declaration (build_fare_pipeline + RegressionTrainer)
4. Model training
5. Evaluation on the test set
6. Artifact and metrics report saving
7. Artifact reload and single-trip prediction

Usage:
    from taxifare.pipeline import Lifecycle

    # Full lifecycle
    Lifecycle.run(LifecycleConfig.from_env())

    # Or step by step
    lifecycle = Lifecycle(config)
    lifecycle.load_data()
    lifecycle.filter_outliers()
    lifecycle.build()
    lifecycle.train()
    lifecycle.evaluate()
    lifecycle.save()
    lifecycle.save_report()
    lifecycle.reload()
    lifecycle.predict_sample()
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

import pandas as pd

from taxifare.config import (
    FARE_LOWER_BOUND,
    FARE_UPPER_BOUND,
    SAMPLE_TRIP,
    LifecycleConfig,
)
from taxifare.data import LABEL_SOURCE_COLUMN, filter_rows_by_column, load_trips
from taxifare.data.schemas import FarePrediction
from taxifare.errors import EmptyDataset
from taxifare.features import build_fare_pipeline
from taxifare.models import TrainedModel, load_model, predict, save_model
from taxifare.pipeline.evaluator import RegressionMetrics, evaluate
from taxifare.pipeline.trainer import RegressionTrainer, TrainingPipeline

logger = logging.getLogger(__name__)


class Lifecycle:
    """Single-pass load → filter → fit → evaluate → save → reload → predict."""

    def __init__(self, config: Optional[LifecycleConfig] = None):
        self.config = config or LifecycleConfig.from_env()

        # State
        self.train_df: Optional[pd.DataFrame] = None
        self.test_df: Optional[pd.DataFrame] = None
        self.training_pipeline: Optional[TrainingPipeline] = None
        self.model: Optional[TrainedModel] = None
        self.loaded_model: Optional[TrainedModel] = None
        self.metrics: Optional[RegressionMetrics] = None
        self.report_path: Optional[Path] = None
        self.prediction: Optional[FarePrediction] = None

    def load_data(self) -> tuple[pd.DataFrame, pd.DataFrame]:
        """Step 1: Load training and test tables."""
        cfg = self.config
        self.train_df = load_trips(cfg.train_data_path, has_header=cfg.has_header, separator=cfg.separator)
        self.test_df = load_trips(cfg.test_data_path, has_header=cfg.has_header, separator=cfg.separator)
        return self.train_df, self.test_df

    def filter_outliers(
        self,
        lower_bound: float = FARE_LOWER_BOUND,
        upper_bound: float = FARE_UPPER_BOUND,
    ) -> pd.DataFrame:
        """Step 2: Drop training rows with implausible fares.

        The unfiltered table is discarded.

        Raises:
            EmptyDataset: If no training rows survive the filter.
        """
        if self.train_df is None:
            raise ValueError("Call load_data() first")

        self.train_df = filter_rows_by_column(
            self.train_df, LABEL_SOURCE_COLUMN, lower_bound, upper_bound
        )
        if len(self.train_df) == 0:
            raise EmptyDataset(
                f"No training rows with {LABEL_SOURCE_COLUMN} in [{lower_bound}, {upper_bound}]"
            )
        return self.train_df

    def build(self) -> TrainingPipeline:
        """Step 3: Declare transforms and trainer (no data touched)."""
        trainer = RegressionTrainer(algorithm=self.config.algorithm, seed=self.config.seed)
        self.training_pipeline = build_fare_pipeline().append(trainer)
        return self.training_pipeline

    def train(self) -> TrainedModel:
        """Step 4: Fit the declared pipeline on the filtered training table."""
        if self.train_df is None:
            raise ValueError("Call load_data() first")
        if self.training_pipeline is None:
            self.build()

        self.model = self.training_pipeline.fit(self.train_df)
        return self.model

    def evaluate(self) -> RegressionMetrics:
        """Step 5: Score the test table and compute metrics."""
        if self.model is None:
            raise ValueError("Call train() first")
        if self.test_df is None:
            raise ValueError("Call load_data() first")

        self.metrics = evaluate(self.model, self.test_df, dataset_name="test")
        return self.metrics

    def save(self) -> Path:
        """Step 6: Persist the trained model (atomic write)."""
        if self.model is None:
            raise ValueError("Call train() first")
        return save_model(self.model, self.config.model_path)

    def save_report(self, report_path: Optional[Path] = None) -> Path:
        """Write the evaluation metrics next to the model artifact."""
        if self.metrics is None:
            raise ValueError("Call evaluate() first")
        if report_path is None:
            report_path = self.config.model_path.with_suffix(".report.json")

        report_path.parent.mkdir(parents=True, exist_ok=True)
        report = {
            "algorithm": self.config.algorithm,
            "seed": self.config.seed,
            "metrics": self.metrics.to_dict(),
        }
        with open(report_path, "w") as f:
            json.dump(report, f, indent=2)
        logger.info(f"Report saved to {report_path}")
        self.report_path = report_path
        return report_path

    def reload(self) -> TrainedModel:
        """Step 7a: Read the persisted artifact back in full."""
        self.loaded_model = load_model(self.config.model_path)
        return self.loaded_model

    def predict_sample(self, record: Optional[Mapping[str, Any]] = None) -> FarePrediction:
        """Step 7b: Score one trip with the reloaded model."""
        if self.loaded_model is None:
            self.reload()
        self.prediction = predict(self.loaded_model, record if record is not None else SAMPLE_TRIP)
        return self.prediction

    @classmethod
    def run(cls, config: Optional[LifecycleConfig] = None) -> "Lifecycle":
        """Run the full lifecycle end-to-end."""
        lifecycle = cls(config)
        lifecycle.load_data()
        lifecycle.filter_outliers()
        lifecycle.build()
        lifecycle.train()
        lifecycle.evaluate()
        lifecycle.save()
        lifecycle.save_report()
        lifecycle.reload()
        lifecycle.predict_sample()
        return lifecycle


__all__ = ["Lifecycle"]
