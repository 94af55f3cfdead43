"""Regression trainer stage.

ALL TRAINING LOGIC LIVES HERE.
A RegressionTrainer names the algorithm and its hyperparameters; appending
it to a TransformPipeline gives a TrainingPipeline whose fit() is the only
effectful step in building a model.

Fitting is one blocking call over the whole training table:
    1. Every transform is fitted in declared order (vocabularies, means, variances)
    2. All rows are transformed with those fixed statistics
    3. The regressor is fitted on the feature matrix and label column

Key Classes:
    RegressionTrainer - Algorithm selection + hyperparameters
    TrainingPipeline  - Transform chain closed by a trainer

Usage:
    from taxifare.features import build_fare_pipeline
    from taxifare.pipeline import RegressionTrainer

    trainer = RegressionTrainer(algorithm="sgd", seed=0)
    model = build_fare_pipeline().append(trainer).fit(train_df)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np
import pandas as pd

from taxifare.config import DEFAULT_ALGORITHM, SEED
from taxifare.errors import EmptyDataset, UnknownInputColumn
from taxifare.features.builder import TransformPipeline
from taxifare.features.definitions import FEATURES_COLUMN, LABEL_COLUMN, SCORE_COLUMN
from taxifare.models.registry import REGRESSORS, get_regressor
from taxifare.models.trained_model import TrainedModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegressionTrainer:
    """Terminal regression stage of a pipeline."""

    algorithm: str = DEFAULT_ALGORITHM
    label_column: str = LABEL_COLUMN
    feature_column: str = FEATURES_COLUMN
    seed: int = SEED
    params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.algorithm not in REGRESSORS:
            raise ValueError(
                f"Unknown algorithm: {self.algorithm}. "
                f"Must be one of: {list(REGRESSORS.keys())}"
            )

    def __hash__(self) -> int:
        return hash((self.algorithm, self.label_column, self.feature_column, self.seed))

    def fit(self, X: np.ndarray, y: np.ndarray):
        """Fit a fresh estimator on a feature matrix and label vector."""
        estimator = get_regressor(self.algorithm, self.seed, self.params)
        estimator.fit(X, y)
        return estimator

    def __str__(self) -> str:
        return f"{REGRESSORS[self.algorithm].__name__}(seed={self.seed})"


@dataclass(frozen=True)
class TrainingPipeline:
    """Transform chain plus regression stage. Declarative until fit()."""

    transforms: TransformPipeline
    trainer: RegressionTrainer

    def fit(self, train_df: pd.DataFrame) -> TrainedModel:
        """Fit transforms and regressor against the full training table.

        Args:
            train_df: Training table (typically outlier-filtered).

        Returns:
            Immutable TrainedModel.

        Raises:
            EmptyDataset: If train_df has no rows.
            UnknownInputColumn: If a stage, or the trainer's label/feature
                binding, references a column nobody produced.
        """
        if len(train_df) == 0:
            raise EmptyDataset("Cannot train on an empty table")

        stages, columns = self.transforms.fit_transform(train_df)

        for name in (self.trainer.label_column, self.trainer.feature_column):
            if name not in columns:
                raise UnknownInputColumn(f"Trainer references unknown column '{name}'")

        X = columns[self.trainer.feature_column].astype(np.float64)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        y = columns[self.trainer.label_column].astype(np.float64)

        logger.info(
            f"Training {self.trainer} on {len(y):,} rows, "
            f"{X.shape[1]} features, {len(stages)} transform stages"
        )
        regressor = self.trainer.fit(X, y)

        return TrainedModel(
            stages=stages,
            regressor=regressor,
            algorithm=self.trainer.algorithm,
            label_column=self.trainer.label_column,
            feature_column=self.trainer.feature_column,
            score_column=SCORE_COLUMN,
        )


__all__ = ["RegressionTrainer", "TrainingPipeline"]
