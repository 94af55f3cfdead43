"""Declarative transform pipeline.

A TransformPipeline is an ordered, immutable tuple of transform specs.
`append()` returns a new pipeline and leaves the receiver alone, so partial
pipelines can be shared and extended freely. Appending a RegressionTrainer
closes the chain and yields a TrainingPipeline.

Nothing touches data until `fit_transform()`: stages are fitted strictly in
declared order, each one seeing the columns produced by the stages before it.
Unknown input columns are therefore reported at fit time, not at declaration.

Key Classes:
    TransformPipeline - Ordered transform specs

Key Functions:
    build_fare_pipeline() - The canonical taxi fare feature chain

Usage:
    from taxifare.features import build_fare_pipeline
    from taxifare.pipeline import RegressionTrainer

    training_pipeline = build_fare_pipeline().append(RegressionTrainer())
    model = training_pipeline.fit(train_df)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Tuple, Union

import pandas as pd

from taxifare.data.schemas import LABEL_SOURCE_COLUMN
from taxifare.features.definitions import (
    CATEGORICAL_COLUMNS,
    FEATURE_INPUTS,
    FEATURES_COLUMN,
    LABEL_COLUMN,
    NUMERIC_COLUMNS,
)
from taxifare.features.transforms import (
    Columns,
    Concatenate,
    CopyColumn,
    FittedTransform,
    Normalize,
    OneHotEncode,
    TransformSpec,
    frame_to_columns,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformPipeline:
    """Ordered, immutable list of column transform specs."""

    stages: Tuple[TransformSpec, ...] = ()

    def append(self, stage) -> Union["TransformPipeline", "TrainingPipeline"]:
        """Return a new pipeline with `stage` added at the end.

        Args:
            stage: A TransformSpec, or a RegressionTrainer to close the chain.
        """
        # Imported here: the trainer module depends on this one
        from taxifare.pipeline.trainer import RegressionTrainer, TrainingPipeline

        if isinstance(stage, RegressionTrainer):
            return TrainingPipeline(transforms=self, trainer=stage)
        if not isinstance(stage, TransformSpec):
            raise TypeError(f"Cannot append {type(stage).__name__} to a pipeline")
        return TransformPipeline(stages=self.stages + (stage,))

    def __len__(self) -> int:
        return len(self.stages)

    def fit_transform(self, df: pd.DataFrame) -> Tuple[Tuple[FittedTransform, ...], Columns]:
        """Fit every stage in order against the full table.

        Returns:
            (fitted stages, transformed columns)

        Raises:
            UnknownInputColumn: If a stage reads a column that neither the
                table nor an earlier stage provides.
        """
        columns = frame_to_columns(df)
        fitted = []
        for spec in self.stages:
            stage = spec.fit(columns)
            columns = stage.transform(columns)
            fitted.append(stage)
            logger.debug(f"Fitted {spec.kind} -> {spec.output}")
        return tuple(fitted), columns


def build_fare_pipeline() -> TransformPipeline:
    """Declare the taxi fare feature chain.

    fare_amount is copied into the label; vendor_id, rate_code and
    payment_type are one-hot encoded; passenger_count, trip_time_seconds and
    trip_distance are mean/variance normalized in place; the six results are
    concatenated into the feature vector.
    """
    pipeline = TransformPipeline().append(CopyColumn(LABEL_COLUMN, LABEL_SOURCE_COLUMN))
    for source, encoded in CATEGORICAL_COLUMNS.items():
        pipeline = pipeline.append(OneHotEncode(encoded, source))
    for column in NUMERIC_COLUMNS:
        pipeline = pipeline.append(Normalize(column, mode="mean_variance"))
    return pipeline.append(Concatenate(FEATURES_COLUMN, FEATURE_INPUTS))


__all__ = ["TransformPipeline", "build_fare_pipeline"]
