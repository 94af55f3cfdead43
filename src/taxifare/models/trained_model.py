"""Fitted fare model: transform chain + regressor.

A TrainedModel is produced once by TrainingPipeline.fit() and never changes
afterwards, so it can be shared by concurrent scorers.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

import numpy as np
import pandas as pd

from taxifare.errors import UnknownInputColumn
from taxifare.features.definitions import SCORE_COLUMN
from taxifare.features.transforms import (
    Columns,
    FittedConcatenate,
    FittedOneHotEncode,
    FittedTransform,
    frame_to_columns,
)


class TrainedModel:
    """Fitted transforms (in declared order) and the fitted regressor."""

    def __init__(
        self,
        stages: Tuple[FittedTransform, ...],
        regressor,
        algorithm: str,
        label_column: str,
        feature_column: str,
        score_column: str = SCORE_COLUMN,
    ):
        self._stages = tuple(stages)
        self._regressor = regressor
        self.algorithm = algorithm
        self.label_column = label_column
        self.feature_column = feature_column
        self.score_column = score_column

    @property
    def stages(self) -> Tuple[FittedTransform, ...]:
        return self._stages

    @property
    def regressor(self):
        return self._regressor

    def _transform_columns(self, df: pd.DataFrame) -> Columns:
        columns = frame_to_columns(df)
        for stage in self._stages:
            columns = stage.transform(columns)
        if self.feature_column not in columns:
            raise UnknownInputColumn(
                f"Feature column '{self.feature_column}' not produced by any stage"
            )
        return columns

    def predict(self, df: pd.DataFrame) -> np.ndarray:
        """Score every row of a trip table."""
        columns = self._transform_columns(df)
        X = columns[self.feature_column]
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        return self._regressor.predict(X)

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Score a table, returning a copy with label (if derivable) and score."""
        columns = self._transform_columns(df)
        X = columns[self.feature_column]
        if X.ndim == 1:
            X = X.reshape(-1, 1)

        result = df.copy()
        if self.label_column in columns:
            result[self.label_column] = columns[self.label_column].astype(float)
        result[self.score_column] = self._regressor.predict(X)
        return result

    @property
    def feature_names(self) -> List[str]:
        """Name of every slot in the feature vector, in layout order."""
        slots: Dict[str, List[str]] = {}
        for stage in self._stages:
            if isinstance(stage, FittedOneHotEncode):
                slots[stage.output] = [f"{stage.output}={v}" for v in stage.vocabulary]
            elif isinstance(stage, FittedConcatenate):
                names: List[str] = []
                for name, width in zip(stage.spec.input_columns, stage.widths):
                    names.extend(slots.get(name) or _default_slots(name, width))
                slots[stage.output] = names
            else:
                source = stage.spec.inputs[0]
                slots[stage.output] = slots.get(source, [stage.output])
        return slots.get(self.feature_column, [])

    def weights(self) -> Dict[str, float]:
        """Regression coefficient per feature slot."""
        coef = np.ravel(self._regressor.coef_)
        return dict(zip(self.feature_names, coef.tolist()))

    @property
    def bias(self) -> float:
        return float(np.ravel(self._regressor.intercept_)[0])

    def __repr__(self) -> str:
        kinds = " -> ".join(s.kind for s in self._stages)
        return f"TrainedModel({kinds} -> {self.algorithm})"


def _default_slots(name: str, width: int) -> List[str]:
    if width == 1:
        return [name]
    return [f"{name}[{i}]" for i in range(width)]


__all__ = ["TrainedModel"]
