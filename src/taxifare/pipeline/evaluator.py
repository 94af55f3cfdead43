"""Model evaluation against held-out data.

Provides separate evaluation logic (decoupled from training).

Key Classes:
    RegressionMetrics - Immutable container for aggregate error statistics

Key Functions:
    evaluate() - Score a labelled table and compute metrics

Usage:
    from taxifare.pipeline.evaluator import evaluate

    metrics = evaluate(model, test_df)
    metrics.print_summary("SGDRegressor")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

from taxifare.errors import EmptyDataset, UnknownInputColumn
from taxifare.models.trained_model import TrainedModel


@dataclass(frozen=True)
class RegressionMetrics:
    """Aggregate regression error statistics."""

    dataset_name: str
    mae: float
    mse: float
    rmse: float
    r_squared: float
    loss: float
    n_samples: int

    @classmethod
    def from_predictions(
        cls,
        y_true: np.ndarray,
        y_pred: np.ndarray,
        dataset_name: str = "test",
    ) -> "RegressionMetrics":
        """Compute metrics from aligned label / prediction arrays.

        Raises:
            EmptyDataset: If there are no rows (RMSE and R² are undefined).
        """
        y_true = np.asarray(y_true, dtype=float)
        y_pred = np.asarray(y_pred, dtype=float)
        if len(y_true) == 0:
            raise EmptyDataset(f"Cannot evaluate on an empty {dataset_name} set")

        mse = float(mean_squared_error(y_true, y_pred))
        if len(y_true) > 1:
            r_squared = float(r2_score(y_true, y_pred))
        else:
            r_squared = _r2_single(y_true, y_pred)

        return cls(
            dataset_name=dataset_name,
            mae=float(mean_absolute_error(y_true, y_pred)),
            mse=mse,
            rmse=float(np.sqrt(mse)),
            r_squared=r_squared,
            # Squared loss is the trainers' objective, so loss == L2
            loss=mse,
            n_samples=len(y_true),
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "dataset": self.dataset_name,
            "mae": round(self.mae, 4),
            "mse": round(self.mse, 4),
            "rmse": round(self.rmse, 4),
            "r_squared": round(self.r_squared, 4),
            "loss": round(self.loss, 4),
            "n_samples": self.n_samples,
        }

    def print_summary(self, model_name: Optional[str] = None):
        """Print evaluation summary."""
        title = f"Metrics for {model_name} regression model" if model_name else "Regression metrics"
        print(f"\n{'*'*70}")
        print(f"*       {title}")
        print(f"*{'-'*69}")
        print(f"*       LossFn:         {self.loss:.2f}")
        print(f"*       R2 Score:       {self.r_squared:.2f}")
        print(f"*       Absolute loss:  {self.mae:.2f}")
        print(f"*       Squared loss:   {self.mse:.2f}")
        print(f"*       RMS loss:       {self.rmse:.2f}")
        print(f"*       Samples:        {self.n_samples:,} ({self.dataset_name})")
        print(f"{'*'*70}")


def _r2_single(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    # r2_score warns and returns nan for one sample; perfect fit still scores 1
    return 1.0 if np.allclose(y_true, y_pred) else 0.0


def evaluate(
    model: TrainedModel,
    df: pd.DataFrame,
    dataset_name: str = "test",
) -> RegressionMetrics:
    """Apply the model to a labelled table and compute metrics.

    The label is taken from the model's own label column, so it goes through
    the same copy stage it did at fit time.

    Raises:
        EmptyDataset: If df has no rows.
        UnknownInputColumn: If the model cannot derive its label from df.
    """
    if len(df) == 0:
        raise EmptyDataset(f"Cannot evaluate on an empty {dataset_name} set")

    scored = model.transform(df)
    if model.label_column not in scored.columns:
        raise UnknownInputColumn(
            f"Label column '{model.label_column}' not available for evaluation"
        )

    return RegressionMetrics.from_predictions(
        scored[model.label_column].to_numpy(),
        scored[model.score_column].to_numpy(),
        dataset_name=dataset_name,
    )


__all__ = ["RegressionMetrics", "evaluate"]
