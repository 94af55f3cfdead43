"""Single-trip scoring.

predict() is a pure function of a loaded model and one trip: it runs the
model's fitted transform chain on a one-row table, so feature layout and
encodings are exactly those used at fit time.

Key Functions:
    predict() - TrainedModel + trip → FarePrediction

Key Classes:
    PredictionEngine - Binds a model for repeated scoring

Usage:
    from taxifare.models import PredictionEngine, load_model

    engine = PredictionEngine(load_model(path))
    fare = engine.predict({"vendor_id": "VTS", ...}).fare_amount
"""

from __future__ import annotations

from typing import Any, List, Mapping, Union

import numpy as np
import pandas as pd
from pydantic import ValidationError

from taxifare.data.loader import records_to_frame
from taxifare.data.schemas import INPUT_FIELDS, TRIP_SCHEMA, FarePrediction, TripRecord
from taxifare.errors import IncompleteRecord, SchemaMismatch
from taxifare.models.trained_model import TrainedModel

TripInput = Union[TripRecord, Mapping[str, Any]]


def to_trip_record(record: TripInput) -> TripRecord:
    """Coerce a mapping into a TripRecord.

    fare_amount may be omitted; it is only a placeholder when scoring.

    Raises:
        IncompleteRecord: If an input field is absent or None.
        SchemaMismatch: If a field has the wrong type.
    """
    if isinstance(record, TripRecord):
        return record

    missing = [f for f in INPUT_FIELDS if record.get(f) is None]
    if missing:
        raise IncompleteRecord(f"Trip is missing required field(s): {missing}")

    values = dict(record)
    if values.get("fare_amount") is None:
        values["fare_amount"] = 0.0
    try:
        return TripRecord.model_validate(values)
    except ValidationError as e:
        raise SchemaMismatch(f"Trip fields have the wrong type: {e}") from e


def predict(model: TrainedModel, record: TripInput) -> FarePrediction:
    """Score one trip."""
    trip = to_trip_record(record)
    score = model.predict(records_to_frame([trip]))
    return FarePrediction(fare_amount=float(score[0]))


class PredictionEngine:
    """Scores trips against one immutable model."""

    def __init__(self, model: TrainedModel):
        self.model = model

    def predict(self, record: TripInput) -> FarePrediction:
        return predict(self.model, record)

    def predict_many(self, records: Union[pd.DataFrame, List[TripInput]]) -> np.ndarray:
        """Score a table of trips (or a list of records) in one pass."""
        if isinstance(records, pd.DataFrame):
            missing = [f for f in INPUT_FIELDS if f not in records.columns]
            if missing:
                raise IncompleteRecord(f"Trips are missing required column(s): {missing}")
            numeric = [c.name for c in TRIP_SCHEMA if c.is_numeric and c.name in INPUT_FIELDS]
            values = records[numeric].apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)
            if not np.isfinite(values).all():
                raise SchemaMismatch(f"Trips have missing or non-finite values in {numeric}")
            df = records
            if "fare_amount" not in df.columns:
                df = df.assign(fare_amount=0.0)
            return self.model.predict(df)
        return self.model.predict(records_to_frame([to_trip_record(r) for r in records]))


__all__ = ["TripInput", "to_trip_record", "predict", "PredictionEngine"]
