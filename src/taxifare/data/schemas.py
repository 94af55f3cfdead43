"""Pydantic schemas and the column descriptor for taxi trip data.

Models:
    TripRecord - One observed trip (also the scoring input)
    FarePrediction - Scoring output, bound to the pipeline's score column

Descriptors:
    ColumnSpec - (name, dtype, source_index) for one delimited-file column
    TRIP_SCHEMA - Ordered column specs for the seven-column trip file

Usage:
    from taxifare.data.schemas import TripRecord

    trip = TripRecord.model_validate({"vendor_id": "VTS", ...})
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple, Type

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class ColumnSpec:
    """One column of a delimited source file."""

    name: str
    dtype: Type  # str or float
    source_index: int

    @property
    def is_numeric(self) -> bool:
        return self.dtype is float


# Field order is part of the on-disk contract:
# vendor_id,rate_code,passenger_count,trip_time_in_secs,trip_distance,payment_type,fare_amount
TRIP_SCHEMA: Tuple[ColumnSpec, ...] = (
    ColumnSpec("vendor_id", str, 0),
    ColumnSpec("rate_code", str, 1),
    ColumnSpec("passenger_count", float, 2),
    ColumnSpec("trip_time_seconds", float, 3),
    ColumnSpec("trip_distance", float, 4),
    ColumnSpec("payment_type", str, 5),
    ColumnSpec("fare_amount", float, 6),
)

LABEL_SOURCE_COLUMN = "fare_amount"

# Everything except the label must be present to score a trip
INPUT_FIELDS: List[str] = [c.name for c in TRIP_SCHEMA if c.name != LABEL_SOURCE_COLUMN]


def schema_width(schema: Tuple[ColumnSpec, ...]) -> int:
    """Number of source columns a row must have for this schema."""
    return max(c.source_index for c in schema) + 1


def schema_dtypes(schema: Tuple[ColumnSpec, ...]) -> Dict[str, str]:
    """Pandas dtypes keyed by column name."""
    return {c.name: ("float64" if c.is_numeric else "object") for c in schema}


class TripRecord(BaseModel):
    """Taxi trip. fare_amount is the label; leave it at 0 when scoring."""

    model_config = ConfigDict(allow_inf_nan=False)

    vendor_id: str
    rate_code: str
    passenger_count: float
    trip_time_seconds: float
    trip_distance: float
    payment_type: str
    fare_amount: float = 0.0


class FarePrediction(BaseModel):
    """Predicted fare for one trip."""

    fare_amount: float


__all__ = [
    "ColumnSpec",
    "TRIP_SCHEMA",
    "LABEL_SOURCE_COLUMN",
    "INPUT_FIELDS",
    "schema_width",
    "schema_dtypes",
    "TripRecord",
    "FarePrediction",
]
