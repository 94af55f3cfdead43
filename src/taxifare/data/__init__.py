"""Data module - schemas, loading, and row filtering.

Public API:
    load_trips - Delimited file → typed DataFrame
    records_to_frame - TripRecord list → typed DataFrame
    filter_rows_by_column - Inclusive range filter on one column
    TripRecord, FarePrediction - Pydantic models
    ColumnSpec, TRIP_SCHEMA - Source column descriptor
"""

from taxifare.data.schemas import (
    ColumnSpec,
    FarePrediction,
    INPUT_FIELDS,
    LABEL_SOURCE_COLUMN,
    TRIP_SCHEMA,
    TripRecord,
)
from taxifare.data.loader import empty_frame, load_trips, records_to_frame
from taxifare.data.filters import filter_rows_by_column

__all__ = [
    "ColumnSpec",
    "FarePrediction",
    "INPUT_FIELDS",
    "LABEL_SOURCE_COLUMN",
    "TRIP_SCHEMA",
    "TripRecord",
    "empty_frame",
    "load_trips",
    "records_to_frame",
    "filter_rows_by_column",
]
