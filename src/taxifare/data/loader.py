"""Delimited-text loader for taxi trip tables.

Reads a CSV (or any single-character delimited file) into a typed pandas
DataFrame, one column per schema field. Column positions come from the
schema descriptor, not from the file header.

Key Functions:
    load_trips() - File path → typed DataFrame
    records_to_frame() - TripRecord list → the same typed DataFrame
    empty_frame() - Zero-row table with the schema's columns

Usage:
    from taxifare.data import load_trips

    train_df = load_trips("storage/data/taxi-fare-train.csv")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Tuple, Union

import numpy as np
import pandas as pd

from taxifare.data.schemas import TRIP_SCHEMA, ColumnSpec, TripRecord, schema_dtypes, schema_width
from taxifare.errors import SchemaMismatch, SourceNotFound

logger = logging.getLogger(__name__)


def empty_frame(schema: Tuple[ColumnSpec, ...] = TRIP_SCHEMA) -> pd.DataFrame:
    """Zero-row table with the schema's columns and dtypes."""
    return pd.DataFrame(
        {name: pd.Series(dtype=dtype) for name, dtype in schema_dtypes(schema).items()}
    )


def load_trips(
    path: Union[str, Path],
    schema: Tuple[ColumnSpec, ...] = TRIP_SCHEMA,
    has_header: bool = True,
    separator: str = ",",
) -> pd.DataFrame:
    """Load a delimited file into a typed table.

    Args:
        path: File to read.
        schema: Ordered column specs (name, dtype, source_index).
        has_header: Skip the first line when True.
        separator: Field delimiter.

    Returns:
        DataFrame with one column per schema entry, numeric columns as float64
        and categorical columns as strings. Row count equals the number of
        data rows in the file.

    Raises:
        SourceNotFound: Path is missing or unreadable.
        SchemaMismatch: A row has the wrong number of columns, a numeric
            field is not a finite number, or the file is not valid UTF-8.
    """
    path = Path(path)
    if not path.is_file():
        raise SourceNotFound(f"Data file not found: {path}")

    width = schema_width(schema)
    header_lines = 1 if has_header else 0

    try:
        raw = pd.read_csv(
            path,
            sep=separator,
            header=None,
            skiprows=header_lines,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError:
        logger.info(f"Loaded 0 rows from {path}")
        return empty_frame(schema)
    except pd.errors.ParserError as e:
        raise SchemaMismatch(f"{path}: {e}") from e
    except UnicodeDecodeError as e:
        raise SchemaMismatch(f"{path}: not valid UTF-8 text: {e}") from e
    except OSError as e:
        raise SourceNotFound(f"Cannot read {path}: {e}") from e

    if raw.shape[1] != width:
        raise SchemaMismatch(
            f"{path}: expected {width} columns, found {raw.shape[1]}"
        )

    # Short rows are padded with NaN by the parser; empty fields stay ""
    short_rows = raw.isna().any(axis=1)
    if short_rows.any():
        row = int(short_rows.to_numpy().argmax())
        raise SchemaMismatch(
            f"{path}: line {row + 1 + header_lines} has fewer than {width} columns"
        )

    columns = {}
    for spec in schema:
        values = raw[spec.source_index]
        if spec.is_numeric:
            numeric = pd.to_numeric(values, errors="coerce")
            bad = ~np.isfinite(numeric)
            if bad.any():
                row = int(bad.to_numpy().argmax())
                raise SchemaMismatch(
                    f"{path}: line {row + 1 + header_lines}, column '{spec.name}': "
                    f"{values.iloc[row]!r} is not a finite number"
                )
            columns[spec.name] = numeric.astype("float64")
        else:
            columns[spec.name] = values.astype(object)

    frame = pd.DataFrame(columns, columns=[c.name for c in schema])
    logger.info(f"Loaded {len(frame):,} rows from {path}")
    return frame


def records_to_frame(
    records: Iterable[TripRecord],
    schema: Tuple[ColumnSpec, ...] = TRIP_SCHEMA,
) -> pd.DataFrame:
    """Build the loader's typed table from in-memory records."""
    rows = [r.model_dump() for r in records]
    if not rows:
        return empty_frame(schema)
    names = [c.name for c in schema]
    return pd.DataFrame(rows, columns=names).astype(schema_dtypes(schema))


__all__ = ["load_trips", "records_to_frame", "empty_frame"]
