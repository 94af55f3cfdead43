"""Row filters applied before training."""

from __future__ import annotations

import logging

import pandas as pd

from taxifare.errors import UnknownInputColumn

logger = logging.getLogger(__name__)


def filter_rows_by_column(
    df: pd.DataFrame,
    column: str,
    lower_bound: float,
    upper_bound: float,
) -> pd.DataFrame:
    """Keep rows whose value on `column` lies in [lower_bound, upper_bound].

    Both bounds are inclusive. Kept rows stay in their original order and the
    input frame is left untouched. An empty result is returned as-is; callers
    decide whether a zero-row training set is an error.

    Raises:
        UnknownInputColumn: If `column` is not in the table.
    """
    if column not in df.columns:
        raise UnknownInputColumn(f"Cannot filter on missing column '{column}'")

    values = df[column]
    mask = (values >= lower_bound) & (values <= upper_bound)
    kept = df[mask].reset_index(drop=True)

    dropped = len(df) - len(kept)
    logger.info(
        f"Filtered {column} to [{lower_bound}, {upper_bound}]: "
        f"kept {len(kept):,} / {len(df):,} rows ({dropped:,} dropped)"
    )
    return kept


__all__ = ["filter_rows_by_column"]
