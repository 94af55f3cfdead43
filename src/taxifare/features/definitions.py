"""Column names used by the fare pipeline.

Source columns come from the trip schema. Derived columns are produced by
the transform chain; the concatenation order of FEATURE_INPUTS fixes the
feature-vector layout of every trained model.
"""

from __future__ import annotations

from typing import List

# Derived column names
LABEL_COLUMN = "label"
FEATURES_COLUMN = "features"
SCORE_COLUMN = "score"

# Categorical source → one-hot output
CATEGORICAL_COLUMNS = {
    "vendor_id": "vendor_id_encoded",
    "rate_code": "rate_code_encoded",
    "payment_type": "payment_type_encoded",
}

# Numeric source columns, normalized in place
NUMERIC_COLUMNS: List[str] = [
    "passenger_count",
    "trip_time_seconds",
    "trip_distance",
]

# Feature-vector layout: encoded categoricals first, then numerics
FEATURE_INPUTS: List[str] = list(CATEGORICAL_COLUMNS.values()) + NUMERIC_COLUMNS
