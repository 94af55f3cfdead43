"""Column transform specifications and their fitted counterparts.

A transform spec is a frozen, declarative description of one column
operation: (kind, output, input(s), parameters). Declaring a spec touches no
data. `spec.fit(columns)` learns fit-time statistics from a full table and
returns a fitted transform; fitted transforms never change after that.

Columns flow between stages as a plain dict of numpy arrays: 1-D arrays for
scalar columns, 2-D arrays for vector columns (one-hot outputs, the
concatenated feature vector).

Spec Classes:
    CopyColumn   - Alias a column (binds the label)
    OneHotEncode - Category → indicator vector (sklearn OneHotEncoder)
    Normalize    - Mean/variance or min/max scaling (sklearn scalers)
    Concatenate  - Horizontal stack into one feature vector

Usage:
    spec = OneHotEncode("vendor_id_encoded", "vendor_id")
    fitted = spec.fit(columns)
    columns = fitted.transform(columns)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.preprocessing import MinMaxScaler, OneHotEncoder, StandardScaler

from taxifare.errors import SchemaMismatch, UnknownInputColumn

Columns = Dict[str, np.ndarray]

NORMALIZER_MODES = {
    "mean_variance": StandardScaler,
    "min_max": MinMaxScaler,
}


def frame_to_columns(df: pd.DataFrame) -> Columns:
    """Split a DataFrame into named column arrays."""
    return {name: df[name].to_numpy() for name in df.columns}


def _require(columns: Columns, names: Sequence[str], kind: str, output: str) -> None:
    missing = [n for n in names if n not in columns]
    if missing:
        raise UnknownInputColumn(
            f"{kind} -> '{output}' references unknown column(s): {missing}"
        )


def _as_2d(values: np.ndarray) -> np.ndarray:
    return values.reshape(-1, 1) if values.ndim == 1 else values


# =============================================================================
# Transform specs (declarative, data-free)
# =============================================================================


class TransformSpec(ABC):
    """Declared column transform. Subclasses are frozen dataclasses."""

    kind: ClassVar[str]
    output: str

    @property
    @abstractmethod
    def inputs(self) -> Tuple[str, ...]:
        """Columns this transform reads."""

    @abstractmethod
    def _fit(self, columns: Columns) -> "FittedTransform":
        pass

    def fit(self, columns: Columns) -> "FittedTransform":
        """Learn fit-time statistics from the full table.

        Raises:
            UnknownInputColumn: If an input column is absent.
        """
        _require(columns, self.inputs, self.kind, self.output)
        return self._fit(columns)


@dataclass(frozen=True)
class CopyColumn(TransformSpec):
    output: str
    input: str

    kind: ClassVar[str] = "copy_column"

    @property
    def inputs(self) -> Tuple[str, ...]:
        return (self.input,)

    def _fit(self, columns: Columns) -> "FittedTransform":
        return FittedCopyColumn(self)


@dataclass(frozen=True)
class OneHotEncode(TransformSpec):
    """One indicator slot per category seen at fit time.

    Categories not seen at fit time encode to the all-zero vector.
    """

    output: str
    input: str

    kind: ClassVar[str] = "one_hot_encode"

    @property
    def inputs(self) -> Tuple[str, ...]:
        return (self.input,)

    def _fit(self, columns: Columns) -> "FittedTransform":
        encoder = OneHotEncoder(
            handle_unknown="ignore",
            sparse_output=False,
            dtype=np.float64,
        )
        encoder.fit(_categories(columns[self.input]))
        return FittedOneHotEncode(self, encoder)


@dataclass(frozen=True)
class Normalize(TransformSpec):
    """Rescale a numeric column using fit-time statistics.

    mean_variance: (value - mean) / sqrt(variance). A zero-variance column
    keeps a scale of 1, so it maps to value - mean (all zeros on the
    training data) and never divides by zero.
    min_max: (value - min) / (max - min), with the same guard for max == min.

    `input` defaults to `output` (normalize in place).
    """

    output: str
    input: Optional[str] = None
    mode: str = "mean_variance"

    kind: ClassVar[str] = "normalize"

    def __post_init__(self):
        if self.mode not in NORMALIZER_MODES:
            raise ValueError(
                f"Unknown normalizer mode: {self.mode}. "
                f"Must be one of: {list(NORMALIZER_MODES.keys())}"
            )
        if self.input is None:
            object.__setattr__(self, "input", self.output)

    @property
    def inputs(self) -> Tuple[str, ...]:
        return (self.input,)

    def _fit(self, columns: Columns) -> "FittedTransform":
        scaler = NORMALIZER_MODES[self.mode]()
        scaler.fit(_as_2d(columns[self.input].astype(np.float64)))
        return FittedNormalize(self, scaler)


@dataclass(frozen=True)
class Concatenate(TransformSpec):
    """Stack scalar/vector columns side by side, in the declared order."""

    output: str
    input_columns: Tuple[str, ...]

    kind: ClassVar[str] = "concatenate"

    def __post_init__(self):
        if isinstance(self.input_columns, str):
            raise TypeError("input_columns must be a sequence of column names")
        object.__setattr__(self, "input_columns", tuple(self.input_columns))
        if not self.input_columns:
            raise ValueError("Concatenate needs at least one input column")

    @property
    def inputs(self) -> Tuple[str, ...]:
        return self.input_columns

    def _fit(self, columns: Columns) -> "FittedTransform":
        widths = tuple(_as_2d(columns[name]).shape[1] for name in self.input_columns)
        return FittedConcatenate(self, widths)


def _categories(values: np.ndarray) -> np.ndarray:
    return _as_2d(np.asarray(values).astype(str).astype(object))


# =============================================================================
# Fitted transforms
# =============================================================================


class FittedTransform(ABC):
    """A spec plus the statistics it learned. Immutable after fit."""

    def __init__(self, spec: TransformSpec):
        self.spec = spec

    @property
    def kind(self) -> str:
        return self.spec.kind

    @property
    def output(self) -> str:
        return self.spec.output

    def transform(self, columns: Columns) -> Columns:
        """Return a new column dict with this stage's output added."""
        _require(columns, self.spec.inputs, self.kind, self.output)
        result = dict(columns)
        result[self.output] = self._apply(columns)
        return result

    @abstractmethod
    def _apply(self, columns: Columns) -> np.ndarray:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.spec!r})"


class FittedCopyColumn(FittedTransform):
    def _apply(self, columns: Columns) -> np.ndarray:
        return columns[self.spec.input].copy()


class FittedOneHotEncode(FittedTransform):
    def __init__(self, spec: OneHotEncode, encoder: OneHotEncoder):
        super().__init__(spec)
        self.encoder = encoder

    @property
    def vocabulary(self) -> List[str]:
        """Categories in slot order."""
        return [str(c) for c in self.encoder.categories_[0]]

    def _apply(self, columns: Columns) -> np.ndarray:
        return self.encoder.transform(_categories(columns[self.spec.input]))


class FittedNormalize(FittedTransform):
    def __init__(self, spec: Normalize, scaler):
        super().__init__(spec)
        self.scaler = scaler

    def _apply(self, columns: Columns) -> np.ndarray:
        values = columns[self.spec.input].astype(np.float64)
        scaled = self.scaler.transform(_as_2d(values))
        return scaled.ravel() if values.ndim == 1 else scaled


class FittedConcatenate(FittedTransform):
    def __init__(self, spec: Concatenate, widths: Tuple[int, ...]):
        super().__init__(spec)
        self.widths = widths

    def _apply(self, columns: Columns) -> np.ndarray:
        blocks = [_as_2d(columns[name]).astype(np.float64) for name in self.spec.input_columns]
        for name, block, width in zip(self.spec.input_columns, blocks, self.widths):
            if block.shape[1] != width:
                raise SchemaMismatch(
                    f"Column '{name}' has width {block.shape[1]}, model expects {width}"
                )
        return np.hstack(blocks)


__all__ = [
    "Columns",
    "NORMALIZER_MODES",
    "frame_to_columns",
    "TransformSpec",
    "CopyColumn",
    "OneHotEncode",
    "Normalize",
    "Concatenate",
    "FittedTransform",
    "FittedCopyColumn",
    "FittedOneHotEncode",
    "FittedNormalize",
    "FittedConcatenate",
]
