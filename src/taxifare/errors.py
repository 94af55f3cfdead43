"""Error taxonomy for the taxi fare lifecycle.

Every failure a run can hit maps to one of these classes. None of them are
retried: they abort the current stage and propagate to the CLI, which prints
the error name and exits non-zero.

The builtin bases (FileNotFoundError / ValueError) are kept so callers that
catch the standard exceptions keep working.
"""

from __future__ import annotations


class TaxiFareError(Exception):
    """Base class for all lifecycle errors."""


class SourceNotFound(TaxiFareError, FileNotFoundError):
    """Input path does not resolve to a readable file."""


class SchemaMismatch(TaxiFareError, ValueError):
    """A row's column count or a field's type does not match the schema."""


class UnknownInputColumn(TaxiFareError, ValueError):
    """A transform references a column nobody produced."""


class EmptyDataset(TaxiFareError, ValueError):
    """A stage that needs rows was handed a table with none."""


class CorruptModel(TaxiFareError, ValueError):
    """Serialized model bytes do not have the expected structure."""


class IncompleteRecord(TaxiFareError, ValueError):
    """A record submitted for scoring is missing a required input field."""


__all__ = [
    "TaxiFareError",
    "SourceNotFound",
    "SchemaMismatch",
    "UnknownInputColumn",
    "EmptyDataset",
    "CorruptModel",
    "IncompleteRecord",
]
