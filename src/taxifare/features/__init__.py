"""Features module - declarative column transforms.

Public API:
    TransformPipeline - Immutable ordered list of transform specs
    build_fare_pipeline - Canonical taxi fare feature chain
    CopyColumn, OneHotEncode, Normalize, Concatenate - Transform specs
"""

from taxifare.features.transforms import (
    Concatenate,
    CopyColumn,
    FittedTransform,
    Normalize,
    OneHotEncode,
    TransformSpec,
)
from taxifare.features.builder import TransformPipeline, build_fare_pipeline

__all__ = [
    "Concatenate",
    "CopyColumn",
    "FittedTransform",
    "Normalize",
    "OneHotEncode",
    "TransformSpec",
    "TransformPipeline",
    "build_fare_pipeline",
]
