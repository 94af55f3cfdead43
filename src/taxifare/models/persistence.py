"""Model artifact serialization.

Byte layout:
    b"TAXIFARE" magic (8 bytes)
    format version (1 byte)
    joblib payload: dict with the fitted stages (spec + learned statistics),
    the fitted regressor, and the label/feature/score column names

The header is checked before anything is unpickled, so a foreign or
truncated file is reported as CorruptModel instead of a decoder crash.
Artifacts are only ever loaded from paths the caller trusts: the payload is
a joblib pickle.

Key Functions:
    dumps() / loads() - TrainedModel <-> bytes
    save_model() / load_model() - TrainedModel <-> file (atomic write)

Usage:
    from taxifare.models import save_model, load_model

    save_model(model, "storage/models/taxi_fare_model.joblib")
    model = load_model("storage/models/taxi_fare_model.joblib")
"""

from __future__ import annotations

import io
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

import joblib

from taxifare.errors import CorruptModel, SourceNotFound
from taxifare.models.trained_model import TrainedModel

logger = logging.getLogger(__name__)

MAGIC = b"TAXIFARE"
FORMAT_VERSION = 1
FORMAT_NAME = "taxifare.trained_model"

PAYLOAD_KEYS = (
    "format",
    "version",
    "stages",
    "regressor",
    "algorithm",
    "label_column",
    "feature_column",
    "score_column",
    "feature_names",
)


def dumps(model: TrainedModel) -> bytes:
    """Serialize a trained model to bytes."""
    payload = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "stages": list(model.stages),
        "regressor": model.regressor,
        "algorithm": model.algorithm,
        "label_column": model.label_column,
        "feature_column": model.feature_column,
        "score_column": model.score_column,
        "feature_names": model.feature_names,
    }
    buffer = io.BytesIO()
    buffer.write(MAGIC)
    buffer.write(bytes([FORMAT_VERSION]))
    joblib.dump(payload, buffer)
    return buffer.getvalue()


def loads(data: bytes) -> TrainedModel:
    """Rebuild a trained model from `dumps()` output.

    Raises:
        CorruptModel: Wrong magic, unsupported version, undecodable payload,
            payload missing required entries, or a feature layout that does
            not match the stages.
    """
    header_len = len(MAGIC) + 1
    if len(data) < header_len or not data.startswith(MAGIC):
        raise CorruptModel("Not a taxifare model artifact (bad header)")

    version = data[len(MAGIC)]
    if version != FORMAT_VERSION:
        raise CorruptModel(f"Unsupported model format version: {version}")

    try:
        payload = joblib.load(io.BytesIO(data[header_len:]))
    except Exception as e:
        raise CorruptModel(f"Model payload could not be decoded: {e}") from e

    if not isinstance(payload, dict):
        raise CorruptModel("Model payload is not a mapping")
    missing = [k for k in PAYLOAD_KEYS if k not in payload]
    if missing:
        raise CorruptModel(f"Model payload missing entries: {missing}")
    if payload["format"] != FORMAT_NAME or payload["version"] != version:
        raise CorruptModel(
            f"Payload format mismatch: {payload['format']} v{payload['version']}"
        )

    model = TrainedModel(
        stages=tuple(payload["stages"]),
        regressor=payload["regressor"],
        algorithm=payload["algorithm"],
        label_column=payload["label_column"],
        feature_column=payload["feature_column"],
        score_column=payload["score_column"],
    )
    try:
        feature_names = model.feature_names
    except (AttributeError, TypeError, IndexError) as e:
        raise CorruptModel(f"Model stages are malformed: {e}") from e
    if feature_names != list(payload["feature_names"]):
        raise CorruptModel("Stored feature layout does not match the fitted stages")
    return model


def save_model(model: TrainedModel, path: Union[str, Path]) -> Path:
    """Write the model artifact atomically.

    The bytes go to a temp file in the target directory which then replaces
    `path`, so readers never observe a partially written artifact.

    Returns:
        Path to the saved artifact
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = dumps(model)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info(f"Model saved to {path} ({len(data):,} bytes)")
    return path


def load_model(path: Union[str, Path]) -> TrainedModel:
    """Read an artifact in full and rebuild the model.

    Raises:
        SourceNotFound: If no artifact exists at `path`
        CorruptModel: If the artifact is not a valid model
    """
    path = Path(path)
    if not path.is_file():
        raise SourceNotFound(f"Model artifact not found: {path}")
    data = path.read_bytes()
    model = loads(data)
    logger.info(f"Model loaded from {path}")
    return model


__all__ = ["MAGIC", "FORMAT_VERSION", "dumps", "loads", "save_model", "load_model"]
