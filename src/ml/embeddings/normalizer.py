"""
Normalization of embeddings read back from storage.

Depending on the driver that wrote it, a stored embedding can come back as
a list of floats, a numpy array, a delimited string such as
``"(0.1, 0.2)"`` or ``"[0.1,0.2]"``, or a wrapper object exposing its
numbers under ``data``. Each shape is classified into one payload variant
and normalized by its own function. Unrecognized shapes normalize to ``[]``,
which the scorer's dimension check then excludes.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from src.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class VectorPayload:
    values: Any


@dataclass(frozen=True)
class DelimitedStringPayload:
    text: str


@dataclass(frozen=True)
class RawBufferPayload:
    data: Any


@dataclass(frozen=True)
class UnknownPayload:
    raw: Any


EmbeddingPayload = Union[VectorPayload, DelimitedStringPayload, RawBufferPayload, UnknownPayload]


def classify_embedding(raw: Any) -> EmbeddingPayload:
    """Decide which stored shape ``raw`` is."""
    if raw is None:
        return UnknownPayload(raw)
    if isinstance(raw, str):
        return DelimitedStringPayload(raw)
    if isinstance(raw, np.ndarray):
        return VectorPayload(raw.ravel().tolist())
    if isinstance(raw, (list, tuple)):
        return VectorPayload(raw)
    if isinstance(raw, Mapping):
        if "data" in raw:
            return RawBufferPayload(raw["data"])
        return UnknownPayload(raw)
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return UnknownPayload(raw)

    data = getattr(raw, "data", None)
    if data is not None:
        return RawBufferPayload(data)
    return UnknownPayload(raw)


def _finite_floats(values: Iterable[Any]) -> list[float]:
    result = []
    for value in values:
        try:
            number = float(value)
        except (TypeError, ValueError):
            continue
        if math.isfinite(number):
            result.append(number)
    return result


def normalize_vector(payload: VectorPayload) -> list[float]:
    """Numeric sequences pass through as floats; a non-numeric component voids the vector."""
    try:
        return [float(v) for v in payload.values]
    except (TypeError, ValueError):
        logger.debug("Stored embedding has non-numeric components")
        return []


def normalize_delimited_string(payload: DelimitedStringPayload) -> list[float]:
    """Parse ``"a, b, c"`` optionally wrapped in parentheses or brackets."""
    text = payload.text.strip()
    if text[:1] in ("(", "["):
        text = text[1:-1]
    parts = [part.strip() for part in text.split(",")]
    return _finite_floats(part for part in parts if part)


def normalize_raw_buffer(payload: RawBufferPayload) -> list[float]:
    """Coerce each element of a buffer-like ``data`` attribute."""
    data = payload.data
    if isinstance(data, np.ndarray):
        data = data.ravel().tolist()
    if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
        return []
    return _finite_floats(data)


def normalize_embedding(raw: Any) -> list[float]:
    """
    Canonical float list for a stored embedding. Never raises.

    Args:
        raw: Embedding value as returned by the candidate store

    Returns:
        The vector, or ``[]`` when the value is missing or unrecognized
    """
    payload = classify_embedding(raw)

    if isinstance(payload, VectorPayload):
        return normalize_vector(payload)
    if isinstance(payload, DelimitedStringPayload):
        return normalize_delimited_string(payload)
    if isinstance(payload, RawBufferPayload):
        return normalize_raw_buffer(payload)
    return []
