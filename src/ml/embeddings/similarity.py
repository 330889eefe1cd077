"""
Cosine similarity between embedding vectors.
"""

from typing import Optional, Sequence

import numpy as np

from src.utils.constants import INVALID_SIMILARITY


def _as_vector(values: Optional[Sequence[float]]) -> Optional[np.ndarray]:
    if values is None:
        return None
    try:
        vector = np.asarray(values, dtype=float).ravel()
    except (TypeError, ValueError):
        return None
    # Missing or NaN components count as zero
    return np.nan_to_num(vector, nan=0.0)


def cosine_similarity(a: Optional[Sequence[float]], b: Optional[Sequence[float]]) -> float:
    """
    Calculate cosine similarity between two embeddings.

    Args:
        a: First embedding vector.
        b: Second embedding vector.

    Returns:
        Similarity in [-1, 1], or ``INVALID_SIMILARITY`` (-1.0) when either
        vector is empty, the lengths differ, or either norm is zero.
    """
    va = _as_vector(a)
    vb = _as_vector(b)
    if va is None or vb is None:
        return INVALID_SIMILARITY
    if va.size == 0 or vb.size == 0 or va.size != vb.size:
        return INVALID_SIMILARITY

    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    if norm_a == 0.0 or norm_b == 0.0:
        return INVALID_SIMILARITY

    sim = float(np.dot(va, vb)) / (norm_a * norm_b)
    # Clip to valid range (numerical precision issues)
    return float(np.clip(sim, -1.0, 1.0))
