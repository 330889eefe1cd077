"""
Embedding generation and comparison.

This module provides the semantic embedding capabilities of the search
pipeline.

Components:
- EmbeddingClient: HTTP client for the external embedding provider
- normalize_embedding: Canonical vectors from stored embedding values
- cosine_similarity: Vector comparison with an explicit invalid sentinel
"""

from .embedding_client import (
    EmbeddingClient,
    get_embedding_client,
)

from .normalizer import (
    DelimitedStringPayload,
    EmbeddingPayload,
    RawBufferPayload,
    UnknownPayload,
    VectorPayload,
    classify_embedding,
    normalize_embedding,
)

from .similarity import cosine_similarity

__all__ = [
    # Provider client
    "EmbeddingClient",
    "get_embedding_client",
    # Normalization
    "DelimitedStringPayload",
    "EmbeddingPayload",
    "RawBufferPayload",
    "UnknownPayload",
    "VectorPayload",
    "classify_embedding",
    "normalize_embedding",
    # Similarity
    "cosine_similarity",
]
