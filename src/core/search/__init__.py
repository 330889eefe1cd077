"""
Candidate semantic search.

Components:
- build_search_document: Text representation of a candidate for embedding
- SemanticSearchService: Filter, gate and rank candidates against a query
- CandidateEmbedder: Embed and persist one candidate or rebuild the pool
- EmbeddingScheduler: Best-effort background embedding for CRUD flows
"""

from .document_builder import build_search_corpus, build_search_document

from .embedding_pipeline import (
    CandidateEmbedder,
    EmbeddingScheduler,
    RebuildSummary,
    get_candidate_embedder,
    get_embedding_scheduler,
)

from .semantic_search import (
    CandidateSearchResult,
    SearchFilters,
    SemanticSearchService,
    get_search_service,
    keyword_gate,
    query_terms,
)

__all__ = [
    # Documents
    "build_search_corpus",
    "build_search_document",
    # Embedding pipeline
    "CandidateEmbedder",
    "EmbeddingScheduler",
    "RebuildSummary",
    "get_candidate_embedder",
    "get_embedding_scheduler",
    # Search
    "CandidateSearchResult",
    "SearchFilters",
    "SemanticSearchService",
    "get_search_service",
    "keyword_gate",
    "query_terms",
]
