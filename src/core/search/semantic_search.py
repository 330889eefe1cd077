"""
Semantic candidate search.

Ranks the candidate pool against a free-text query. Candidates first pass
hard filters (status, city, salary ceiling), then are kept only when their
stored embedding has the query's dimensionality, their text contains the
query terms, and their cosine similarity reaches the configured floor.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.core.exceptions import SearchValidationError
from src.data.models.candidate import Candidate
from src.data.repositories.candidate_repository import CandidateStore, get_candidate_repository
from src.ml.embeddings.embedding_client import EmbeddingClient, get_embedding_client
from src.ml.embeddings.normalizer import normalize_embedding
from src.ml.embeddings.similarity import cosine_similarity
from src.utils.config import SearchSettings, get_settings
from src.utils.constants import KeywordMatchMode
from src.utils.logger import get_logger

from .document_builder import build_search_corpus

logger = get_logger(__name__)


class SearchFilters(BaseModel):
    """Hard filters applied before scoring."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    status: Optional[str] = None
    city: Optional[str] = None
    salary_max: Optional[float] = None

    def accepts(self, candidate: Candidate) -> bool:
        """Whether ``candidate`` survives the filters."""
        if self.status and candidate.status != self.status:
            return False
        if self.city and self.city.lower() not in (candidate.address or "").lower():
            return False
        # Candidates without a salary expectation are never excluded
        if self.salary_max and candidate.salary_max and candidate.salary_max > self.salary_max:
            return False
        return True


@dataclass
class CandidateSearchResult:
    """A ranked candidate and its similarity to the query."""

    candidate: Candidate
    similarity: float

    def to_dict(self) -> dict[str, Any]:
        """Candidate's public data with ``similarity`` added."""
        data = self.candidate.to_public_dict()
        data["similarity"] = self.similarity
        return data


def query_terms(query: str) -> list[str]:
    """Lowercased whitespace-separated terms of ``query``."""
    return query.lower().split()


def keyword_gate(terms: list[str], corpus: str, mode: KeywordMatchMode = KeywordMatchMode.ANY) -> bool:
    """
    Check query terms against a lowercased corpus by substring.

    A query without terms always passes; an empty corpus never does.
    """
    if not terms:
        return True
    if not corpus:
        return False
    if mode == KeywordMatchMode.ALL:
        return all(term in corpus for term in terms)
    return any(term in corpus for term in terms)


class SemanticSearchService:
    """
    Embedding-based search over the candidate store.

    Usage:
        service = SemanticSearchService()
        results = service.search("java developer", {"city": "berlin"}, limit=10)
    """

    def __init__(
        self,
        store: Optional[CandidateStore] = None,
        embedding_client: Optional[EmbeddingClient] = None,
        settings: Optional[SearchSettings] = None,
    ):
        self.store = store if store is not None else get_candidate_repository()
        self.embedding_client = embedding_client or get_embedding_client()
        self.settings = settings or get_settings().search

    def clamp_limit(self, limit: Optional[int]) -> int:
        """Result count for a requested ``limit``; unset or zero means the maximum."""
        max_limit = self.settings.max_limit
        if not limit:
            return max_limit
        return max(1, min(int(limit), max_limit))

    def search(
        self,
        query: str,
        filters: Optional[Union[SearchFilters, Mapping[str, Any]]] = None,
        limit: Optional[int] = None,
    ) -> list[CandidateSearchResult]:
        """
        Rank candidates against ``query``.

        Args:
            query: Free-text query, must not be blank
            filters: Optional hard filters
            limit: Maximum results, clamped to ``[1, max_limit]``

        Returns:
            Results ordered by descending similarity

        Raises:
            SearchValidationError: If the query is blank
            EmbeddingConfigurationError, EmbeddingProviderError: From the provider
        """
        if not query or not query.strip():
            raise SearchValidationError("query is required")

        if filters is None:
            filters = SearchFilters()
        elif not isinstance(filters, SearchFilters):
            filters = SearchFilters.model_validate(dict(filters))
        max_results = self.clamp_limit(limit)

        logger.info(f"Semantic search: query={query!r} filters={filters.model_dump(exclude_none=True)} limit={max_results}")

        query_vector = self.embedding_client.embed_text(query)
        if not query_vector:
            logger.warning("Query embedding came back empty")
            return []

        candidates = [c for c in self.store.list_all() if filters.accepts(c)]
        logger.debug(f"{len(candidates)} candidates passed hard filters")

        terms = query_terms(query)
        mode = KeywordMatchMode(self.settings.keyword_match_mode)
        scored: list[CandidateSearchResult] = []

        for candidate in candidates:
            vector = normalize_embedding(candidate.embedding)
            if len(vector) != len(query_vector):
                continue
            if not keyword_gate(terms, build_search_corpus(candidate), mode):
                continue

            score = cosine_similarity(query_vector, vector)
            if score >= self.settings.min_similarity:
                scored.append(CandidateSearchResult(candidate=candidate, similarity=score))

        # list.sort is stable, so equal scores keep store order
        scored.sort(key=lambda r: r.similarity, reverse=True)

        top = f"{scored[0].similarity:.3f}" if scored else "n/a"
        logger.info(f"Semantic search scored {len(scored)} candidates, top score {top}")
        return scored[:max_results]


# Singleton instance
_search_service: Optional[SemanticSearchService] = None


def get_search_service() -> SemanticSearchService:
    """Get the semantic search service singleton instance."""
    global _search_service
    if _search_service is None:
        _search_service = SemanticSearchService()
    return _search_service
