"""
API request/response models for the candidate search API.

Request bodies use the CRM's camelCase field names; candidate payloads are
returned as produced by ``Candidate.to_public_dict``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.core.search.semantic_search import SearchFilters


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Request Models
# =============================================================================


class SemanticSearchRequest(_CamelModel):
    """Body of ``POST /api/candidates/search/semantic``."""

    query: str = Field("", description="Free-text search query")
    filters: Optional[SearchFilters] = None
    limit: Optional[int] = Field(None, description="Maximum results (capped at 20)")


class RebuildEmbeddingRequest(_CamelModel):
    """Body of ``POST /api/candidates/{id}/rebuild-embedding``."""

    extra_text: str = Field("", description="Résumé text appended to the search document")


class AttachResumeRequest(_CamelModel):
    """Body of ``POST /api/candidates/{id}/resume``."""

    resume_url: str = Field(..., min_length=1, description="Public or share URL of the résumé")


# =============================================================================
# Response Models
# =============================================================================


class EmbeddingResponse(BaseModel):
    embedding: list[float]


class RebuildSummaryResponse(BaseModel):
    success: int
    fail: int
    total: int


class HealthResponse(BaseModel):
    status: str
    database: bool
    embedding_configured: bool
    version: str


class ErrorResponse(BaseModel):
    detail: str
