"""
Exception hierarchy for the candidate search pipeline.

Every error carries the HTTP status the API layer should answer with.
"""

from typing import Optional


class RecruitCRMError(Exception):
    """Base exception for RecruitCRM errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(RecruitCRMError):
    """Raised when a required setting is missing or invalid."""

    status_code = 500


class EmbeddingConfigurationError(ConfigurationError):
    """Raised when the embedding provider has no API credential."""


class EmbeddingProviderError(RecruitCRMError):
    """Raised when the embedding provider answers with a non-success status."""

    status_code = 502


class SearchValidationError(RecruitCRMError):
    """Raised for malformed search requests (e.g. a blank query)."""

    status_code = 400


class CandidateNotFoundError(RecruitCRMError):
    """Raised when a candidate id does not exist in the store."""

    status_code = 404

    def __init__(self, candidate_id: object):
        super().__init__(f"Candidate not found: {candidate_id}")
        self.candidate_id = candidate_id
