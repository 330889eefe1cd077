"""
Candidate repository for RecruitCRM.

Provides the candidate store used by the CRUD API and the semantic-search
pipeline: ``list_all``, ``get``, ``create``, ``update`` and ``delete``.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from bson import ObjectId

from src.core.exceptions import CandidateNotFoundError
from src.data.models.candidate import Candidate, CandidateCreate

from .base import BaseRepository


@runtime_checkable
class CandidateStore(Protocol):
    """Operations the search pipeline needs from a candidate store."""

    def list_all(self) -> list[Candidate]: ...

    def get(self, candidate_id: str) -> Candidate: ...

    def create(self, data: CandidateCreate) -> Candidate: ...

    def update(self, candidate_id: str, data: dict[str, Any]) -> Candidate: ...

    def delete(self, candidate_id: str) -> None: ...


class CandidateRepository(BaseRepository[Candidate]):
    """MongoDB-backed candidate store."""

    @property
    def collection_name(self) -> str:
        return "candidates"

    @property
    def model_class(self) -> type[Candidate]:
        return Candidate

    def list_all(self) -> list[Candidate]:
        """Whole pool in insertion order."""
        return self.find({})

    def get(self, candidate_id: str | ObjectId) -> Candidate:
        """Get a candidate or raise CandidateNotFoundError."""
        candidate = self.get_by_id(candidate_id)
        if candidate is None:
            raise CandidateNotFoundError(candidate_id)
        return candidate

    def create(self, data: CandidateCreate) -> Candidate:
        """Create a candidate from a create schema."""
        candidate = Candidate.model_validate(data.model_dump(by_alias=True))
        return self.insert(candidate)

    def update(self, candidate_id: str | ObjectId, data: dict[str, Any]) -> Candidate:
        """
        Apply a partial update.

        Args:
            candidate_id: Candidate id
            data: Storage-shaped (camelCase) field values to set

        Raises:
            CandidateNotFoundError: If the id does not exist
        """
        if not data:
            return self.get(candidate_id)
        candidate = self.set_fields(candidate_id, data)
        if candidate is None:
            raise CandidateNotFoundError(candidate_id)
        return candidate

    def delete(self, candidate_id: str | ObjectId) -> None:
        """Delete a candidate or raise CandidateNotFoundError."""
        if not self.remove(candidate_id):
            raise CandidateNotFoundError(candidate_id)

    def ping(self) -> bool:
        """Whether the backing database answers."""
        return self._db_manager.check_connection()


# Singleton instance
_candidate_repository: Optional[CandidateRepository] = None


def get_candidate_repository() -> CandidateRepository:
    """Get the candidate repository singleton instance."""
    global _candidate_repository
    if _candidate_repository is None:
        _candidate_repository = CandidateRepository()
    return _candidate_repository
