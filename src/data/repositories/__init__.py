"""
Database repositories for RecruitCRM data access.

This module provides repository classes implementing the repository
pattern for clean data access.
"""

# Base repository
from .base import BaseRepository

# Entity repositories
from .candidate_repository import (
    CandidateRepository,
    CandidateStore,
    get_candidate_repository,
)

__all__ = [
    # Base
    "BaseRepository",
    # Candidate
    "CandidateRepository",
    "CandidateStore",
    "get_candidate_repository",
]
