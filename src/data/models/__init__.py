"""
Pydantic data models and schemas for RecruitCRM.

This module provides the data models used by the search pipeline,
including database documents, embedded models, and API schemas.
"""

# Base models
from .base import BaseDocument, EmbeddedModel, PyObjectId, TimestampMixin

# Candidate models
from .candidate import (
    Candidate,
    CandidateCreate,
    CandidateSkills,
    CandidateUpdate,
    LanguageSkill,
    MatchAnalysis,
    TechnicalSkill,
    WorkExperience,
)

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "TimestampMixin",
    # Candidate
    "Candidate",
    "CandidateCreate",
    "CandidateSkills",
    "CandidateUpdate",
    "LanguageSkill",
    "MatchAnalysis",
    "TechnicalSkill",
    "WorkExperience",
]
