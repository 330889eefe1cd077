"""
Application-wide constants for RecruitCRM search.

This module contains constant values used throughout the search pipeline.
Tunable thresholds live in ``SearchSettings``; the values here are fixed
properties of formats and protocols.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "recruit-crm"
APP_DISPLAY_NAME: Final[str] = "RecruitCRM Candidate Search"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Document Sniffing
# =============================================================================

PDF_MAGIC: Final[bytes] = b"%PDF"
ZIP_MAGIC: Final[bytes] = b"PK"

PDF_CONTENT_HINTS: Final[tuple[str, ...]] = ("pdf",)

OFFICE_CONTENT_HINTS: Final[tuple[str, ...]] = (
    "officedocument",
    "wordprocessingml",
    "msword",
    "application/octet-stream",
)

TEXT_CONTENT_HINTS: Final[tuple[str, ...]] = ("json", "html", "csv")

BINARY_CONTENT_HINTS: Final[tuple[str, ...]] = PDF_CONTENT_HINTS + OFFICE_CONTENT_HINTS


# =============================================================================
# Similarity
# =============================================================================

# Returned by cosine_similarity when the pair cannot be compared
INVALID_SIMILARITY: Final[float] = -1.0


# =============================================================================
# Status Enums
# =============================================================================


class CandidateStatus(str, Enum):
    """Status of a candidate in the recruitment pipeline."""

    NEW = "new"
    SCREENING = "screening"
    SHORTLISTED = "shortlisted"
    INTERVIEWING = "interview"
    OFFERED = "offer"
    HIRED = "hired"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class KeywordMatchMode(str, Enum):
    """How query terms must hit a candidate's corpus in semantic search."""

    ANY = "any"
    ALL = "all"
