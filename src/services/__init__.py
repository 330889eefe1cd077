"""
Business services for RecruitCRM search.

This module contains services that reach outside the process on behalf of
the search pipeline.
"""

from src.services.resume_fetcher import (
    FetchResult,
    ResumeFetcher,
    fetch_resume_text,
    get_resume_fetcher,
    rewrite_for_download,
)

__all__ = [
    "FetchResult",
    "ResumeFetcher",
    "fetch_resume_text",
    "get_resume_fetcher",
    "rewrite_for_download",
]
