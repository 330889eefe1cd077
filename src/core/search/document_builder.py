"""
Search document construction.

A candidate is embedded as a short labelled text. The same document,
lowercased and joined with the candidate's stored résumé text, is the
corpus the keyword gate searches.
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from src.data.models.candidate import Candidate

CandidateLike = Union[Candidate, Mapping[str, Any]]


def _as_candidate(candidate: CandidateLike) -> Candidate:
    if isinstance(candidate, Candidate):
        return candidate
    return Candidate.model_validate(dict(candidate))


def _join(values) -> str:
    return ", ".join(v for v in values if v)


def build_search_document(candidate: Optional[CandidateLike], extra_text: str = "") -> str:
    """
    Build the text that represents ``candidate`` for embedding.

    Args:
        candidate: Candidate model or raw record (camelCase or snake_case keys)
        extra_text: Résumé text appended as the last line

    Returns:
        Newline-joined document; ``""`` for a missing candidate
    """
    if candidate is None:
        return ""
    c = _as_candidate(candidate)

    skills = [*c.tags, *c.skills.technical_names, *c.skills.soft]
    experience = [entry.label for entry in c.work_experience]
    industries = [c.industry, c.field, *c.internal_tags]
    seniority = c.match_analysis.seniority if c.match_analysis else None

    lines = [
        f"Job Title: {c.title or ''}.",
        f"Summary: {c.professional_summary or ''}.",
        f"Skills: {_join(skills)}.",
        f"Experience: {_join(experience)}.",
        f"Industries: {_join(industries)}.",
        f"Seniority: {seniority or ''}.",
        f"Languages: {_join(c.language_names)}.",
        extra_text or "",
    ]
    return "\n".join(lines)


def build_search_corpus(candidate: CandidateLike) -> str:
    """Lowercased document plus stored ``search_text``, for keyword matching."""
    c = _as_candidate(candidate)
    return f"{build_search_document(c)}\n{c.search_text or ''}".lower()
