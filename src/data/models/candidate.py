"""
Candidate data models for RecruitCRM.

Defines the schema for candidate profiles as stored by the CRM, including the
``embedding`` and ``search_text`` fields owned by the semantic-search pipeline.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.utils.constants import CandidateStatus

from .base import BaseDocument, EmbeddedModel


def _drop_nulls(value: Any) -> Any:
    """Stored arrays may be null or hold null entries; both read as absent."""
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if item is not None]
    return value


class TechnicalSkill(EmbeddedModel):
    """A technical skill, optionally with a self-assessed level."""

    name: Optional[str] = None
    level: Optional[str] = None


class CandidateSkills(EmbeddedModel):
    """Technical and soft skills. Technical entries may be plain strings."""

    technical: list[Union[TechnicalSkill, str]] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)

    @field_validator("technical", "soft", mode="before")
    @classmethod
    def validate_entries(cls, v: Any) -> Any:
        return _drop_nulls(v)

    @property
    def technical_names(self) -> list[str]:
        names = (s.name if isinstance(s, TechnicalSkill) else s for s in self.technical)
        return [name for name in names if name]


class WorkExperience(EmbeddedModel):
    """Represents a single work experience entry."""

    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None

    @property
    def label(self) -> str:
        """``"{title} at {company}"``, or whichever half is present."""
        return " at ".join(part for part in (self.title, self.company) if part)


class LanguageSkill(EmbeddedModel):
    """Represents a language proficiency."""

    name: Optional[str] = None
    level: Optional[str] = None


class MatchAnalysis(EmbeddedModel):
    """AI match analysis attached to a profile; only seniority is used for search."""

    seniority: Optional[str] = None
    summary: Optional[str] = None


class Candidate(BaseDocument):
    """
    Main candidate model representing a CRM candidate record.

    This is the primary document stored in the candidates collection.
    """

    # Personal Information
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    # Professional profile
    title: Optional[str] = None
    professional_summary: Optional[str] = None
    skills: CandidateSkills = Field(default_factory=CandidateSkills)
    work_experience: list[WorkExperience] = Field(default_factory=list)
    languages: list[Union[LanguageSkill, str]] = Field(default_factory=list)

    # Taxonomy
    industry: Optional[str] = None
    field: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    internal_tags: list[str] = Field(default_factory=list)

    # Compensation
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None

    # Status. Legacy records may carry values outside CandidateStatus.
    status: Union[CandidateStatus, str] = CandidateStatus.NEW

    # Media
    resume_url: Optional[str] = None
    profile_picture: Optional[str] = None

    match_analysis: Optional[MatchAnalysis] = None

    # Semantic search. The stored embedding shape depends on the driver that
    # wrote it, so it is kept raw here and normalized at read time.
    embedding: Optional[Any] = None
    search_text: Optional[str] = None

    @field_validator("work_experience", "languages", "tags", "internal_tags", mode="before")
    @classmethod
    def validate_collections(cls, v: Any) -> Any:
        return _drop_nulls(v)

    @field_validator("skills", mode="before")
    @classmethod
    def validate_skills(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def full_name(self) -> str:
        """Get candidate's full name."""
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def language_names(self) -> list[str]:
        names = (l.name if isinstance(l, LanguageSkill) else l for l in self.languages)
        return [name for name in names if name]

    def to_public_dict(self, include_embedding: bool = False) -> dict[str, Any]:
        """JSON-ready camelCase representation used by the API and search results."""
        exclude = None if include_embedding else {"embedding"}
        data = self.model_dump(mode="json", by_alias=True, exclude=exclude)
        data["id"] = data.pop("_id", None)
        return data

    class Settings:
        """MongoDB collection settings."""

        name = "candidates"
        indexes = [
            "email",
            "status",
            "tags",
            "createdAt",
        ]


class _CandidateSchema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="allow",
    )


class CandidateCreate(_CandidateSchema):
    """Schema for creating a new candidate."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    title: Optional[str] = None
    professional_summary: Optional[str] = None
    skills: CandidateSkills = Field(default_factory=CandidateSkills)
    work_experience: list[WorkExperience] = Field(default_factory=list)
    languages: list[Union[LanguageSkill, str]] = Field(default_factory=list)
    industry: Optional[str] = None
    field: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    internal_tags: list[str] = Field(default_factory=list)
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    status: CandidateStatus = CandidateStatus.NEW
    resume_url: Optional[str] = None
    match_analysis: Optional[MatchAnalysis] = None


class CandidateUpdate(_CandidateSchema):
    """Schema for updating an existing candidate. Only set fields are applied."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    title: Optional[str] = None
    professional_summary: Optional[str] = None
    skills: Optional[CandidateSkills] = None
    work_experience: Optional[list[WorkExperience]] = None
    languages: Optional[list[Union[LanguageSkill, str]]] = None
    industry: Optional[str] = None
    field: Optional[str] = None
    tags: Optional[list[str]] = None
    internal_tags: Optional[list[str]] = None
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    status: Optional[CandidateStatus] = None
    resume_url: Optional[str] = None
    match_analysis: Optional[MatchAnalysis] = None

    def to_update_data(self) -> dict[str, Any]:
        """Storage-shaped (camelCase) dict of the fields the caller actually sent."""
        return self.model_dump(by_alias=True, exclude_unset=True)
