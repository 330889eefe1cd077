"""
Tests for Pydantic data models in src.data.models.
"""

from datetime import datetime

import pytest
from bson import ObjectId

from src.data.models import (
    Candidate,
    CandidateCreate,
    CandidateSkills,
    CandidateUpdate,
    LanguageSkill,
    TechnicalSkill,
    WorkExperience,
)
from src.data.models.base import BaseDocument, PyObjectId, TimestampMixin
from src.utils.constants import CandidateStatus


# ═══════════════════════════════════════════════════════════════════════════
#  base.py
# ═══════════════════════════════════════════════════════════════════════════


class TestPyObjectId:
    def test_validate_valid_string(self):
        oid = ObjectId()
        result = PyObjectId.validate(str(oid))
        assert result == oid

    def test_validate_object_id_passthrough(self):
        oid = ObjectId()
        assert PyObjectId.validate(oid) is oid

    def test_validate_invalid_string(self):
        with pytest.raises(ValueError, match="Invalid ObjectId"):
            PyObjectId.validate("not-a-valid-id")


class TestTimestampMixin:
    def test_auto_timestamps(self):
        ts = TimestampMixin()
        assert isinstance(ts.created_at, datetime)
        assert isinstance(ts.updated_at, datetime)


class TestBaseDocument:
    def test_model_dump_mongo_excludes_none_id(self):
        data = BaseDocument().model_dump_mongo()
        assert "_id" not in data

    def test_model_dump_mongo_includes_set_id(self):
        oid = ObjectId()
        data = BaseDocument(id=oid).model_dump_mongo()
        assert data["_id"] == oid

    def test_mongo_keys_are_camel_case(self):
        data = BaseDocument().model_dump_mongo()
        assert {"createdAt", "updatedAt"} <= set(data)


# ═══════════════════════════════════════════════════════════════════════════
#  candidate.py
# ═══════════════════════════════════════════════════════════════════════════


class TestCandidateSkills:
    def test_mixed_technical_entries(self):
        skills = CandidateSkills(technical=[{"name": "Java", "level": "expert"}, "Kotlin"])
        assert skills.technical_names == ["Java", "Kotlin"]
        assert isinstance(skills.technical[0], TechnicalSkill)

    def test_defaults_empty(self):
        skills = CandidateSkills()
        assert skills.technical == []
        assert skills.soft == []


class TestWorkExperience:
    @pytest.mark.parametrize(
        "title,company,expected",
        [
            ("Engineer", "Acme", "Engineer at Acme"),
            ("Engineer", None, "Engineer"),
            (None, "Acme", "Acme"),
            (None, None, ""),
        ],
    )
    def test_label(self, title, company, expected):
        assert WorkExperience(title=title, company=company).label == expected


class TestCandidate:
    def test_parses_camel_case_document(self):
        oid = ObjectId()
        candidate = Candidate.model_validate(
            {
                "_id": oid,
                "firstName": "Ada",
                "lastName": "Lovelace",
                "professionalSummary": "Analyst",
                "salaryMax": 90000,
                "workExperience": [{"title": "Engineer", "company": "Babbage & Co"}],
                "languages": [{"name": "English", "level": "native"}, "French"],
                "matchAnalysis": {"seniority": "Senior"},
                "searchText": "résumé text",
            }
        )

        assert candidate.id == oid
        assert candidate.full_name == "Ada Lovelace"
        assert candidate.salary_max == 90000
        assert candidate.work_experience[0].label == "Engineer at Babbage & Co"
        assert candidate.language_names == ["English", "French"]
        assert isinstance(candidate.languages[0], LanguageSkill)
        assert candidate.match_analysis.seniority == "Senior"
        assert candidate.search_text == "résumé text"
        assert candidate.status == CandidateStatus.NEW.value

    def test_unknown_fields_are_kept(self):
        candidate = Candidate.model_validate({"firstName": "Ada", "linkedinUrl": "https://x"})
        assert candidate.model_dump(by_alias=True)["linkedinUrl"] == "https://x"

    def test_embedding_kept_raw(self):
        assert Candidate(embedding="(1, 2)").embedding == "(1, 2)"
        assert Candidate(embedding={"data": [1, 2]}).embedding == {"data": [1, 2]}

    def test_null_collections_become_empty(self):
        candidate = Candidate.model_validate(
            {
                "skills": None,
                "workExperience": None,
                "languages": None,
                "tags": None,
                "internalTags": None,
            }
        )

        assert candidate.skills.technical_names == []
        assert candidate.skills.soft == []
        assert candidate.work_experience == []
        assert candidate.language_names == []
        assert candidate.tags == []
        assert candidate.internal_tags == []

    def test_null_entries_are_dropped(self):
        candidate = Candidate.model_validate({"tags": [None, "remote"], "workExperience": [None, {"title": "Dev"}]})
        assert candidate.tags == ["remote"]
        assert [w.label for w in candidate.work_experience] == ["Dev"]

    def test_nameless_skills_and_languages_are_skipped(self):
        candidate = Candidate.model_validate(
            {
                "skills": {"technical": [{"level": "senior"}, {"name": ""}, "Go"], "soft": None},
                "languages": [{"level": "native"}, "Hebrew"],
            }
        )

        assert candidate.skills.technical_names == ["Go"]
        assert candidate.language_names == ["Hebrew"]

    def test_legacy_status_is_accepted(self):
        assert Candidate.model_validate({"status": "on-hold"}).status == "on-hold"

    def test_full_name_with_one_part(self):
        assert Candidate(first_name="Ada").full_name == "Ada"

    def test_to_public_dict(self, make_candidate):
        candidate = make_candidate(embedding=[0.1, 0.2], search_text="cv")

        data = candidate.to_public_dict()

        assert data["id"] == str(candidate.id)
        assert "_id" not in data
        assert "embedding" not in data
        assert data["firstName"] == "Jane"
        assert data["searchText"] == "cv"
        assert isinstance(data["createdAt"], str)

    def test_to_public_dict_with_embedding(self, make_candidate):
        data = make_candidate(embedding=[0.1, 0.2]).to_public_dict(include_embedding=True)
        assert data["embedding"] == [0.1, 0.2]


class TestCandidateSchemas:
    def test_create_defaults(self):
        payload = CandidateCreate(firstName="Grace")
        assert payload.first_name == "Grace"
        assert payload.status == CandidateStatus.NEW.value
        assert payload.tags == []

    def test_create_rejects_unknown_status(self):
        with pytest.raises(ValueError):
            CandidateCreate(status="archived")

    def test_update_data_contains_only_sent_fields(self):
        payload = CandidateUpdate.model_validate({"title": "Lead", "salaryMax": 100000})
        assert payload.to_update_data() == {"title": "Lead", "salaryMax": 100000}

    def test_update_explicit_none_is_sent(self):
        payload = CandidateUpdate.model_validate({"resumeUrl": None})
        assert payload.to_update_data() == {"resumeUrl": None}

    def test_update_nested_skills_use_storage_keys(self):
        payload = CandidateUpdate.model_validate({"skills": {"technical": ["Go"], "soft": []}})
        assert payload.to_update_data() == {"skills": {"technical": ["Go"], "soft": []}}
