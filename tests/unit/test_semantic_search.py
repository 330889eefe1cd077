"""
Tests for semantic candidate search in src.core.search.semantic_search.
"""

import math

import pytest
from bson import ObjectId

from src.core.exceptions import EmbeddingProviderError, SearchValidationError
from src.core.search.semantic_search import (
    CandidateSearchResult,
    SearchFilters,
    SemanticSearchService,
    keyword_gate,
    query_terms,
)
from src.data.models import Candidate
from src.utils.config import SearchSettings
from src.utils.constants import KeywordMatchMode

QUERY_VECTOR = [1.0, 0.0]


def _vector_at(similarity: float) -> list[float]:
    """A unit vector whose cosine with QUERY_VECTOR is ``similarity``."""
    return [similarity, math.sqrt(1 - similarity**2)]


@pytest.fixture
def build_service(make_store, make_embedding_client):
    def _build(candidates, settings=None, client=None) -> SemanticSearchService:
        return SemanticSearchService(
            store=make_store(candidates),
            embedding_client=client or make_embedding_client(default=QUERY_VECTOR),
            settings=settings or SearchSettings(),
        )

    return _build


# ═══════════════════════════════════════════════════════════════════════════
#  Keyword gate
# ═══════════════════════════════════════════════════════════════════════════


class TestKeywordGate:
    def test_query_terms(self):
        assert query_terms("  Java   Developer\n") == ["java", "developer"]

    def test_no_terms_pass(self):
        assert keyword_gate([], "")

    def test_empty_corpus_fails(self):
        assert not keyword_gate(["java"], "")

    def test_any_mode(self):
        assert keyword_gate(["java", "rust"], "senior java engineer")
        assert not keyword_gate(["go", "rust"], "senior java engineer")

    def test_all_mode(self):
        corpus = "senior java developer"
        assert keyword_gate(["java", "developer"], corpus, KeywordMatchMode.ALL)
        assert not keyword_gate(["java", "rust"], corpus, KeywordMatchMode.ALL)

    def test_substring_match(self):
        assert keyword_gate(["script"], "javascript")


# ═══════════════════════════════════════════════════════════════════════════
#  SearchFilters
# ═══════════════════════════════════════════════════════════════════════════


class TestSearchFilters:
    def test_empty_accepts_everything(self, make_candidate):
        assert SearchFilters().accepts(make_candidate())

    def test_status(self, make_candidate):
        filters = SearchFilters(status="shortlisted")
        assert filters.accepts(make_candidate(status="shortlisted"))
        assert not filters.accepts(make_candidate(status="new"))

    def test_city_is_case_insensitive_substring(self, make_candidate):
        filters = SearchFilters(city="BERLIN")
        assert filters.accepts(make_candidate(address="Torstraße 1, Berlin"))
        assert not filters.accepts(make_candidate(address="Munich"))
        assert not filters.accepts(make_candidate(address=None))

    def test_salary_ceiling(self, make_candidate):
        filters = SearchFilters(salary_max=80_000)
        assert filters.accepts(make_candidate(salary_max=75_000))
        assert filters.accepts(make_candidate(salary_max=80_000))
        assert not filters.accepts(make_candidate(salary_max=90_000))

    def test_candidate_without_salary_is_kept(self, make_candidate):
        assert SearchFilters(salary_max=50_000).accepts(make_candidate(salary_max=None))

    def test_camel_case_input(self):
        assert SearchFilters.model_validate({"salaryMax": 1000}).salary_max == 1000


# ═══════════════════════════════════════════════════════════════════════════
#  SemanticSearchService
# ═══════════════════════════════════════════════════════════════════════════


class TestSemanticSearch:
    def test_java_developer_scenario(self, make_candidate, build_service):
        a = make_candidate(first_name="A", title="Java Developer", embedding=_vector_at(0.82))
        b = make_candidate(
            first_name="B",
            title="Backend Engineer",
            technical=[{"name": "Java"}],
            embedding=_vector_at(0.42),
        )
        c = make_candidate(
            first_name="C",
            title="Python Developer",
            technical=[{"name": "Python"}],
            embedding=_vector_at(0.95),
        )
        d = make_candidate(first_name="D", title="Java Architect", embedding=_vector_at(0.25))

        results = build_service([a, b, c, d]).search("java developer")

        # C passes the any-term gate on "developer"; D falls under the floor
        assert [r.candidate.first_name for r in results] == ["C", "A", "B"]
        assert [r.similarity for r in results] == pytest.approx([0.95, 0.82, 0.42])

    def test_high_similarity_without_term_hits_is_dropped(self, make_candidate, build_service):
        a = make_candidate(first_name="A", title="Java Developer", embedding=_vector_at(0.82))
        e = make_candidate(
            first_name="E",
            title="Product Designer",
            professional_summary="Figma prototypes",
            technical=[{"name": "Sketch"}],
            soft=[],
            embedding=_vector_at(0.95),
        )

        results = build_service([a, e]).search("java developer")

        assert [r.candidate.first_name for r in results] == ["A"]

    def test_records_with_null_collections_are_searchable(self, make_candidate, build_service):
        sparse = Candidate.model_validate(
            {
                "_id": ObjectId(),
                "firstName": "Sparse",
                "title": "Java Developer",
                "tags": None,
                "skills": None,
                "workExperience": None,
                "languages": None,
                "embedding": QUERY_VECTOR,
            }
        )
        full = make_candidate(first_name="Full", title="Java Engineer", embedding=_vector_at(0.9))

        results = build_service([sparse, full]).search("java")

        assert [r.candidate.first_name for r in results] == ["Sparse", "Full"]

    def test_all_mode_requires_every_term(self, make_candidate, build_service):
        a = make_candidate(first_name="A", title="Java Developer", embedding=_vector_at(0.82))
        c = make_candidate(first_name="C", title="Python Developer", technical=[], embedding=_vector_at(0.95))

        settings = SearchSettings(keyword_match_mode=KeywordMatchMode.ALL)
        results = build_service([a, c], settings=settings).search("java developer")

        assert [r.candidate.first_name for r in results] == ["A"]

    def test_search_text_feeds_keyword_gate(self, make_candidate, build_service):
        candidate = make_candidate(title="Engineer", technical=[], search_text="Certified Kubernetes admin",
                                   embedding=_vector_at(0.9))

        results = build_service([candidate]).search("kubernetes")

        assert len(results) == 1

    def test_blank_query_rejected_before_provider(self, make_candidate, build_service, make_embedding_client):
        client = make_embedding_client(default=QUERY_VECTOR)
        service = build_service([make_candidate(embedding=QUERY_VECTOR)], client=client)

        for query in ["", "   ", None]:
            with pytest.raises(SearchValidationError) as exc_info:
                service.search(query)
            assert exc_info.value.status_code == 400

        assert client.calls == []

    def test_limit_never_exceeds_twenty(self, make_candidate, build_service):
        candidates = [make_candidate(title="Java Developer", embedding=QUERY_VECTOR) for _ in range(30)]
        service = build_service(candidates)

        assert len(service.search("java", limit=50)) == 20
        assert len(service.search("java", limit=None)) == 20
        assert len(service.search("java", limit=0)) == 20
        assert len(service.search("java", limit=5)) == 5

    @pytest.mark.parametrize("limit,expected", [(None, 20), (0, 20), (-3, 1), (1, 1), (20, 20), (21, 20)])
    def test_clamp_limit(self, build_service, limit, expected):
        assert build_service([]).clamp_limit(limit) == expected

    def test_candidates_without_embedding_excluded(self, make_candidate, build_service):
        with_vector = make_candidate(first_name="Has", title="Java Developer", embedding=QUERY_VECTOR)
        without = make_candidate(first_name="None", title="Java Developer", embedding=None)
        empty = make_candidate(first_name="Empty", title="Java Developer", embedding=[])

        results = build_service([with_vector, without, empty]).search("java")

        assert [r.candidate.first_name for r in results] == ["Has"]

    def test_dimension_mismatch_excluded(self, make_candidate, build_service):
        candidate = make_candidate(title="Java Developer", embedding=[1.0, 0.0, 0.0])
        assert build_service([candidate]).search("java") == []

    def test_string_embeddings_are_normalized(self, make_candidate, build_service):
        candidate = make_candidate(title="Java Developer", embedding="(1.0, 0.0)")
        results = build_service([candidate]).search("java")
        assert results[0].similarity == pytest.approx(1.0)

    def test_hard_filters_applied(self, make_candidate, build_service):
        berlin = make_candidate(first_name="Berlin", title="Java Developer", address="Berlin", embedding=QUERY_VECTOR)
        paris = make_candidate(first_name="Paris", title="Java Developer", address="Paris", embedding=QUERY_VECTOR)

        results = build_service([berlin, paris]).search("java", {"city": "paris"})

        assert [r.candidate.first_name for r in results] == ["Paris"]

    def test_equal_scores_keep_store_order(self, make_candidate, build_service):
        candidates = [
            make_candidate(first_name=name, title="Java Developer", embedding=QUERY_VECTOR)
            for name in ["first", "second", "third"]
        ]
        results = build_service(candidates).search("java")
        assert [r.candidate.first_name for r in results] == ["first", "second", "third"]

    def test_empty_query_vector_returns_nothing(self, make_candidate, build_service, make_embedding_client):
        client = make_embedding_client(default=[])
        service = build_service([make_candidate(title="Java", embedding=QUERY_VECTOR)], client=client)
        assert service.search("java") == []

    def test_provider_errors_propagate(self, make_candidate, build_service, make_embedding_client):
        client = make_embedding_client(failures={"java": 503})
        with pytest.raises(EmbeddingProviderError) as exc_info:
            build_service([], client=client).search("java")
        assert exc_info.value.status_code == 503

    def test_result_dict_has_similarity_and_no_embedding(self, make_candidate, build_service):
        candidate = make_candidate(title="Java Developer", embedding=QUERY_VECTOR)

        result = build_service([candidate]).search("java")[0]
        data = result.to_dict()

        assert isinstance(result, CandidateSearchResult)
        assert data["similarity"] == pytest.approx(1.0)
        assert data["id"] == str(candidate.id)
        assert data["title"] == "Java Developer"
        assert "embedding" not in data
