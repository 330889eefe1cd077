"""
Shared test fixtures for the RecruitCRM search test suite.

Sets environment variables before any src imports to prevent config failures,
then provides factory fixtures for candidates, an in-memory candidate store
and a fake embedding client.
"""

import os

# === Set environment BEFORE any src imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "recruit_crm_test")
os.environ.setdefault("LOG_FILE_OUTPUT", "false")
os.environ.setdefault("EMBEDDING_API_KEY", "test-key")

from typing import Any, Callable, Optional

import pytest
from bson import ObjectId

from src.core.exceptions import CandidateNotFoundError, EmbeddingProviderError
from src.data.models import Candidate, CandidateCreate


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class InMemoryCandidateStore:
    """Dict-backed candidate store with the repository's semantics."""

    def __init__(self, candidates: Optional[list[Candidate]] = None):
        self._items: dict[str, Candidate] = {}
        self.updates: list[tuple[str, dict[str, Any]]] = []
        for candidate in candidates or []:
            self.add(candidate)

    def add(self, candidate: Candidate) -> Candidate:
        if candidate.id is None:
            candidate.id = ObjectId()
        self._items[str(candidate.id)] = candidate
        return candidate

    def list_all(self) -> list[Candidate]:
        return list(self._items.values())

    def get(self, candidate_id: str) -> Candidate:
        try:
            return self._items[str(candidate_id)]
        except KeyError:
            raise CandidateNotFoundError(candidate_id)

    def create(self, data: CandidateCreate) -> Candidate:
        return self.add(Candidate.model_validate(data.model_dump(by_alias=True)))

    def update(self, candidate_id: str, data: dict[str, Any]) -> Candidate:
        current = self.get(candidate_id)
        self.updates.append((str(candidate_id), data))
        updated = Candidate.model_validate({**current.model_dump(by_alias=True), **data})
        self._items[str(candidate_id)] = updated
        return updated

    def delete(self, candidate_id: str) -> None:
        self.get(candidate_id)
        del self._items[str(candidate_id)]


class FakeEmbeddingClient:
    """
    Embedding client returning canned vectors.

    ``vectors`` maps exact input text to a vector; anything else gets
    ``default``. Texts listed in ``failures`` raise an EmbeddingProviderError.
    """

    def __init__(
        self,
        vectors: Optional[dict[str, list[float]]] = None,
        default: Optional[list[float]] = None,
        failures: Optional[dict[str, int]] = None,
    ):
        self.vectors = vectors or {}
        self.default = default if default is not None else [1.0, 0.0, 0.0]
        self.failures = failures or {}
        self.calls: list[str] = []

    def embed_text(self, text: str) -> list[float]:
        self.calls.append(text)
        for marker, status in self.failures.items():
            if marker in text:
                raise EmbeddingProviderError(f"Embedding provider failed: {status}", status_code=status)
        return list(self.vectors.get(text, self.default))


class FakeFetcher:
    """Résumé fetcher stand-in that returns canned text per URL."""

    def __init__(self, texts: Optional[dict[str, str]] = None):
        self.texts = texts or {}
        self.fetched: list[str] = []

    def fetch(self, url: str, candidate_id: str = ""):
        from src.services.resume_fetcher import FetchResult

        self.fetched.append(url)
        text = self.texts.get(url, "")
        return FetchResult(url=url, fetch_url=url, status_code=200, text=text, error=None if text else "empty")


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_candidate() -> Callable[..., Candidate]:
    """Factory that returns a callable to build Candidate models."""

    def _factory(
        first_name: str = "Jane",
        last_name: str = "Smith",
        title: Optional[str] = "Backend Developer",
        professional_summary: Optional[str] = "Builds APIs and data services",
        technical: Optional[list[Any]] = None,
        soft: Optional[list[str]] = None,
        tags: Optional[list[str]] = None,
        address: Optional[str] = "Berlin, Germany",
        embedding: Any = None,
        **kwargs,
    ) -> Candidate:
        return Candidate(
            id=ObjectId(),
            first_name=first_name,
            last_name=last_name,
            title=title,
            professional_summary=professional_summary,
            skills={
                "technical": technical if technical is not None else [{"name": "Python"}],
                "soft": soft if soft is not None else ["Communication"],
            },
            tags=tags or [],
            address=address,
            embedding=embedding,
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_store() -> Callable[..., InMemoryCandidateStore]:
    """Factory for in-memory stores preloaded with candidates."""
    return InMemoryCandidateStore


@pytest.fixture
def make_embedding_client() -> Callable[..., FakeEmbeddingClient]:
    """Factory for fake embedding clients with canned vectors or failures."""
    return FakeEmbeddingClient


@pytest.fixture
def make_fetcher() -> Callable[..., FakeFetcher]:
    """Factory for résumé fetchers returning canned text per URL."""
    return FakeFetcher


@pytest.fixture
def minimal_pdf_bytes() -> bytes:
    """A single-page PDF whose only text is 'Hello PDF'."""
    stream = b"BT /F1 24 Tf 72 720 Td (Hello PDF) Tj ET"
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


@pytest.fixture
def docx_bytes() -> bytes:
    """A DOCX document built with python-docx."""
    import io

    from docx import Document

    document = Document()
    document.add_paragraph("Senior Java Developer")
    document.add_paragraph("Spring Boot, Kafka, PostgreSQL")
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()
