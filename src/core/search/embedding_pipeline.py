"""
Candidate embedding pipeline.

Computes and persists candidate embeddings: synchronously for one
candidate, as a batch over the whole pool, or as best-effort background
work triggered by CRUD operations.
"""

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import asdict, dataclass
from typing import Optional

from src.data.models.candidate import Candidate
from src.data.repositories.candidate_repository import CandidateStore, get_candidate_repository
from src.ml.embeddings.embedding_client import EmbeddingClient, get_embedding_client
from src.services.resume_fetcher import ResumeFetcher, fetch_resume_text, get_resume_fetcher
from src.utils.config import SearchSettings, get_settings
from src.utils.logger import LoggerMixin, snippet

from .document_builder import build_search_document


@dataclass
class RebuildSummary:
    """Counts from a batch rebuild."""

    success: int = 0
    fail: int = 0
    total: int = 0

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


class CandidateEmbedder(LoggerMixin):
    """
    Builds, embeds and persists candidate search documents.

    Usage:
        embedder = CandidateEmbedder()
        vector = embedder.embed_candidate_and_save(candidate_id, resume_text)
        summary = embedder.rebuild_all()
    """

    def __init__(
        self,
        store: Optional[CandidateStore] = None,
        embedding_client: Optional[EmbeddingClient] = None,
        fetcher: Optional[ResumeFetcher] = None,
        settings: Optional[SearchSettings] = None,
    ):
        self.store = store if store is not None else get_candidate_repository()
        self.embedding_client = embedding_client or get_embedding_client()
        self.fetcher = fetcher or get_resume_fetcher()
        self.settings = settings or get_settings().search

    def embed_candidate_and_save(self, candidate_id: str, extra_text: str = "") -> list[float]:
        """
        Embed one candidate and persist the vector.

        ``extra_text`` is appended to the search document and, when not
        blank, stored (truncated) as the candidate's ``searchText`` so the
        keyword gate can see it later.

        Raises:
            CandidateNotFoundError: If the candidate does not exist
            EmbeddingConfigurationError, EmbeddingProviderError: From the provider
        """
        candidate = self.store.get(candidate_id)
        document = build_search_document(candidate, extra_text)
        self.logger.debug(f"Embedding candidate {candidate_id}: {snippet(document, 400)!r}")

        embedding = self.embedding_client.embed_text(document)

        update = {"embedding": embedding}
        if extra_text and extra_text.strip():
            update["searchText"] = extra_text[: self.settings.search_text_max_chars]
        self.store.update(candidate_id, update)

        self.logger.info(f"Saved {len(embedding)}-dim embedding for candidate {candidate_id}")
        return embedding

    def _rebuild_one(self, candidate: Candidate) -> bool:
        """Fetch résumé text and re-embed one candidate. Never raises."""
        candidate_id = str(candidate.id)
        try:
            extra_text = ""
            if candidate.resume_url:
                extra_text = fetch_resume_text(candidate.resume_url, candidate_id, fetcher=self.fetcher)
            self.embed_candidate_and_save(candidate_id, extra_text)
            return True
        except Exception as e:
            self.logger.error(f"Rebuild failed for candidate {candidate_id}: {e}")
            return False

    def rebuild_all(self, concurrency: Optional[int] = None) -> RebuildSummary:
        """
        Recompute embeddings for every candidate.

        Each candidate is processed inside its own error boundary, so one
        failure only increments ``fail``.

        Args:
            concurrency: Worker threads; 1 processes candidates sequentially

        Returns:
            RebuildSummary with success, fail and total counts
        """
        concurrency = max(1, concurrency or self.settings.rebuild_concurrency)
        candidates = self.store.list_all()
        summary = RebuildSummary(total=len(candidates))
        self.logger.info(f"Rebuilding embeddings for {summary.total} candidates (concurrency={concurrency})")

        if concurrency == 1:
            outcomes = [self._rebuild_one(c) for c in candidates]
        else:
            with ThreadPoolExecutor(max_workers=concurrency, thread_name_prefix="rebuild") as executor:
                futures = [executor.submit(self._rebuild_one, c) for c in candidates]
                outcomes = [future.result() for future in as_completed(futures)]

        summary.success = sum(1 for ok in outcomes if ok)
        summary.fail = summary.total - summary.success
        self.logger.info(f"Rebuild finished: {summary.success} ok, {summary.fail} failed")
        return summary


class EmbeddingScheduler(LoggerMixin):
    """
    Fire-and-forget embedding work for request handlers.

    ``schedule`` submits to a bounded thread pool and returns immediately;
    callers get no handle. Failures are logged, never raised.
    """

    def __init__(self, embedder: Optional[CandidateEmbedder] = None, max_workers: Optional[int] = None):
        self.embedder = embedder or get_candidate_embedder()
        workers = max_workers or get_settings().search.scheduler_workers
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="embedding")

    def try_embed_candidate(self, candidate_id: Optional[str], extra_text: str = "") -> None:
        """Embed and save one candidate, logging and swallowing any failure."""
        if not candidate_id:
            return
        try:
            self.embedder.embed_candidate_and_save(candidate_id, extra_text)
        except Exception as e:
            self.logger.error(f"Embedding failed for candidate {candidate_id}: {e}")

    def _run(self, candidate_id: str, extra_text: str, resume_url: Optional[str]) -> None:
        if resume_url:
            extra_text = fetch_resume_text(resume_url, candidate_id, fetcher=self.embedder.fetcher)
        self.try_embed_candidate(candidate_id, extra_text)

    def _on_done(self, future: Future) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self.logger.opt(exception=error).error(f"Background embedding task crashed: {error}")

    def schedule(
        self,
        candidate_id: Optional[str],
        extra_text: str = "",
        resume_url: Optional[str] = None,
    ) -> None:
        """
        Queue background embedding for a candidate.

        When ``resume_url`` is given the résumé is fetched first and its text
        replaces ``extra_text``.
        """
        if not candidate_id:
            return
        try:
            future = self._executor.submit(self._run, str(candidate_id), extra_text, resume_url)
        except RuntimeError as e:
            # Executor already shut down
            self.logger.warning(f"Could not schedule embedding for {candidate_id}: {e}")
            return
        future.add_done_callback(self._on_done)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


# Singleton instances
_candidate_embedder: Optional[CandidateEmbedder] = None
_embedding_scheduler: Optional[EmbeddingScheduler] = None


def get_candidate_embedder() -> CandidateEmbedder:
    """Get the candidate embedder singleton instance."""
    global _candidate_embedder
    if _candidate_embedder is None:
        _candidate_embedder = CandidateEmbedder()
    return _candidate_embedder


def get_embedding_scheduler() -> EmbeddingScheduler:
    """Get the embedding scheduler singleton instance."""
    global _embedding_scheduler
    if _embedding_scheduler is None:
        _embedding_scheduler = EmbeddingScheduler()
    return _embedding_scheduler
