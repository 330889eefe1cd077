"""
FastAPI application for the candidate CRM and semantic search.

Handlers are plain ``def`` functions, so Starlette runs them in its
threadpool; embedding work triggered by CRUD is handed to the
``EmbeddingScheduler`` and never awaited by the request.

Usage:
    from src.api.app import create_app
    app = create_app()

    # Or run directly:
    # uvicorn src.api.app:create_app --factory --reload
"""

from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.core.exceptions import RecruitCRMError
from src.core.search.embedding_pipeline import CandidateEmbedder, EmbeddingScheduler
from src.core.search.semantic_search import SemanticSearchService
from src.data.models.candidate import CandidateCreate, CandidateUpdate
from src.data.repositories.candidate_repository import CandidateStore, get_candidate_repository
from src.utils.config import get_settings
from src.utils.constants import APP_DISPLAY_NAME, VERSION
from src.utils.logger import get_logger, setup_logging

from .middleware import RequestLoggingMiddleware
from .models import (
    AttachResumeRequest,
    EmbeddingResponse,
    ErrorResponse,
    HealthResponse,
    RebuildEmbeddingRequest,
    RebuildSummaryResponse,
    SemanticSearchRequest,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Drain background embedding work on shutdown."""
    yield

    scheduler: Optional[EmbeddingScheduler] = app.state.scheduler
    if scheduler is not None:
        logger.info("Shutting down embedding scheduler")
        scheduler.shutdown(wait=True)


# =========================================================================
# Dependencies
# =========================================================================


def get_store(request: Request) -> CandidateStore:
    """FastAPI dependency: the candidate store."""
    state = request.app.state
    if state.store is None:
        state.store = get_candidate_repository()
    return state.store


def get_embedder(request: Request, store: CandidateStore = Depends(get_store)) -> CandidateEmbedder:
    """FastAPI dependency: the candidate embedder bound to the app's store."""
    state = request.app.state
    if state.embedder is None:
        state.embedder = CandidateEmbedder(store=store)
    return state.embedder


def get_scheduler(
    request: Request, embedder: CandidateEmbedder = Depends(get_embedder)
) -> EmbeddingScheduler:
    """FastAPI dependency: the background embedding scheduler."""
    state = request.app.state
    if state.scheduler is None:
        state.scheduler = EmbeddingScheduler(embedder=embedder)
    return state.scheduler


def get_search_service(
    request: Request,
    store: CandidateStore = Depends(get_store),
    embedder: CandidateEmbedder = Depends(get_embedder),
) -> SemanticSearchService:
    """FastAPI dependency: semantic search sharing the embedder's provider client."""
    state = request.app.state
    if state.search_service is None:
        state.search_service = SemanticSearchService(
            store=store, embedding_client=embedder.embedding_client
        )
    return state.search_service


# =========================================================================
# Application factory
# =========================================================================


def create_app(
    store: Optional[CandidateStore] = None,
    embedder: Optional[CandidateEmbedder] = None,
    scheduler: Optional[EmbeddingScheduler] = None,
    search_service: Optional[SemanticSearchService] = None,
    cors_origins: Optional[list[str]] = None,
) -> FastAPI:
    """
    Application factory.

    Components left as ``None`` are created on first use, so building the
    app never opens a database connection. Logging is configured here so
    ``uvicorn --factory`` runs with the same sinks as the CLI.
    """
    setup_logging()

    app = FastAPI(
        title=APP_DISPLAY_NAME,
        description="Candidate CRUD and embedding-based semantic search",
        version=VERSION,
        lifespan=lifespan,
        responses={
            400: {"model": ErrorResponse},
            404: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
            502: {"model": ErrorResponse},
        },
    )

    app.state.store = store
    app.state.embedder = embedder
    app.state.scheduler = scheduler
    app.state.search_service = search_service

    if cors_origins is None:
        cors_origins = get_settings().api.cors_origins

    # add_middleware prepends: logging ends up outermost
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(_build_candidate_router())
    _register_health(app)
    _register_exception_handlers(app)

    return app


# =========================================================================
# Route registration
# =========================================================================


def _build_candidate_router() -> APIRouter:
    router = APIRouter(prefix="/api/candidates", tags=["candidates"])

    # -- Batch and search routes (declared before /{candidate_id}) ----------

    @router.get("/rebuild-embeddings", response_model=RebuildSummaryResponse)
    def rebuild_embeddings(embedder: CandidateEmbedder = Depends(get_embedder)) -> dict[str, int]:
        """Recompute every candidate's embedding, fetching résumés where set."""
        return embedder.rebuild_all().to_dict()

    @router.post("/search/semantic")
    def semantic_search(
        request: SemanticSearchRequest,
        service: SemanticSearchService = Depends(get_search_service),
    ) -> list[dict[str, Any]]:
        """Rank candidates against a free-text query."""
        results = service.search(request.query, request.filters, request.limit)
        return [r.to_dict() for r in results]

    # -- CRUD ----------------------------------------------------------------

    @router.get("")
    def list_candidates(store: CandidateStore = Depends(get_store)) -> list[dict[str, Any]]:
        return [c.to_public_dict() for c in store.list_all()]

    @router.get("/{candidate_id}")
    def get_candidate(candidate_id: str, store: CandidateStore = Depends(get_store)) -> dict[str, Any]:
        return store.get(candidate_id).to_public_dict()

    @router.post("", status_code=201)
    def create_candidate(
        payload: CandidateCreate,
        store: CandidateStore = Depends(get_store),
        scheduler: EmbeddingScheduler = Depends(get_scheduler),
    ) -> dict[str, Any]:
        """Create a candidate and queue its first embedding."""
        candidate = store.create(payload)
        scheduler.schedule(str(candidate.id))
        return candidate.to_public_dict()

    @router.put("/{candidate_id}")
    def update_candidate(
        candidate_id: str,
        payload: CandidateUpdate,
        store: CandidateStore = Depends(get_store),
        scheduler: EmbeddingScheduler = Depends(get_scheduler),
    ) -> dict[str, Any]:
        """Apply a partial update and queue a re-embedding."""
        candidate = store.update(candidate_id, payload.to_update_data())
        scheduler.schedule(str(candidate.id))
        return candidate.to_public_dict()

    @router.delete("/{candidate_id}", status_code=204)
    def delete_candidate(candidate_id: str, store: CandidateStore = Depends(get_store)) -> Response:
        store.delete(candidate_id)
        return Response(status_code=204)

    @router.post("/{candidate_id}/resume")
    def attach_resume(
        candidate_id: str,
        payload: AttachResumeRequest,
        store: CandidateStore = Depends(get_store),
        scheduler: EmbeddingScheduler = Depends(get_scheduler),
    ) -> dict[str, Any]:
        """Store a résumé URL, then fetch it and re-embed in the background."""
        candidate = store.update(candidate_id, {"resumeUrl": payload.resume_url})
        scheduler.schedule(str(candidate.id), resume_url=payload.resume_url)
        return candidate.to_public_dict()

    @router.post("/{candidate_id}/rebuild-embedding", response_model=EmbeddingResponse)
    def rebuild_embedding(
        candidate_id: str,
        payload: Optional[RebuildEmbeddingRequest] = None,
        embedder: CandidateEmbedder = Depends(get_embedder),
    ) -> dict[str, list[float]]:
        """Synchronously embed one candidate; provider errors keep their status."""
        extra_text = payload.extra_text if payload else ""
        return {"embedding": embedder.embed_candidate_and_save(candidate_id, extra_text)}

    return router


def _register_health(app: FastAPI) -> None:

    @app.get("/api/health", response_model=HealthResponse)
    def health_check(store: CandidateStore = Depends(get_store)) -> HealthResponse:
        """Liveness plus store connectivity."""
        ping = getattr(store, "ping", None)
        database = bool(ping()) if callable(ping) else True
        return HealthResponse(
            status="healthy" if database else "degraded",
            database=database,
            embedding_configured=get_settings().embedding.is_configured,
            version=VERSION,
        )


# =========================================================================
# Exception handlers
# =========================================================================


def _register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(RecruitCRMError)
    async def recruit_crm_error_handler(request: Request, exc: RecruitCRMError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.opt(exception=exc).error("Unhandled exception")
        return JSONResponse(
            status_code=500,
            content={"detail": "An unexpected error occurred"},
        )
