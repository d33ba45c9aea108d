"""HTTP API for the fact-checking dashboard."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..logging_config import logging as _  # noqa: F401  # ensure config applied early
from .. import __version__
from ..container import Services, build_services
from ..errors import (
    DuplicateContentError,
    DuplicateKeywordError,
    InvalidInputError,
    RecordNotFoundError,
)
from ..services import storage
from ..services.trends import TrendConfig, rank_recent_trends, top_words
from ..services.url_similarity import check_url
from .schemas import (
    AddPostRequest,
    EvaluationResponse,
    HealthResponse,
    KeywordListResponse,
    KeywordMatchResponse,
    KeywordOut,
    KeywordRequest,
    LabelRequest,
    MessageResponse,
    PostCreatedResponse,
    PostListResponse,
    PostOut,
    SearchResultOut,
    TextRequest,
    TopWordsResponse,
    TrendOut,
    TrendsResponse,
    UrlCheckRequest,
    UrlCheckResponse,
    VectorSearchRequest,
    VectorSearchResponse,
    WordCountOut,
)

logger = logging.getLogger(__name__)


def get_services(request: Request) -> Services:
    return request.app.state.services


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError):
        return _error(400, "Invalid request body")

    @app.exception_handler(InvalidInputError)
    async def _invalid_input(request: Request, exc: InvalidInputError):
        return _error(400, str(exc))

    @app.exception_handler(RecordNotFoundError)
    async def _not_found(request: Request, exc: RecordNotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(DuplicateContentError)
    async def _duplicate_post(request: Request, exc: DuplicateContentError):
        return _error(409, str(exc))

    @app.exception_handler(DuplicateKeywordError)
    async def _duplicate_keyword(request: Request, exc: DuplicateKeywordError):
        return _error(409, str(exc))

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        logger.error("Error handling %s %s: %s", request.method, request.url.path, exc)
        return _error(500, "Internal server error")


def create_app(services: Optional[Services] = None) -> FastAPI:
    """Build the FastAPI app; *services* are built on startup when omitted."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "services", None) is None:
            app.state.services = build_services()
        yield

    app = FastAPI(
        title="Fact Check API",
        version=__version__,
        description="Similarity-graded fact checking of submitted posts",
        lifespan=lifespan,
    )
    app.state.services = services
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------
    @app.get("/api/text", response_model=PostListResponse)
    def list_posts(services: Services = Depends(get_services)) -> PostListResponse:
        posts = storage.list_posts(services.store)
        return PostListResponse(count=len(posts), posts=[PostOut.from_record(p) for p in posts])

    @app.post("/api/text", response_model=PostCreatedResponse, status_code=201)
    def add_post(body: AddPostRequest, services: Services = Depends(get_services)) -> PostCreatedResponse:
        record = storage.add_post(
            services.store,
            body.text,
            url=body.url,
            is_fake=body.is_fake,
            duplicate_threshold=services.duplicate_threshold,
        )
        return PostCreatedResponse(message="Post added successfully", post=PostOut.from_record(record))

    @app.delete("/api/text", response_model=MessageResponse)
    def delete_post(
        id: Optional[str] = Query(default=None),
        services: Services = Depends(get_services),
    ) -> MessageResponse:
        if not id:
            raise InvalidInputError("Post ID is required")
        storage.delete_post(services.store, id)
        return MessageResponse(message="Post deleted successfully")

    @app.patch("/api/text/{post_id}/label", response_model=PostOut)
    def label_post(
        post_id: str,
        body: LabelRequest,
        services: Services = Depends(get_services),
    ) -> PostOut:
        return PostOut.from_record(storage.set_label(services.store, post_id, body.is_fake))

    # ------------------------------------------------------------------
    # Evaluation and similarity
    # ------------------------------------------------------------------
    @app.post("/api/evaluate", response_model=EvaluationResponse)
    def evaluate(body: TextRequest, services: Services = Depends(get_services)) -> EvaluationResponse:
        verdict = services.evaluator.evaluate(body.text)
        return EvaluationResponse.from_verdict(verdict)

    @app.post("/api/checkURL", response_model=UrlCheckResponse)
    def check_url_endpoint(body: UrlCheckRequest, services: Services = Depends(get_services)) -> UrlCheckResponse:
        result = check_url(
            services.store,
            body.url,
            threshold=services.url_threshold,
            unsure_threshold=services.url_unsure_threshold,
        )
        percentage = f"{result.similarity * 100:.2f}%"
        if result.warning:
            message = f"Warning: This URL has {percentage} similarity with an existing URL in our database."
        else:
            message = "URL check completed successfully."
        return UrlCheckResponse(
            similarity=result.similarity,
            similarity_percentage=percentage,
            matched_url=result.matched_url,
            status=result.status,
            warning=result.warning,
            message=message,
        )

    @app.post("/api/vector-search", response_model=VectorSearchResponse)
    def vector_search(body: VectorSearchRequest, services: Services = Depends(get_services)) -> VectorSearchResponse:
        matches = storage.vector_search(services.store, body.text, body.limit)
        return VectorSearchResponse(
            query=body.text.strip(),
            results=[SearchResultOut.from_match(m) for m in matches],
            count=len(matches),
        )

    # ------------------------------------------------------------------
    # Trends
    # ------------------------------------------------------------------
    @app.get("/api/trends", response_model=TrendsResponse)
    def trends(
        window_minutes: float = Query(default=60, gt=0),
        top_n: int = Query(default=10, ge=1, le=100),
        min_occurrences: int = Query(default=1, ge=1),
        stop_words: List[str] = Query(default=[]),
        services: Services = Depends(get_services),
    ) -> TrendsResponse:
        config = TrendConfig(
            window_minutes=window_minutes,
            top_n=top_n,
            min_occurrences=min_occurrences,
            extra_stop_words=tuple(stop_words),
        )
        ranked = rank_recent_trends(storage.list_posts(services.store), config=config)
        return TrendsResponse(window_minutes=window_minutes, trends=[TrendOut.from_ranked(r) for r in ranked])

    @app.get("/api/top-words", response_model=TopWordsResponse)
    def most_common_words(
        top_n: int = Query(default=3, ge=1, le=100),
        services: Services = Depends(get_services),
    ) -> TopWordsResponse:
        texts = [p.text for p in storage.list_posts(services.store)]
        return TopWordsResponse(words=[WordCountOut.from_count(w) for w in top_words(texts, top_n)])

    # ------------------------------------------------------------------
    # Keywords
    # ------------------------------------------------------------------
    @app.get("/api/keywords", response_model=KeywordListResponse)
    def list_keywords(services: Services = Depends(get_services)) -> KeywordListResponse:
        return KeywordListResponse(
            keywords=[KeywordOut.from_keyword(k) for k in services.keywords.list_keywords()]
        )

    @app.post("/api/keywords", response_model=KeywordOut, status_code=201)
    def add_keyword(body: KeywordRequest, services: Services = Depends(get_services)) -> KeywordOut:
        return KeywordOut.from_keyword(services.keywords.add_keyword(body.keyword))

    @app.delete("/api/keywords", response_model=MessageResponse)
    def delete_keyword(
        id: Optional[str] = Query(default=None),
        services: Services = Depends(get_services),
    ) -> MessageResponse:
        if not id:
            raise InvalidInputError("Keyword ID is required")
        services.keywords.delete_keyword(id)
        return MessageResponse(message="Keyword deleted successfully")

    @app.post("/api/keywords/match", response_model=KeywordMatchResponse)
    def match_keywords(body: TextRequest, services: Services = Depends(get_services)) -> KeywordMatchResponse:
        return KeywordMatchResponse(matched=services.keywords.matches_keyword(body.text))

    return app


app = create_app()

__all__ = ["app", "create_app", "get_services"]
