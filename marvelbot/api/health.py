"""
Health check endpoints.

Provides liveness and readiness probes. The service is ready once a
non-empty corpus has been loaded.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from marvelbot.api.dependencies import get_corpus_store
from marvelbot.models.corpus import CorpusStore

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    corpus: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check the corpus.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    store: Annotated[CorpusStore, Depends(get_corpus_store)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 while the corpus is empty.
    """
    if store.current.is_empty:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", corpus="empty")
    return HealthResponse(status="ready", corpus="loaded")
