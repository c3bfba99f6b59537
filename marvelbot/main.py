import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from marvelbot.api import (
    cards_router,
    corpus_router,
    health_router,
    query_router,
    rules_router,
)
from marvelbot.config import settings
from marvelbot.models.corpus import CorpusStore
from marvelbot.models.failure import KnownError, create_unknown_failure
from marvelbot.services.corpus_loader import CorpusLoadError, load_corpus

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the corpus on startup; start empty if it cannot be read."""
    logging.basicConfig(level=settings.log_level)

    store = CorpusStore()
    try:
        store.refresh(load_corpus(settings.cards_dirs, settings.rules_dir))
    except CorpusLoadError as e:
        logger.error("CORPUS_LOAD_FAILED", extra={"detail": e.detail})
    app.state.corpus_store = store
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("marvelbot"),
    lifespan=lifespan,
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("UNHANDLED_ERROR")
    return JSONResponse(
        status_code=500,
        content=create_unknown_failure(exc).model_dump(mode="json"),
    )


app.include_router(cards_router)
app.include_router(corpus_router)
app.include_router(health_router)
app.include_router(query_router)
app.include_router(rules_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
