"""
Corpus administration endpoints.

Reports what is loaded and reloads the corpus from the configured data
directories. A reload builds a complete new corpus before swapping it in;
if loading fails, the active corpus is left untouched.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from marvelbot.api.dependencies import get_corpus_store
from marvelbot.config import settings
from marvelbot.models.corpus import CorpusStore
from marvelbot.models.failure import ApiResponse, create_success
from marvelbot.services.corpus_loader import load_corpus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/corpus", tags=["corpus"])


class CorpusStats(BaseModel):
    """Size of the active corpus."""

    cards: int
    rules: int
    generation: int


def _stats(store: CorpusStore) -> CorpusStats:
    corpus = store.current
    return CorpusStats(
        cards=len(corpus.cards),
        rules=len(corpus.rules),
        generation=store.generation,
    )


@router.get("/stats", response_model=ApiResponse[CorpusStats])
async def corpus_stats(
    store: Annotated[CorpusStore, Depends(get_corpus_store)],
) -> ApiResponse[CorpusStats]:
    """Card and rule counts of the active corpus."""
    return create_success(_stats(store))


@router.post("/refresh", response_model=ApiResponse[CorpusStats])
async def refresh_corpus(
    store: Annotated[CorpusStore, Depends(get_corpus_store)],
) -> ApiResponse[CorpusStats]:
    """
    Reload cards and rules from disk and swap them in atomically.

    Raises CorpusLoadError (503) if any file is malformed.
    """
    corpus = load_corpus(settings.cards_dirs, settings.rules_dir)
    store.refresh(corpus)
    return create_success(_stats(store))
