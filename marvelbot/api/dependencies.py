"""Shared FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from marvelbot.models.corpus import Corpus, CorpusStore


def get_corpus_store(request: Request) -> CorpusStore:
    """Return the application's corpus store, creating an empty one if absent."""
    store: CorpusStore | None = getattr(request.app.state, "corpus_store", None)
    if store is None:
        store = CorpusStore()
        request.app.state.corpus_store = store
    return store


def get_corpus(store: Annotated[CorpusStore, Depends(get_corpus_store)]) -> Corpus:
    """Snapshot of the active corpus, read once per request."""
    return store.current
