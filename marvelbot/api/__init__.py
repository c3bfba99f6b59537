from marvelbot.api.cards import router as cards_router
from marvelbot.api.corpus import router as corpus_router
from marvelbot.api.health import router as health_router
from marvelbot.api.query import router as query_router
from marvelbot.api.rules import router as rules_router

__all__ = [
    "cards_router",
    "corpus_router",
    "health_router",
    "query_router",
    "rules_router",
]
