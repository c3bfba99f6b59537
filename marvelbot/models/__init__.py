from marvelbot.models.card import Card, CardSet, DeckType, Face, Pack
from marvelbot.models.corpus import Corpus, CorpusStore
from marvelbot.models.failure import (
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    create_success,
    create_unknown_failure,
    finalize_response,
)
from marvelbot.models.rule import Rule

__all__ = [
    "ApiResponse",
    "Card",
    "CardSet",
    "Corpus",
    "CorpusStore",
    "DeckType",
    "Face",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "OutcomeType",
    "Pack",
    "Rule",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
]
