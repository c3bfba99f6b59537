"""
Card search endpoint.

Direct access to the card matcher with an explicit filter.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from marvelbot.api.dependencies import get_corpus
from marvelbot.api.views import CardView
from marvelbot.config import settings
from marvelbot.models.corpus import Corpus
from marvelbot.models.failure import ApiResponse, create_success
from marvelbot.services.card_matcher import find_cards
from marvelbot.services.query_parser import check_query_length

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("/search", response_model=ApiResponse[list[CardView]])
async def search_cards(
    corpus: Annotated[Corpus, Depends(get_corpus)],
    q: Annotated[str, Query(description="Card, pack or set name")],
    filter: Annotated[str, Query(description="pack, set or a card type")] = "",
) -> ApiResponse[list[CardView]]:
    """
    Search cards by name, pack or set.

    An empty result is a success with no data items.
    Queries shorter than the minimum length are rejected with 400.
    """
    query = check_query_length(q.strip().lower(), settings.min_query_length)
    cards = find_cards(filter.strip().lower(), query, corpus.cards, settings.fuzzy_threshold)
    return create_success([CardView.from_card(card) for card in cards])
