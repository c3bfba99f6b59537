"""
Query API endpoint.

Accepts chat-style text ("[[Lockjaw]] [[rule:Villain Phase]]" or
"Relentless Assault;Follow Through") and answers with every card and rule
it references, plus the rendered chat reply.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from marvelbot.api.dependencies import get_corpus
from marvelbot.api.views import CardView, RuleView
from marvelbot.config import settings
from marvelbot.models.corpus import Corpus
from marvelbot.models.failure import ApiResponse, create_success
from marvelbot.services.dispatcher import format_reply, handle_message

router = APIRouter(prefix="/query", tags=["query"])


class QueryRequest(BaseModel):
    """A chat message or slash-command argument."""

    message: str = Field(..., min_length=1, max_length=2000)


class QueryReplyView(BaseModel):
    """Cards and rules found for a message."""

    cards: list[CardView] = Field(default_factory=list)
    rules: list[RuleView] = Field(default_factory=list)
    unmatched: list[str] = Field(default_factory=list)
    rejected: list[str] = Field(default_factory=list)
    text: str = ""


@router.post("", response_model=ApiResponse[QueryReplyView])
async def query(
    request: QueryRequest,
    corpus: Annotated[Corpus, Depends(get_corpus)],
) -> ApiResponse[QueryReplyView]:
    """
    Resolve every reference in a message.

    Unmatched and too-short queries are listed in the reply, not raised.
    """
    reply = handle_message(
        request.message,
        corpus,
        min_query_length=settings.min_query_length,
        fuzzy_threshold=settings.fuzzy_threshold,
    )

    return create_success(
        QueryReplyView(
            cards=[CardView.from_card(card) for card in reply.cards],
            rules=[RuleView.from_rule(rule) for rule in reply.rules],
            unmatched=reply.unmatched,
            rejected=reply.rejected,
            text=format_reply(reply, min_query_length=settings.min_query_length),
        )
    )
