"""Rule lookup endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from marvelbot.api.dependencies import get_corpus
from marvelbot.api.views import RuleView
from marvelbot.models.corpus import Corpus
from marvelbot.models.failure import ApiResponse, FailureKind, KnownError, create_success
from marvelbot.services.rule_lookup import find_rule

router = APIRouter(prefix="/rules", tags=["rules"])


@router.get("/{name}", response_model=ApiResponse[RuleView])
async def get_rule(
    name: str,
    corpus: Annotated[Corpus, Depends(get_corpus)],
) -> ApiResponse[RuleView]:
    """
    Look up a rule by exact name, ignoring case and punctuation.

    There is no fuzzy fallback for rules.
    """
    rule = find_rule(name, corpus.rules)
    if rule is None:
        raise KnownError(
            kind=FailureKind.NOT_FOUND,
            message=f"No rule named '{name}'.",
            suggestion="Check the rule name in the Rules Reference.",
            status_code=status.HTTP_404_NOT_FOUND,
        )
    return create_success(RuleView.from_rule(rule))
