"""
Card Matcher: three-tier card lookup.

Given a filter and a query, every card is checked for:

1. EXACT: a key equal to the query
2. CONTAINS: a key containing the query
3. FUZZY: the Fuzzy Ranker's best matches above the ratio threshold

The first non-empty tier is returned verbatim. Tiers are never merged or
re-ranked; order within a tier is corpus order. Keys and query are compared
in normalized form (see normalizer.normalize).

Which keys are checked depends on the filter:
- "pack" / "set": pack or set names; the first hit per card wins
- type token (ally, hero, ...): card names, for cards with a face of that type
- "" or unrecognized: card names

KNOWN QUIRK: under a type filter, a card lands in the contains tier once per
matching name, so a card with two matching names appears twice. Callers that
count results see the duplicate.

No exceptions are raised. "No match" is an empty list.
"""

import logging
from collections.abc import Callable, Iterable, Sequence

from marvelbot.config import FUZZY_RATIO_THRESHOLD
from marvelbot.models.card import Card
from marvelbot.services.fuzzy_ranker import find_levenshtein_cards
from marvelbot.services.normalizer import normalize
from marvelbot.services.query_parser import PACK_FILTER, SET_FILTER, TYPE_FILTERS

logger = logging.getLogger(__name__)


def _match_grouping(
    key: str,
    cards: Sequence[Card],
    names_of: Callable[[Card], Iterable[str]],
) -> tuple[list[Card], list[Card]]:
    """
    Bucket cards by their pack or set names.

    Per card, groupings are scanned in order and the first one that equals
    or contains the key decides the bucket; the card is added at most once.
    """
    exact: list[Card] = []
    contains: list[Card] = []

    for card in cards:
        for name in names_of(card):
            candidate = normalize(name)
            if candidate == key:
                exact.append(card)
                break
            if key in candidate:
                contains.append(card)
                break

    return exact, contains


def _match_typed_names(
    key: str,
    face_type: str,
    cards: Sequence[Card],
) -> tuple[list[Card], list[Card]]:
    """Bucket cards by name, restricted to cards with a face of `face_type`."""
    exact: list[Card] = []
    contains: list[Card] = []

    for card in cards:
        if not card.has_face_type(face_type):
            continue
        for name in card.names:
            candidate = normalize(name)
            if candidate == key:
                exact.append(card)
            if key in candidate:
                contains.append(card)

    return exact, contains


def _match_names(key: str, cards: Sequence[Card]) -> tuple[list[Card], list[Card]]:
    """Bucket cards by name with no type restriction."""
    exact: list[Card] = []
    contains: list[Card] = []

    for card in cards:
        for name in card.names:
            candidate = normalize(name)
            if candidate == key:
                exact.append(card)
            if key in candidate:
                contains.append(card)

    return exact, contains


def find_cards(
    filter_token: str,
    query: str,
    cards: Sequence[Card] | None,
    fuzzy_threshold: float = FUZZY_RATIO_THRESHOLD,
) -> list[Card]:
    """
    Find cards matching a query under an optional filter.

    Args:
        filter_token: Lower-cased filter token; "" or unrecognized means none
        query: Lower-cased search string (length already checked by caller)
        cards: Corpus cards in load order (None is treated as empty)
        fuzzy_threshold: Ratio a fuzzy candidate must strictly exceed

    Returns:
        Exact matches if any, else substring matches if any, else fuzzy
        matches. Empty when nothing matches.
    """
    if not cards:
        return []

    key = normalize(query)
    if not key:
        return []

    filter_token = filter_token.lower()

    if filter_token == PACK_FILTER:
        exact, contains = _match_grouping(
            key, cards, lambda card: (pack.name for pack in card.packs)
        )
    elif filter_token == SET_FILTER:
        exact, contains = _match_grouping(
            key, cards, lambda card: (card_set.name for card_set in card.sets)
        )
    elif filter_token in TYPE_FILTERS:
        exact, contains = _match_typed_names(key, filter_token, cards)
    else:
        # Unrecognized filters search like no filter at all
        filter_token = ""
        exact, contains = _match_names(key, cards)

    if exact:
        logger.debug("MATCH_EXACT: filter=%r query=%r count=%d", filter_token, query, len(exact))
        return exact

    if contains:
        logger.debug(
            "MATCH_CONTAINS: filter=%r query=%r count=%d", filter_token, query, len(contains)
        )
        return contains

    return find_levenshtein_cards(filter_token, query, cards, threshold=fuzzy_threshold)
