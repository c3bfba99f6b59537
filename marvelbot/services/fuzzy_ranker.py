"""
Fuzzy Ranker: edit-distance fallback for card lookup.

Used only when neither an exact nor a substring match exists.

RATIO DEFINITION (pinned):
    ratio(a, b) = (L - d) / L

where d is the Levenshtein distance with unit insert, delete and substitute
costs, computed over Unicode code points, and L is the longer of the two
code-point lengths. Two empty strings have ratio 1.0.

The ratio is symmetric, 1.0 for identical strings and 0.0 for equal-length
strings that share no position. It is a single true division of two ints,
which IEEE 754 rounds correctly, so a ratio landing exactly on the
threshold (e.g. 7/10 against the literal 0.70) yields the same double and
is excluded.
"""

import logging
from collections.abc import Callable, Iterable, Sequence

from rapidfuzz.distance import Levenshtein

from marvelbot.config import FUZZY_RATIO_THRESHOLD
from marvelbot.models.card import Card
from marvelbot.services.normalizer import normalize
from marvelbot.services.query_parser import PACK_FILTER, SET_FILTER, TYPE_FILTERS

logger = logging.getLogger(__name__)


def similarity_ratio(a: str, b: str) -> float:
    """
    Normalized Levenshtein similarity in [0.0, 1.0].

    Args:
        a: First string
        b: Second string

    Returns:
        (L - d) / L, or 1.0 when both strings are empty
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    distance = Levenshtein.distance(a, b)
    return (longest - distance) / longest


def candidate_keys(filter_token: str) -> Callable[[Card], Iterable[str]]:
    """
    Return the function producing a card's raw candidate keys for a filter.

    - "pack": pack names
    - "set": set names
    - type token: card names, only for cards with a face of that type
    - anything else: card names
    """
    if filter_token == PACK_FILTER:
        return lambda card: (pack.name for pack in card.packs)
    if filter_token == SET_FILTER:
        return lambda card: (card_set.name for card_set in card.sets)
    if filter_token in TYPE_FILTERS:
        return lambda card: card.names if card.has_face_type(filter_token) else ()
    return lambda card: card.names


def find_levenshtein_cards(
    filter_token: str,
    query: str,
    cards: Sequence[Card] | None,
    threshold: float = FUZZY_RATIO_THRESHOLD,
) -> list[Card]:
    """
    Find the cards whose keys are most similar to the query.

    Each card scores the best ratio among its candidate keys. Cards scoring
    at or below `threshold` are discarded. Every card tied at the highest
    surviving score is returned, in corpus order.

    Args:
        filter_token: Lower-cased filter ("pack", "set", a type token, or "")
        query: Search string; normalized before comparison
        cards: Cards to rank (None is treated as empty)
        threshold: Scores must be strictly greater than this to qualify

    Returns:
        Tied best matches, or an empty list when nothing qualifies
    """
    if not cards:
        return []

    key = normalize(query)
    keys_for = candidate_keys(filter_token)

    scored: list[tuple[Card, float]] = []
    for card in cards:
        best: float | None = None
        for raw_key in keys_for(card):
            ratio = similarity_ratio(key, normalize(raw_key))
            if best is None or ratio > best:
                best = ratio
        if best is not None and best > threshold:
            scored.append((card, best))

    if not scored:
        logger.debug("FUZZY_NO_MATCH: filter=%r query=%r", filter_token, query)
        return []

    top = max(ratio for _, ratio in scored)
    matches = [card for card, ratio in scored if ratio == top]

    logger.debug(
        "FUZZY_MATCH: filter=%r query=%r ratio=%.3f matches=%d",
        filter_token,
        query,
        top,
        len(matches),
    )
    return matches
