"""
Result Dispatcher.

Routes user queries to the card matcher or rule lookup and collects the
outcome for the reply layer.

A message is searched for `[[...]]` references first. When it has none, it
is treated as a slash-command style list of semicolon-separated names.

Per query:
- `rule:<name>` goes to rule lookup only
- everything else is length-checked, then sent to the card matcher

Queries that match nothing are reported back, never raised.
"""

import logging
from dataclasses import dataclass, field

from marvelbot.config import FUZZY_RATIO_THRESHOLD, MIN_QUERY_LENGTH
from marvelbot.models.card import Card
from marvelbot.models.corpus import Corpus
from marvelbot.models.rule import Rule
from marvelbot.services.card_matcher import find_cards
from marvelbot.services.query_parser import (
    QueryTooShortError,
    check_query_length,
    extract_bracket_queries,
    split_card_names,
    split_command,
)
from marvelbot.services.rule_lookup import find_rule

logger = logging.getLogger(__name__)


@dataclass
class MessageReply:
    """Everything found (and not found) for one user message."""

    cards: list[Card] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)

    @property
    def has_results(self) -> bool:
        return bool(self.cards or self.rules)


def extract_queries(message: str) -> list[str]:
    """Bracket references if any, otherwise semicolon-separated names."""
    queries = extract_bracket_queries(message)
    if queries:
        return queries
    return split_card_names(message)


def handle_message(
    message: str,
    corpus: Corpus,
    min_query_length: int = MIN_QUERY_LENGTH,
    fuzzy_threshold: float = FUZZY_RATIO_THRESHOLD,
) -> MessageReply:
    """
    Resolve every query in a message against the corpus.

    Args:
        message: Raw user text
        corpus: Corpus snapshot to search (read once by the caller)
        min_query_length: Queries shorter than this are rejected
        fuzzy_threshold: Ratio fuzzy card matches must strictly exceed

    Returns:
        MessageReply with matched cards and rules in query order
    """
    reply = MessageReply()

    for raw in extract_queries(message):
        parsed = split_command(raw)

        if parsed.is_rule:
            rule = find_rule(parsed.query, corpus.rules)
            if rule is None:
                reply.unmatched.append(raw)
            else:
                reply.rules.append(rule)
            continue

        try:
            check_query_length(parsed.query, min_query_length)
        except QueryTooShortError:
            reply.rejected.append(raw)
            continue

        found = find_cards(parsed.filter, parsed.query, corpus.cards, fuzzy_threshold)
        if found:
            reply.cards.extend(found)
        else:
            reply.unmatched.append(raw)

    logger.info(
        "MESSAGE_DISPATCHED",
        extra={
            "cards": len(reply.cards),
            "rules": len(reply.rules),
            "unmatched": len(reply.unmatched),
            "rejected": len(reply.rejected),
        },
    )
    return reply


# =============================================================================
# TEXT RENDERING
# =============================================================================


def format_card_link(card: Card) -> str:
    """Markdown link to the card on MarvelCDB, or the bare name."""
    url = card.marvelcdb_url
    if url:
        return f"[{card.display_name}]({url})"
    return card.display_name


def format_rule(rule: Rule) -> str:
    lines = [f"**{rule.name}**", rule.text]
    if rule.text2:
        lines.append(rule.text2)
    if rule.related:
        lines.append(f"Related: {', '.join(rule.related)}")
    return "\n".join(lines)


def format_reply(reply: MessageReply, min_query_length: int = MIN_QUERY_LENGTH) -> str:
    """
    Render a reply as chat text.

    Rules come first, then card links, then what could not be answered.
    """
    sections: list[str] = [format_rule(rule) for rule in reply.rules]

    if reply.cards:
        sections.append("\n".join(format_card_link(card) for card in reply.cards))

    if reply.unmatched:
        sections.append(f"No matches found: {', '.join(reply.unmatched)}")

    if reply.rejected:
        sections.append(
            f"Search terms must be at least {min_query_length} characters: "
            f"{', '.join(reply.rejected)}"
        )

    return "\n\n".join(sections)
