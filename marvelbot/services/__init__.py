"""
MarvelBot services.

Card and rule matching, corpus loading and reply dispatch.
"""

from marvelbot.services.card_matcher import find_cards
from marvelbot.services.corpus_loader import (
    CorpusLoadError,
    card_from_dict,
    card_to_dict,
    load_corpus,
    read_cards,
    read_rules,
    rule_from_dict,
    write_cards,
)
from marvelbot.services.dispatcher import (
    MessageReply,
    extract_queries,
    format_reply,
    handle_message,
)
from marvelbot.services.fuzzy_ranker import find_levenshtein_cards, similarity_ratio
from marvelbot.services.normalizer import normalize
from marvelbot.services.query_parser import (
    TYPE_FILTERS,
    ParsedQuery,
    QueryTooShortError,
    check_query_length,
    extract_bracket_queries,
    split_card_names,
    split_command,
)
from marvelbot.services.rule_lookup import find_rule

__all__ = [
    "CorpusLoadError",
    "MessageReply",
    "ParsedQuery",
    "QueryTooShortError",
    "TYPE_FILTERS",
    "card_from_dict",
    "card_to_dict",
    "check_query_length",
    "extract_bracket_queries",
    "extract_queries",
    "find_cards",
    "find_levenshtein_cards",
    "find_rule",
    "format_reply",
    "handle_message",
    "load_corpus",
    "normalize",
    "read_cards",
    "read_rules",
    "rule_from_dict",
    "similarity_ratio",
    "split_card_names",
    "split_command",
    "write_cards",
]
