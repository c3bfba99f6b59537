"""
Rule Lookup.

Rules are looked up by name only. Unlike cards there is no substring or fuzzy
fallback: a query that does not match a rule name exactly (ignoring case and
punctuation) is simply not found.
"""

from collections.abc import Sequence

from marvelbot.models.rule import Rule
from marvelbot.services.normalizer import normalize


def find_rule(query: str, rules: Sequence[Rule] | None) -> Rule | None:
    """
    Find the rule whose name matches the query.

    Args:
        query: Rule name as typed by the user
        rules: Rule corpus in load order (None is treated as empty)

    Returns:
        The first rule with a matching name, or None
    """
    if not rules:
        return None

    key = normalize(query)
    if not key:
        return None

    for rule in rules:
        if normalize(rule.name) == key:
            return rule
    return None
