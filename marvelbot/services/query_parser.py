"""
Query Parser.

Turns raw user text into (filter, query) pairs for the matcher.

Chat messages reference cards as `[[Lockjaw]]` or, with a filter,
`[[ally:Lockjaw]]`. Slash commands pass semicolon-separated names such as
`Relentless Assault;Follow Through`.

KNOWN FRAGILITY: `split_command` splits on every colon and keeps only the
first two parts, so `a:b:c` parses as filter "a", query "b". Card and rule
names containing a colon cannot be looked up with a filter.
"""

import re
from dataclasses import dataclass

from marvelbot.config import MIN_QUERY_LENGTH
from marvelbot.models.failure import FailureKind, KnownError

_BRACKET_REFERENCE = re.compile(r"\[\[([^\]]+)\]\]")

PACK_FILTER = "pack"
SET_FILTER = "set"
RULE_FILTER = "rule"

TYPE_FILTERS = frozenset(
    [
        "attachment",
        "ally",
        "alter-ego",
        "hero",
        "minion",
        "upgrade",
        "obligation",
        "support",
        "villain",
    ]
)


class QueryTooShortError(KnownError):
    """Raised when a query is too short to search for."""

    def __init__(self, query: str, min_length: int):
        self.query = query
        self.min_length = min_length
        super().__init__(
            kind=FailureKind.QUERY_TOO_SHORT,
            message=f"Search terms must be at least {min_length} characters long.",
            detail=f"Query '{query}' has {len(query)} characters",
            suggestion="Type more of the card or rule name.",
            status_code=400,
        )


@dataclass(frozen=True, slots=True)
class ParsedQuery:
    """A lower-cased filter token and search string."""

    filter: str
    query: str

    @property
    def is_rule(self) -> bool:
        return self.filter == RULE_FILTER


def split_command(raw: str) -> ParsedQuery:
    """
    Split a raw command into filter and query.

    "Ally:Lockjaw" -> ParsedQuery("ally", "lockjaw")
    "Lockjaw"      -> ParsedQuery("", "lockjaw")

    Only the first two colon-separated parts are kept.
    """
    if ":" in raw:
        parts = raw.split(":")
        return ParsedQuery(
            filter=parts[0].strip().lower(),
            query=parts[1].strip().lower(),
        )
    return ParsedQuery(filter="", query=raw.strip().lower())


def check_query_length(query: str, min_length: int = MIN_QUERY_LENGTH) -> str:
    """
    Reject queries strictly shorter than `min_length` characters.

    The length is measured on the lower-cased query, before normalization.

    Returns:
        The query unchanged

    Raises:
        QueryTooShortError: If the query is too short
    """
    if len(query) < min_length:
        raise QueryTooShortError(query, min_length)
    return query


def extract_bracket_queries(message: str) -> list[str]:
    """Return the contents of every `[[...]]` reference, in message order."""
    return [match.group(1) for match in _BRACKET_REFERENCE.finditer(message)]


def split_card_names(text: str) -> list[str]:
    """Split a semicolon-separated list of names, dropping blank entries."""
    return [name.strip() for name in text.split(";") if name.strip()]
