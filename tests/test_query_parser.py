"""Tests for command splitting and query validation."""

import pytest

from marvelbot.models.failure import FailureKind, KnownError, OutcomeType
from marvelbot.services.query_parser import (
    ParsedQuery,
    QueryTooShortError,
    check_query_length,
    extract_bracket_queries,
    split_card_names,
    split_command,
)


class TestSplitCommand:
    def test_filter_and_query(self) -> None:
        assert split_command("Ally:Lockjaw") == ParsedQuery(filter="ally", query="lockjaw")

    def test_no_colon(self) -> None:
        assert split_command("Lockjaw") == ParsedQuery(filter="", query="lockjaw")

    def test_whitespace_around_parts_is_stripped(self) -> None:
        parsed = split_command("rule: Villain Phase ")

        assert parsed.filter == "rule"
        assert parsed.query == "villain phase"
        assert parsed.is_rule

    def test_extra_colons_are_dropped(self) -> None:
        """Only the first two colon-separated parts survive."""
        parsed = split_command("set:Expert:Rhino")

        assert parsed == ParsedQuery(filter="set", query="expert")

    def test_empty_query_after_colon(self) -> None:
        assert split_command("ally:") == ParsedQuery(filter="ally", query="")


class TestCheckQueryLength:
    def test_accepts_minimum_length(self) -> None:
        assert check_query_length("abc") == "abc"

    def test_length_counts_spaces(self) -> None:
        """Length is measured before normalization."""
        assert check_query_length("a b") == "a b"

    def test_rejects_short_query(self) -> None:
        with pytest.raises(QueryTooShortError) as exc_info:
            check_query_length("ab")

        assert exc_info.value.kind == FailureKind.QUERY_TOO_SHORT
        assert exc_info.value.status_code == 400
        assert exc_info.value.min_length == 3

    def test_rejects_empty_query(self) -> None:
        with pytest.raises(QueryTooShortError):
            check_query_length("")

    def test_custom_minimum(self) -> None:
        with pytest.raises(QueryTooShortError):
            check_query_length("abcd", min_length=5)

    def test_error_is_known_failure(self) -> None:
        error = QueryTooShortError("ab", 3)

        assert isinstance(error, KnownError)
        response = error.to_response()
        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert "3 characters" in response.failure.message


class TestExtractBracketQueries:
    def test_extracts_in_order(self) -> None:
        message = "Play [[Lockjaw]] then [[rule:Villain Phase]]!"

        assert extract_bracket_queries(message) == ["Lockjaw", "rule:Villain Phase"]

    def test_no_references(self) -> None:
        assert extract_bracket_queries("Lockjaw is great") == []

    def test_empty_brackets_are_ignored(self) -> None:
        assert extract_bracket_queries("[[]] [[Rhino]]") == ["Rhino"]


class TestSplitCardNames:
    def test_semicolon_list(self) -> None:
        assert split_card_names("Relentless Assault;Follow Through") == [
            "Relentless Assault",
            "Follow Through",
        ]

    def test_blank_entries_dropped(self) -> None:
        assert split_card_names(" Rhino ;; ;Lockjaw") == ["Rhino", "Lockjaw"]
