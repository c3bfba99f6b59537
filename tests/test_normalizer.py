"""Tests for matching-key normalization."""

import pytest

from marvelbot.services.normalizer import normalize


class TestNormalize:
    def test_strips_punctuation_and_case(self) -> None:
        assert normalize("Get Behind Me!") == "getbehindme"

    def test_keeps_digits(self) -> None:
        assert normalize("1 2 3 4 5!") == "12345"

    def test_hyphenated_name(self) -> None:
        assert normalize("Spider-Man") == "spiderman"

    def test_empty_string(self) -> None:
        assert normalize("") == ""

    def test_only_punctuation(self) -> None:
        assert normalize("!?- ...") == ""

    def test_non_ascii_is_removed(self) -> None:
        """Curly apostrophes and accented letters are not ASCII alphanumerics."""
        assert normalize("Galaxy’s Most Wanted") == "galaxysmostwanted"
        assert normalize("Ångström") == "ngstrm"

    @pytest.mark.parametrize(
        "text",
        ["", "Get Behind Me!", "The Break-In!", "S.H.I.E.L.D. Tech", "Ångström", "  a  "],
    )
    def test_idempotent(self, text: str) -> None:
        once = normalize(text)
        assert normalize(once) == once
