"""
Tests for three-tier card lookup.

Exact matches short-circuit substring matches, which short-circuit the
fuzzy fallback. Order inside a tier is corpus order.
"""

from marvelbot.models.card import Card
from marvelbot.services.card_matcher import find_cards


class TestExactTier:
    def test_exact_type_match_excludes_similar_cards(self, lockjaw: Card, lockbox: Card) -> None:
        """Lockbox would qualify by fuzzy ratio, but the exact tier wins."""
        result = find_cards("ally", "lockjaw", [lockjaw, lockbox])

        assert result == [lockjaw]

    def test_exact_match_excludes_substring_matches(self, card_factory) -> None:
        spider_man_2099 = card_factory("Spider-Man 2099", face_type="Hero")
        spider_man = card_factory("Spider-Man", face_type="Hero")

        result = find_cards("", "spider-man", [spider_man_2099, spider_man])

        assert result == [spider_man]

    def test_exact_match_ignores_punctuation(self, sample_corpus, spider_man: Card) -> None:
        assert find_cards("", "spiderman", sample_corpus.cards) == [spider_man]

    def test_any_name_can_match(self, sample_corpus, spider_man: Card) -> None:
        assert find_cards("", "peter parker", sample_corpus.cards) == [spider_man]


class TestContainsTier:
    def test_substring_matches_in_corpus_order(
        self, sample_corpus, lockjaw: Card, lockbox: Card
    ) -> None:
        assert find_cards("", "lock", sample_corpus.cards) == [lockjaw, lockbox]

    def test_type_filter_keeps_duplicate_per_name(self, card_factory) -> None:
        """A card with two matching names lands in the contains tier twice."""
        hero = card_factory("Spider-Man", "Spider-Man (Peter Parker)", face_type="Hero")

        result = find_cards("hero", "spider", [hero])

        assert result == [hero, hero]

    def test_type_filter_excludes_other_types(self, sample_corpus, lockjaw: Card) -> None:
        assert find_cards("ally", "lock", sample_corpus.cards[:3]) == [
            lockjaw,
            sample_corpus.cards[2],
        ]
        assert find_cards("villain", "lock", sample_corpus.cards) == []


class TestFuzzyTier:
    def test_misspelling_falls_back_to_fuzzy(self, sample_corpus, spider_man: Card) -> None:
        """'spidermann' has no exact or substring match; Spider-Man is 0.9 similar."""
        assert find_cards("", "Spidermann", sample_corpus.cards) == [spider_man]

    def test_custom_threshold(self, sample_corpus) -> None:
        assert find_cards("", "spidermann", sample_corpus.cards, fuzzy_threshold=0.95) == []

    def test_no_match(self, sample_corpus) -> None:
        assert find_cards("", "zzzzzzzz", sample_corpus.cards) == []

    def test_fuzzy_respects_type_filter(self, sample_corpus) -> None:
        assert find_cards("villain", "spidermann", sample_corpus.cards) == []


class TestGroupingFilters:
    def test_pack_exact(self, sample_corpus, spider_man: Card, rhino: Card) -> None:
        assert find_cards("pack", "core set", sample_corpus.cards) == [spider_man, rhino]

    def test_pack_contains(self, sample_corpus, spider_man: Card, rhino: Card) -> None:
        assert find_cards("pack", "core", sample_corpus.cards) == [spider_man, rhino]

    def test_pack_fuzzy(self, sample_corpus, spider_man: Card, rhino: Card) -> None:
        assert find_cards("pack", "core sett", sample_corpus.cards) == [spider_man, rhino]

    def test_card_added_once_for_several_packs(self, card_factory) -> None:
        reprinted = card_factory("Black Cat", packs=("Core Set", "Core Set Reprint"))

        assert find_cards("pack", "core", [reprinted]) == [reprinted]

    def test_first_matching_pack_decides_tier(self, card_factory) -> None:
        """A substring hit on the first pack stops the scan before an exact hit."""
        reprint_first = card_factory("Black Cat", packs=("Core Set Reprint", "Core Set"))
        core_first = card_factory("Rhino", packs=("Core Set", "Core Set Reprint"))

        result = find_cards("pack", "core set", [reprint_first, core_first])

        assert result == [core_first]

    def test_set_filter(self, sample_corpus, spider_man: Card) -> None:
        assert find_cards("set", "Spider-Man", sample_corpus.cards) == [spider_man]

    def test_set_filter_ignores_names(self, sample_corpus) -> None:
        assert find_cards("set", "lockbox", sample_corpus.cards) == []


class TestFilterHandling:
    def test_filter_is_case_insensitive(self, sample_corpus, lockjaw: Card) -> None:
        assert find_cards("ALLY", "lockjaw", sample_corpus.cards) == [lockjaw]

    def test_unrecognized_filter_searches_names(self, sample_corpus, rhino: Card) -> None:
        assert find_cards("hulk", "rhino", sample_corpus.cards) == [rhino]

    def test_card_without_faces_never_matches_type_filter(self) -> None:
        blank = Card(names=("Blank",))

        assert find_cards("ally", "blank", [blank]) == []
        assert find_cards("", "blank", [blank]) == [blank]


class TestEdgeCases:
    def test_empty_corpus(self) -> None:
        assert find_cards("", "lockjaw", []) == []

    def test_none_corpus(self) -> None:
        assert find_cards("", "lockjaw", None) == []

    def test_query_without_alphanumerics(self, sample_corpus) -> None:
        assert find_cards("", "!!!", sample_corpus.cards) == []
