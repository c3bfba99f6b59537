"""Tests for routing chat messages to card and rule lookup."""

from marvelbot.models.card import Card
from marvelbot.models.corpus import Corpus
from marvelbot.models.rule import Rule
from marvelbot.services.dispatcher import (
    MessageReply,
    extract_queries,
    format_card_link,
    format_reply,
    format_rule,
    handle_message,
)


class TestExtractQueries:
    def test_bracket_references_take_priority(self) -> None:
        assert extract_queries("[[Rhino]]; [[Lockjaw]]") == ["Rhino", "Lockjaw"]

    def test_falls_back_to_semicolons(self) -> None:
        assert extract_queries("Relentless Assault;Follow Through") == [
            "Relentless Assault",
            "Follow Through",
        ]


class TestHandleMessage:
    def test_cards_and_rules(
        self, sample_corpus: Corpus, lockjaw: Card, villain_phase: Rule
    ) -> None:
        reply = handle_message("Play [[Lockjaw]] in the [[rule:Villain Phase]]", sample_corpus)

        assert reply.cards == [lockjaw]
        assert reply.rules == [villain_phase]
        assert reply.unmatched == []
        assert reply.rejected == []
        assert reply.has_results

    def test_semicolon_list(self, sample_corpus: Corpus, rhino: Card, lockjaw: Card) -> None:
        reply = handle_message("Rhino;Lockjaw", sample_corpus)

        assert reply.cards == [rhino, lockjaw]

    def test_filtered_reference(
        self, sample_corpus: Corpus, lockjaw: Card, lockbox: Card
    ) -> None:
        reply = handle_message("[[ally:lock]]", sample_corpus)

        assert reply.cards == [lockjaw, lockbox]

    def test_unmatched_and_rejected(self, sample_corpus: Corpus) -> None:
        reply = handle_message("[[ab]] [[zzzzzz]] [[rule:Villain Phaze]]", sample_corpus)

        assert reply.rejected == ["ab"]
        assert reply.unmatched == ["zzzzzz", "rule:Villain Phaze"]
        assert not reply.has_results

    def test_custom_minimum_length(self, sample_corpus: Corpus, rhino: Card) -> None:
        reply = handle_message("[[rhino]] [[lock]]", sample_corpus, min_query_length=5)

        assert reply.cards == [rhino]
        assert reply.rejected == ["lock"]

    def test_empty_corpus(self) -> None:
        reply = handle_message("[[Lockjaw]]", Corpus())

        assert reply.unmatched == ["Lockjaw"]

    def test_empty_message(self, sample_corpus: Corpus) -> None:
        reply = handle_message("", sample_corpus)

        assert reply == MessageReply()


class TestFormatting:
    def test_card_link(self, lockjaw: Card, lockbox: Card) -> None:
        assert format_card_link(lockjaw) == "[Lockjaw](https://marvelcdb.com/card/05014)"
        assert format_card_link(lockbox) == "Lockbox"

    def test_rule(self, villain_phase: Rule) -> None:
        text = format_rule(villain_phase)

        assert text.startswith("**Villain Phase**\n")
        assert text.endswith("Related: Player Phase")

    def test_reply_sections(self, sample_corpus: Corpus) -> None:
        reply = handle_message(
            "[[rule:villain phase]] [[Lockjaw]] [[Lockbox]] [[zzzzzz]] [[ab]]", sample_corpus
        )

        sections = format_reply(reply).split("\n\n")

        assert sections[0].startswith("**Villain Phase**")
        assert sections[1] == "[Lockjaw](https://marvelcdb.com/card/05014)\nLockbox"
        assert sections[2] == "No matches found: zzzzzz"
        assert sections[3] == "Search terms must be at least 3 characters: ab"

    def test_empty_reply(self) -> None:
        assert format_reply(MessageReply()) == ""
