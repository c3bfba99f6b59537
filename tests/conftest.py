from pathlib import Path

import pytest

from marvelbot.models.card import Card, CardSet, Face, Pack
from marvelbot.models.corpus import Corpus
from marvelbot.models.rule import Rule

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _make_card(
    *names: str,
    face_type: str = "Ally",
    packs: tuple[str, ...] = (),
    sets: tuple[str, ...] = (),
    url: str | None = None,
) -> Card:
    """Build a minimal card with one face per type."""
    return Card(
        names=names,
        packs=tuple(Pack(name=pack) for pack in packs),
        sets=tuple(CardSet(name=card_set) for card_set in sets),
        faces=(Face(name=names[0], type=face_type, marvelcdb_url=url),),
    )


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def lockjaw() -> Card:
    return _make_card(
        "Lockjaw",
        packs=("Ms. Marvel",),
        sets=("Ms. Marvel",),
        url="https://marvelcdb.com/card/05014",
    )


@pytest.fixture
def lockbox() -> Card:
    return _make_card("Lockbox", packs=("Homebrew Heroes",))


@pytest.fixture
def spider_man() -> Card:
    return _make_card(
        "Spider-Man",
        "Peter Parker",
        face_type="Hero",
        packs=("Core Set",),
        sets=("Spider-Man",),
        url="https://marvelcdb.com/card/01001a",
    )


@pytest.fixture
def rhino() -> Card:
    return _make_card("Rhino", face_type="Villain", packs=("Core Set",), sets=("Rhino",))


@pytest.fixture
def villain_phase() -> Rule:
    return Rule(
        name="Villain Phase",
        text="The villain phase is the second phase of each round.",
        related=("Player Phase",),
    )


@pytest.fixture
def sample_corpus(
    spider_man: Card,
    lockjaw: Card,
    lockbox: Card,
    rhino: Card,
    villain_phase: Rule,
) -> Corpus:
    """Small corpus covering each filter category."""
    return Corpus(
        cards=(spider_man, lockjaw, lockbox, rhino),
        rules=(villain_phase, Rule(name="Guard", text="Guard text.")),
    )


@pytest.fixture
def card_factory():
    """Build ad-hoc cards: card_factory("Name", face_type="Hero", packs=(...))."""
    return _make_card
