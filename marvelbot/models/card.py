"""
Card Models.

A Card is one physical Marvel Champions card. Peter Parker/Spider-Man is a
single card known by two names; Rhino I, Rhino II and Rhino III are three
separate cards.

INVARIANTS:
- Every Card has at least one name
- All models are frozen (immutable after construction)
- Sequence fields are tuples so records can be shared across threads
"""

from dataclasses import dataclass
from enum import Enum

SCHEME_TYPES = frozenset({"main scheme", "side scheme"})


class DeckType(str, Enum):
    """Which deck a card belongs to."""

    PLAYER = "Player"
    ENCOUNTER = "Encounter"
    VILLAIN = "Villain"
    MAIN_SCHEME = "Main Scheme"
    INVOCATION = "Invocation"


@dataclass(frozen=True, slots=True)
class Pack:
    """
    A retail product containing the card, such as the Core Set or a hero pack.

    Attributes:
        name: Pack name (e.g., "The Rise of Red Skull")
        sku: Stable product code (e.g., "MC10en"); "Unknown" when unmapped
        position: Card number within the pack
        quantity: Copies of the card in the pack
    """

    name: str
    sku: str = "Unknown"
    position: int | None = None
    quantity: int | None = None


@dataclass(frozen=True, slots=True)
class CardSet:
    """A named subset of cards, such as the Spider-Man hero deck or Expert."""

    name: str


@dataclass(frozen=True, slots=True)
class Face:
    """
    One printed side of a card.

    Heroes have an alter-ego and a hero side, some villains and environments
    are double-sided; most cards have a single face.
    """

    name: str
    type: str
    subtitle: str | None = None
    cost: int | None = None
    unique: bool = False
    aspects: tuple[str, ...] = ()
    traits: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    text: str | None = None
    flavor_text: str | None = None
    recover: int | None = None
    scheme: int | None = None
    thwart: int | None = None
    attack: int | None = None
    defense: int | None = None
    hand_size: int | None = None
    hit_points: int | None = None
    hit_points_per_player: int | None = None
    stage: str | None = None
    boost_icons: int | None = None
    image_url: str | None = None
    marvelcdb_url: str | None = None
    illustrator: str | None = None

    @property
    def is_scheme(self) -> bool:
        """True for main and side schemes."""
        return self.type.lower() in SCHEME_TYPES


@dataclass(frozen=True, slots=True)
class Card:
    """
    A physical card with every name it is known by.

    Attributes:
        names: Names the card is known by, display name first
        packs: Packs in which the card has appeared
        sets: Sets in which the card is a member
        faces: Printed sides of the card
        deck: Deck type, if known
        horizontal: Whether the card is printed landscape (schemes)
    """

    names: tuple[str, ...]
    packs: tuple[Pack, ...] = ()
    sets: tuple[CardSet, ...] = ()
    faces: tuple[Face, ...] = ()
    deck: DeckType | None = None
    horizontal: bool = False

    def __post_init__(self) -> None:
        if not self.names:
            raise ValueError("Card must have at least one name")

    @property
    def display_name(self) -> str:
        return self.names[0]

    @property
    def is_scheme(self) -> bool:
        return any(face.is_scheme for face in self.faces)

    @property
    def image_urls(self) -> tuple[str, ...]:
        """Image URLs for every face that has one, in face order."""
        return tuple(face.image_url for face in self.faces if face.image_url)

    @property
    def marvelcdb_url(self) -> str | None:
        for face in self.faces:
            if face.marvelcdb_url:
                return face.marvelcdb_url
        return None

    def has_face_type(self, face_type: str) -> bool:
        """Case-insensitive check for a face of the given type."""
        wanted = face_type.lower()
        return any(face.type.lower() == wanted for face in self.faces)
