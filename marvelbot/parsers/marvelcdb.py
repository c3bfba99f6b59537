"""
MarvelCDB card data parser.

Fetches card JSON from the MarvelCDB public API and converts each entry into
a corpus Card.

API: https://marvelcdb.com/api/public/cards/?_format=json&encounter=1
"""

import logging
import re
from typing import Any

import httpx

from marvelbot.models.card import Card, CardSet, Face, Pack
from marvelbot.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)

IMAGE_BASE_URL = "https://marvel-champions-cards.s3.us-west-2.amazonaws.com"

UNKNOWN_SKU = "Unknown"

# MarvelCDB pack name -> (display name, SKU)
PACK_SKUS: dict[str, tuple[str, str]] = {
    "Core Set": ("Core Set", "MC01en"),
    "The Green Goblin": ("The Green Goblin", "MC02en"),
    "The Wrecking Crew": ("The Wrecking Crew", "MC03en"),
    "Captain America": ("Captain America", "MC04en"),
    "Ms. Marvel": ("Ms. Marvel", "MC05en"),
    "Thor": ("Thor", "MC06en"),
    "Black Widow": ("Black Widow", "MC07en"),
    "Doctor Strange": ("Dr. Strange", "MC08en"),
    "Hulk": ("Hulk", "MC09en"),
    "The Rise of Red Skull": ("The Rise of Red Skull", "MC10en"),
    "The Once and Future Kang": ("The Once and Future Kang", "MC11en"),
    "Ant-man": ("Ant-Man", "MC12en"),
    "Wasp": ("Wasp", "MC13en"),
    "Quicksilver": ("Quicksilver", "MC14en"),
    "Scarlet Witch": ("Scarlet Witch", "MC15en"),
    "Galaxy's Most Wanted": ("Galaxy’s Most Wanted", "MC16en"),
    "Star-Lord": ("Star-Lord", "MC17en"),
    "Gamora": ("Gamora", "MC18en"),
    "Drax": ("Drax", "MC19en"),
    "Venom": ("Venom", "MC20en"),
    "Ronan Modular Set": ("Ronan Modular Set", "PNP01en"),
}

ASPECTS = frozenset(["Aggression", "Basic", "Justice", "Leadership", "Protection"])

# MarvelCDB does not track keywords; they are detected in the card text.
# Entries ending in "." only match the keyword form, not the word in prose.
KEYWORD_MARKERS = (
    "Guard.",
    "Hinder",
    "Incite",
    "Overkill.",
    "Patrol.",
    "Peril.",
    "Permanent.",
    "Piercing.",
    "Quickstrike.",
    "Ranged.",
    "Restricted.",
    "Retaliate",
    "Setup.",
    "Stalwart.",
    "Surge.",
    "Team-Up.",
    "Team Up",
    "Toughness.",
    "Uses",
    "Victory",
    "Villainous.",
)

# Encounter cards of these types can carry boost icons; MarvelCDB reports
# "no boost" and "zero boost" the same way
_BOOSTABLE_ENCOUNTER_TYPES = frozenset(
    ["attachment", "minion", "obligation", "side_scheme", "treachery"]
)

_SCHEME_TYPE_CODES = frozenset(["main_scheme", "side_scheme"])

# Type codes whose display form is not a plain title-casing
_FACE_TYPE_NAMES = {"alter_ego": "Alter-Ego"}

_TRAIT_SPLIT = re.compile(r"(?<=\.)\s+")


class MarvelCDBError(KnownError):
    """Raised when MarvelCDB cannot be reached or returns unusable data."""

    def __init__(self, detail: str):
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message="MarvelCDB card data could not be retrieved.",
            detail=detail,
            suggestion="Try again later.",
            status_code=502,
        )


async def fetch_marvelcdb_cards(
    base_url: str,
    client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    """
    Fetch every player and encounter card from MarvelCDB.

    Args:
        base_url: API root, e.g. https://marvelcdb.com/api/public
        client: Optional client to reuse; a short-lived one is created otherwise

    Returns:
        Raw card objects as returned by the API

    Raises:
        MarvelCDBError: If the request fails or the payload is not a list
    """
    url = f"{base_url.rstrip('/')}/cards/"
    params = {"_format": "json", "encounter": "1"}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=30.0) as owned_client:
                response = await owned_client.get(url, params=params)
        else:
            response = await client.get(url, params=params)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as e:
        raise MarvelCDBError(f"Request to {url} failed: {e}") from e
    except ValueError as e:
        raise MarvelCDBError(f"Invalid JSON from {url}: {e}") from e

    if not isinstance(data, list):
        raise MarvelCDBError(f"Expected a list of cards from {url}, got {type(data).__name__}")

    logger.info("MARVELCDB_FETCHED", extra={"cards": len(data)})
    return data


# =============================================================================
# CONVERSION
# =============================================================================


def _face_type(type_code: str) -> str:
    """'main_scheme' -> 'Main Scheme', 'alter_ego' -> 'Alter-Ego'."""
    if type_code in _FACE_TYPE_NAMES:
        return _FACE_TYPE_NAMES[type_code]
    return type_code.replace("_", " ").title()


def _parse_traits(traits: str | None) -> tuple[str, ...]:
    """
    Split a MarvelCDB traits string such as "Avenger. S.H.I.E.L.D. Spy.".

    Single-word traits lose their trailing period; acronyms keep theirs.
    """
    if not traits:
        return ()
    parsed: list[str] = []
    for trait in _TRAIT_SPLIT.split(traits.strip()):
        trait = trait.strip()
        if not trait:
            continue
        if trait.count(".") == 1:
            trait = trait.rstrip(".")
        parsed.append(trait)
    return tuple(parsed)


def _detect_keywords(text: str | None) -> tuple[str, ...]:
    if not text:
        return ()
    keywords: list[str] = []
    for marker in KEYWORD_MARKERS:
        if marker in text:
            keyword = marker.rstrip(".")
            if keyword == "Team Up":
                keyword = "Team-Up"
            if keyword not in keywords:
                keywords.append(keyword)
    return tuple(keywords)


def _markdown(text: str | None) -> str | None:
    """Convert MarvelCDB's HTML emphasis to markdown."""
    if text is None:
        return None
    return (
        text.replace("<b>", "**")
        .replace("</b>", "**")
        .replace("<i>", "_")
        .replace("</i>", "_")
    )


def _boost_icons(data: dict[str, Any]) -> int | None:
    boost = data.get("boost")
    if boost is not None:
        return int(boost)
    if (
        data.get("faction_code") == "encounter"
        and data.get("type_code") in _BOOSTABLE_ENCOUNTER_TYPES
    ):
        return 0
    return None


def _image_url(sku: str, data: dict[str, Any], back: bool = False) -> str | None:
    """
    Build the card image URL from the pack SKU and card position.

    Cards whose MarvelCDB URL ends in a letter (e.g. 01040a) use that letter
    as the side suffix. Main schemes without one are printed A (back) / B
    (front).
    """
    url = data.get("url")
    if sku == UNKNOWN_SKU or not url:
        return None
    position = data.get("position")
    last = str(url)[-1]
    if last.isalpha():
        suffix = last.upper()
    elif data.get("type_code") == "main_scheme":
        suffix = "A" if back else "B"
    else:
        suffix = ""
    return f"{IMAGE_BASE_URL}/{sku.lower()}/{position}{suffix}.png"


def _build_face(data: dict[str, Any], sku: str, back: bool = False) -> Face:
    faction = data.get("faction_name")
    health = data.get("health")
    per_player = bool(data.get("health_per_hero"))
    url = data.get("url")

    return Face(
        name=str(data.get("name", "")),
        type=_face_type(str(data.get("type_code", ""))),
        subtitle=data.get("subname"),
        cost=data.get("cost"),
        unique=bool(data.get("is_unique", False)),
        aspects=(faction,) if faction in ASPECTS else (),
        traits=_parse_traits(data.get("traits")),
        keywords=_detect_keywords(data.get("text")),
        text=_markdown(data.get("back_text") if back else data.get("text")),
        flavor_text=data.get("back_flavor") if back else data.get("flavor"),
        recover=data.get("recover"),
        scheme=data.get("scheme"),
        thwart=data.get("thwart"),
        attack=data.get("attack"),
        defense=data.get("defense"),
        hand_size=data.get("hand_size"),
        hit_points=health if health is not None and not per_player else None,
        hit_points_per_player=health if health is not None and per_player else None,
        boost_icons=_boost_icons(data),
        image_url=_image_url(sku, data, back=back),
        marvelcdb_url=str(url).replace("\\", "") if url else None,
    )


def convert_marvelcdb_card(data: dict[str, Any]) -> Card:
    """
    Convert one MarvelCDB card object into a Card.

    Double-sided main schemes get a second face built from the back text.

    Raises:
        ValueError: If the card has no name
    """
    pack_name = str(data.get("pack_name", ""))
    display_name, sku = PACK_SKUS.get(pack_name, (pack_name, UNKNOWN_SKU))
    type_code = data.get("type_code")

    faces = [_build_face(data, sku)]
    if data.get("double_sided") and type_code == "main_scheme":
        faces.append(_build_face(data, sku, back=True))

    set_name = data.get("card_set_name")
    name = data.get("name")

    return Card(
        names=(str(name),) if name else (),
        packs=(
            Pack(
                name=display_name,
                sku=sku,
                position=data.get("position"),
                quantity=data.get("quantity"),
            ),
        ),
        sets=(CardSet(name=str(set_name)),) if set_name else (),
        faces=tuple(faces),
        horizontal=type_code in _SCHEME_TYPE_CODES,
    )


def convert_marvelcdb_cards(raw_cards: list[dict[str, Any]]) -> list[Card]:
    """Convert a MarvelCDB payload, skipping entries without a name."""
    cards: list[Card] = []
    for data in raw_cards:
        try:
            cards.append(convert_marvelcdb_card(data))
        except ValueError:
            logger.warning("MARVELCDB_SKIPPED_CARD", extra={"code": data.get("code")})
    return cards
