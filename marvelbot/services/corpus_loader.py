"""
Corpus loader.

Reads card and rule records from YAML or JSON files and builds a Corpus.

Layout (all directories walked recursively, files in sorted order):
- cards directories: each file holds a list of cards
- rules directory: each file holds one rule or a list of rules

Directories that do not exist are skipped with a warning so the service can
start with an empty corpus; files that exist but cannot be parsed raise
CorpusLoadError naming the file.
"""

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from marvelbot.models.card import Card, CardSet, DeckType, Face, Pack
from marvelbot.models.corpus import Corpus
from marvelbot.models.failure import FailureKind, KnownError
from marvelbot.models.rule import Rule

logger = logging.getLogger(__name__)

CORPUS_SUFFIXES = (".yaml", ".yml", ".json")

# Face keys whose YAML name differs from the Face attribute
_FACE_KEY_ALIASES = {"aspect": "aspects"}

_FACE_SEQUENCE_FIELDS = ("aspects", "traits", "keywords")
_FACE_FIELDS = tuple(field.name for field in fields(Face))

_DECK_ORDER = list(DeckType)


class CorpusLoadError(KnownError):
    """Raised when a corpus file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(
            kind=FailureKind.CORPUS_UNAVAILABLE,
            message="Card data could not be loaded.",
            detail=f"{path}: {reason}",
            suggestion="Fix or remove the file and refresh the corpus.",
            status_code=503,
        )


# =============================================================================
# RECORD CONVERSION
# =============================================================================


def _as_text(value: Any, field_name: str) -> str:
    """Accept strings and numbers (YAML reads `1602` as an int); reject the rest."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise TypeError(f"{field_name} must be a string, got {type(value).__name__}")


def _as_optional_text(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    return _as_text(value, field_name)


def _as_strings(value: Any, field_name: str) -> tuple[str, ...]:
    """A single string or a list of strings."""
    if value is None:
        return ()
    if isinstance(value, list | tuple):
        return tuple(_as_text(item, field_name) for item in value)
    return (_as_text(value, field_name),)


def _as_mapping(value: Any, field_name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"{field_name} must be a mapping, got {type(value).__name__}")
    return value


def _as_mappings(value: Any, field_name: str) -> list[dict[str, Any]]:
    """A list of mappings; None is empty."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{field_name} must be a list, got {type(value).__name__}")
    return [_as_mapping(item, field_name) for item in value]


def _parse_deck(value: Any) -> DeckType | None:
    """
    Accept a deck name ("Encounter") or its ordinal (1).

    Raises:
        ValueError: If the name is unknown or the ordinal out of range
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"deck must be a name or ordinal, got {value!r}")
    if isinstance(value, int):
        if not 0 <= value < len(_DECK_ORDER):
            raise ValueError(f"deck ordinal {value} out of range 0-{len(_DECK_ORDER) - 1}")
        return _DECK_ORDER[value]
    return DeckType(_as_text(value, "deck"))


def face_from_dict(data: dict[str, Any]) -> Face:
    """
    Build a Face from a YAML/JSON mapping, ignoring unknown keys.

    Raises:
        TypeError: If the face is not a mapping, lacks a name or type, or a
            name, type or sequence field holds something other than text
    """
    kwargs: dict[str, Any] = {}
    for raw_key, value in _as_mapping(data, "face").items():
        key = _FACE_KEY_ALIASES.get(raw_key, raw_key)
        if key not in _FACE_FIELDS or value is None:
            continue
        if key in _FACE_SEQUENCE_FIELDS:
            value = _as_strings(value, f"face {raw_key}")
        elif key in ("name", "type"):
            value = _as_text(value, f"face {key}")
        kwargs[key] = value
    return Face(**kwargs)


def card_from_dict(data: dict[str, Any]) -> Card:
    """
    Build a Card from a YAML/JSON mapping.

    Raises:
        KeyError: If a pack or set has no name
        TypeError: If a field has the wrong shape
        ValueError: If the card has no names or an unknown deck
    """
    return Card(
        names=_as_strings(data.get("names"), "names"),
        packs=tuple(
            Pack(
                name=_as_text(pack["name"], "pack name"),
                sku=_as_optional_text(pack.get("sku"), "pack sku") or "Unknown",
                position=pack.get("position"),
                quantity=pack.get("quantity"),
            )
            for pack in _as_mappings(data.get("packs"), "packs")
        ),
        sets=tuple(
            CardSet(name=_as_text(card_set["name"], "set name"))
            for card_set in _as_mappings(data.get("sets"), "sets")
        ),
        faces=tuple(face_from_dict(face) for face in _as_mappings(data.get("faces"), "faces")),
        deck=_parse_deck(data.get("deck")),
        horizontal=bool(data.get("horizontal", False)),
    )


def rule_from_dict(data: dict[str, Any]) -> Rule:
    """Build a Rule from a YAML/JSON mapping."""
    name = data.get("name")
    if not name:
        raise ValueError("Rule must have a name")
    return Rule(
        name=_as_text(name, "rule name"),
        text=_as_text(data.get("rule_text") or data.get("text") or "", "rule text"),
        text2=_as_optional_text(data.get("rule_text_2") or data.get("text2"), "rule text2"),
        version=_as_optional_text(data.get("version"), "rule version"),
        related=_as_strings(data.get("related"), "related"),
    )


def card_to_dict(card: Card) -> dict[str, Any]:
    """Serialize a Card in the corpus file format, omitting empty fields."""
    faces: list[dict[str, Any]] = []
    for face in card.faces:
        face_data: dict[str, Any] = {}
        for key in _FACE_FIELDS:
            value = getattr(face, key)
            if value is None or value == ():
                continue
            if key == "unique" and not value:
                continue
            out_key = "aspect" if key == "aspects" else key
            face_data[out_key] = list(value) if isinstance(value, tuple) else value
        faces.append(face_data)

    data: dict[str, Any] = {"names": list(card.names)}
    if card.packs:
        data["packs"] = [
            {
                key: value
                for key, value in (
                    ("name", pack.name),
                    ("sku", pack.sku),
                    ("position", pack.position),
                    ("quantity", pack.quantity),
                )
                if value is not None
            }
            for pack in card.packs
        ]
    if card.sets:
        data["sets"] = [{"name": card_set.name} for card_set in card.sets]
    if faces:
        data["faces"] = faces
    if card.deck is not None:
        data["deck"] = card.deck.value
    if card.horizontal:
        data["horizontal"] = True
    return data


# =============================================================================
# FILE LOADING
# =============================================================================


def walk_corpus_files(directory: Path) -> list[Path]:
    """Return every corpus file under `directory`, sorted by path."""
    return sorted(
        path
        for path in directory.rglob("*")
        if path.is_file() and path.suffix.lower() in CORPUS_SUFFIXES
    )


def _read_file(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise CorpusLoadError(path, str(e)) from e


def _as_records(path: Path, data: Any) -> list[dict[str, Any]]:
    """Files hold either one mapping or a list of mappings."""
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list) and all(isinstance(item, dict) for item in data):
        return data
    raise CorpusLoadError(path, "expected a mapping or a list of mappings")


def read_cards(directory: Path) -> list[Card]:
    """
    Read all cards under a directory.

    Raises:
        CorpusLoadError: If a file cannot be parsed or holds an invalid card
    """
    if not directory.is_dir():
        logger.warning("CORPUS_DIR_MISSING", extra={"path": str(directory)})
        return []

    cards: list[Card] = []
    for path in walk_corpus_files(directory):
        for record in _as_records(path, _read_file(path)):
            try:
                cards.append(card_from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                raise CorpusLoadError(path, f"invalid card: {e}") from e
    return cards


def read_rules(directory: Path) -> list[Rule]:
    """
    Read all rules under a directory.

    Raises:
        CorpusLoadError: If a file cannot be parsed or holds an invalid rule
    """
    if not directory.is_dir():
        logger.warning("CORPUS_DIR_MISSING", extra={"path": str(directory)})
        return []

    rules: list[Rule] = []
    for path in walk_corpus_files(directory):
        for record in _as_records(path, _read_file(path)):
            try:
                rules.append(rule_from_dict(record))
            except (TypeError, ValueError) as e:
                raise CorpusLoadError(path, f"invalid rule: {e}") from e
    return rules


def load_corpus(card_dirs: Sequence[Path] | Iterable[Path], rules_dir: Path | None) -> Corpus:
    """
    Load a complete corpus.

    Args:
        card_dirs: Card directories, read in order (official before homebrew)
        rules_dir: Rules directory, or None for no rules

    Returns:
        A new Corpus

    Raises:
        CorpusLoadError: If any file is malformed
    """
    cards: list[Card] = []
    for directory in card_dirs:
        cards.extend(read_cards(Path(directory)))

    rules = read_rules(Path(rules_dir)) if rules_dir is not None else []

    logger.info("CORPUS_LOADED", extra={"cards": len(cards), "rules": len(rules)})
    return Corpus(cards=tuple(cards), rules=tuple(rules))


def write_cards(cards: Sequence[Card], path: Path) -> Path:
    """Write cards as a YAML list, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            [card_to_dict(card) for card in cards],
            f,
            allow_unicode=True,
            sort_keys=False,
        )
    return path
