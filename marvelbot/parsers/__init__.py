from marvelbot.parsers.marvelcdb import (
    MarvelCDBError,
    convert_marvelcdb_card,
    convert_marvelcdb_cards,
    fetch_marvelcdb_cards,
)

__all__ = [
    "MarvelCDBError",
    "convert_marvelcdb_card",
    "convert_marvelcdb_cards",
    "fetch_marvelcdb_cards",
]
