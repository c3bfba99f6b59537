"""
Download MarvelCDB card data.

Run this job to refresh the official card files the corpus is loaded from:

    python -m marvelbot.jobs.download_cards
"""

import asyncio
import logging
from pathlib import Path

from marvelbot.config import settings
from marvelbot.parsers.marvelcdb import convert_marvelcdb_cards, fetch_marvelcdb_cards
from marvelbot.services.corpus_loader import write_cards

logger = logging.getLogger(__name__)

OUTPUT_FILENAME = "marvelcdb.yaml"


async def run_download(output_path: Path | None = None) -> Path:
    """
    Fetch MarvelCDB cards, convert them and write them as YAML.

    Args:
        output_path: Where to write. Defaults to the first cards directory.

    Returns:
        Path to the written file.
    """
    if output_path is None:
        output_path = settings.cards_dirs[0] / OUTPUT_FILENAME

    logger.info("Downloading MarvelCDB cards from %s...", settings.marvelcdb_url)

    try:
        raw_cards = await fetch_marvelcdb_cards(settings.marvelcdb_url)
    except Exception as e:
        logger.error("Failed to download MarvelCDB cards: %s", e)
        raise

    cards = convert_marvelcdb_cards(raw_cards)
    path = write_cards(cards, output_path)
    logger.info("Wrote %d cards to %s", len(cards), path)
    return path


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_download())


if __name__ == "__main__":
    main()
