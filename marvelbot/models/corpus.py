"""
Corpus. The in-memory card and rule collection.

The corpus is built once by the loader and never mutated. A data refresh
builds a new Corpus and swaps it into the CorpusStore; readers holding the
previous reference keep a consistent view until they finish.
"""

import logging
from dataclasses import dataclass, field
from threading import Lock

from marvelbot.models.card import Card
from marvelbot.models.rule import Rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Corpus:
    """Read-only card and rule records in load order."""

    cards: tuple[Card, ...] = ()
    rules: tuple[Rule, ...] = ()

    def __len__(self) -> int:
        return len(self.cards) + len(self.rules)

    @property
    def is_empty(self) -> bool:
        return not self.cards and not self.rules


@dataclass
class CorpusStore:
    """
    Holder for the active corpus.

    `current` is a plain attribute read; `refresh` replaces the reference
    under a lock so concurrent refreshes are serialized.
    """

    _corpus: Corpus = field(default_factory=Corpus)
    _lock: Lock = field(default_factory=Lock)
    _generation: int = 0

    @property
    def current(self) -> Corpus:
        return self._corpus

    @property
    def generation(self) -> int:
        """Number of refreshes applied since construction."""
        return self._generation

    def refresh(self, corpus: Corpus) -> Corpus:
        """
        Atomically replace the active corpus.

        Returns:
            The corpus that was active before the swap
        """
        with self._lock:
            previous = self._corpus
            self._corpus = corpus
            self._generation += 1

        logger.info(
            "CORPUS_REFRESHED",
            extra={
                "generation": self._generation,
                "cards": len(corpus.cards),
                "rules": len(corpus.rules),
                "previous_cards": len(previous.cards),
            },
        )
        return previous
