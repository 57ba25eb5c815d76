"""Randomized insertion of short discourse markers at sentence heads.

Interjections vary sentence-initial rhythm. Insertion is strictly additive:
an interjection and a space are placed in front of a sentence, and nothing
else in the text moves. The random source is injectable so runs can be made
reproducible with a seed.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from humanize_diff.config import HumanizerConfig
from humanize_diff.rewrite.phrases import INTERJECTIONS
from humanize_diff.text.analyzer import TextAnalyzer

logger = logging.getLogger(__name__)


class Intensity(str, Enum):
    LIGHT = "light"
    BALANCED = "balanced"
    HEAVY = "heavy"

    @classmethod
    def parse(cls, value: Union[str, "Intensity", None]) -> "Intensity":
        """Map a raw value to an intensity, falling back to balanced."""
        try:
            return cls(getattr(value, "value", value))
        except ValueError:
            return cls.BALANCED


@dataclass(frozen=True)
class Interjection:
    """A catalog entry; ``weight`` scales its chance of being picked."""

    text: str
    weight: float = 1.0


@lru_cache(maxsize=1)
def default_catalog() -> Tuple[Interjection, ...]:
    """Built-in interjection catalog, loaded once per process."""
    return tuple(Interjection(text, weight) for text, weight in INTERJECTIONS)


def build_catalog(entries: Iterable) -> Tuple[Interjection, ...]:
    """Build a catalog from Interjection objects, strings or (text, weight) pairs.

    Blank texts and non-positive weights are skipped with a warning. Entries
    repeating an earlier text are merged into it, their weights summed.
    """
    catalog: List[Interjection] = []
    positions = {}
    for entry in entries:
        if isinstance(entry, Interjection):
            item = entry
        elif isinstance(entry, str):
            item = Interjection(entry)
        else:
            text, weight = entry
            item = Interjection(text, float(weight))

        if not item.text or not item.text.strip() or item.weight <= 0:
            logger.warning("Skipping interjection %r", item)
            continue
        text = item.text.strip()
        if text in positions:
            logger.warning("Merging duplicate interjection %r", text)
            index = positions[text]
            catalog[index] = Interjection(text, catalog[index].weight + item.weight)
            continue
        positions[text] = len(catalog)
        catalog.append(Interjection(text, item.weight))
    return tuple(catalog)


class InterjectionInjector:
    """Prepends interjections to sentences with an intensity-driven probability."""

    def __init__(
        self,
        catalog: Optional[Sequence[Interjection]] = None,
        config: Optional[HumanizerConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the injector.

        Args:
            catalog: Interjections to draw from; the built-in catalog if omitted
            config: Supplies the per-intensity probabilities
            rng: Random source; seeded from ``config.random_seed`` if omitted
        """
        self.catalog = tuple(catalog) if catalog is not None else default_catalog()
        self.config = config or HumanizerConfig()
        self.rng = rng or random.Random(self.config.random_seed)

    def _choose(self, previous: Optional[Interjection]) -> Optional[Interjection]:
        pool: List[Interjection] = [
            item for item in self.catalog if previous is None or item.text != previous.text
        ]
        if not pool:
            return None
        return self.rng.choices(pool, weights=[item.weight for item in pool], k=1)[0]

    def inject(self, text: str, intensity: Union[str, Intensity] = Intensity.BALANCED) -> str:
        """Insert interjections at sentence heads.

        Each sentence independently receives an interjection with the
        probability configured for ``intensity`` (unknown values use the
        balanced probability). The interjection used on the immediately
        preceding sentence is never reused for the next one.

        Args:
            text: Text to decorate
            intensity: "light", "balanced" or "heavy"

        Returns:
            Text with interjections inserted; unchanged if empty
        """
        spans = TextAnalyzer(text).sentence_spans
        if not spans or not self.catalog:
            return text

        probability = self.config.probability_for(Intensity.parse(intensity).value)
        insertions = []
        previous: Optional[Interjection] = None
        for start, _ in spans:
            if self.rng.random() >= probability:
                previous = None
                continue
            chosen = self._choose(previous)
            if chosen is not None:
                insertions.append((start, chosen.text + " "))
            previous = chosen

        if not insertions:
            return text

        parts = []
        cursor = 0
        for offset, inserted in insertions:
            parts.append(text[cursor:offset])
            parts.append(inserted)
            cursor = offset
        parts.append(text[cursor:])
        logger.debug("Inserted %d interjection(s) into %d sentence(s)", len(insertions), len(spans))
        return "".join(parts)


def inject_interjections(
    text: str,
    intensity: Union[str, Intensity] = Intensity.BALANCED,
    rng: Optional[random.Random] = None,
    config: Optional[HumanizerConfig] = None,
) -> str:
    """Convenience wrapper around ``InterjectionInjector.inject``."""
    return InterjectionInjector(config=config, rng=rng).inject(text, intensity)
