"""Deterministic rule-based rewrite engine for phrase-level text humanization.

This module applies the phrase dictionary and a small set of mechanical
normalizations to raw text. Every step is a plain function so it can be
tested on its own; ``DeterministicRewriter`` runs them in order:

1. Phrase substitution from the dictionary's non-overlapping spans
2. Contractions ("do not" -> "don't") over the substituted text
3. Capitalization repair at the text start and after sentence punctuation
4. Whitespace collapse and trim
"""

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional, Tuple

from humanize_diff.rewrite.dictionary import MatchSpan, PhraseDictionary, build_dictionary
from humanize_diff.rewrite.phrases import CONTRACTION_RULES, PHRASE_RULES, TRANSITION_RULES

logger = logging.getLogger(__name__)


@dataclass
class RewriteResult:
    """Output of one deterministic rewrite.

    Attributes:
        text: The rewritten text
        spans: Phrase matches, as offsets into the *input* text
        contraction_count: Number of contractions applied in step 2
    """

    text: str
    spans: List[MatchSpan] = field(default_factory=list)
    contraction_count: int = 0


def match_case(matched: str, replacement: str) -> str:
    """Carry the case of the matched text over to its replacement.

    All-caps matches give an all-caps replacement; otherwise only the first
    letter is adjusted. A replacement that starts with an acronym or with
    "I" keeps its own case when the match is lower-case.

    Args:
        matched: Text consumed by the rule
        replacement: The rule's replacement

    Returns:
        Replacement with adjusted case
    """
    if not replacement or not matched:
        return replacement

    cased = [ch for ch in matched if ch.isalpha()]
    if len(cased) > 1 and all(ch.isupper() for ch in cased):
        return replacement.upper()

    first = matched.lstrip()[:1]
    if first.isupper() and replacement[0].islower():
        return replacement[0].upper() + replacement[1:]
    if first.islower() and replacement[0].isupper():
        head = replacement.split()[0]
        # "AI", "I'm" and other intentional capitals stay as written
        if len(head) > 1 and head[1].islower():
            return replacement[0].lower() + replacement[1:]
    return replacement


def substitute_spans(text: str, spans: List[MatchSpan], dictionary: PhraseDictionary) -> str:
    """Replace each span with its rule's replacement.

    Spans are substituted right to left so that earlier offsets stay valid.

    Args:
        text: Text the spans were found in
        spans: Non-overlapping spans in ascending order
        dictionary: Dictionary the spans' rule ids refer to

    Returns:
        Text with every span substituted
    """
    parts = []
    cursor = len(text)
    for span in reversed(spans):
        parts.append(text[span.end:cursor])
        replacement = dictionary.rule(span.rule_id).replacement
        parts.append(match_case(text[span.start:span.end], replacement))
        cursor = span.start
    parts.append(text[:cursor])
    return "".join(reversed(parts))


def apply_contractions(text: str, contractions: PhraseDictionary) -> Tuple[str, int]:
    """Contract auxiliary + "not" pairs and similar fixed phrases.

    Args:
        text: Text to contract, usually the phrase-substituted text
        contractions: Dictionary holding the contraction table

    Returns:
        Tuple of (contracted text, number of contractions applied)
    """
    spans = contractions.find_all_matches(text)
    if not spans:
        return text, 0
    return substitute_spans(text, spans, contractions), len(spans)


def repair_capitalization(text: str) -> str:
    """Capitalize the first character of the text and of every sentence.

    A sentence starts after ``.``, ``!`` or ``?`` followed by whitespace.
    """
    if not text:
        return text

    def capitalize_sentence_start(match):
        return match.group(1) + match.group(2).upper()

    text = re.sub(r"([.!?]\s+)(\w)", capitalize_sentence_start, text)

    # Capitalize first letter of entire text if it's lowercase
    lead = len(text) - len(text.lstrip())
    if lead < len(text) and text[lead].islower():
        text = text[:lead] + text[lead].upper() + text[lead + 1:]
    return text


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim the ends."""
    return re.sub(r"\s+", " ", text).strip()


class DeterministicRewriter:
    """Applies the phrase dictionary and normalizations to text.

    Instances hold only immutable dictionaries and can be shared across
    threads and concurrent pipeline runs.
    """

    def __init__(
        self,
        dictionary: Optional[PhraseDictionary] = None,
        contractions: Optional[PhraseDictionary] = None,
    ):
        """Initialize the rewriter.

        Args:
            dictionary: Phrase dictionary; the built-in one if omitted
            contractions: Contraction table; the built-in one if omitted
        """
        self.dictionary = dictionary if dictionary is not None else default_phrase_dictionary()
        self.contractions = (
            contractions if contractions is not None else default_contraction_dictionary()
        )

    @classmethod
    def from_bundle(cls, bundle) -> "DeterministicRewriter":
        """Build a rewriter from a loaded ``RuleBundle``."""
        return cls(
            dictionary=build_dictionary(bundle.phrase_rules),
            contractions=build_dictionary(bundle.contraction_rules),
        )

    def rewrite(self, text: str) -> RewriteResult:
        """Rewrite text and report which spans of the input were matched.

        Args:
            text: Raw input text

        Returns:
            RewriteResult; empty or whitespace-only input gives empty text
            and no spans
        """
        if not text or not text.strip():
            return RewriteResult(text="")

        spans = self.dictionary.find_all_matches(text)
        substituted = substitute_spans(text, spans, self.dictionary)
        contracted, contraction_count = apply_contractions(substituted, self.contractions)
        rewritten = collapse_whitespace(repair_capitalization(contracted))

        logger.debug(
            "Rewrote text: %d phrase matches, %d contractions", len(spans), contraction_count
        )
        return RewriteResult(text=rewritten, spans=spans, contraction_count=contraction_count)


@lru_cache(maxsize=1)
def default_phrase_dictionary() -> PhraseDictionary:
    """Built-in phrase dictionary, built once per process."""
    rules = [(pattern, replacement) for pattern, replacement in PHRASE_RULES]
    rules.extend((pattern, replacement, False, True) for pattern, replacement in TRANSITION_RULES)
    return build_dictionary(rules)


@lru_cache(maxsize=1)
def default_contraction_dictionary() -> PhraseDictionary:
    """Built-in contraction table, built once per process."""
    return build_dictionary(CONTRACTION_RULES)
