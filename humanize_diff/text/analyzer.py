"""Sentence and word segmentation shared by the pipeline stages."""

import re
from typing import List, Optional, Tuple

# Terminal punctuation, optional closing quotes/brackets, then whitespace
SENTENCE_BOUNDARY = re.compile(r"[.!?]+[\"'’”)\]]*\s+")

WORD_STRIP_CHARS = ".,!?;:()[]{}'\"-—_"


class TextAnalyzer:
    """Segments text into sentences and words without altering it.

    Sentence spans are reported as offsets into the original string so that
    callers can insert text at sentence heads without re-joining sentences.
    """

    def __init__(self, text: str):
        """Initialize with text to analyze.

        Args:
            text: The text string to analyze
        """
        self.text = text
        self._sentence_spans: Optional[List[Tuple[int, int]]] = None
        self._words: Optional[List[str]] = None

    def _find_sentence_spans(self) -> List[Tuple[int, int]]:
        """Locate sentences as (start, end) offsets.

        A sentence starts at the first non-whitespace character of the text or
        after a terminal punctuation run followed by whitespace. The end offset
        excludes the whitespace separating it from the next sentence.

        Returns:
            List of half-open offset pairs, in text order
        """
        text = self.text
        first = len(text) - len(text.lstrip())
        if first >= len(text):
            return []

        spans = []
        start = first
        for match in SENTENCE_BOUNDARY.finditer(text, first):
            boundary_end = match.end()
            if boundary_end >= len(text):
                break
            end = match.end() - len(match.group()) + len(match.group().rstrip())
            spans.append((start, end))
            start = boundary_end

        spans.append((start, len(text.rstrip())))
        return spans

    @property
    def sentence_spans(self) -> List[Tuple[int, int]]:
        """Offsets of each sentence in the text."""
        if self._sentence_spans is None:
            self._sentence_spans = self._find_sentence_spans()
        return self._sentence_spans

    @property
    def sentences(self) -> List[str]:
        """List of sentences extracted from the text."""
        return [self.text[start:end] for start, end in self.sentence_spans]

    @property
    def sentence_count(self) -> int:
        """Number of sentences in the text."""
        return len(self.sentence_spans)

    def _split_words(self) -> List[str]:
        """Split text into words, handling punctuation and numbers.

        Returns:
            List of word strings with punctuation stripped
        """
        result = []
        for word in re.split(r"\s+", self.text):
            cleaned = word.strip(WORD_STRIP_CHARS)
            if cleaned:
                result.append(cleaned)
        return result

    @property
    def words(self) -> List[str]:
        """Words of the text with surrounding punctuation removed."""
        if self._words is None:
            self._words = self._split_words()
        return self._words

    @property
    def word_count(self) -> int:
        """Total number of words in the text."""
        return len(self.words)
