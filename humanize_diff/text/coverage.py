"""Coverage metric: how much of the original text the phrase rules touched."""

from dataclasses import dataclass
from typing import Dict, Iterable, Union

from humanize_diff.rewrite.dictionary import MatchSpan


@dataclass(frozen=True)
class CoverageResult:
    """Structured coverage result for one pipeline run."""

    matched_phrase_count: int
    total_word_count: int
    coverage_ratio: float

    def to_dict(self) -> Dict[str, Union[int, float]]:
        """Convert coverage result to API response format."""
        return {
            "matchedPhraseCount": self.matched_phrase_count,
            "totalWordCount": self.total_word_count,
            "coverageRatio": self.coverage_ratio,
        }

    def summary(self) -> str:
        """Generate a one-line human-readable summary."""
        return (
            f"{self.matched_phrase_count} phrase(s) matched, "
            f"{self.coverage_ratio:.1%} of characters covered "
            f"({self.total_word_count} words)"
        )


def measure_coverage(
    original: str, spans: Iterable[MatchSpan], total_words: int
) -> CoverageResult:
    """Measure rule coverage by character length.

    The ratio is the summed length of the matched spans over the length of
    the original text. Character length keeps short filler matches from
    counting as much as long phrase matches would under a word-based ratio.
    Spans are clipped to the text, and overlapping spans are counted once.

    Args:
        original: The text the spans were matched in
        spans: Phrase spans from the deterministic rewrite
        total_words: Word count of the original text

    Returns:
        CoverageResult with ``coverage_ratio`` in [0, 1]
    """
    spans = sorted(spans, key=lambda span: (span.start, span.end))
    length = len(original)

    covered = 0
    cursor = 0
    for span in spans:
        start = max(span.start, cursor, 0)
        end = min(span.end, length)
        if end > start:
            covered += end - start
            cursor = end

    ratio = covered / length if length else 0.0
    return CoverageResult(
        matched_phrase_count=len(spans),
        total_word_count=max(0, total_words),
        coverage_ratio=min(1.0, max(0.0, ratio)),
    )
