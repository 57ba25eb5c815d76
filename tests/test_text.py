"""
Text analysis, coverage and interjection tests
"""
import random

import pytest

from humanize_diff.config import HumanizerConfig
from humanize_diff.rewrite.dictionary import MatchSpan
from humanize_diff.text.analyzer import TextAnalyzer
from humanize_diff.text.coverage import measure_coverage
from humanize_diff.text.interjections import (
    Intensity,
    Interjection,
    InterjectionInjector,
    build_catalog,
    default_catalog,
    inject_interjections,
)


class TestTextAnalyzer:
    """Sentence and word segmentation"""

    def test_sentences(self):
        analyzer = TextAnalyzer("Hello world. How are you? Fine!")

        assert analyzer.sentences == ["Hello world.", "How are you?", "Fine!"]
        assert analyzer.sentence_count == 3
        assert analyzer.word_count == 6

    def test_spans_skip_leading_whitespace(self):
        analyzer = TextAnalyzer("  Hi. There")

        assert analyzer.sentence_spans == [(2, 5), (6, 11)]

    def test_closing_quote_stays_with_sentence(self):
        analyzer = TextAnalyzer('He said "stop." Then left.')

        assert analyzer.sentences == ['He said "stop."', "Then left."]

    def test_empty_text(self):
        analyzer = TextAnalyzer("   ")

        assert analyzer.sentence_spans == []
        assert analyzer.word_count == 0


class TestCoverage:
    """Character-length coverage of matched spans"""

    def test_ratio(self):
        result = measure_coverage("abcdefghij", [MatchSpan(0, 5, 0)], 1)

        assert result.coverage_ratio == 0.5
        assert result.matched_phrase_count == 1
        assert result.total_word_count == 1

    def test_overlapping_spans_counted_once(self):
        result = measure_coverage("abcdefghij", [MatchSpan(3, 8, 1), MatchSpan(0, 5, 0)], 1)

        assert result.coverage_ratio == pytest.approx(0.8)

    def test_ratio_is_clamped(self):
        result = measure_coverage("abcdefghij", [MatchSpan(5, 50, 0)], 1)

        assert result.coverage_ratio == 0.5

    def test_empty_text(self):
        result = measure_coverage("", [], 0)

        assert result.coverage_ratio == 0.0

    def test_to_dict(self):
        result = measure_coverage("abcd", [MatchSpan(0, 4, 0)], 1)

        assert result.to_dict() == {
            "matchedPhraseCount": 1,
            "totalWordCount": 1,
            "coverageRatio": 1.0,
        }


class TestInterjections:
    """Sentence-head interjection insertion"""

    def test_never_repeats_adjacent(self, loud_config):
        injector = InterjectionInjector(
            catalog=build_catalog(["Alpha!", "Beta!"]), config=loud_config, rng=random.Random(3)
        )

        result = injector.inject("One. Two. Three.", "heavy")

        assert result in (
            "Alpha! One. Beta! Two. Alpha! Three.",
            "Beta! One. Alpha! Two. Beta! Three.",
        )

    def test_single_entry_skips_next_sentence(self, loud_config):
        injector = InterjectionInjector(
            catalog=build_catalog(["Wow."]), config=loud_config, rng=random.Random(0)
        )

        result = injector.inject("One. Two. Three.", "heavy")

        assert result == "Wow. One. Two. Wow. Three."

    def test_same_text_with_different_weights_not_adjacent(self, loud_config):
        catalog = (Interjection("Wow.", 1.0), Interjection("Wow.", 2.0))
        injector = InterjectionInjector(catalog=catalog, config=loud_config, rng=random.Random(0))

        result = injector.inject("A b. C d. E f. G h.", "heavy")

        assert result == "Wow. A b. C d. Wow. E f. G h."

    def test_build_catalog_merges_duplicate_texts(self):
        catalog = build_catalog([("Wow.", 1.0), ("Wow. ", 2.0), "Hey."])

        assert catalog == (Interjection("Wow.", 3.0), Interjection("Hey.", 1.0))

    def test_default_catalog_no_adjacent_duplicates(self, loud_config):
        catalog = build_catalog(["Seriously.", "No joke.", "For real."])
        text = " ".join(f"Sentence {n}." for n in range(40))

        result = InterjectionInjector(catalog, loud_config, random.Random(7)).inject(text)

        heads = TextAnalyzer(result).sentences
        inserted = [s for s in heads if not s.startswith("Sentence")]
        assert len(inserted) == 40
        for first, second in zip(inserted, inserted[1:]):
            assert first != second

    def test_zero_probability_leaves_text(self, quiet_config):
        text = "One. Two. Three."

        assert inject_interjections(text, "heavy", random.Random(1), quiet_config) == text

    def test_insertion_is_additive(self, loud_config):
        text = "First point. Second point! Third point?"
        result = inject_interjections(text, "heavy", random.Random(11), loud_config)

        remaining = result
        for item in sorted(default_catalog(), key=lambda item: -len(item.text)):
            remaining = remaining.replace(item.text + " ", "")
        assert remaining == text
        assert result != text

    def test_seeded_runs_repeat(self):
        text = "One. Two. Three. Four. Five."

        first = inject_interjections(text, "heavy", random.Random(42))
        second = inject_interjections(text, "heavy", random.Random(42))

        assert first == second

    def test_empty_text(self, loud_config):
        assert InterjectionInjector(config=loud_config).inject("") == ""

    def test_intensity_parse(self):
        assert Intensity.parse("light") is Intensity.LIGHT
        assert Intensity.parse(Intensity.HEAVY) is Intensity.HEAVY
        assert Intensity.parse("extreme") is Intensity.BALANCED
        assert Intensity.parse(None) is Intensity.BALANCED

    def test_intensity_probability(self):
        config = HumanizerConfig()

        assert config.probability_for("light") < config.probability_for("heavy")
        assert config.probability_for("extreme") == config.probability_for("balanced")

    def test_build_catalog_skips_bad_entries(self):
        catalog = build_catalog(["Hey.", "  ", ("Yo.", 0), Interjection("Sure.", 2.0)])

        assert catalog == (Interjection("Hey.", 1.0), Interjection("Sure.", 2.0))
