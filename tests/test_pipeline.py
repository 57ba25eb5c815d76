"""
Fallback coordination and pipeline orchestration tests
"""
import asyncio
import random

import pytest

from humanize_diff import humanize
from humanize_diff.config import HumanizerConfig
from humanize_diff.errors import InvalidInputError
from humanize_diff.fallback import FallbackCoordinator
from humanize_diff.pipeline import HumanizePipeline, humanize_with_diff_sync
from humanize_diff.text.diff import DiffSegment, SegmentKind
from humanize_diff.text.interjections import build_catalog

LOW_COVERAGE_TEXT = "The cat sat on the mat."


class Collaborator:
    """Async stand-in for a generative rewriter that records its calls."""

    def __init__(self, result=None, error=None, delay=0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = []

    async def __call__(self, text):
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class BrokenRewriter:
    def rewrite(self, text):
        raise RuntimeError("rule table exploded")


def joined(segments):
    return (
        "".join(segment.original_text for segment in segments),
        "".join(segment.final_text for segment in segments),
    )


class TestFallbackCoordinator:
    """Coverage-gated generative rewrite"""

    def decide(self, coordinator, ratio, collaborator=None):
        return asyncio.run(
            coordinator.decide_and_merge(ratio, "original text", "rewritten text", collaborator)
        )

    def test_sufficient_coverage_skips_collaborator(self):
        collaborator = Collaborator(result="model text")

        decision = self.decide(FallbackCoordinator(), 0.9, collaborator)

        assert decision.text == "rewritten text"
        assert decision.used_fallback is False
        assert decision.reason == "coverage_sufficient"
        assert collaborator.calls == []

    def test_threshold_is_strict(self):
        coordinator = FallbackCoordinator(HumanizerConfig(coverage_threshold=0.5))

        assert coordinator.needs_fallback(0.49)
        assert not coordinator.needs_fallback(0.5)

    def test_no_collaborator(self):
        decision = self.decide(FallbackCoordinator(), 0.0)

        assert decision.text == "rewritten text"
        assert decision.reason == "no_collaborator"

    def test_collaborator_resolves(self):
        collaborator = Collaborator(result="model text")

        decision = self.decide(FallbackCoordinator(), 0.0, collaborator)

        assert decision.text == "model text"
        assert decision.used_fallback is True
        assert collaborator.calls == ["original text"]

    @pytest.mark.parametrize(
        "collaborator",
        [
            Collaborator(error=RuntimeError("provider down")),
            Collaborator(result="   "),
            Collaborator(result=42),
        ],
    )
    def test_collaborator_failure_falls_back(self, collaborator):
        decision = self.decide(FallbackCoordinator(), 0.0, collaborator)

        assert decision.text == "rewritten text"
        assert decision.used_fallback is False
        assert decision.reason == "collaborator_failed"

    def test_collaborator_timeout(self):
        coordinator = FallbackCoordinator(HumanizerConfig(fallback_timeout_s=0.01))
        collaborator = Collaborator(result="too late", delay=1.0)

        decision = self.decide(coordinator, 0.0, collaborator)

        assert decision.text == "rewritten text"
        assert decision.used_fallback is False


class TestHumanizePipeline:
    """End-to-end pipeline runs"""

    def test_phrase_rewrite_and_diff(self, improvements_rewriter, quiet_config):
        pipeline = HumanizePipeline(rewriter=improvements_rewriter, config=quiet_config)
        original = "The implementation demonstrates significant improvements."

        result = asyncio.run(pipeline.run(original))

        assert result.final_text == "The implementation really helped a lot."
        assert result.used_fallback is False
        assert result.coverage.matched_phrase_count == 1
        assert result.coverage.coverage_ratio == pytest.approx(37 / 57)
        assert result.segments == [
            DiffSegment(SegmentKind.EQUAL, "The implementation ", "The implementation "),
            DiffSegment(
                SegmentKind.REPLACED,
                "demonstrates significant improvements",
                "really helped a lot",
            ),
            DiffSegment(SegmentKind.EQUAL, ".", "."),
        ]

    def test_low_coverage_uses_collaborator(self, quiet_config):
        collaborator = Collaborator(result="A cat was sitting on a mat.")
        pipeline = HumanizePipeline(config=quiet_config)

        result = asyncio.run(pipeline.run(LOW_COVERAGE_TEXT, "light", collaborator))

        assert result.coverage.coverage_ratio == 0.0
        assert result.used_fallback is True
        assert result.final_text == "A cat was sitting on a mat."
        assert joined(result.segments) == (LOW_COVERAGE_TEXT, result.final_text)

    def test_rejecting_collaborator_keeps_rewrite(self, quiet_config):
        collaborator = Collaborator(error=RuntimeError("provider down"))
        pipeline = HumanizePipeline(config=quiet_config)

        result = asyncio.run(pipeline.run(LOW_COVERAGE_TEXT, "light", collaborator))

        assert result.used_fallback is False
        assert result.final_text == result.rewritten_text == LOW_COVERAGE_TEXT
        assert result.warnings == []

    def test_interjections_follow_fallback(self, loud_config):
        collaborator = Collaborator(result="The cat sat. The dog ran.")
        pipeline = HumanizePipeline(injector_catalog=build_catalog(["Wow."]), config=loud_config)

        result = asyncio.run(pipeline.run(LOW_COVERAGE_TEXT, "heavy", collaborator))

        assert result.used_fallback is True
        assert result.final_text == "Wow. The cat sat. The dog ran."

    def test_interjections_are_inserted_segments(self, loud_config):
        pipeline = HumanizePipeline(injector_catalog=build_catalog(["Wow."]), config=loud_config)
        original = "The cat sat. The dog ran."

        result = asyncio.run(pipeline.run(original, "heavy"))

        assert result.segments == [
            DiffSegment(SegmentKind.INSERTED, "", "Wow. "),
            DiffSegment(SegmentKind.EQUAL, original, original),
        ]

    @pytest.mark.parametrize("text", ["", "   \n\t", None, 42])
    def test_invalid_input(self, text):
        with pytest.raises(InvalidInputError):
            asyncio.run(HumanizePipeline().run(text))

    def test_failed_stage_degrades(self, quiet_config):
        pipeline = HumanizePipeline(rewriter=BrokenRewriter(), config=quiet_config)

        result = asyncio.run(pipeline.run(LOW_COVERAGE_TEXT))

        assert result.final_text == LOW_COVERAGE_TEXT
        assert result.warnings and result.warnings[0].startswith("rewrite_failed")

    def test_concurrent_runs(self, quiet_config):
        pipeline = HumanizePipeline(config=quiet_config)
        texts = ["We utilize tools.", LOW_COVERAGE_TEXT, "It is not fine."]

        async def run_all():
            return await asyncio.gather(*(pipeline.run(text) for text in texts))

        results = asyncio.run(run_all())

        for text, result in zip(texts, results):
            assert joined(result.segments) == (text, result.final_text)

    def test_to_dict(self, quiet_config):
        result = humanize_with_diff_sync("We utilize tools.", config=quiet_config)

        data = result.to_dict()

        assert data["finalText"] == "We use tools."
        assert data["usedFallback"] is False
        assert data["intensity"] == "balanced"
        assert {"kind", "originalText", "finalText"} == set(data["segments"][0])

    def test_seeded_runs_repeat(self):
        text = "One point. Another point. A third point. And a fourth."

        first = humanize_with_diff_sync(text, "heavy", rng=random.Random(5))
        second = humanize_with_diff_sync(text, "heavy", rng=random.Random(5))

        assert first.final_text == second.final_text

    def test_humanize_returns_text(self):
        result = humanize("We utilize tools.", "light", rng=random.Random(0))

        assert isinstance(result, str)
        assert "use tools." in result
