"""Pipeline orchestrator: rewrite, measure, fall back, decorate, diff.

Stages run in a fixed order:

1. DeterministicRewriter rewrites the input with the phrase dictionary
2. CoverageMeter scores the deterministic rewrite (before interjections,
   which are not rule matches and would distort the ratio)
3. FallbackCoordinator optionally swaps in a generative rewrite
4. InterjectionInjector decorates whichever text became final
5. DiffComputer aligns the original input against the final text

The orchestrator is the only place stage errors are caught. Apart from input
validation, every failure degrades to a best-effort result instead of
propagating.
"""

import asyncio
import logging
import random
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional, Union

from humanize_diff.config import HumanizerConfig
from humanize_diff.data.bundle import RuleBundle
from humanize_diff.errors import InvalidInputError
from humanize_diff.fallback import FallbackCoordinator, GenerativeRewrite
from humanize_diff.rewrite.rules import DeterministicRewriter, RewriteResult
from humanize_diff.text.analyzer import TextAnalyzer
from humanize_diff.text.coverage import CoverageResult, measure_coverage
from humanize_diff.text.diff import DiffSegment, SegmentKind, compute_diff
from humanize_diff.text.interjections import Intensity, InterjectionInjector, build_catalog

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Everything the caller gets back from one run.

    Attributes:
        final_text: Text after rewriting, fallback and interjections
        segments: Diff of the original input against ``final_text``
        coverage: Coverage of the deterministic rewrite
        used_fallback: True if the generative rewrite was adopted
        rewritten_text: The deterministic rewrite, before fallback and
            interjections
        intensity: Intensity actually applied
        warnings: Stages that failed and were degraded, if any
    """

    final_text: str
    segments: List[DiffSegment]
    coverage: CoverageResult
    used_fallback: bool
    rewritten_text: str = ""
    intensity: Intensity = Intensity.BALANCED
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to API response format."""
        return {
            "finalText": self.final_text,
            "segments": [segment.to_dict() for segment in self.segments],
            "coverage": self.coverage.to_dict(),
            "usedFallback": self.used_fallback,
            "rewrittenText": self.rewritten_text,
            "intensity": self.intensity.value,
            "warnings": list(self.warnings),
        }


def validate_input(text: Any) -> str:
    """Reject non-string and blank input before any stage runs.

    Raises:
        InvalidInputError: If ``text`` is not a non-blank string
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"text must be a string, got {type(text).__name__}")
    if not text.strip():
        raise InvalidInputError("text cannot be empty")
    return text


class HumanizePipeline:
    """Sequences the pipeline stages for one configuration.

    A pipeline holds only read-only state (dictionaries, catalog, config), so
    one instance can serve any number of concurrent runs. Each run gets its
    own random source.
    """

    def __init__(
        self,
        rewriter: Optional[DeterministicRewriter] = None,
        injector_catalog=None,
        config: Optional[HumanizerConfig] = None,
    ):
        """Initialize the pipeline.

        Args:
            rewriter: Deterministic rewriter; the built-in tables if omitted
            injector_catalog: Interjection catalog; the built-in one if omitted
            config: Thresholds, probabilities and timeouts
        """
        self.config = config or HumanizerConfig()
        self.rewriter = rewriter or DeterministicRewriter()
        self.catalog = injector_catalog
        self.coordinator = FallbackCoordinator(self.config)

    @classmethod
    def from_bundle(cls, bundle: RuleBundle, config: Optional[HumanizerConfig] = None) -> "HumanizePipeline":
        """Build a pipeline from a rule bundle."""
        return cls(
            rewriter=DeterministicRewriter.from_bundle(bundle),
            injector_catalog=build_catalog(bundle.interjections),
            config=config,
        )

    @classmethod
    def from_config(cls, config: Optional[HumanizerConfig] = None) -> "HumanizePipeline":
        """Build a pipeline, loading ``config.rules_path`` when it is set."""
        config = config or HumanizerConfig()
        if config.rules_path:
            rewriter, catalog = _bundle_components(config.rules_path)
            return cls(rewriter=rewriter, injector_catalog=catalog, config=config)
        return cls(config=config)

    def _rewrite(self, text: str, warnings: List[str]) -> RewriteResult:
        try:
            return self.rewriter.rewrite(text)
        except Exception as e:
            logger.exception("Deterministic rewrite failed, keeping original text")
            warnings.append(f"rewrite_failed: {e!r}")
            return RewriteResult(text=text)

    def _inject(self, text: str, intensity: Intensity, rng: random.Random, warnings: List[str]) -> str:
        try:
            injector = InterjectionInjector(catalog=self.catalog, config=self.config, rng=rng)
            return injector.inject(text, intensity)
        except Exception as e:
            logger.exception("Interjection injection failed, skipping")
            warnings.append(f"interjections_failed: {e!r}")
            return text

    def _diff(self, original: str, final: str, warnings: List[str]) -> List[DiffSegment]:
        try:
            return compute_diff(original, final, max_cells=self.config.max_diff_cells)
        except Exception as e:
            logger.exception("Diff computation failed, returning a single segment")
            warnings.append(f"diff_failed: {e!r}")
            if original == final:
                return [DiffSegment(SegmentKind.EQUAL, original, final)]
            return [
                DiffSegment(SegmentKind.DELETED, original, ""),
                DiffSegment(SegmentKind.INSERTED, "", final),
            ]

    async def run(
        self,
        text: str,
        intensity: Union[str, Intensity] = Intensity.BALANCED,
        generative_rewrite: Optional[GenerativeRewrite] = None,
        rng: Optional[random.Random] = None,
    ) -> PipelineResult:
        """Humanize text and diff it against the input.

        Args:
            text: Non-blank input text
            intensity: Interjection intensity; unknown values use balanced
            generative_rewrite: Optional async collaborator for the fallback
            rng: Random source for interjections; seeded from config if omitted

        Returns:
            PipelineResult, even if optional stages failed

        Raises:
            InvalidInputError: If ``text`` is not a non-blank string
        """
        original = validate_input(text)
        level = Intensity.parse(intensity)
        rng = rng or random.Random(self.config.random_seed)
        warnings: List[str] = []

        rewrite = self._rewrite(original, warnings)

        try:
            coverage = measure_coverage(
                original, rewrite.spans, TextAnalyzer(original).word_count
            )
        except Exception as e:
            logger.exception("Coverage measurement failed")
            warnings.append(f"coverage_failed: {e!r}")
            coverage = CoverageResult(0, 0, 0.0)
        logger.debug("Coverage: %s", coverage.summary())

        try:
            decision = await self.coordinator.decide_and_merge(
                coverage.coverage_ratio, original, rewrite.text, generative_rewrite
            )
            merged, used_fallback = decision.text, decision.used_fallback
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception("Fallback coordination failed, keeping deterministic rewrite")
            warnings.append(f"fallback_failed: {e!r}")
            merged, used_fallback = rewrite.text, False

        final_text = self._inject(merged, level, rng, warnings)
        segments = self._diff(original, final_text, warnings)

        return PipelineResult(
            final_text=final_text,
            segments=segments,
            coverage=coverage,
            used_fallback=used_fallback,
            rewritten_text=rewrite.text,
            intensity=level,
            warnings=warnings,
        )


async def humanize_with_diff(
    text: str,
    intensity: Union[str, Intensity] = Intensity.BALANCED,
    generative_rewrite: Optional[GenerativeRewrite] = None,
    *,
    config: Optional[HumanizerConfig] = None,
    rng: Optional[random.Random] = None,
) -> PipelineResult:
    """Run the full pipeline with the built-in tables (or ``config.rules_path``).

    Args:
        text: Non-blank input text
        intensity: "light", "balanced" or "heavy"
        generative_rewrite: Optional async collaborator for the fallback
        config: Pipeline configuration; defaults if omitted
        rng: Random source for interjections

    Returns:
        PipelineResult
    """
    pipeline = HumanizePipeline.from_config(config)
    return await pipeline.run(text, intensity, generative_rewrite, rng=rng)


def humanize_with_diff_sync(
    text: str,
    intensity: Union[str, Intensity] = Intensity.BALANCED,
    generative_rewrite: Optional[GenerativeRewrite] = None,
    *,
    config: Optional[HumanizerConfig] = None,
    rng: Optional[random.Random] = None,
) -> PipelineResult:
    """Blocking wrapper around ``humanize_with_diff`` for non-async callers."""
    return asyncio.run(
        humanize_with_diff(text, intensity, generative_rewrite, config=config, rng=rng)
    )


@lru_cache(maxsize=8)
def _bundle_components(path: str):
    """Load a bundle once per process and build its read-only components."""
    bundle = RuleBundle.load(path)
    logger.info("Loaded rule bundle %s: %s", path, bundle.counts())
    return DeterministicRewriter.from_bundle(bundle), build_catalog(bundle.interjections)
