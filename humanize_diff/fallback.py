"""Coverage-gated hand-off to an external generative rewriter.

The collaborator is an opaque async callable supplied by the caller (in the
full product, an LLM call). It is only consulted when the deterministic
rules touched too little of the text, and its failures never reach the
caller: errors, timeouts and unusable output all fall back to the
deterministic rewrite.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from humanize_diff.config import HumanizerConfig
from humanize_diff.errors import CollaboratorFailure

logger = logging.getLogger(__name__)

GenerativeRewrite = Callable[[str], Awaitable[str]]


@dataclass(frozen=True)
class FallbackDecision:
    """Outcome of the fallback gate.

    Attributes:
        text: Text to carry forward
        used_fallback: True if ``text`` came from the collaborator
        reason: Short machine-readable reason for the decision
    """

    text: str
    used_fallback: bool
    reason: str


class FallbackCoordinator:
    """Decides from coverage whether to request a generative rewrite."""

    def __init__(self, config: Optional[HumanizerConfig] = None):
        self.config = config or HumanizerConfig()

    @property
    def threshold(self) -> float:
        return self.config.coverage_threshold

    def needs_fallback(self, coverage_ratio: float) -> bool:
        """True when coverage is below the configured threshold."""
        return coverage_ratio < self.threshold

    async def _call_collaborator(self, generative_rewrite: GenerativeRewrite, original: str) -> str:
        """Invoke the collaborator under the configured timeout.

        Raises:
            CollaboratorFailure: On any error, timeout or unusable output
        """
        try:
            result = await asyncio.wait_for(
                generative_rewrite(original), timeout=self.config.fallback_timeout_s
            )
        except asyncio.TimeoutError as e:
            raise CollaboratorFailure(
                f"generative rewrite timed out after {self.config.fallback_timeout_s}s"
            ) from e
        except Exception as e:
            raise CollaboratorFailure(f"generative rewrite failed: {e!r}") from e

        if not isinstance(result, str):
            raise CollaboratorFailure(
                f"generative rewrite returned {type(result).__name__}, expected str"
            )
        if not result.strip():
            raise CollaboratorFailure("generative rewrite returned blank text")
        return result

    async def decide_and_merge(
        self,
        coverage_ratio: float,
        original: str,
        rewritten: str,
        generative_rewrite: Optional[GenerativeRewrite] = None,
    ) -> FallbackDecision:
        """Pick the text to carry forward.

        Args:
            coverage_ratio: Coverage of the deterministic rewrite
            original: The original input, which is what the collaborator sees
            rewritten: The deterministic rewrite
            generative_rewrite: Optional async collaborator

        Returns:
            FallbackDecision; ``used_fallback`` is True only if the
            collaborator was called and returned usable text
        """
        if not self.needs_fallback(coverage_ratio):
            return FallbackDecision(rewritten, False, "coverage_sufficient")
        if generative_rewrite is None:
            return FallbackDecision(rewritten, False, "no_collaborator")

        logger.info(
            "Coverage %.3f below threshold %.3f, requesting generative rewrite",
            coverage_ratio,
            self.threshold,
        )
        try:
            text = await self._call_collaborator(generative_rewrite, original)
        except CollaboratorFailure as e:
            logger.warning("Falling back to deterministic rewrite: %s", e)
            return FallbackDecision(rewritten, False, "collaborator_failed")

        return FallbackDecision(text, True, "generative_rewrite")
