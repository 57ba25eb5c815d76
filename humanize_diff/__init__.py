"""humanize-diff: rule-based text humanization with a displayable diff."""

import random
from typing import Optional, Union

from humanize_diff.config import HumanizerConfig
from humanize_diff.errors import (
    BundleError,
    CollaboratorFailure,
    DictionaryBuildError,
    HumanizeError,
    InvalidInputError,
)
from humanize_diff.pipeline import (
    HumanizePipeline,
    PipelineResult,
    humanize_with_diff,
    humanize_with_diff_sync,
)
from humanize_diff.text.diff import DiffSegment, SegmentKind, compute_diff
from humanize_diff.text.interjections import Intensity

__version__ = "0.1.0"

__all__ = [
    "BundleError",
    "CollaboratorFailure",
    "DictionaryBuildError",
    "DiffSegment",
    "HumanizeError",
    "HumanizePipeline",
    "HumanizerConfig",
    "Intensity",
    "InvalidInputError",
    "PipelineResult",
    "SegmentKind",
    "compute_diff",
    "humanize",
    "humanize_with_diff",
    "humanize_with_diff_sync",
]


def humanize(
    text: str,
    intensity: Union[str, Intensity] = "balanced",
    rng: Optional[random.Random] = None,
) -> str:
    """Canonical entry point for text humanization.

    Runs the deterministic pipeline (no generative fallback) and returns
    only the final text. Use ``humanize_with_diff`` to also get the diff
    segments and coverage.

    Args:
        text: Raw body text (multiple sentences, possibly multi-paragraph)
        intensity: "light", "balanced" or "heavy"
        rng: Random source for interjections

    Returns:
        Humanized text string
    """
    return humanize_with_diff_sync(text, intensity, rng=rng).final_text
