"""Shared fixtures."""

import pytest

from humanize_diff.config import HumanizerConfig
from humanize_diff.rewrite.dictionary import build_dictionary
from humanize_diff.rewrite.rules import DeterministicRewriter


def probabilities(value):
    return {"light": value, "balanced": value, "heavy": value}


@pytest.fixture
def quiet_config():
    """Config that never inserts interjections."""
    return HumanizerConfig(intensity_probabilities=probabilities(0.0))


@pytest.fixture
def loud_config():
    """Config that offers an interjection to every sentence."""
    return HumanizerConfig(intensity_probabilities=probabilities(1.0))


@pytest.fixture
def improvements_rewriter():
    """Rewriter with a single phrase rule and no contractions."""
    return DeterministicRewriter(
        dictionary=build_dictionary(
            [("demonstrates significant improvements", "really helped a lot")]
        ),
        contractions=build_dictionary([]),
    )
