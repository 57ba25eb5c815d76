"""Runtime configuration for the humanization pipeline.

The fallback threshold and the intensity-to-probability mapping are tuned
constants, so they live here rather than in the components that use them.
Values can be overridden through ``HUMANIZE_*`` environment variables (a
``.env`` file in the working directory is honoured).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from dotenv import load_dotenv


DEFAULT_INTENSITY_PROBABILITIES = MappingProxyType(
    {
        "light": 0.15,
        "balanced": 0.3,
        "heavy": 0.5,
    }
)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "")
    if not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw.lstrip("-").isdigit() else None


@dataclass(frozen=True)
class HumanizerConfig:
    """Tunable knobs for one pipeline instance.

    Attributes:
        coverage_threshold: Coverage ratio below which the generative
            fallback is requested (when a collaborator is supplied)
        intensity_probabilities: Per-sentence interjection probability for
            each intensity name
        fallback_timeout_s: Upper bound on the wait for the collaborator
        random_seed: Seed for the interjection random source, None for
            nondeterministic runs
        max_diff_cells: Largest token table the exact diff aligner may build
        rules_path: Optional rule bundle replacing the built-in tables
    """

    coverage_threshold: float = 0.15
    intensity_probabilities: Mapping[str, float] = field(
        default_factory=lambda: DEFAULT_INTENSITY_PROBABILITIES
    )
    fallback_timeout_s: float = 30.0
    random_seed: Optional[int] = None
    max_diff_cells: int = 4_000_000
    rules_path: Optional[str] = None

    def __post_init__(self):
        if not 0.0 <= self.coverage_threshold <= 1.0:
            raise ValueError(
                f"coverage_threshold must be within [0, 1], got {self.coverage_threshold}"
            )
        if self.fallback_timeout_s <= 0:
            raise ValueError(
                f"fallback_timeout_s must be positive, got {self.fallback_timeout_s}"
            )
        if self.max_diff_cells <= 0:
            raise ValueError(f"max_diff_cells must be positive, got {self.max_diff_cells}")
        for name, probability in self.intensity_probabilities.items():
            if not 0.0 <= probability <= 1.0:
                raise ValueError(
                    f"probability for intensity '{name}' must be within [0, 1], got {probability}"
                )
        # Freeze a caller-supplied dict so shared configs stay read-only
        object.__setattr__(
            self,
            "intensity_probabilities",
            MappingProxyType(dict(self.intensity_probabilities)),
        )

    def probability_for(self, intensity: str) -> float:
        """Interjection probability for an intensity; unknown names use balanced."""
        key = getattr(intensity, "value", intensity)
        if key in self.intensity_probabilities:
            return self.intensity_probabilities[key]
        return self.intensity_probabilities.get(
            "balanced", DEFAULT_INTENSITY_PROBABILITIES["balanced"]
        )

    @staticmethod
    def load() -> "HumanizerConfig":
        """Build a config from the environment, keeping defaults for bad values."""
        load_dotenv()
        defaults = HumanizerConfig()
        probabilities = {
            name: _env_float(f"HUMANIZE_{name.upper()}_PROBABILITY", default)
            for name, default in DEFAULT_INTENSITY_PROBABILITIES.items()
        }
        max_cells = _env_int("HUMANIZE_MAX_DIFF_CELLS")
        return HumanizerConfig(
            coverage_threshold=_env_float(
                "HUMANIZE_COVERAGE_THRESHOLD", defaults.coverage_threshold
            ),
            intensity_probabilities=probabilities,
            fallback_timeout_s=_env_float(
                "HUMANIZE_FALLBACK_TIMEOUT", defaults.fallback_timeout_s
            ),
            random_seed=_env_int("HUMANIZE_RANDOM_SEED"),
            max_diff_cells=max_cells if max_cells and max_cells > 0 else defaults.max_diff_cells,
            rules_path=os.getenv("HUMANIZE_RULES_PATH") or None,
        )
