"""Token-level alignment of original and final text into displayable segments.

The alignment is a longest common subsequence over tokens; among all
alignments of maximal length the one with the fewest segments is chosen,
which keeps the rendered diff visually minimal. Concatenating the segments'
``original_text`` reproduces the original exactly, and concatenating their
``final_text`` reproduces the final text exactly.
"""

import difflib
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# Leading whitespace stands alone; every other token carries its trailing
# whitespace, so the tokens of a string always join back to the string.
_TOKEN = re.compile(r"\s+|(?:\w+(?:['’]\w+)*|[^\w\s])\s*")

DEFAULT_MAX_CELLS = 4_000_000

_UNREACHABLE = -(1 << 62)


class SegmentKind(str, Enum):
    EQUAL = "equal"
    REPLACED = "replaced"
    INSERTED = "inserted"
    DELETED = "deleted"


@dataclass(frozen=True)
class DiffSegment:
    kind: SegmentKind
    original_text: str
    final_text: str

    def to_dict(self) -> Dict[str, str]:
        """Convert segment to API response format."""
        return {
            "kind": self.kind.value,
            "originalText": self.original_text,
            "finalText": self.final_text,
        }


def tokenize(text: str) -> List[str]:
    """Split text into words and punctuation marks with trailing whitespace.

    Args:
        text: Text to split

    Returns:
        Tokens whose concatenation equals ``text``
    """
    return _TOKEN.findall(text)


def _gap_segment(original: str, final: str) -> DiffSegment:
    if original and final:
        return DiffSegment(SegmentKind.REPLACED, original, final)
    if final:
        return DiffSegment(SegmentKind.INSERTED, "", final)
    return DiffSegment(SegmentKind.DELETED, original, "")


def _build_segments(runs: Sequence[Tuple[bool, str, str]]) -> List[DiffSegment]:
    """Merge consecutive runs of the same category into segments.

    Args:
        runs: (is_equal, original_text, final_text) triples in order

    Returns:
        Segments with adjacent equal runs and adjacent gap runs merged
    """
    segments: List[DiffSegment] = []
    current_equal: Optional[bool] = None
    original_parts: List[str] = []
    final_parts: List[str] = []

    def flush():
        if current_equal is None:
            return
        original, final = "".join(original_parts), "".join(final_parts)
        if not original and not final:
            return
        if current_equal:
            segments.append(DiffSegment(SegmentKind.EQUAL, original, final))
        else:
            segments.append(_gap_segment(original, final))

    for is_equal, original, final in runs:
        if is_equal != current_equal:
            flush()
            current_equal = is_equal
            original_parts, final_parts = [], []
        original_parts.append(original)
        final_parts.append(final)
    flush()
    return segments


def _align_lcs(a: Sequence[int], b: Sequence[int]) -> List[Tuple[bool, int, int]]:
    """Align two token id sequences.

    Scores are ``lcs_length * weight - segment_count`` so that a longer common
    subsequence always wins and segment count only breaks ties. Two tables
    hold the best score of each suffix pair given that the previous step was
    a match (``after_match``) or a gap (``after_gap``).

    Args:
        a: Original token ids
        b: Final token ids

    Returns:
        Steps as (is_match, a_count, b_count), each consuming one token
        from a, b, or both
    """
    n, m = len(a), len(b)
    weight = n + m + 2
    after_match = [[0] * (m + 1) for _ in range(n + 1)]
    after_gap = [[0] * (m + 1) for _ in range(n + 1)]

    for i in range(n, -1, -1):
        row_match = after_match[i]
        row_gap = after_gap[i]
        next_match = after_match[i + 1] if i < n else None
        next_gap = after_gap[i + 1] if i < n else None
        for j in range(m, -1, -1):
            if i == n and j == m:
                continue
            best_match = best_gap = _UNREACHABLE
            if i < n and j < m and a[i] == b[j]:
                value = weight + next_match[j + 1]
                best_match, best_gap = value, value - 1
            if i < n:
                value = next_gap[j]
                if value - 1 > best_match:
                    best_match = value - 1
                if value > best_gap:
                    best_gap = value
            if j < m:
                value = row_gap[j + 1]
                if value - 1 > best_match:
                    best_match = value - 1
                if value > best_gap:
                    best_gap = value
            row_match[j] = best_match
            row_gap[j] = best_gap

    steps: List[Tuple[bool, int, int]] = []
    i = j = 0
    # None: nothing precedes, so every first step opens a segment
    state: Optional[bool] = None
    while i < n or j < m:
        options = []
        if i < n and j < m and a[i] == b[j]:
            options.append((weight + after_match[i + 1][j + 1] - (0 if state is True else 1), True, 1, 1))
        if i < n:
            options.append((after_gap[i + 1][j] - (0 if state is False else 1), False, 1, 0))
        if j < m:
            options.append((after_gap[i][j + 1] - (0 if state is False else 1), False, 0, 1))
        # max() keeps the first of equal options: match, then delete, then insert
        _, is_match, di, dj = max(options, key=lambda option: option[0])
        steps.append((is_match, di, dj))
        i += di
        j += dj
        state = is_match
    return steps


def _align_difflib(a: Sequence[int], b: Sequence[int]) -> List[Tuple[bool, int, int]]:
    """Approximate alignment for inputs too large for the exact table."""
    steps: List[Tuple[bool, int, int]] = []
    matcher = difflib.SequenceMatcher(None, a, b, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            steps.extend((True, 1, 1) for _ in range(i2 - i1))
        else:
            steps.extend((False, 1, 0) for _ in range(i2 - i1))
            steps.extend((False, 0, 1) for _ in range(j2 - j1))
    return steps


def compute_diff(original: str, final: str, max_cells: int = DEFAULT_MAX_CELLS) -> List[DiffSegment]:
    """Align original and final text into Equal/Replaced/Inserted/Deleted segments.

    Args:
        original: Text before rewriting
        final: Text after rewriting
        max_cells: Largest alignment table to build; bigger inputs use
            ``difflib`` matching blocks instead of the exact alignment

    Returns:
        Ordered segments; their ``original_text`` values join to ``original``
        and their ``final_text`` values join to ``final``
    """
    a_tokens = tokenize(original)
    b_tokens = tokenize(final)

    ids: Dict[str, int] = {}
    a = [ids.setdefault(token, len(ids)) for token in a_tokens]
    b = [ids.setdefault(token, len(ids)) for token in b_tokens]

    prefix = suffix = 0
    cells = (len(a) + 1) * (len(b) + 1)
    if a == b:
        prefix = len(a)
        steps = []
    elif cells <= max_cells:
        steps = _align_lcs(a, b)
    else:
        # Shared ends are pinned as equal here, which may cost one extra segment
        limit = min(len(a), len(b))
        while prefix < limit and a[prefix] == b[prefix]:
            prefix += 1
        while suffix < limit - prefix and a[-1 - suffix] == b[-1 - suffix]:
            suffix += 1
        logger.debug("Diff table of %d cells exceeds %d, using difflib", cells, max_cells)
        steps = _align_difflib(a[prefix:len(a) - suffix], b[prefix:len(b) - suffix])

    runs: List[Tuple[bool, str, str]] = []
    if prefix:
        shared = "".join(a_tokens[:prefix])
        runs.append((True, shared, shared))

    i, j = prefix, prefix
    for is_match, di, dj in steps:
        runs.append((is_match, "".join(a_tokens[i:i + di]), "".join(b_tokens[j:j + dj])))
        i += di
        j += dj

    if suffix:
        shared = "".join(a_tokens[len(a_tokens) - suffix:])
        runs.append((True, shared, shared))

    segments = _build_segments(runs)

    # Nothing in common: show the whole original removed and the whole final added
    if len(segments) == 1 and segments[0].kind is SegmentKind.REPLACED:
        segments = [
            DiffSegment(SegmentKind.DELETED, original, ""),
            DiffSegment(SegmentKind.INSERTED, "", final),
        ]
    return segments
