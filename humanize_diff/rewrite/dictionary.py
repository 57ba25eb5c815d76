"""Ordered phrase dictionary with a single-pass, non-overlapping matcher.

Rules are sorted once, at build time, by descending pattern length so that
more specific phrases are always tried before shorter ones at the same
offset ("is not" before "not"). Matching is an explicit left-to-right scan:
at each unconsumed offset the rules are tried in priority order, the first
match is taken, and the cursor jumps past it. Text produced by a replacement
is never rescanned in the same pass.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Pattern, Tuple

from humanize_diff.errors import DictionaryBuildError

logger = logging.getLogger(__name__)

_APOSTROPHES = "'’"


@dataclass(frozen=True)
class RewriteRule:
    """One phrase replacement.

    Literal patterns match on word boundaries, with any whitespace run
    between words and either apostrophe style accepted. Regex patterns are
    compiled exactly as written; their replacement is inserted literally.
    """

    pattern: str
    replacement: str
    case_sensitive: bool = False
    is_regex: bool = False

    @property
    def specificity(self) -> int:
        """Sort key for priority ordering: longer patterns win."""
        return len(self.pattern)

    def compile(self) -> Pattern:
        """Compile the rule into a regex.

        Raises:
            re.error: If a regex pattern is invalid
        """
        flags = 0 if self.case_sensitive else re.IGNORECASE
        if self.is_regex:
            return re.compile(self.pattern, flags)
        return re.compile(_literal_to_regex(self.pattern), flags)

    def first_chars(self) -> Optional[Tuple[str, ...]]:
        """Characters a match can start with, or None when unknown (regex)."""
        if self.is_regex:
            return None
        first = self.pattern.lstrip()[0]
        if first in _APOSTROPHES:
            return tuple(_APOSTROPHES)
        if self.case_sensitive:
            return (first,)
        return tuple({first, first.lower(), first.upper()})


class MatchSpan(NamedTuple):
    """Half-open character range consumed by one rule during a scan."""

    start: int
    end: int
    rule_id: int

    @property
    def length(self) -> int:
        return self.end - self.start


def _literal_to_regex(phrase: str) -> str:
    words = phrase.split()
    parts = []
    for word in words:
        # Either apostrophe style matches the other
        parts.append(re.sub(r"['’]", "['’]", re.escape(word)))
    body = r"\s+".join(parts)
    if re.match(r"\w", words[0][0]):
        body = r"\b" + body
    if re.match(r"\w", words[-1][-1]):
        body = body + r"\b"
    return body


def _coerce_rule(raw) -> RewriteRule:
    """Turn a tuple, mapping or RewriteRule into a RewriteRule."""
    if isinstance(raw, RewriteRule):
        return raw
    if isinstance(raw, Mapping):
        try:
            return RewriteRule(
                pattern=raw["pattern"],
                replacement=raw["replacement"],
                case_sensitive=bool(raw.get("case_sensitive", False)),
                is_regex=bool(raw.get("is_regex", False)),
            )
        except KeyError as e:
            raise DictionaryBuildError(f"rule mapping is missing {e}", raw) from e
    if isinstance(raw, (tuple, list)) and 2 <= len(raw) <= 4:
        pattern, replacement, *flags = raw
        case_sensitive = bool(flags[0]) if len(flags) > 0 else False
        is_regex = bool(flags[1]) if len(flags) > 1 else False
        return RewriteRule(pattern, replacement, case_sensitive, is_regex)
    raise DictionaryBuildError(f"unsupported rule format: {type(raw).__name__}", raw)


class PhraseDictionary:
    """Immutable, priority-ordered collection of rewrite rules.

    Build instances with ``build_dictionary``; the constructor assumes its
    input is already validated and sorted.
    """

    def __init__(
        self,
        rules: Iterable[RewriteRule],
        compiled: Iterable[Pattern],
        rejected: Iterable[DictionaryBuildError] = (),
    ):
        self.rules: Tuple[RewriteRule, ...] = tuple(rules)
        self._compiled: Tuple[Pattern, ...] = tuple(compiled)
        self.rejected: Tuple[DictionaryBuildError, ...] = tuple(rejected)
        self._wildcards, self._by_first_char = self._index_first_chars()

    def _index_first_chars(self) -> Tuple[Tuple[int, ...], Dict[str, Tuple[int, ...]]]:
        """Precompute, per starting character, which rules are worth trying."""
        wildcards = []
        by_char: Dict[str, List[int]] = {}
        for rule_id, rule in enumerate(self.rules):
            chars = rule.first_chars()
            if chars is None:
                wildcards.append(rule_id)
                continue
            for ch in chars:
                by_char.setdefault(ch, []).append(rule_id)

        # Merge regex rules into every bucket, keeping global priority order
        merged = {
            ch: tuple(sorted(set(ids) | set(wildcards))) for ch, ids in by_char.items()
        }
        return tuple(wildcards), merged

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[RewriteRule]:
        return iter(self.rules)

    def rule(self, rule_id: int) -> RewriteRule:
        return self.rules[rule_id]

    def find_all_matches(self, text: str) -> List[MatchSpan]:
        """Scan text once, left to right, returning non-overlapping spans.

        Args:
            text: Text to scan

        Returns:
            Spans in ascending offset order
        """
        spans: List[MatchSpan] = []
        pos = 0
        length = len(text)
        while pos < length:
            candidates = self._by_first_char.get(text[pos], self._wildcards)
            for rule_id in candidates:
                match = self._compiled[rule_id].match(text, pos)
                # Zero-width matches would stall the cursor
                if match is not None and match.end() > pos:
                    spans.append(MatchSpan(pos, match.end(), rule_id))
                    pos = match.end()
                    break
            else:
                pos += 1
        return spans


def build_dictionary(raw_rules: Iterable) -> PhraseDictionary:
    """Validate, order and compile rewrite rules.

    Malformed rules never abort the build: each one is logged as a warning,
    recorded on ``PhraseDictionary.rejected`` and skipped. Rejected are:
    empty patterns, invalid regexes, exact duplicates of an earlier rule, and
    rules whose replacement would itself be matched by the dictionary.

    Args:
        raw_rules: RewriteRule objects, (pattern, replacement[, case_sensitive
            [, is_regex]]) tuples, or mappings with the same keys

    Returns:
        PhraseDictionary with rules sorted by descending pattern length,
        ties kept in declaration order
    """
    rejected: List[DictionaryBuildError] = []

    def reject(error: DictionaryBuildError) -> None:
        logger.warning("Skipping rewrite rule %r: %s", error.rule, error)
        rejected.append(error)

    accepted: List[Tuple[RewriteRule, Pattern]] = []
    seen = set()
    for raw in raw_rules:
        try:
            rule = _coerce_rule(raw)
        except DictionaryBuildError as e:
            reject(e)
            continue

        if not isinstance(rule.pattern, str) or not rule.pattern.strip():
            reject(DictionaryBuildError("pattern is empty", rule))
            continue
        if not isinstance(rule.replacement, str):
            reject(DictionaryBuildError("replacement is not a string", rule))
            continue

        key = (
            rule.pattern if rule.case_sensitive else rule.pattern.lower(),
            rule.case_sensitive,
            rule.is_regex,
        )
        if key in seen:
            reject(DictionaryBuildError("duplicate pattern", rule))
            continue

        try:
            compiled = rule.compile()
        except re.error as e:
            reject(DictionaryBuildError(f"invalid pattern: {e}", rule))
            continue

        seen.add(key)
        accepted.append((rule, compiled))

    # A replacement that the dictionary itself would match again makes the
    # rewrite non-idempotent; drop such rules
    patterns = [compiled for _, compiled in accepted]
    stable = []
    for rule, compiled in accepted:
        if rule.replacement and any(p.search(rule.replacement) for p in patterns):
            reject(DictionaryBuildError("replacement is matched by the dictionary", rule))
            continue
        stable.append((rule, compiled))

    stable.sort(key=lambda item: -item[0].specificity)
    logger.debug("Built phrase dictionary: %d rules, %d rejected", len(stable), len(rejected))
    return PhraseDictionary(
        rules=[rule for rule, _ in stable],
        compiled=[compiled for _, compiled in stable],
        rejected=rejected,
    )
