"""Rule bundle: every rewrite table the pipeline needs, in one Parquet file.

A bundle stores phrase rules, contraction rules and interjections as rows of
a single table distinguished by a ``kind`` column. Loading is atomic: either
the whole file is present and valid, or loading fails with a clear error,
so a half-loaded rule set can never reach the rewriter.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple, Union

import polars as pl
import pyarrow as pa
import pyarrow.parquet as pq

from humanize_diff.errors import BundleError
from humanize_diff.rewrite.dictionary import RewriteRule
from humanize_diff.rewrite.phrases import (
    CONTRACTION_RULES,
    INTERJECTIONS,
    PHRASE_RULES,
    TRANSITION_RULES,
)
from humanize_diff.text.interjections import Interjection

BUNDLE_METADATA_KEY = b"humanize_diff_bundle"
BUNDLE_VERSION = 1

BUNDLE_SCHEMA = {
    "kind": pl.String,
    "pattern": pl.String,
    "replacement": pl.String,
    "case_sensitive": pl.Boolean,
    "is_regex": pl.Boolean,
    "weight": pl.Float64,
}

KINDS = ("phrase", "contraction", "interjection")


@dataclass(frozen=True)
class RuleBundle:
    """All rule tables used by one pipeline.

    Attributes:
        phrase_rules: Rules for the phrase dictionary
        contraction_rules: Rules for the contraction pass
        interjections: Interjection catalog
    """

    phrase_rules: Tuple[RewriteRule, ...]
    contraction_rules: Tuple[RewriteRule, ...]
    interjections: Tuple[Interjection, ...]

    @classmethod
    def default(cls) -> "RuleBundle":
        """Bundle holding the built-in tables."""
        phrases = [RewriteRule(pattern, replacement) for pattern, replacement in PHRASE_RULES]
        phrases.extend(
            RewriteRule(pattern, replacement, is_regex=True)
            for pattern, replacement in TRANSITION_RULES
        )
        return cls(
            phrase_rules=tuple(phrases),
            contraction_rules=tuple(
                RewriteRule(pattern, replacement, case_sensitive)
                for pattern, replacement, case_sensitive in CONTRACTION_RULES
            ),
            interjections=tuple(Interjection(text, weight) for text, weight in INTERJECTIONS),
        )

    def to_frame(self) -> pl.DataFrame:
        """Flatten the bundle into one DataFrame with a ``kind`` column."""
        rows = []
        for kind, rules in (("phrase", self.phrase_rules), ("contraction", self.contraction_rules)):
            for rule in rules:
                rows.append(
                    (kind, rule.pattern, rule.replacement, rule.case_sensitive, rule.is_regex, 1.0)
                )
        for item in self.interjections:
            rows.append(("interjection", item.text, "", False, False, float(item.weight)))
        return pl.DataFrame(rows, schema=BUNDLE_SCHEMA, orient="row")

    def counts(self) -> Dict[str, int]:
        return {
            "phrase": len(self.phrase_rules),
            "contraction": len(self.contraction_rules),
            "interjection": len(self.interjections),
        }

    def write(self, path: Union[str, Path]) -> None:
        """Write the bundle to a Parquet file with bundle metadata.

        Args:
            path: Destination file; parent directories are created
        """
        filepath = Path(path)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        table = self.to_frame().to_arrow()
        metadata = dict(table.schema.metadata or {})
        metadata[BUNDLE_METADATA_KEY] = json.dumps(
            {"version": BUNDLE_VERSION, "counts": self.counts()}
        ).encode("utf-8")
        pq.write_table(table.replace_schema_metadata(metadata), filepath)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "RuleBundle":
        """Load a bundle written by ``write``.

        Args:
            path: Path to the bundle file

        Returns:
            Fully initialized RuleBundle

        Raises:
            FileNotFoundError: If the file does not exist
            BundleError: If metadata, schema or row contents are invalid
        """
        filepath = Path(path)
        if not filepath.exists():
            raise FileNotFoundError(f"Rule bundle not found: {path}")

        try:
            table = pq.read_table(filepath)
        except (pa.lib.ArrowException, OSError) as e:
            raise BundleError(f"Failed to read rule bundle from {filepath}: {e}") from e

        cls._validate_metadata(table, filepath)
        df = pl.from_arrow(table)
        cls._validate_schema(df)

        unknown = set(df["kind"].unique().to_list()) - set(KINDS)
        if unknown:
            raise BundleError(f"Rule bundle has unknown kinds: {sorted(str(k) for k in unknown)}")

        def rules_of(kind: str) -> Tuple[RewriteRule, ...]:
            rows = df.filter(pl.col("kind") == kind).iter_rows(named=True)
            return tuple(
                RewriteRule(
                    pattern=row["pattern"] or "",
                    replacement=row["replacement"] or "",
                    case_sensitive=bool(row["case_sensitive"]),
                    is_regex=bool(row["is_regex"]),
                )
                for row in rows
            )

        interjections = tuple(
            Interjection(row["pattern"] or "", row["weight"] if row["weight"] is not None else 1.0)
            for row in df.filter(pl.col("kind") == "interjection").iter_rows(named=True)
        )

        return cls(
            phrase_rules=rules_of("phrase"),
            contraction_rules=rules_of("contraction"),
            interjections=interjections,
        )

    @staticmethod
    def _validate_metadata(table: pa.Table, filepath: Path) -> None:
        """Check the bundle marker and format version."""
        metadata = table.schema.metadata or {}
        if BUNDLE_METADATA_KEY not in metadata:
            raise BundleError(
                f"File {filepath} is not a rule bundle. "
                f"Expected '{BUNDLE_METADATA_KEY.decode()}' in custom metadata."
            )
        try:
            info = json.loads(metadata[BUNDLE_METADATA_KEY].decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise BundleError(f"Invalid bundle metadata in {filepath}: {e}") from e
        if not isinstance(info, dict) or info.get("version") != BUNDLE_VERSION:
            raise BundleError(
                f"Unsupported rule bundle version in {filepath}: expected {BUNDLE_VERSION}"
            )

    @staticmethod
    def _validate_schema(df: pl.DataFrame) -> None:
        """Validate that the bundle table has the expected columns and types.

        Raises:
            BundleError: If columns are missing or have the wrong type
        """
        missing = set(BUNDLE_SCHEMA) - set(df.columns)
        if missing:
            raise BundleError(f"Rule bundle is missing required columns: {sorted(missing)}")

        type_mismatches: List[str] = []
        for col_name, expected_type in BUNDLE_SCHEMA.items():
            actual_type = df[col_name].dtype
            if actual_type != expected_type:
                type_mismatches.append(f"{col_name}: expected {expected_type}, got {actual_type}")

        if type_mismatches:
            raise BundleError(
                "Rule bundle has schema mismatches:\n"
                + "\n".join(f"  - {m}" for m in type_mismatches)
            )
