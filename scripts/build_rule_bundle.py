#!/usr/bin/env python3
"""
Build a rule bundle from the built-in rewrite tables.

The bundle is a single Parquet file holding phrase rules, contraction rules
and interjections (see humanize_diff/data/bundle.py). Extra phrase rules can
be merged in from a CSV file with the columns:
- pattern: phrase to match (required)
- replacement: text to put in its place (required)
- case_sensitive: true/false (optional, default false)
- is_regex: true/false (optional, default false)

Every merged rule goes through the same validation as the dictionary build,
so rules that would be rejected at load time are reported here instead.
"""

import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import List

import polars as pl

from humanize_diff.data.bundle import RuleBundle
from humanize_diff.rewrite.dictionary import RewriteRule, build_dictionary

OUTPUT_FILE = "datasets/rules.parquet"

REQUIRED_CSV_COLUMNS = {"pattern", "replacement"}


def load_extra_rules(csv_path: Path) -> List[RewriteRule]:
    """Read extra phrase rules from a CSV file.

    Args:
        csv_path: Path to the CSV file

    Returns:
        Rules in file order

    Raises:
        ValueError: If required columns are missing
    """
    df = pl.read_csv(csv_path, infer_schema_length=0)
    missing = REQUIRED_CSV_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"{csv_path} is missing required columns: {sorted(missing)}")

    def flag(value) -> bool:
        return str(value or "").strip().lower() in ("1", "true", "yes")

    rules = []
    for row in df.iter_rows(named=True):
        rules.append(
            RewriteRule(
                pattern=row["pattern"] or "",
                replacement=row["replacement"] or "",
                case_sensitive=flag(row.get("case_sensitive")),
                is_regex=flag(row.get("is_regex")),
            )
        )
    return rules


def build_bundle(extra_csv: Path = None) -> RuleBundle:
    """Combine the built-in tables with optional CSV rules."""
    bundle = RuleBundle.default()
    if extra_csv is None:
        return bundle

    extra = load_extra_rules(extra_csv)
    print(f"  Read {len(extra)} extra phrase rules from {extra_csv}")
    phrase_rules = bundle.phrase_rules + tuple(extra)

    dictionary = build_dictionary(phrase_rules)
    for error in dictionary.rejected:
        print(f"    ✗ {error.rule.pattern!r}: {error}")
    print(f"    ✓ {len(dictionary)} phrase rules accepted, {len(dictionary.rejected)} rejected")

    return RuleBundle(
        phrase_rules=tuple(dictionary.rules),
        contraction_rules=bundle.contraction_rules,
        interjections=bundle.interjections,
    )


def main():
    """Main execution function."""
    parser = ArgumentParser(description="Build a rule bundle for humanize-diff")
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=OUTPUT_FILE,
        help=f"Output bundle path (default: {OUTPUT_FILE})",
    )
    parser.add_argument(
        "--extra",
        type=str,
        help="CSV file of extra phrase rules to merge in",
    )
    args = parser.parse_args()

    extra_csv = Path(args.extra) if args.extra else None
    if extra_csv is not None and not extra_csv.exists():
        print(f"Error: File not found: {extra_csv}", file=sys.stderr)
        sys.exit(1)

    print("Building rule bundle...")
    try:
        bundle = build_bundle(extra_csv)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    output_path = Path(args.output)
    bundle.write(output_path)
    counts = bundle.counts()
    print(f"\nWrote {output_path}")
    for kind, count in counts.items():
        print(f"  {kind}: {count} rows")


if __name__ == "__main__":
    main()
