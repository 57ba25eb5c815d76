import json
import logging
import random
import sys
from argparse import ArgumentParser
from dataclasses import replace
from typing import List, Optional

from humanize_diff import __version__
from humanize_diff.config import HumanizerConfig
from humanize_diff.errors import BundleError, InvalidInputError
from humanize_diff.pipeline import PipelineResult, humanize_with_diff_sync
from humanize_diff.text.diff import SegmentKind
from humanize_diff.text.interjections import Intensity


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="humanize-diff",
        description="Rewrite AI-sounding prose with phrase rules and show what changed.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # humanize command
    humanize_parser = subparsers.add_parser(
        "humanize",
        help="Humanize text and optionally show the diff against the input",
    )
    humanize_parser.add_argument(
        "text",
        nargs="?",
        help="Text to humanize (reads from stdin if not provided)",
    )
    humanize_parser.add_argument(
        "-f",
        "--file",
        type=str,
        help="Path to input text file",
    )
    humanize_parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output file path (writes to stdout if not provided)",
    )
    humanize_parser.add_argument(
        "--intensity",
        choices=[level.value for level in Intensity],
        default=Intensity.BALANCED.value,
        help="How often interjections are added (default: balanced)",
    )
    humanize_parser.add_argument(
        "--seed",
        type=int,
        help="Seed for interjection choices, for reproducible output",
    )
    humanize_parser.add_argument(
        "--rules",
        type=str,
        help="Path to a rule bundle (Parquet) replacing the built-in tables",
    )
    output_group = humanize_parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Print the full result (text, segments, coverage) as JSON",
    )
    output_group.add_argument(
        "--diff",
        action="store_true",
        help="Print an inline diff with [-deleted-] and {+inserted+} markers",
    )
    humanize_parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log pipeline progress to stderr (-vv for debug output)",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )
    return parser


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    if args.command == "humanize":
        handle_humanize(args)
    elif args.command == "version":
        handle_version()


def handle_version():
    """Display version information."""
    print(f"humanize-diff version {__version__}")


def render_inline_diff(result: PipelineResult) -> str:
    """Render diff segments as text with word-diff style markers."""
    parts = []
    for segment in result.segments:
        if segment.kind is SegmentKind.EQUAL:
            parts.append(segment.final_text)
        elif segment.kind is SegmentKind.DELETED:
            parts.append(f"[-{segment.original_text}-]")
        elif segment.kind is SegmentKind.INSERTED:
            parts.append(f"{{+{segment.final_text}+}}")
        else:
            parts.append(f"[-{segment.original_text}-]{{+{segment.final_text}+}}")
    return "".join(parts)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def handle_humanize(args):
    """Process text humanization request."""
    _configure_logging(args.verbose)

    # Get input text
    if args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                text = f.read()
        except FileNotFoundError:
            print(f"Error: File not found: {args.file}", file=sys.stderr)
            sys.exit(1)
    elif args.text:
        text = args.text
    else:
        # Read from stdin if no file or text argument provided
        text = sys.stdin.read()

    config = HumanizerConfig.load()
    if args.rules:
        config = replace(config, rules_path=args.rules)
    rng = random.Random(args.seed) if args.seed is not None else None

    try:
        result = humanize_with_diff_sync(text, args.intensity, config=config, rng=rng)
    except InvalidInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except FileNotFoundError:
        print(f"Error: Rule bundle not found: {config.rules_path}", file=sys.stderr)
        sys.exit(1)
    except BundleError as e:
        print(
            f"Error: Invalid rule bundle: {config.rules_path}\n"
            f"Details: {e}",
            file=sys.stderr,
        )
        sys.exit(1)

    if args.json:
        output = json.dumps(result.to_dict(), ensure_ascii=False, indent=2) + "\n"
    elif args.diff:
        output = render_inline_diff(result) + "\n"
    else:
        output = result.final_text

    # Write output
    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(output)
        except IOError as e:
            print(f"Error writing to file: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(output, end="")


if __name__ == "__main__":
    main()
