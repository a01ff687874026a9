"""Command line interface for Sensitive Replace."""

from __future__ import annotations

import argparse
import pathlib
import sys
from typing import Iterable, Optional, Sequence

from .configuration import get_settings
from .editor import (
    ReplacementPrompt,
    ReplacementRunner,
    ReplacementSummary,
    validate_paths,
)
from .errors import (
    ConfigurationError,
    OverwriteRefusedError,
    ReplacementCancelled,
    SelectionError,
    SensitiveReplaceError,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sensitive-replace",
        description=(
            "Replace identifiers in a text file while preserving each one's case style."
        ),
    )
    parser.add_argument(
        "input_file",
        help="Path to the text file to edit.",
    )
    parser.add_argument(
        "-r",
        "--range",
        dest="ranges",
        action="append",
        default=[],
        metavar="START:END",
        help="Character range to replace (repeatable, end exclusive).",
    )
    parser.add_argument(
        "-m",
        "--match",
        dest="patterns",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Regular expression; every match is replaced (repeatable).",
    )
    parser.add_argument(
        "-i",
        "--ignore-case",
        action="store_true",
        help="Match patterns case-insensitively.",
    )
    parser.add_argument(
        "-w",
        "--with",
        dest="replacement",
        help='Replacement text (e.g. "hello world"). Prompts when omitted.',
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Output file path. Defaults to writing the result to stdout.",
    )
    parser.add_argument(
        "--in-place",
        action="store_true",
        help="Rewrite the input file instead of printing the result.",
    )
    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Allow overwriting the output file if it already exists.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report every selection and the style detected for it.",
    )
    return parser


def make_prompt(replacement: str | None, placeholder: str) -> ReplacementPrompt:
    """Return a callable that yields the replacement text exactly once."""

    def prompt() -> str:
        if replacement is not None:
            return replacement
        try:
            return input(f"{placeholder}: ")
        except (EOFError, KeyboardInterrupt) as exc:
            raise ReplacementCancelled("Replacement cancelled; no changes made.") from exc

    return prompt


def execute_replacement(
    *,
    input_file: str,
    output_file: str | None,
    in_place: bool,
    ranges: Sequence[str],
    patterns: Sequence[str],
    ignore_case: bool,
    prompt: ReplacementPrompt,
    force_overwrite: bool,
    encoding: str,
    verbose: bool,
) -> tuple[int, str | None, ReplacementSummary | None, str | None]:
    """Execute a replacement run and return exit code, text, summary, and message."""

    input_path = pathlib.Path(input_file).expanduser().resolve()
    if in_place:
        output_path: pathlib.Path | None = input_path
    elif output_file:
        output_path = pathlib.Path(output_file).expanduser().resolve()
    else:
        output_path = None

    try:
        validate_paths(
            input_path,
            output_path,
            force_overwrite=force_overwrite,
            in_place=in_place,
        )
    except FileNotFoundError as exc:
        return 1, None, None, str(exc)
    except SensitiveReplaceError as exc:
        return 1, None, None, str(exc)

    runner = ReplacementRunner(
        input_path=input_path,
        output_path=output_path,
        ranges=ranges,
        patterns=patterns,
        ignore_case=ignore_case,
        prompt=prompt,
        encoding=encoding,
        verbose=verbose,
    )

    try:
        edited, summary = runner.run()
    except ReplacementCancelled as exc:
        return 2, None, None, str(exc)
    except (SelectionError, OverwriteRefusedError) as exc:
        return 1, None, None, str(exc)
    except SensitiveReplaceError as exc:
        return 1, None, None, str(exc)
    except KeyboardInterrupt:
        return 2, None, None, "Replacement interrupted by user."
    except Exception as exc:  # pragma: no cover - unexpected failure
        error_message = (
            f"{exc}\n"
            "An unexpected error occurred. Please rerun with --verbose for more details."
        )
        return 1, None, None, error_message

    return 0, edited, summary, None


def print_summary(summary: ReplacementSummary) -> None:
    """Output a short report on stderr once processing completes."""

    out = sys.stderr
    print("\nReplacement complete.", file=out)
    print(f"  Input file:   {summary.input_path}", file=out)
    if summary.output_path is not None:
        print(f"  Output file:  {summary.output_path}", file=out)
    print(
        "  Selections:   "
        f"{summary.total_selections} "
        f"({summary.restyled} restyled, {summary.verbatim} verbatim)",
        file=out,
    )
    print(f"  Words:        {' '.join(summary.words)}", file=out)
    print(f"  Elapsed time: {summary.elapsed_seconds:.2f} seconds", file=out)


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.in_place and args.output:
        parser.error("--in-place cannot be combined with -o/--output")

    try:
        settings = get_settings()
    except ConfigurationError as exc:
        print(exc)
        return 1

    verbose = bool(args.verbose or settings.SENSITIVE_REPLACE_VERBOSE)

    exit_code, edited, summary, message = execute_replacement(
        input_file=args.input_file,
        output_file=args.output,
        in_place=args.in_place,
        ranges=args.ranges,
        patterns=args.patterns,
        ignore_case=args.ignore_case,
        prompt=make_prompt(args.replacement, settings.SENSITIVE_REPLACE_PLACEHOLDER),
        force_overwrite=args.force,
        encoding=settings.SENSITIVE_REPLACE_ENCODING,
        verbose=verbose,
    )

    if message:
        print(message, file=sys.stderr)
    if edited is not None and summary is not None and summary.output_path is None:
        sys.stdout.write(edited)
    if summary and verbose:
        print_summary(summary)
    return exit_code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
