"""High-level orchestration for case-preserving replacement."""

from __future__ import annotations

import pathlib
import re
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Sequence

from .errors import OverwriteRefusedError, SelectionError, SensitiveReplaceError
from .segmenter import segment
from .structures import Selection, StagedReplacement
from .styles import build, detect_style, style_name

ReplacementPrompt = Callable[[], str]


@dataclass
class ReplacementSummary:
    """Report returned after editing a document."""

    input_path: pathlib.Path
    output_path: pathlib.Path | None
    total_selections: int
    restyled: int
    verbatim: int
    words: List[str]
    elapsed_seconds: float
    replacements: List[StagedReplacement] = field(default_factory=list)


def parse_range(value: str) -> Selection:
    """Parse a `START:END` character range."""

    start_text, sep, end_text = value.partition(":")
    if not sep:
        raise SelectionError(f"Invalid range '{value}': expected START:END.")
    try:
        start, end = int(start_text), int(end_text)
    except ValueError as exc:
        raise SelectionError(
            f"Invalid range '{value}': offsets must be integers."
        ) from exc
    if start < 0 or end < start:
        raise SelectionError(
            f"Invalid range '{value}': END must not precede START."
        )
    return Selection(start=start, end=end)


def find_selections(
    text: str,
    patterns: Iterable[str],
    *,
    ignore_case: bool = False,
) -> List[Selection]:
    """Select every non-empty match of each pattern."""

    flags = re.IGNORECASE if ignore_case else 0
    selections: List[Selection] = []
    for pattern in patterns:
        try:
            compiled = re.compile(pattern, flags)
        except re.error as exc:
            raise SelectionError(f"Invalid pattern '{pattern}': {exc}") from exc
        for match in compiled.finditer(text):
            if match.end() > match.start():
                selections.append(Selection(start=match.start(), end=match.end()))
    return selections


def validate_selections(text: str, selections: Sequence[Selection]) -> List[Selection]:
    """Return selections ordered by position, rejecting invalid layouts."""

    ordered = sorted(selections, key=lambda item: (item.start, item.end))
    previous: Selection | None = None
    for selection in ordered:
        if selection.start < 0 or selection.end > len(text):
            raise SelectionError(
                f"Selection {selection.start}:{selection.end} lies outside the "
                f"document ({len(text)} characters)."
            )
        if previous is not None and (
            selection.start < previous.end or selection == previous
        ):
            raise SelectionError(
                f"Selections {previous.start}:{previous.end} and "
                f"{selection.start}:{selection.end} overlap."
            )
        previous = selection
    return ordered


def stage_replacements(
    text: str,
    selections: Sequence[Selection],
    replacement_text: str,
    words: Sequence[str] | None = None,
) -> List[StagedReplacement]:
    """Compute the replacement for every selection without editing anything.

    `words` is the already segmented replacement text, when the caller has it.
    """

    if words is None:
        words = segment(replacement_text)
    staged: List[StagedReplacement] = []
    for selection in validate_selections(text, selections):
        original = text[selection.start:selection.end]
        style = detect_style(original)
        if style is None:
            replacement = replacement_text
        else:
            replacement = build(style, original, words)
        staged.append(
            StagedReplacement(
                selection=selection,
                original_text=original,
                replacement=replacement,
                style=style_name(style),
            )
        )
    return staged


def apply_replacements(text: str, staged: Sequence[StagedReplacement]) -> str:
    """Apply staged replacements in a single pass from the end backwards."""

    result = text
    for item in sorted(staged, key=lambda entry: entry.selection.start, reverse=True):
        result = (
            result[:item.selection.start]
            + item.replacement
            + result[item.selection.end:]
        )
    return result


def replace_in_text(
    text: str,
    selections: Sequence[Selection],
    replacement_text: str,
) -> str:
    """Return `text` with every selection replaced in its own case style."""

    return apply_replacements(
        text, stage_replacements(text, selections, replacement_text)
    )


class ReplacementRunner:
    """Coordinates reading, prompting, restyling, and writing."""

    def __init__(
        self,
        *,
        input_path: pathlib.Path,
        output_path: pathlib.Path | None,
        ranges: Sequence[str],
        patterns: Sequence[str],
        ignore_case: bool,
        prompt: ReplacementPrompt,
        encoding: str,
        verbose: bool,
    ) -> None:
        self.input_path = input_path
        self.output_path = output_path
        self.ranges = ranges
        self.patterns = patterns
        self.ignore_case = ignore_case
        self.prompt = prompt
        self.encoding = encoding
        self.verbose = verbose

    def run(self) -> tuple[str, ReplacementSummary]:
        start_time = time.time()

        try:
            text = self.input_path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise SensitiveReplaceError(
                f"Could not read {self.input_path}: {exc}"
            ) from exc

        selections = [parse_range(value) for value in self.ranges]
        selections.extend(
            find_selections(text, self.patterns, ignore_case=self.ignore_case)
        )

        if not selections:
            if self.verbose:
                print("No selections found; nothing to replace.", file=sys.stderr)
            self._write(text)
            return text, self._summary([], [], start_time)

        # Layout problems surface before the user is asked for anything.
        validate_selections(text, selections)

        replacement_text = self.prompt()
        words = segment(replacement_text)
        staged = stage_replacements(text, selections, replacement_text, words)
        if self.verbose:
            print(
                f"Prepared {len(staged)} selections, "
                f"{len(words)} replacement words: {words}.",
                file=sys.stderr,
            )
            for item in staged:
                print(
                    f"  {item.selection.start}:{item.selection.end} "
                    f"{item.original_text!r} -> {item.replacement!r} "
                    f"({item.style or 'verbatim'})",
                    file=sys.stderr,
                )

        edited = apply_replacements(text, staged)
        self._write(edited)
        return edited, self._summary(staged, words, start_time)

    def _write(self, text: str) -> None:
        if self.output_path is None:
            return
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(text, encoding=self.encoding)
        except OSError as exc:
            raise SensitiveReplaceError(
                f"Could not write {self.output_path}: {exc}"
            ) from exc

    def _summary(
        self,
        staged: List[StagedReplacement],
        words: List[str],
        start_time: float,
    ) -> ReplacementSummary:
        restyled = sum(1 for item in staged if item.style is not None)
        return ReplacementSummary(
            input_path=self.input_path,
            output_path=self.output_path,
            total_selections=len(staged),
            restyled=restyled,
            verbatim=len(staged) - restyled,
            words=words,
            elapsed_seconds=time.time() - start_time,
            replacements=staged,
        )


def validate_paths(
    input_path: pathlib.Path,
    output_path: pathlib.Path | None,
    *,
    force_overwrite: bool,
    in_place: bool,
) -> None:
    """Validate input/output path combinations and overwrite policy."""

    if not input_path.exists():
        raise FileNotFoundError(
            "Input file not found. Please provide a readable text file."
        )
    if not input_path.is_file():
        raise SensitiveReplaceError("Input path must be a file.")

    if output_path is None or in_place:
        return

    if input_path.resolve() == output_path.resolve():
        raise OverwriteRefusedError(
            "The output path matches the input file. Use --in-place to edit it directly."
        )

    if output_path.exists() and not force_overwrite:
        raise OverwriteRefusedError(
            "The output file already exists; rename it or use the overwrite flag."
        )
