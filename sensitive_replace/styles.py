"""Case style recognition and style-preserving reconstruction."""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, Tuple

from .structures import CaseStyle, Delimited, LowerCamel, ScreamingSnake, UpperCamel

SCREAMING_SNAKE_PATTERN = re.compile(r"^(_*)[A-Z]+(?=_|\Z)")
DELIMITER_PATTERN = re.compile(r"[-._/\\: ]+")
LOWER_CAMEL_PATTERN = re.compile(r"^[a-z][a-z0-9]*(?=[A-Z]|\Z)")
UPPER_CAMEL_PATTERN = re.compile(r"^[A-Z][a-z0-9]*(?=[A-Z]|\Z)")
ACRONYM_PATTERN = re.compile(r"^[A-Z0-9]+\Z")


def _recognize_screaming_snake(text: str) -> Optional[CaseStyle]:
    match = SCREAMING_SNAKE_PATTERN.match(text)
    if not match:
        return None
    return ScreamingSnake(leading_underscores=match.group(1))


def _recognize_delimited(text: str) -> Optional[CaseStyle]:
    match = DELIMITER_PATTERN.search(text)
    if not match:
        return None
    return Delimited(delimiter=match.group(0))


def _recognize_lower_camel(text: str) -> Optional[CaseStyle]:
    return LowerCamel() if LOWER_CAMEL_PATTERN.match(text) else None


def _recognize_upper_camel(text: str) -> Optional[CaseStyle]:
    return UpperCamel() if UPPER_CAMEL_PATTERN.match(text) else None


Recognizer = Callable[[str], Optional[CaseStyle]]

# Priority order; the first recognizer that fires wins.
STYLE_CATALOG: Tuple[Tuple[str, Recognizer], ...] = (
    ("screaming_snake", _recognize_screaming_snake),
    ("delimited", _recognize_delimited),
    ("lower_camel", _recognize_lower_camel),
    ("upper_camel", _recognize_upper_camel),
)


def detect_style(text: str) -> Optional[CaseStyle]:
    """Return the first style whose recognizer matches `text`."""

    for _, recognize in STYLE_CATALOG:
        style = recognize(text)
        if style is not None:
            return style
    return None


def style_name(style: Optional[CaseStyle]) -> Optional[str]:
    """Return the catalog name of a detected style."""

    if style is None:
        return None
    if isinstance(style, ScreamingSnake):
        return "screaming_snake"
    if isinstance(style, Delimited):
        return "delimited"
    if isinstance(style, LowerCamel):
        return "lower_camel"
    return "upper_camel"


def _is_acronym(word: str) -> bool:
    return bool(ACRONYM_PATTERN.match(word))


def _capitalize_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def _build_screaming_snake(style: ScreamingSnake, words: Sequence[str]) -> str:
    return style.leading_underscores + "_".join(word.upper() for word in words)


def _build_delimited(style: Delimited, original_text: str, words: Sequence[str]) -> str:
    segments = [part for part in DELIMITER_PATTERN.split(original_text) if part]
    rendered: List[str] = []
    for index, word in enumerate(words):
        if index < len(segments):
            restyled = restyle(segments[index], [word])
        elif DELIMITER_PATTERN.search(word):
            restyled = None
        else:
            # Words past the last segment take their style from themselves.
            restyled = restyle(word, [word])
        rendered.append(restyled if restyled is not None else word)
    return style.delimiter.join(rendered)


def _build_lower_camel(words: Sequence[str]) -> str:
    if not words:
        return ""
    head = words[0].lower()
    tail = [
        word if _is_acronym(word) else _capitalize_first(word.lower())
        for word in words[1:]
    ]
    return head + "".join(tail)


def _build_upper_camel(words: Sequence[str]) -> str:
    return "".join(_capitalize_first(word) for word in words)


def build(style: CaseStyle, original_text: str, words: Sequence[str]) -> str:
    """Render `words` in `style`, as detected on `original_text`."""

    if isinstance(style, ScreamingSnake):
        return _build_screaming_snake(style, words)
    if isinstance(style, Delimited):
        return _build_delimited(style, original_text, words)
    if isinstance(style, LowerCamel):
        return _build_lower_camel(words)
    return _build_upper_camel(words)


def restyle(original_text: str, words: Sequence[str]) -> Optional[str]:
    """Render `words` in the case style of `original_text`.

    Returns ``None`` when no style is recognised; callers then fall back to
    the literal replacement text.
    """

    style = detect_style(original_text)
    if style is None:
        return None
    return build(style, original_text, words)
