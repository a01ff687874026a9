"""Word segmentation for identifiers and free text."""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .structures import Token, TokenKind

RUN_PATTERN = re.compile(r"[A-Za-z0-9]+")


def _is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def _is_lower(char: str) -> bool:
    return "a" <= char <= "z"


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _acronym_end(run: str, start: int) -> Optional[int]:
    """Return the end of the acronym starting at `start`, if one applies.

    The uppercase run is shortened until what follows it is either the end of
    the run or an uppercase letter followed by a lowercase one, so `ABCDef`
    yields `ABC` and leaves `Def` for the next word.
    """

    length = len(run)
    end = start
    while end < length and _is_upper(run[end]):
        end += 1
    while end > start:
        if end == length:
            return end
        if end + 1 < length and _is_upper(run[end]) and _is_lower(run[end + 1]):
            return end
        end -= 1
    return None


def scan_tokens(run: str) -> List[Token]:
    """Classify an alphanumeric run into tokens, consuming greedily."""

    tokens: List[Token] = []
    index = 0
    length = len(run)
    while index < length:
        char = run[index]
        if _is_upper(char):
            end = _acronym_end(run, index)
            if end is None:
                tokens.append(Token(TokenKind.UPPER, char))
                index += 1
            else:
                tokens.append(Token(TokenKind.ACRONYM, run[index:end]))
                index = end
        elif _is_digit(char):
            end = index
            while end < length and _is_digit(run[end]):
                end += 1
            tokens.append(Token(TokenKind.DIGITS, run[index:end]))
            index = end
        else:
            tokens.append(Token(TokenKind.LOWER, char))
            index += 1
    return tokens


def decide_boundary(
    previous_kind: Optional[TokenKind],
    current_kind: TokenKind,
    preceded_by_number: bool,
) -> Tuple[bool, bool]:
    """Return `(starts_new_word, next_preceded_by_number)` for a token."""

    is_digits = current_kind is TokenKind.DIGITS
    if previous_kind is None:
        return False, preceded_by_number
    if preceded_by_number:
        return True, is_digits
    return current_kind is not TokenKind.LOWER, is_digits


def segment(text: str) -> List[str]:
    """Split text into words on delimiters, case transitions and digits."""

    words: List[str] = []
    previous_kind: Optional[TokenKind] = None
    preceded_by_number = False

    for run in RUN_PATTERN.findall(text):
        for position, token in enumerate(scan_tokens(run)):
            starts_word, preceded_by_number = decide_boundary(
                previous_kind, token.kind, preceded_by_number
            )
            # A delimiter already separated this run from the previous one.
            if (starts_word or position == 0) and previous_kind is not None:
                words.append(token.text)
            elif words:
                words[-1] += token.text
            else:
                words.append(token.text)
            previous_kind = token.kind
    return words
