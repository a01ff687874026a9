"""Core data structures for the Sensitive Replace tool."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


class TokenKind(Enum):
    """Classifies the pieces produced while scanning an alphanumeric run."""

    ACRONYM = auto()
    UPPER = auto()
    DIGITS = auto()
    LOWER = auto()


@dataclass(frozen=True)
class Token:
    """A classified slice of an alphanumeric run."""

    kind: TokenKind
    text: str


@dataclass(frozen=True)
class ScreamingSnake:
    """`__FOO_BAR` style; keeps the leading underscores of the original."""

    leading_underscores: str = ""


@dataclass(frozen=True)
class Delimited:
    """Words separated by a run of `-._/\\:` or spaces."""

    delimiter: str


@dataclass(frozen=True)
class LowerCamel:
    """`fooBar` style."""


@dataclass(frozen=True)
class UpperCamel:
    """`FooBar` style."""


CaseStyle = Union[ScreamingSnake, Delimited, LowerCamel, UpperCamel]


@dataclass(frozen=True)
class Selection:
    """A half-open character range in a document."""

    start: int
    end: int

    @property
    def is_empty(self) -> bool:
        return self.start == self.end


@dataclass
class StagedReplacement:
    """A computed replacement waiting to be applied."""

    selection: Selection
    original_text: str
    replacement: str
    style: Optional[str] = None
