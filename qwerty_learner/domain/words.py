"""Immutable vocabulary types.

Dictionaries, their word entries and the chapters derived from them never
change after loading, so all of them are frozen dataclasses. No Qt here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

TRANSLATION_SEPARATOR: Final[str] = "; "


@dataclass(frozen=True)
class DictionaryDescriptor:
    """Registry entry for one word list."""

    id: str
    name: str
    url: str
    description: str = ""
    language: str = "en"


@dataclass(frozen=True)
class WordEntry:
    """A headword the learner types, plus what is shown alongside it."""

    headword: str
    translation: tuple[str, ...] = field(default_factory=tuple)
    us_phone: str = ""
    uk_phone: str = ""

    @property
    def translation_text(self) -> str:
        return TRANSLATION_SEPARATOR.join(t for t in self.translation if t)

    @property
    def pronunciation_key(self) -> str:
        return self.headword

    def __len__(self) -> int:
        return len(self.headword)


@dataclass(frozen=True)
class Chapter:
    """A contiguous slice of a dictionary's word list."""

    index: int
    words: tuple[WordEntry, ...]

    def __len__(self) -> int:
        return len(self.words)

    def __getitem__(self, i: int) -> WordEntry:
        return self.words[i]
