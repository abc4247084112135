"""Chapter partitioning of a dictionary's word list.

Chapters are never stored: they are recomputed from (word list, chapter
length) whenever either changes.
"""

from __future__ import annotations

from typing import Sequence

from qwerty_learner.domain.errors import ConfigurationRejected, OutOfRangeSelection
from qwerty_learner.domain.words import Chapter, WordEntry


def _check_length(chapter_length: int) -> int:
    n = int(chapter_length)
    if n <= 0:
        raise ConfigurationRejected("chapter_length", chapter_length, "must be positive")
    return n


def chapter_count(words: Sequence[WordEntry], chapter_length: int) -> int:
    n = _check_length(chapter_length)
    return -(-len(words) // n)


def chapters(words: Sequence[WordEntry], chapter_length: int) -> list[Chapter]:
    n = _check_length(chapter_length)
    return [
        Chapter(index=i, words=tuple(words[start:start + n]))
        for i, start in enumerate(range(0, len(words), n))
    ]


def chapter_words(words: Sequence[WordEntry], chapter_length: int, index: int) -> list[WordEntry]:
    """Return the words of chapter `index` (0-based)."""
    n = _check_length(chapter_length)
    count = chapter_count(words, n)
    if index < 0 or index >= count:
        raise OutOfRangeSelection("chapter {} outside 0..{}".format(index, count - 1))
    return list(words[index * n:(index + 1) * n])


def clamp_chapter(index: int, count: int) -> int:
    """Clamp a chapter index into [0, count); 0 when there are no chapters."""
    if count <= 0:
        return 0
    return max(0, min(int(index), count - 1))
