from __future__ import annotations

from typing import Sequence

from qwerty_learner.domain.enums import CompareResult


def compare(
    expected: Sequence[str],
    confirmed_count: int,
    typed: str,
    *,
    case_sensitive: bool = True,
) -> CompareResult:
    """Classify the next typed character against the expected headword.

    `confirmed_count` is how many leading characters were already accepted.
    Callers pass exactly one character; anything outside the word yields WRONG.
    """
    n = len(expected)
    if confirmed_count < 0 or confirmed_count >= n:
        return CompareResult.WRONG

    want = expected[confirmed_count]
    got = typed
    if not case_sensitive:
        want = want.casefold()
        got = got.casefold()

    if got != want:
        return CompareResult.WRONG
    if confirmed_count == n - 1:
        return CompareResult.COMPLETE
    return CompareResult.CONTINUE
