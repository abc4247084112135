"""Text fragments for the three display slots.

Everything here is a pure function of (state, current word, config); the host
re-pulls fragments after each state change instead of caching them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Optional

from qwerty_learner.domain.config import SessionConfig
from qwerty_learner.domain.enums import SessionPhase, VoiceType
from qwerty_learner.domain.session_state import SessionState
from qwerty_learner.domain.words import WordEntry

CURSOR_MARKER: Final[str] = "|"


@dataclass(frozen=True)
class DisplayFragments:
    word: str = ""
    input: str = ""
    translation: str = ""
    highlight_wrong: bool = False
    highlight_color: str = ""


def word_fragment(state: SessionState, word: Optional[WordEntry], config: SessionConfig) -> str:
    if word is None or not state.is_started:
        return ""
    if not state.word_visible:
        if not state.placeholder_enabled:
            return ""
        return config.placeholder * len(word.headword)
    text = word.headword
    phone = word.uk_phone if config.voice_type is VoiceType.UK else word.us_phone
    if config.show_phonetic and phone:
        text = "{} /{}/".format(text, phone)
    return text


def input_fragment(state: SessionState, word: Optional[WordEntry]) -> str:
    if word is None or not state.is_started:
        return ""
    prefix = word.headword[:state.typed_count]
    if state.phase is SessionPhase.WRONG_HOLD:
        return prefix + (state.wrong_char or CURSOR_MARKER)
    return prefix + CURSOR_MARKER


def translation_fragment(state: SessionState, word: Optional[WordEntry]) -> str:
    if word is None or not state.is_started or not state.translation_visible:
        return ""
    return word.translation_text


def format_display(state: SessionState, word: Optional[WordEntry], config: SessionConfig) -> DisplayFragments:
    wrong = state.phase is SessionPhase.WRONG_HOLD
    return DisplayFragments(
        word=word_fragment(state, word, config),
        input=input_fragment(state, word),
        translation=translation_fragment(state, word),
        highlight_wrong=wrong,
        highlight_color=config.wrong_highlight_color if wrong else "",
    )
