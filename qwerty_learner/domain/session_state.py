from __future__ import annotations

from dataclasses import dataclass

from qwerty_learner.domain.enums import SessionPhase


@dataclass
class SessionState:
    """The mutable cursor of a typing session.

    Owned by the session controller; everything else reads it. The phase is
    derived from the flags instead of being stored separately.
    """

    dictionary_id: str = ""
    chapter_index: int = 0
    word_index: int = 0
    typed_count: int = 0
    is_wrong: bool = False
    wrong_char: str = ""
    is_started: bool = False
    read_only_mode: bool = False
    word_visible: bool = True
    placeholder_enabled: bool = True
    translation_visible: bool = True

    @property
    def phase(self) -> SessionPhase:
        if not self.is_started:
            return SessionPhase.IDLE
        if self.is_wrong:
            return SessionPhase.WRONG_HOLD
        return SessionPhase.AWAITING_INPUT

    def clear_wrong(self) -> None:
        self.is_wrong = False
        self.wrong_char = ""

    def reset_word(self) -> None:
        self.typed_count = 0
        self.clear_wrong()

    def reset_cursor(self) -> None:
        self.word_index = 0
        self.reset_word()
