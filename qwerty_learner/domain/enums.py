from __future__ import annotations

from enum import Enum, auto


class CompareResult(Enum):
    """Outcome of comparing one typed character with the expected word."""

    CONTINUE = auto()
    WRONG = auto()
    COMPLETE = auto()


class SessionPhase(Enum):
    IDLE = auto()
    AWAITING_INPUT = auto()
    WRONG_HOLD = auto()


class SoundCue(str, Enum):
    """Named sound effects; the value doubles as the asset file stem."""

    CLICK = "click"
    SUCCESS = "success"
    WRONG = "wrong"


class ReadOnlyTrigger(Enum):
    LINE_SUBMIT = auto()
    SPACE = auto()


class VoiceType(str, Enum):
    UK = "uk"
    US = "us"

    @property
    def dictvoice_type(self) -> int:
        # dictvoice: type=1 is British, type=2 is American
        return 1 if self is VoiceType.UK else 2
