from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Final, Mapping

from qwerty_learner.domain.enums import VoiceType
from qwerty_learner.domain.errors import ConfigurationRejected

DEFAULT_PLACEHOLDER: Final[str] = "_"
DEFAULT_CHAPTER_LENGTH: Final[int] = 20
DEFAULT_WRONG_DELAY_MS: Final[int] = 400
DEFAULT_WRONG_COLOR: Final[str] = "#EE3D11"


@dataclass(frozen=True)
class SessionConfig:
    """Immutable snapshot of the user-configurable options.

    The controller swaps the whole snapshot on every change; nothing holds on
    to derived values, so the formatter always sees the latest one.
    """

    placeholder: str = DEFAULT_PLACEHOLDER
    chapter_length: int = DEFAULT_CHAPTER_LENGTH
    wrong_highlight_delay_ms: int = DEFAULT_WRONG_DELAY_MS
    wrong_highlight_color: str = DEFAULT_WRONG_COLOR
    show_phonetic: bool = False
    ignore_case: bool = False
    sound_enabled: bool = True
    voice_enabled: bool = True
    voice_type: VoiceType = VoiceType.US
    dictionary: str = ""

    def with_values(self, values: Mapping[str, Any]) -> tuple["SessionConfig", list[ConfigurationRejected]]:
        """Return a copy with `values` applied field by field.

        Invalid values are not applied: the current value is kept and the
        rejection is returned so callers can log it. Unknown keys are ignored.
        """
        known = {f.name for f in fields(self)}
        accepted: dict[str, Any] = {}
        rejected: list[ConfigurationRejected] = []
        for key, raw in (values or {}).items():
            if key not in known:
                continue
            try:
                accepted[key] = _VALIDATORS[key](raw)
            except ConfigurationRejected as e:
                rejected.append(e)
        return replace(self, **accepted), rejected

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for f in fields(self):
            v = getattr(self, f.name)
            out[f.name] = v.value if isinstance(v, VoiceType) else v
        return out


# ----------------------------
# Field validators
# ----------------------------


def _positive_int(key: str) -> Callable[[Any], int]:
    def _check(value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigurationRejected(key, value, "expected an integer")
        try:
            v = int(value)
        except (TypeError, ValueError):
            raise ConfigurationRejected(key, value, "expected an integer") from None
        if v <= 0:
            raise ConfigurationRejected(key, value, "must be positive")
        return v

    return _check


def _non_empty_str(key: str) -> Callable[[Any], str]:
    def _check(value: Any) -> str:
        if not isinstance(value, str) or not value:
            raise ConfigurationRejected(key, value, "expected a non-empty string")
        return value

    return _check


def _flag(key: str) -> Callable[[Any], bool]:
    def _check(value: Any) -> bool:
        if not isinstance(value, bool):
            raise ConfigurationRejected(key, value, "expected true/false")
        return value

    return _check


def _voice_type(value: Any) -> VoiceType:
    try:
        return VoiceType(str(value).strip().lower())
    except ValueError:
        raise ConfigurationRejected("voice_type", value, "expected 'us' or 'uk'") from None


def _dictionary_id(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigurationRejected("dictionary", value, "expected a dictionary id")
    return value.strip()


_VALIDATORS: Final[dict[str, Callable[[Any], Any]]] = {
    "placeholder": _non_empty_str("placeholder"),
    "chapter_length": _positive_int("chapter_length"),
    "wrong_highlight_delay_ms": _positive_int("wrong_highlight_delay_ms"),
    "wrong_highlight_color": _non_empty_str("wrong_highlight_color"),
    "show_phonetic": _flag("show_phonetic"),
    "ignore_case": _flag("ignore_case"),
    "sound_enabled": _flag("sound_enabled"),
    "voice_enabled": _flag("voice_enabled"),
    "voice_type": _voice_type,
    "dictionary": _dictionary_id,
}
