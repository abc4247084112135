from qwerty_learner.domain.config import DEFAULT_CHAPTER_LENGTH, SessionConfig
from qwerty_learner.domain.enums import VoiceType


def test_valid_values_are_applied() -> None:
    config, rejected = SessionConfig().with_values(
        {"chapter_length": 10, "placeholder": "*", "voice_type": "UK", "show_phonetic": True}
    )
    assert rejected == []
    assert config.chapter_length == 10
    assert config.placeholder == "*"
    assert config.voice_type is VoiceType.UK
    assert config.show_phonetic is True


def test_invalid_values_keep_previous() -> None:
    base = SessionConfig(wrong_highlight_delay_ms=250)
    config, rejected = base.with_values(
        {"chapter_length": 0, "wrong_highlight_delay_ms": "soon", "placeholder": "", "sound_enabled": "yes"}
    )
    assert config.chapter_length == DEFAULT_CHAPTER_LENGTH
    assert config.wrong_highlight_delay_ms == 250
    assert config.placeholder == "_"
    assert config.sound_enabled is True
    assert sorted(e.key for e in rejected) == [
        "chapter_length",
        "placeholder",
        "sound_enabled",
        "wrong_highlight_delay_ms",
    ]


def test_unknown_keys_are_ignored() -> None:
    config, rejected = SessionConfig().with_values({"theme": "dark"})
    assert config == SessionConfig()
    assert rejected == []


def test_to_dict_round_trips() -> None:
    original = SessionConfig(chapter_length=7, voice_type=VoiceType.UK)
    config, rejected = SessionConfig().with_values(original.to_dict())
    assert rejected == []
    assert config == original
