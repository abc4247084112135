# tests/conftest.py
import json
import os
from pathlib import Path
from typing import Callable, Optional

import pytest

# Must be set before the first QApplication is created.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from qwerty_learner.controllers.session_controller import SessionController  # noqa: E402
from qwerty_learner.domain.config import SessionConfig  # noqa: E402
from qwerty_learner.services.dictionary_catalog import DictionaryCatalog  # noqa: E402

FRUIT_WORDS = [
    {"name": "apple", "trans": ["苹果"], "usphone": "'æpl", "ukphone": "'æpl"},
    {"name": "pear", "trans": "梨"},
    {"name": "plum", "trans": ["李子", "梅子"]},
]

NUMBERED_WORDS = [{"name": "word{:02d}".format(i), "trans": ["第{}个".format(i)]} for i in range(50)]


def write_data_dir(root: Path) -> Path:
    data_dir = root / "data"
    (data_dir / "dicts").mkdir(parents=True, exist_ok=True)
    (data_dir / "dicts" / "fruit.json").write_text(json.dumps(FRUIT_WORDS, ensure_ascii=False), encoding="utf-8")
    (data_dir / "dicts" / "numbered.json").write_text(json.dumps(NUMBERED_WORDS), encoding="utf-8")
    (data_dir / "dictionaries.yaml").write_text(
        "- id: fruit\n"
        "  name: Fruit\n"
        "  url: dicts/fruit.json\n"
        "  description: A few fruits\n"
        "- id: numbered\n"
        "  name: Numbered\n"
        "  url: dicts/numbered.json\n"
        "- id: broken\n"
        "  name: Broken\n"
        "  url: dicts/missing.json\n",
        encoding="utf-8",
    )
    return data_dir


@pytest.fixture
def catalog(tmp_path: Path) -> DictionaryCatalog:
    write_data_dir(tmp_path)
    return DictionaryCatalog(project_root=tmp_path)


class FakeCooldown:
    """Manually fired stand-in for CooldownTimer."""

    def __init__(self) -> None:
        self.callback: Optional[Callable[[], None]] = None
        self.delay_ms: Optional[int] = None
        self.cancel_count = 0

    def is_active(self) -> bool:
        return self.callback is not None

    def start(self, delay_ms: int, on_expire: Callable[[], None]) -> None:
        self.delay_ms = int(delay_ms)
        self.callback = on_expire

    def cancel(self) -> None:
        self.cancel_count += 1
        self.callback = None

    def fire(self) -> None:
        cb = self.callback
        self.callback = None
        if cb is not None:
            cb()


class Recorder:
    """Collects cues and pronunciation requests emitted by the session."""

    def __init__(self) -> None:
        self.cues = []
        self.pronounced = []
        self.pending = []

    def play_cue(self, cue) -> None:
        self.cues.append(cue)

    def pronounce(self, word: str, on_complete: Callable[[], None]) -> None:
        self.pronounced.append(word)
        self.pending.append(on_complete)

    def complete_all(self) -> None:
        pending, self.pending = self.pending, []
        for cb in pending:
            cb()


@pytest.fixture
def cooldown() -> FakeCooldown:
    return FakeCooldown()


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_session(catalog, cooldown, recorder):
    def _make(**config_values) -> SessionController:
        config = SessionConfig(dictionary=config_values.pop("dictionary", "fruit"))
        config, rejected = config.with_values(config_values)
        assert not rejected
        return SessionController(
            catalog=catalog,
            config=config,
            cooldown=cooldown,
            play_cue=recorder.play_cue,
            pronounce=recorder.pronounce,
        )

    return _make
