from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from qwerty_learner.domain.enums import SoundCue

logger = logging.getLogger(__name__)


def _default_sounds_dir() -> Path:
    return Path(__file__).resolve().parents[2] / "assets" / "sounds"


class SoundCuePlayer(QObject):
    """Plays the click/success/wrong cues via one QSoundEffect each.

    Missing WAV files are skipped (the cue is simply silent).
    """

    def __init__(
        self,
        sounds_dir: Path | None = None,
        *,
        volume: float = 0.25,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.enabled = True
        self._effects: dict[SoundCue, QSoundEffect] = {}

        root = sounds_dir if sounds_dir is not None else _default_sounds_dir()
        for cue in SoundCue:
            path = root / "{}.wav".format(cue.value)
            if not path.exists():
                logger.debug("Sound cue missing: %s", path)
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setLoopCount(1)
            effect.setVolume(float(volume))
            self._effects[cue] = effect

    def play(self, cue: SoundCue) -> None:
        if not self.enabled:
            return
        effect = self._effects.get(cue)
        if effect is None:
            return
        # Restart rather than stack when keys arrive faster than the clip.
        if effect.isPlaying():
            effect.stop()
        effect.play()
