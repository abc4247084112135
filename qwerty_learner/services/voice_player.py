"""Word pronunciation via the Youdao dictvoice endpoint.

`VoicePlayer.pronounce(word, on_complete)` streams the clip with QMediaPlayer.
`on_complete` is *always* invoked exactly once (end of media, playback error,
or immediately when voice is disabled) so the caller's playback lock cannot
deadlock.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional
from urllib.parse import urlencode

from PyQt6.QtCore import QObject, QTimer, QUrl
from PyQt6.QtMultimedia import QAudioOutput, QMediaPlayer

from qwerty_learner.domain.enums import VoiceType

logger = logging.getLogger(__name__)

DICTVOICE_URL = "https://dict.youdao.com/dictvoice"


def dictvoice_url(word: str, voice_type: VoiceType = VoiceType.US) -> str:
    return "{}?{}".format(DICTVOICE_URL, urlencode({"audio": word, "type": voice_type.dictvoice_type}))


class VoicePlayer(QObject):
    def __init__(self, *, volume: float = 1.0, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.enabled = True
        self.voice_type = VoiceType.US

        self._audio = QAudioOutput(self)
        self._audio.setVolume(float(volume))
        self._player = QMediaPlayer(self)
        self._player.setAudioOutput(self._audio)
        self._player.mediaStatusChanged.connect(self._on_media_status)  # type: ignore
        self._player.errorOccurred.connect(self._on_error)  # type: ignore

        self._pending: Optional[Callable[[], None]] = None

    def pronounce(self, word: str, on_complete: Optional[Callable[[], None]] = None) -> None:
        # A new request supersedes whatever is still playing.
        self._finish()
        if not self.enabled or not word:
            if on_complete is not None:
                QTimer.singleShot(0, on_complete)
            return

        self._pending = on_complete
        url = dictvoice_url(word, self.voice_type)
        logger.debug("Pronouncing %r via %s", word, url)
        self._player.setSource(QUrl(url))
        self._player.play()

    def _on_media_status(self, status: QMediaPlayer.MediaStatus) -> None:
        if status in (QMediaPlayer.MediaStatus.EndOfMedia, QMediaPlayer.MediaStatus.InvalidMedia):
            self._finish()

    def _on_error(self, error: QMediaPlayer.Error, message: str = "") -> None:
        if error == QMediaPlayer.Error.NoError:
            return
        logger.warning("Pronunciation playback failed: %s", message or error)
        self._finish()

    def _finish(self) -> None:
        cb = self._pending
        self._pending = None
        if cb is None:
            return
        try:
            cb()
        except Exception:
            logger.exception("Pronunciation completion callback failed")
