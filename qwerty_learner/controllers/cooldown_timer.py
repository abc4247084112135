from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer


class CooldownTimer(QObject):
    """Cancelable one-shot timer for the wrong-input cooldown.

    Every `start()` bumps a generation token; an expiry whose token is no
    longer current is a no-op, so `cancel()` also neutralises a timeout that
    is already queued on the event loop.
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._gen = 0
        self._active = False

    def is_active(self) -> bool:
        return self._active

    def start(self, delay_ms: int, on_expire: Callable[[], None]) -> None:
        self.cancel()
        self._active = True
        token = self._gen

        def _fire() -> None:
            if not self._active or token != self._gen:
                return
            self._active = False
            on_expire()

        QTimer.singleShot(max(0, int(delay_ms)), _fire)

    def cancel(self) -> None:
        self._gen += 1
        self._active = False
