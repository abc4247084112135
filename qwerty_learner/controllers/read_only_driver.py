from __future__ import annotations

import logging
from typing import Callable

from qwerty_learner.domain.enums import ReadOnlyTrigger

logger = logging.getLogger(__name__)

LINE_SUBMIT_TEXTS = ("\n", "\r", "\r\n")
SPACE_TEXT = " "


def trigger_for_text(text: str) -> ReadOnlyTrigger | None:
    if text in LINE_SUBMIT_TEXTS:
        return ReadOnlyTrigger.LINE_SUBMIT
    if text == SPACE_TEXT:
        return ReadOnlyTrigger.SPACE
    return None


class ReadOnlyDriver:
    """Advances the session from line/space triggers instead of typed words.

    The session controller arms the driver while read-only mode is on and the
    session is started; triggers arriving while disarmed are dropped.
    """

    def __init__(
        self,
        *,
        on_line_submit: Callable[[], None],
        on_space: Callable[[], None],
    ) -> None:
        self._on_line_submit = on_line_submit
        self._on_space = on_space
        self._armed = False

    @property
    def armed(self) -> bool:
        return self._armed

    def arm(self) -> None:
        self._armed = True

    def disarm(self) -> None:
        self._armed = False

    def handle_trigger(self, text: str) -> bool:
        """Dispatch a raw text trigger; return True when it was consumed."""
        if not self._armed:
            return False
        trigger = trigger_for_text(text)
        if trigger is None:
            return False
        logger.debug("Read-only trigger: %s", trigger.name)
        if trigger is ReadOnlyTrigger.LINE_SUBMIT:
            self._on_line_submit()
        else:
            self._on_space()
        return True
