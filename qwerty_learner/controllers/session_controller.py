from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Union

from qwerty_learner.controllers.cooldown_timer import CooldownTimer
from qwerty_learner.controllers.read_only_driver import ReadOnlyDriver
from qwerty_learner.domain.chapters import chapter_count, chapter_words, clamp_chapter
from qwerty_learner.domain.comparator import compare
from qwerty_learner.domain.config import SessionConfig
from qwerty_learner.domain.enums import CompareResult, SessionPhase, SoundCue
from qwerty_learner.domain.errors import (
    ConfigurationRejected,
    DictionaryLoadError,
    InvalidTransition,
    NotFoundError,
    OutOfRangeSelection,
)
from qwerty_learner.domain.formatter import DisplayFragments, format_display
from qwerty_learner.domain.session_state import SessionState
from qwerty_learner.domain.words import DictionaryDescriptor, WordEntry
from qwerty_learner.services.dictionary_catalog import DictionaryCatalog
from qwerty_learner.services.playback_lock import PlaybackLock

logger = logging.getLogger(__name__)

CuePlayFn = Callable[[SoundCue], None]
PronounceFn = Callable[[str, Callable[[], None]], None]


class SessionController:
    """Owns the typing session: cursor, phase transitions, cues and timers.

    Phases (derived from SessionState):
        IDLE -> AWAITING_INPUT <-> WRONG_HOLD

    Collaborators are injected as callables so the controller never touches
    widgets:
      - `play_cue(cue)` for the click/success/wrong sound effects
      - `pronounce(word, on_complete)` for word audio; `on_complete` must be
        called once playback ends, it releases the playback lock

    Listeners registered with `add_on_state_changed` are notified after every
    transition and pull `display()` to re-render.
    """

    def __init__(
        self,
        *,
        catalog: DictionaryCatalog,
        config: Optional[SessionConfig] = None,
        cooldown: Optional[CooldownTimer] = None,
        play_cue: Optional[CuePlayFn] = None,
        pronounce: Optional[PronounceFn] = None,
    ) -> None:
        self._catalog = catalog
        self._config = config if config is not None else SessionConfig()
        self._cooldown = cooldown if cooldown is not None else CooldownTimer()
        self._play_cue = play_cue
        self._pronounce = pronounce
        self._playback_lock = PlaybackLock()
        self._listeners: list[Callable[[], None]] = []

        self._read_only = ReadOnlyDriver(
            on_line_submit=self._on_line_submit,
            on_space=self._on_space,
        )

        initial = self._config.dictionary
        if not initial or not catalog.has(initial):
            if initial:
                logger.warning("Unknown dictionary %r in settings; using default", initial)
            initial = catalog.default_id()
        self._state = SessionState(dictionary_id=initial)
        self._words: list[WordEntry] = []

    # ----------------------------
    # Read access
    # ----------------------------

    @property
    def state(self) -> SessionState:
        """The live session state. Read it; mutate only through this controller."""
        return self._state

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    @property
    def read_only_driver(self) -> ReadOnlyDriver:
        return self._read_only

    @property
    def playback_lock(self) -> PlaybackLock:
        return self._playback_lock

    def dictionaries(self) -> list[DictionaryDescriptor]:
        return self._catalog.list()

    def current_dictionary(self) -> DictionaryDescriptor:
        return self._catalog.get(self._state.dictionary_id)

    def total_chapters(self) -> int:
        if not self._words:
            return 0
        return chapter_count(self._words, self._config.chapter_length)

    def current_chapter_words(self) -> list[WordEntry]:
        if not self._words:
            return []
        return chapter_words(self._words, self._config.chapter_length, self._state.chapter_index)

    def current_word(self) -> Optional[WordEntry]:
        words = self.current_chapter_words()
        if not words:
            return None
        return words[self._state.word_index]

    def display(self) -> DisplayFragments:
        return format_display(self._state, self.current_word(), self._config)

    # ----------------------------
    # Listeners
    # ----------------------------

    def add_on_state_changed(self, callback: Callable[[], None] | None) -> None:
        if callback is None:
            return
        self._listeners.append(callback)

    def _notify(self) -> None:
        for cb in list(self._listeners):
            try:
                cb()
            except Exception:
                logger.exception("State listener failed")

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def start(self) -> bool:
        """Start a session; return False (and stay idle) if the words cannot load."""
        if self._state.is_started:
            return True
        try:
            words = self._catalog.resolve(self._state.dictionary_id)
        except (NotFoundError, DictionaryLoadError) as e:
            logger.error("Cannot start session: %s", e)
            return False

        self._words = words
        self._state.chapter_index = clamp_chapter(self._state.chapter_index, self.total_chapters())
        self._state.reset_cursor()
        self._state.translation_visible = True
        self._state.is_started = True
        if self._state.read_only_mode:
            self._read_only.arm()
        logger.info(
            "Session started: %s chapter %d/%d",
            self._state.dictionary_id,
            self._state.chapter_index + 1,
            self.total_chapters(),
        )
        self._request_pronunciation()
        self._notify()
        return True

    def stop(self) -> None:
        if not self._state.is_started:
            return
        self._cooldown.cancel()
        self._read_only.disarm()
        self._playback_lock.reset()
        self._state.clear_wrong()
        self._state.is_started = False
        logger.info("Session stopped")
        self._notify()

    def toggle_start(self) -> bool:
        if self._state.is_started:
            self.stop()
            return False
        return self.start()

    # ----------------------------
    # Input
    # ----------------------------

    def dispatch_text(self, text: str) -> None:
        """Route raw text from the host's input feed to the active advancement path."""
        if self._state.read_only_mode:
            self._read_only.handle_trigger(text)
            return
        if text in ("\n", "\r", "\r\n"):
            return
        self.receive_character(text)

    def receive_character(self, c: str) -> Optional[CompareResult]:
        """Feed one typed character; return the comparison result, or None if discarded."""
        if not isinstance(c, str) or len(c) != 1:
            logger.debug("Ignoring non single-character input %r", c)
            return None
        try:
            word = self._require_typing_word()
        except InvalidTransition as e:
            logger.debug("Ignored keystroke %r: %s", c, e)
            return None

        result = compare(
            word.headword,
            self._state.typed_count,
            c,
            case_sensitive=not self._config.ignore_case,
        )
        if result is CompareResult.CONTINUE:
            self._state.typed_count += 1
            self._emit_cue(SoundCue.CLICK)
            self._notify()
        elif result is CompareResult.COMPLETE:
            self._state.typed_count = len(word.headword)
            self._emit_cue(SoundCue.SUCCESS)
            self.finish_word()
        else:
            self._state.is_wrong = True
            self._state.wrong_char = c
            self._emit_cue(SoundCue.WRONG)
            self._cooldown.start(self._config.wrong_highlight_delay_ms, self._on_cooldown_expired)
            self._notify()
        return result

    def _require_typing_word(self) -> WordEntry:
        phase = self._state.phase
        if phase is SessionPhase.IDLE:
            raise InvalidTransition("session not started")
        if self._state.read_only_mode:
            raise InvalidTransition("read-only mode is active")
        if phase is SessionPhase.WRONG_HOLD:
            raise InvalidTransition("waiting for wrong-input cooldown")
        word = self.current_word()
        if word is None:
            raise InvalidTransition("no word loaded")
        return word

    def _on_cooldown_expired(self) -> None:
        if not self._state.is_wrong:
            return
        self._state.clear_wrong()
        self._notify()

    def finish_word(self, *, show_translation: bool = True) -> None:
        """Advance to the next word, wrapping chapters and then the dictionary."""
        if not self._state.is_started or not self._words:
            return
        self._cooldown.cancel()

        in_chapter = len(self.current_chapter_words())
        if self._state.word_index + 1 < in_chapter:
            self._state.word_index += 1
        else:
            # Past the last chapter wrap silently to chapter 0.
            total = self.total_chapters()
            self._state.chapter_index = (self._state.chapter_index + 1) % total
            self._state.word_index = 0
        self._state.reset_word()
        self._state.translation_visible = show_translation
        self._request_pronunciation()
        self._notify()

    # ----------------------------
    # Read-only triggers
    # ----------------------------

    def _on_line_submit(self) -> None:
        if not self._state.is_started or not self._state.read_only_mode:
            return
        self.finish_word(show_translation=False)

    def _on_space(self) -> None:
        if not self._state.is_started or not self._state.read_only_mode:
            return
        self._state.translation_visible = True
        self._notify()

    # ----------------------------
    # Navigation commands
    # ----------------------------

    def change_dictionary(self, dictionary_id: str) -> bool:
        if not self._catalog.has(dictionary_id):
            logger.warning("Ignoring unknown dictionary %r", dictionary_id)
            return False
        try:
            words = self._catalog.resolve(dictionary_id)
        except DictionaryLoadError as e:
            logger.error("Keeping dictionary %s: %s", self._state.dictionary_id, e)
            return False

        self._cooldown.cancel()
        self._words = words
        self._state.dictionary_id = dictionary_id
        self._state.chapter_index = 0
        self._reset_after_navigation()
        logger.info("Dictionary changed to %s (%d chapters)", dictionary_id, self.total_chapters())
        return True

    def change_chapter(self, index: int) -> int:
        """Select chapter `index` (0-based, clamped); return the chapter actually selected."""
        if not self._ensure_words():
            return self._state.chapter_index
        total = self.total_chapters()
        try:
            chapter_words(self._words, self._config.chapter_length, int(index))
            target = int(index)
        except OutOfRangeSelection as e:
            target = clamp_chapter(int(index), total)
            logger.debug("%s; clamped to %d", e, target)

        self._cooldown.cancel()
        self._state.chapter_index = target
        self._reset_after_navigation()
        return target

    def _ensure_words(self) -> bool:
        if self._words:
            return True
        try:
            self._words = self._catalog.resolve(self._state.dictionary_id)
        except (NotFoundError, DictionaryLoadError) as e:
            logger.error("No words available: %s", e)
            return False
        return True

    def _reset_after_navigation(self) -> None:
        self._state.reset_cursor()
        self._state.translation_visible = True
        if self._state.is_started:
            self._request_pronunciation()
        self._notify()

    # ----------------------------
    # Toggles and configuration
    # ----------------------------

    def toggle_word_visibility(self) -> bool:
        self._state.word_visible = not self._state.word_visible
        self._notify()
        return self._state.word_visible

    def toggle_placeholder(self) -> bool:
        self._state.placeholder_enabled = not self._state.placeholder_enabled
        self._notify()
        return self._state.placeholder_enabled

    def toggle_read_only_mode(self) -> bool:
        self._cooldown.cancel()
        self._state.clear_wrong()
        self._state.read_only_mode = not self._state.read_only_mode
        if self._state.read_only_mode and self._state.is_started:
            self._read_only.arm()
        else:
            self._read_only.disarm()
        logger.info("Read-only mode %s", "on" if self._state.read_only_mode else "off")
        self._notify()
        return self._state.read_only_mode

    def apply_config(self, config: Union[SessionConfig, Mapping[str, Any]]) -> list[ConfigurationRejected]:
        """Swap in a new configuration snapshot.

        Every field is validated against its domain; rejected values keep the
        current setting. A chapter length change re-partitions the dictionary
        and resets the cursor.
        """
        values = config.to_dict() if isinstance(config, SessionConfig) else dict(config)
        new, rejected = self._config.with_values(values)
        for e in rejected:
            logger.warning("Configuration rejected: %s", e)

        old = self._config
        self._config = new
        if new.chapter_length != old.chapter_length and self._words:
            self._cooldown.cancel()
            self._state.chapter_index = clamp_chapter(self._state.chapter_index, self.total_chapters())
            self._reset_after_navigation()
        else:
            self._notify()
        return rejected

    # ----------------------------
    # Audio
    # ----------------------------

    def _emit_cue(self, cue: SoundCue) -> None:
        if self._play_cue is None or not self._config.sound_enabled:
            return
        try:
            self._play_cue(cue)
        except Exception:
            logger.exception("Sound cue %s failed", cue.value)

    def _request_pronunciation(self) -> None:
        if self._pronounce is None or not self._config.voice_enabled:
            return
        word = self.current_word()
        if word is None:
            return
        token = self._playback_lock.try_acquire()
        if token is None:
            logger.debug("Pronunciation of %r dropped: playback in progress", word.headword)
            return

        def _done() -> None:
            self._playback_lock.release(token)

        try:
            self._pronounce(word.pronunciation_key, _done)
        except Exception:
            logger.exception("Pronunciation request failed")
            self._playback_lock.release(token)
