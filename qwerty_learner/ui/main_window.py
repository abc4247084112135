"""Main window factory.

This module owns construction and UI wiring for the trainer window.

Public API:
- create_main_window(...): builds and returns the main window without starting
  the Qt event loop, so UI tests can instantiate it headlessly.

The window is a thin host around SessionController: it forwards keystrokes
and commands, and re-renders the three text slots (word, input, translation)
whenever the controller reports a state change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QFont, QKeyEvent
from PyQt6.QtWidgets import (
    QInputDialog,
    QLabel,
    QMainWindow,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from qwerty_learner.controllers.config_watcher import ConfigWatcher
from qwerty_learner.controllers.session_controller import CuePlayFn, PronounceFn, SessionController
from qwerty_learner.services.dictionary_catalog import DictionaryCatalog
from qwerty_learner.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MainWindowHandles:
    """Handles that tests may need. Stored on the window as `window._handles`."""

    session: Optional[SessionController] = None
    word_label: Optional[QLabel] = None
    input_label: Optional[QLabel] = None
    translation_label: Optional[QLabel] = None
    typing_panel: Optional[Any] = None
    actions: Optional[dict[str, QAction]] = None


class TypingPanel(QWidget):
    """Focusable surface that turns key presses into the session's input feed.

    Only single printable characters and Return/Space reach the session;
    deletions, modifiers and multi-character input are dropped here.
    """

    def __init__(self, on_text: Callable[[str], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._on_text = on_text
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    def keyPressEvent(self, event: QKeyEvent) -> None:  # noqa: N802
        key = event.key()
        if key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self._on_text("\n")
            return
        if event.modifiers() & (Qt.KeyboardModifier.ControlModifier | Qt.KeyboardModifier.AltModifier):
            super().keyPressEvent(event)
            return
        text = event.text()
        if len(text) == 1 and text.isprintable():
            self._on_text(text)
            return
        super().keyPressEvent(event)


class MainWindow(QMainWindow):
    def __init__(self, session: SessionController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._session = session
        self.setWindowTitle("Qwerty Learner")

        central = QWidget(self)
        layout = QVBoxLayout(central)

        self.word_label = self._make_label("labelWord", 28)
        self.input_label = self._make_label("labelInput", 22)
        self.translation_label = self._make_label("labelTranslation", 16)
        self.typing_panel = TypingPanel(self._session.dispatch_text, central)
        self.typing_panel.setObjectName("typingPanel")

        for w in (self.word_label, self.input_label, self.translation_label, self.typing_panel):
            layout.addWidget(w)
        self.setCentralWidget(central)

        self.actions_by_name: dict[str, QAction] = {}
        self._build_toolbar()
        session.add_on_state_changed(self.refresh_display)
        self.refresh_display()

    def _make_label(self, name: str, point_size: int) -> QLabel:
        label = QLabel("", self)
        label.setObjectName(name)
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = QFont()
        font.setPointSize(point_size)
        label.setFont(font)
        return label

    def _build_toolbar(self) -> None:
        toolbar = QToolBar("Session", self)
        toolbar.setObjectName("toolbarSession")
        self.addToolBar(toolbar)

        entries: list[tuple[str, str, Callable[[], Any], bool]] = [
            ("start", "Start/Stop", self._session.toggle_start, False),
            ("chapter", "Chapter…", self.choose_chapter, False),
            ("dictionary", "Dictionary…", self.choose_dictionary, False),
            ("visibility", "Hide word", self._session.toggle_word_visibility, True),
            ("placeholder", "Placeholder", self._session.toggle_placeholder, True),
            ("read_only", "Read-only", self._session.toggle_read_only_mode, True),
        ]
        for name, text, handler, checkable in entries:
            action = QAction(text, self)
            action.setObjectName("action_{}".format(name))
            action.setCheckable(checkable)
            action.triggered.connect(lambda _checked=False, h=handler: self._run_command(h))
            toolbar.addAction(action)
            self.actions_by_name[name] = action

    def _run_command(self, handler: Callable[[], Any]) -> None:
        handler()
        # Keystrokes must keep flowing to the panel after a toolbar click.
        self.typing_panel.setFocus()

    # --- commands needing a picker ---

    def choose_chapter(self) -> None:
        total = self._session.total_chapters()
        if total <= 0:
            return
        current = self._session.state.chapter_index + 1
        items = [str(i) for i in range(1, total + 1)]
        picked, ok = QInputDialog.getItem(
            self,
            "Chapter",
            "Current chapter: {}   {} chapters".format(current, total),
            items,
            current - 1,
            False,
        )
        if ok and picked:
            self._session.change_chapter(int(picked) - 1)

    def choose_dictionary(self) -> None:
        dicts = self._session.dictionaries()
        if not dicts:
            return
        labels = ["{} - {}".format(d.name, d.description) if d.description else d.name for d in dicts]
        ids = [d.id for d in dicts]
        current = ids.index(self._session.state.dictionary_id) if self._session.state.dictionary_id in ids else 0
        picked, ok = QInputDialog.getItem(self, "Dictionary", "Current dictionary:", labels, current, False)
        if ok and picked in labels:
            self._session.change_dictionary(ids[labels.index(picked)])

    # --- rendering sink ---

    def refresh_display(self) -> None:
        fragments = self._session.display()
        self.word_label.setText(fragments.word)
        self.input_label.setText(fragments.input)
        self.translation_label.setText(fragments.translation)
        if fragments.highlight_wrong:
            self.input_label.setStyleSheet("color: {};".format(fragments.highlight_color))
        else:
            self.input_label.setStyleSheet("")

        state = self._session.state
        for name, checked in (
            ("visibility", not state.word_visible),
            ("placeholder", state.placeholder_enabled),
            ("read_only", state.read_only_mode),
        ):
            action = self.actions_by_name.get(name)
            if action is not None and action.isChecked() != checked:
                action.blockSignals(True)
                action.setChecked(checked)
                action.blockSignals(False)

        if state.is_started:
            self.statusBar().showMessage(
                "{}  ·  chapter {}/{}".format(
                    state.dictionary_id,
                    state.chapter_index + 1,
                    self._session.total_chapters(),
                )
            )
        else:
            self.statusBar().showMessage("Press Start to begin")


def create_main_window(
    *,
    expose_handles: bool = True,
    settings_path: str | None = None,
    catalog: Optional[DictionaryCatalog] = None,
    play_cue: Optional[CuePlayFn] = None,
    pronounce: Optional[PronounceFn] = None,
) -> MainWindow:
    """Create and return the application's main window.

    This function must NOT call app.exec(). It assumes a QApplication exists.

    Args:
        expose_handles: attach a MainWindowHandles instance as `window._handles`.
        settings_path: override for settings.yaml (defaults to the project root).
        catalog: dictionary catalog; defaults to the bundled data directory.
        play_cue / pronounce: audio sinks; default to QSoundEffect / QMediaPlayer
            backed players. Tests pass plain callables to stay silent.
    """
    store = SettingsStore(settings_path)
    config = store.get_config()
    catalog = catalog if catalog is not None else DictionaryCatalog()

    voice_player = None
    if play_cue is None:
        from qwerty_learner.services.sound_player import SoundCuePlayer

        play_cue = SoundCuePlayer().play
    if pronounce is None:
        from qwerty_learner.services.voice_player import VoicePlayer

        voice_player = VoicePlayer()
        voice_player.voice_type = config.voice_type
        pronounce = voice_player.pronounce

    session = SessionController(catalog=catalog, config=config, play_cue=play_cue, pronounce=pronounce)
    window = MainWindow(session)

    if voice_player is not None:
        voice_player.setParent(window)
        session.add_on_state_changed(lambda: setattr(voice_player, "voice_type", session.config.voice_type))

    watcher = ConfigWatcher(store=store, session=session, parent=window)
    watcher.wire()
    window._config_watcher = watcher  # type: ignore[attr-defined]

    if expose_handles:
        window._handles = MainWindowHandles(  # type: ignore[attr-defined]
            session=session,
            word_label=window.word_label,
            input_label=window.input_label,
            translation_label=window.translation_label,
            typing_panel=window.typing_panel,
            actions=dict(window.actions_by_name),
        )
    window.typing_panel.setFocus()
    return window
