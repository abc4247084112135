from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QFileSystemWatcher, QObject

from qwerty_learner.controllers.session_controller import SessionController
from qwerty_learner.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)


class ConfigWatcher(QObject):
    """Reloads settings.yaml on change and pushes the snapshot to the session.

    Atomic saves (tmp file + rename) drop the watched path, so the parent
    directory is watched too and the file is re-added whenever it reappears.
    """

    def __init__(
        self,
        *,
        store: SettingsStore,
        session: SessionController,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._session = session
        self._watcher = QFileSystemWatcher(self)
        self._watcher.fileChanged.connect(self._on_changed)  # type: ignore
        self._watcher.directoryChanged.connect(self._on_changed)  # type: ignore
        self._last: dict | None = None

    def wire(self) -> None:
        self._last = self._store.load()
        parent = str(self._store.path.parent)
        if self._store.path.parent.exists() and parent not in self._watcher.directories():
            self._watcher.addPath(parent)
        self._watch_file()

    def _watch_file(self) -> None:
        path = str(self._store.path)
        if self._store.path.exists() and path not in self._watcher.files():
            self._watcher.addPath(path)

    def reload(self) -> None:
        data = self._store.load()
        if data == self._last:
            return
        self._last = data
        logger.info("Settings changed; reloading %s", self._store.path)
        self._session.apply_config(data)

    def _on_changed(self, _path: str = "") -> None:
        self._watch_file()
        self.reload()
