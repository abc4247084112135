from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from qwerty_learner.domain.config import SessionConfig

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "QWERTY_SETTINGS_PATH"


class SettingsStore:
    """YAML-backed settings store.

    Responsibilities:
      - Load/save settings.yaml atomically
      - Materialise a validated SessionConfig from whatever the file holds

    Notes:
      - Keys match SessionConfig field names (placeholder, chapter_length, ...).
      - Invalid values never raise: they are logged and the previous value
        (or the default) is kept.
    """

    def __init__(self, settings_path: str | None = None) -> None:
        if settings_path is None:
            env = (os.environ.get(SETTINGS_ENV_VAR) or "").strip()
            if env:
                self._path = Path(env).expanduser()
            else:
                # <project_root>/settings.yaml, next to main.py
                project_root = Path(__file__).resolve().parents[2]
                self._path = project_root / "settings.yaml"
        else:
            self._path = Path(settings_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        try:
            p = self._path
            if not p.exists():
                return {}
            with p.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
                return data if isinstance(data, dict) else {}
        except (OSError, UnicodeError, yaml.YAMLError) as e:
            logger.warning("Failed to read settings %s: %s", self._path, e)
            return {}

    def save(self, data: dict[str, Any]) -> None:
        try:
            p = self._path
            p.parent.mkdir(parents=True, exist_ok=True)
            tmp = p.with_suffix(p.suffix + ".tmp")
            with tmp.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data or {}, f, allow_unicode=True, sort_keys=True)
            os.replace(str(tmp), str(p))
        except OSError as e:
            # Best-effort persistence; callers should not crash on save failures.
            logger.warning("Failed to save settings atomically: %s", e)

    def get_config(self, previous: SessionConfig | None = None) -> SessionConfig:
        """Return `previous` (or defaults) updated with the stored values."""
        base = previous if previous is not None else SessionConfig()
        config, rejected = base.with_values(self.load())
        for e in rejected:
            logger.warning("Ignoring setting: %s", e)
        return config

