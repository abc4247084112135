from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

import yaml

from qwerty_learner.domain.errors import DictionaryLoadError, NotFoundError
from qwerty_learner.domain.words import DictionaryDescriptor, WordEntry

logger = logging.getLogger(__name__)

REGISTRY_FILENAME = "dictionaries.yaml"


def _default_data_dir() -> Path:
    """Return the project-root data directory.

    Assumes this file lives at: <root>/qwerty_learner/services/dictionary_catalog.py
    """
    return Path(__file__).resolve().parents[2] / "data"


@dataclass(frozen=True)
class DictionaryCatalog:
    """Registry of the available word lists.

    The registry (`data/dictionaries.yaml`) is a list of mappings, or a dict
    wrapping one under `dictionaries`:

        - id: cet4
          name: CET-4
          url: dicts/cet4.json
          description: College English Test band 4

    `url` is relative to the data directory and points at a JSON array in the
    Qwerty Learner word-list format:

        [{"name": "apple", "trans": ["苹果"], "usphone": "'æpl", "ukphone": "'æpl"}]

    `trans` may also be a plain string. Word lists are read lazily on first
    use and cached for the lifetime of the catalog.
    """

    project_root: Path | None = None
    _words_cache: dict[str, tuple[WordEntry, ...]] = field(default_factory=dict, compare=False, repr=False)
    _descriptors_cache: list[DictionaryDescriptor] = field(default_factory=list, compare=False, repr=False)

    @property
    def data_dir(self) -> Path:
        if self.project_root is not None:
            return self.project_root / "data"
        return _default_data_dir()

    # --- Parsing helpers ---

    def _read_yaml(self, filename: str) -> Any:
        path = self.data_dir / filename
        if not path.exists() or not path.is_file():
            return None

        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeError):
            return None

        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            logger.warning("Invalid dictionary registry %s: %s", path, e)
            return None

    @staticmethod
    def _as_nonempty_str(value: Any) -> str | None:
        if isinstance(value, str):
            s = value.strip()
            return s if s else None
        return None

    @classmethod
    def _pick_str(cls, mapping: Any, keys: Iterable[str]) -> str | None:
        if not isinstance(mapping, dict):
            return None
        for k in keys:
            s = cls._as_nonempty_str(mapping.get(k))
            if s is not None:
                return s
        return None

    @staticmethod
    def _iter_items(container: Any, preferred_keys: Iterable[str]) -> list[Any]:
        """Return a list of items from either a list or a dict wrapper."""
        if isinstance(container, list):
            return container
        if isinstance(container, dict):
            for k in preferred_keys:
                v = container.get(k)
                if isinstance(v, list):
                    return v
            for k in ("items", "data", "list"):
                v = container.get(k)
                if isinstance(v, list):
                    return v
        return []

    @classmethod
    def _parse_translation(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            s = value.strip()
            return (s,) if s else ()
        if isinstance(value, list):
            return tuple(s for s in (cls._as_nonempty_str(v) for v in value) if s is not None)
        return ()

    def _load_descriptors(self) -> list[DictionaryDescriptor]:
        data = self._read_yaml(REGISTRY_FILENAME)
        items = self._iter_items(data, preferred_keys=("dictionaries", "dicts"))

        out: list[DictionaryDescriptor] = []
        seen: set[str] = set()
        for item in items:
            key = self._pick_str(item, ("id", "key"))
            url = self._pick_str(item, ("url", "path", "file"))
            if key is None or url is None:
                logger.debug("Skipping registry entry without id/url: %r", item)
                continue
            if key in seen:
                logger.warning("Duplicate dictionary id %r in registry; keeping the first", key)
                continue
            seen.add(key)
            out.append(
                DictionaryDescriptor(
                    id=key,
                    name=self._pick_str(item, ("name", "label")) or key,
                    url=url,
                    description=self._pick_str(item, ("description", "detail")) or "",
                    language=self._pick_str(item, ("language", "lang")) or "en",
                )
            )
        return out

    def _load_words(self, descriptor: DictionaryDescriptor) -> tuple[WordEntry, ...]:
        path = self.data_dir / descriptor.url
        try:
            raw = path.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (OSError, UnicodeError, ValueError) as e:
            raise DictionaryLoadError("Cannot load dictionary {!r} from {}: {}".format(descriptor.id, path, e)) from e

        words: list[WordEntry] = []
        for item in self._iter_items(data, preferred_keys=("words",)):
            headword = self._pick_str(item, ("name", "word", "headword"))
            if headword is None:
                continue
            words.append(
                WordEntry(
                    headword=headword,
                    translation=self._parse_translation(item.get("trans")),
                    us_phone=self._pick_str(item, ("usphone", "us_phone")) or "",
                    uk_phone=self._pick_str(item, ("ukphone", "uk_phone")) or "",
                )
            )
        if not words:
            raise DictionaryLoadError("Dictionary {!r} has no words".format(descriptor.id))
        logger.info("Loaded dictionary %s: %d words", descriptor.id, len(words))
        return tuple(words)

    # --- Public API ---

    def list(self) -> list[DictionaryDescriptor]:
        if not self._descriptors_cache:
            self._descriptors_cache.extend(self._load_descriptors())
        return list(self._descriptors_cache)

    def get(self, dictionary_id: str) -> DictionaryDescriptor:
        for d in self.list():
            if d.id == dictionary_id:
                return d
        raise NotFoundError(dictionary_id)

    def has(self, dictionary_id: str) -> bool:
        return any(d.id == dictionary_id for d in self.list())

    def default_id(self) -> str:
        items = self.list()
        return items[0].id if items else ""

    def resolve(self, dictionary_id: str) -> list[WordEntry]:
        """Return the full word list for `dictionary_id`.

        Raises NotFoundError for an unknown id and DictionaryLoadError when the
        word list file is missing or malformed.
        """
        cached = self._words_cache.get(dictionary_id)
        if cached is None:
            cached = self._load_words(self.get(dictionary_id))
            self._words_cache[dictionary_id] = cached
        return list(cached)
