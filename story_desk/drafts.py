"""Draft cache — durable per-field storage for in-progress writing.

Layout on disk is a single JSON object of string values:

    {
      "prompt:draft_story_v1": "It was raining on the ...",
      "self:draft_story_v1":   "The tram came at 3 a.m. ...",
      "self:draft_title_v1":   "The Last Tram"
    }

Keys carry a format version (`draft_<field>_v<N>`). Bumping
DRAFT_FORMAT_VERSION orphans old entries instead of misreading them.

Every set/clear rewrites the file before returning; there is no batching.
If the file cannot be read the cache starts empty, and if it cannot be
written the cache keeps working in memory and retries the write on the
next change. Callers never see an
exception from this module.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DRAFT_FORMAT_VERSION = 1


def draft_key(field: str, slot: str | None = None) -> str:
    """Cache key for one draft field, e.g. draft_key("story", "self") → "self:draft_story_v1"."""
    key = f"draft_{field}_v{DRAFT_FORMAT_VERSION}"
    return f"{slot}:{key}" if slot else key


class DraftCache:
    """Key → string store persisted to a JSON file.

    Args:
        path: File to persist to. None gives a memory-only cache.
    """

    def __init__(self, path: Path | None) -> None:
        self._path = path
        self._entries: dict[str, str] = {}
        self.available = path is not None
        self._write_failed = False
        if path is not None:
            self._entries = self._load(path)

    @staticmethod
    def _load(path: Path) -> dict[str, str]:
        if not path.is_file():
            return {}
        try:
            data = json.loads(path.read_text())
        except (OSError, ValueError) as e:
            logger.warning("Draft cache %s unreadable, starting empty: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Draft cache %s is not a JSON object, starting empty", path)
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _flush(self) -> None:
        if self._path is None:
            return
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(self._entries, indent=2))
            os.replace(tmp, self._path)
        except OSError as e:
            if not self._write_failed:
                logger.warning(
                    "Draft cache %s not writable, drafts will not survive a restart: %s",
                    self._path, e,
                )
            self._write_failed = True
            self.available = False
            return
        if self._write_failed:
            logger.info("Draft cache %s writable again", self._path)
            self._write_failed = False
        self.available = True

    def get(self, key: str) -> str:
        return self._entries.get(key, "")

    def set(self, key: str, value: str) -> None:
        self._entries[key] = value
        logger.debug("draft set key=%s len=%d", key, len(value))
        self._flush()

    def clear(self, key: str) -> None:
        if self._entries.pop(key, None) is not None:
            logger.debug("draft cleared key=%s", key)
            self._flush()

    def clear_many(self, keys: list[str]) -> None:
        """Remove several keys with a single write."""
        removed = [k for k in keys if self._entries.pop(k, None) is not None]
        if removed:
            logger.debug("drafts cleared keys=%s", removed)
            self._flush()


class DraftSlot:
    """The live text fields of one writing mode, mirrored into a DraftCache.

    Fields are restored from the cache when the slot is created. Each
    set() updates exactly one field and persists it before returning.
    clear() empties every field and drops every cache entry of the slot
    together.
    """

    def __init__(self, cache: DraftCache, slot: str, fields: tuple[str, ...]) -> None:
        self._cache = cache
        self.slot = slot
        self._keys = {f: draft_key(f, slot) for f in fields}
        self._values = {f: cache.get(key) for f, key in self._keys.items()}

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._keys)

    def get(self, field: str) -> str:
        return self._values[field]

    def set(self, field: str, value: str) -> None:
        key = self._keys[field]
        self._values[field] = value
        self._cache.set(key, value)

    def clear(self) -> None:
        for field in self._values:
            self._values[field] = ""
        self._cache.clear_many(list(self._keys.values()))

    def snapshot(self) -> dict[str, str]:
        return dict(self._values)

    def is_empty(self) -> bool:
        return not any(self._values.values())
