# backend/favorites.py
# Favorites Store: persisted set of favorited property ids
#
# Storage mirrors browser localStorage: a flat key -> string map. The id list
# is stored JSON-encoded under a single key and rewritten in full on every
# mutation.

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from backend.config import FAVORITES_PATH, FAVORITES_STORAGE_KEY, IS_DEV


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Process-local storage (tests, ephemeral sessions)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """
    Key/value storage backed by a JSON object on disk.

    The whole file is rewritten on each set_item. A missing file reads as
    empty; an unreadable file is reported and treated as empty.
    """

    def __init__(self, path: str | Path = FAVORITES_PATH):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"[FAVORITES] Cannot read storage file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)


class FavoritesStore:
    """Set of favorite property ids, loaded once and re-persisted on change."""

    def __init__(self, storage: KeyValueStorage, key: str = FAVORITES_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._ids: List[str] = self._load()

    def _load(self) -> List[str]:
        raw = self.storage.get_item(self.key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            # Corrupted persisted state degrades to an empty set
            print(f"[FAVORITES] Error loading favorites from storage: {e}")
            return []
        if not isinstance(data, list):
            print(f"[FAVORITES] Error loading favorites: expected a list, got {type(data).__name__}")
            return []

        ids: List[str] = []
        for item in data:
            item = str(item)
            if item not in ids:
                ids.append(item)
        return ids

    def _persist(self) -> None:
        self.storage.set_item(self.key, json.dumps(self._ids))

    @property
    def ids(self) -> List[str]:
        return list(self._ids)

    def is_favorite(self, property_id: str) -> bool:
        return property_id in self._ids

    def toggle(self, property_id: str) -> bool:
        """Flip membership; returns True if the id is now a favorite."""
        if property_id in self._ids:
            self._ids = [i for i in self._ids if i != property_id]
            now_favorite = False
        else:
            self._ids = self._ids + [property_id]
            now_favorite = True
        self._persist()
        if IS_DEV:
            print(f"[FAVORITES] toggle {property_id} -> {now_favorite} ({len(self._ids)} total)")
        return now_favorite

    def __len__(self) -> int:
        return len(self._ids)
