"""
backend/test_favorites.py

Tests for the Favorites Store and its storage backends.

Run: pytest backend/test_favorites.py -v
"""

from __future__ import annotations

import json

from backend.favorites import FavoritesStore, JsonFileStorage, MemoryStorage

KEY = "realEstate_favorites"


def test_starts_empty():
    store = FavoritesStore(MemoryStorage())
    assert store.ids == []
    assert len(store) == 0
    assert not store.is_favorite("p1")


def test_toggle_twice_is_identity():
    storage = MemoryStorage()
    store = FavoritesStore(storage)
    assert store.toggle("p1") is True
    assert store.is_favorite("p1")
    assert store.toggle("p1") is False
    assert store.ids == []
    assert json.loads(storage.get_item(KEY)) == []


def test_every_toggle_persists_full_list():
    storage = MemoryStorage()
    store = FavoritesStore(storage)
    store.toggle("p1")
    store.toggle("p3")
    store.toggle("p2")
    assert json.loads(storage.get_item(KEY)) == ["p1", "p3", "p2"]
    store.toggle("p3")
    assert json.loads(storage.get_item(KEY)) == ["p1", "p2"]


def test_loads_persisted_ids():
    storage = MemoryStorage({KEY: json.dumps(["p2", "p5"])})
    store = FavoritesStore(storage)
    assert store.ids == ["p2", "p5"]
    assert store.is_favorite("p5")


def test_duplicate_persisted_ids_are_collapsed():
    store = FavoritesStore(MemoryStorage({KEY: json.dumps(["p1", "p1", "p2"])}))
    assert store.ids == ["p1", "p2"]


def test_corrupted_storage_degrades_to_empty(capsys):
    store = FavoritesStore(MemoryStorage({KEY: "{not json"}))
    assert store.ids == []
    assert "[FAVORITES] Error loading" in capsys.readouterr().out


def test_non_list_storage_degrades_to_empty():
    store = FavoritesStore(MemoryStorage({KEY: json.dumps({"p1": True})}))
    assert store.ids == []


def test_ids_returns_a_copy():
    store = FavoritesStore(MemoryStorage())
    store.toggle("p1")
    store.ids.append("p9")
    assert store.ids == ["p1"]


class TestJsonFileStorage:
    def test_missing_file_reads_empty(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "favorites.json")
        assert storage.get_item(KEY) is None

    def test_survives_new_store_instance(self, tmp_path):
        path = tmp_path / "nested" / "favorites.json"
        FavoritesStore(JsonFileStorage(path)).toggle("p4")

        reloaded = FavoritesStore(JsonFileStorage(path))
        assert reloaded.ids == ["p4"]
        assert json.loads(path.read_text(encoding="utf-8")) == {KEY: '["p4"]'}

    def test_other_keys_are_preserved(self, tmp_path):
        path = tmp_path / "favorites.json"
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
        FavoritesStore(JsonFileStorage(path)).toggle("p1")
        assert json.loads(path.read_text(encoding="utf-8"))["theme"] == "dark"

    def test_unreadable_file_reads_empty(self, tmp_path):
        path = tmp_path / "favorites.json"
        path.write_text("garbage", encoding="utf-8")
        assert FavoritesStore(JsonFileStorage(path)).ids == []
