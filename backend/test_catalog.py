"""
backend/test_catalog.py

Tests for the Catalog Store and its read-only helpers.

Run: pytest backend/test_catalog.py -v
"""

from __future__ import annotations

import json

import pytest

from backend.catalog import Catalog, CatalogError, catalog_stats, load_catalog, suggest


def test_bundled_catalog_loads(bundled_catalog_path):
    catalog = load_catalog(str(bundled_catalog_path))
    assert len(catalog) > 0
    assert len({p.id for p in catalog}) == len(catalog)


def test_lookup_by_id(make_catalog):
    catalog = make_catalog({"id": "a"}, {"id": "b"})
    assert catalog.get("b").id == "b"
    assert catalog.get("zzz") is None
    assert "a" in catalog
    assert "zzz" not in catalog
    assert [p.id for p in catalog.properties] == ["a", "b"]


def test_duplicate_ids_rejected(make_property):
    with pytest.raises(CatalogError):
        Catalog([make_property(id="x"), make_property(id="x")])


def test_invalid_record_rejected(make_record):
    with pytest.raises(CatalogError):
        Catalog.from_records([make_record(id="p1", bedrooms=-1)])


def test_from_json_file(tmp_path, make_record):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([make_record(id="p1"), make_record(id="p2")]), encoding="utf-8")
    catalog = Catalog.from_json_file(path)
    assert [p.id for p in catalog] == ["p1", "p2"]


def test_from_json_file_requires_array(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"id": "p1"}), encoding="utf-8")
    with pytest.raises(CatalogError):
        Catalog.from_json_file(path)


def test_missing_file(tmp_path):
    with pytest.raises(CatalogError):
        Catalog.from_json_file(tmp_path / "nope.json")


def test_catalog_stats(make_catalog):
    catalog = make_catalog(
        {"price": 400000, "city": "Roma", "propertyType": "Villa"},
        {"price": 800000, "city": "Roma"},
        {"price": 3000000, "city": "Milano", "priceHidden": True},
    )
    stats = catalog_stats(catalog)
    assert stats["total_properties"] == 3
    assert stats["average_price"] == 600000
    assert stats["cities"] == {"Roma": 2, "Milano": 1}
    assert stats["property_types"] == {"Villa": 1, "Appartamento": 2}
    assert stats["price_ranges"] == {"under_500k": 1, "500k_1m": 1, "1m_2m": 0, "over_2m": 0}


def test_catalog_stats_empty():
    assert catalog_stats([])["average_price"] == 0


class TestSuggest:
    def test_city_and_address_parts(self, make_catalog):
        catalog = make_catalog(
            {"city": "Milano", "address": "Via Roma 1, Milano"},
            {"city": "Roma", "address": "Piazza Navona 3, Roma"},
        )
        assert suggest(catalog, "rom") == ["Via Roma 1", "Roma"]
        assert suggest(catalog, "MIL") == ["Milano"]

    def test_short_address_parts_skipped(self, make_catalog):
        catalog = make_catalog({"address": "Via Po, TO", "city": "Torino"})
        assert suggest(catalog, "to") == ["Torino", "Appartamento"]

    def test_blank_query(self, make_catalog):
        assert suggest(make_catalog({}), "   ") == []

    def test_limit(self, make_catalog):
        catalog = make_catalog(*({"city": f"Citta{i}"} for i in range(5)))
        assert len(suggest(catalog, "citta", limit=3)) == 3
