"""
backend/test_session.py

Tests for SearchSession: filter setters, URL sync wiring, memoized results
and favorites.

Run: pytest backend/test_session.py -v
"""

from __future__ import annotations

import pytest

from backend.favorites import FavoritesStore, MemoryStorage
from backend.filter_state import empty_basic_filters, has_active_filters
from backend.session import SearchSession
from backend.sync import InMemoryAddressBar, SyncPhase
from domains.search.models.filters import AdvancedFilters, BasicFilters, SortKey


@pytest.fixture
def catalog(make_catalog):
    return make_catalog(
        {"city": "Milano", "price": 300000, "contractType": "vendita"},
        {"city": "Roma", "price": 1500, "contractType": "affitto"},
        {"city": "Roma", "price": 900000, "contractType": "vendita", "featured": True},
    )


def new_session(catalog, query: str = ""):
    bar = InMemoryAddressBar(query)
    return SearchSession(catalog, FavoritesStore(MemoryStorage()), bar), bar


def ids(items):
    return [p.id for p in items]


def test_fresh_session_defaults_to_sale_and_records_it(catalog):
    session, bar = new_session(catalog)
    assert session.filters.contract_type == ("vendita",)
    assert bar.read() == "contract=vendita"
    assert ids(session.filtered_properties) == ["p3", "p1"]


def test_session_from_shared_link(catalog):
    session, bar = new_session(catalog, "?city=Roma")
    assert session.filters.city == ("Roma",)
    assert session.filters.contract_type == ()
    assert bar.replace_count == 0
    assert session.sync.phase is SyncPhase.SYNCED
    assert ids(session.filtered_properties) == ["p3", "p2"]


def test_update_filter_writes_url(catalog):
    session, bar = new_session(catalog)
    session.update_filter("city", "Roma")
    assert session.filters.city == ("Roma",)
    assert bar.read() == "city=Roma&contract=vendita"
    assert bar.history == ["city=Roma&contract=vendita"]


def test_update_filter_accepts_wire_name(catalog):
    session, _ = new_session(catalog)
    session.update_filter("contractType", ["entrambi"])
    assert ids(session.filtered_properties) == ["p3", "p1", "p2"]


def test_update_filter_unknown_key(catalog):
    session, _ = new_session(catalog)
    with pytest.raises(KeyError):
        session.update_filter("colour", "red")


def test_advanced_filters_replace_and_clear(catalog):
    session, bar = new_session(catalog)
    session.update_advanced_filters({"priceMin": "500000"})
    assert session.advanced_filters.price_min == "500000"
    assert ids(session.filtered_properties) == ["p3"]
    assert "priceMin=500000" in bar.read()

    session.update_advanced_filters({"priceMax": "400000"})
    assert session.advanced_filters.price_min == ""

    session.clear_advanced_filters()
    assert session.advanced_filters == AdvancedFilters()
    assert bar.read() == "contract=vendita"


def test_results_are_memoized(catalog):
    session, _ = new_session(catalog)
    session.filtered_properties
    session.filtered_properties
    session.diagnostics
    assert session.computations == 1

    session.set_sort_by(SortKey.default)
    session.filtered_properties
    assert session.computations == 1

    session.set_sort_by("price_asc")
    assert ids(session.filtered_properties) == ["p1", "p3"]
    assert session.computations == 2


def test_search_forces_recompute(catalog):
    session, _ = new_session(catalog)
    session.filtered_properties
    session.search()
    session.filtered_properties
    assert session.computations == 2


def test_unknown_sort_falls_back(catalog):
    session, _ = new_session(catalog)
    session.set_sort_by("cheapest")
    assert session.sort_by is SortKey.default


def test_diagnostics_surface(catalog):
    session, _ = new_session(catalog)
    session.update_filter("bedrooms", ["tre"])
    assert [d.field for d in session.diagnostics] == ["bedrooms"]
    assert ids(session.filtered_properties) == ["p3", "p1"]


def test_is_loading_is_false(catalog):
    session, _ = new_session(catalog)
    assert session.is_loading is False


def test_hydrate_from_url_after_navigation(catalog):
    session, bar = new_session(catalog)
    bar.navigate("city=Milano")
    assert session.filters.city == ()

    session.hydrate_from_url()
    assert session.filters.city == ("Milano",)
    assert bar.read() == "city=Milano"
    assert ids(session.filtered_properties) == ["p1"]


def test_share_url(catalog):
    session, _ = new_session(catalog)
    session.update_filter("city", ["Roma"])
    assert session.share_url("https://case.example/") == "https://case.example/?city=Roma&contract=vendita"


def test_favorites(catalog):
    session, _ = new_session(catalog)
    assert session.toggle_favorite("p2") is True
    assert session.is_favorite("p2")
    assert session.favorites == ["p2"]
    session.toggle_favorite("p2")
    assert session.favorites == []


def test_has_active_filters():
    assert not has_active_filters(empty_basic_filters(), AdvancedFilters())
    assert has_active_filters(BasicFilters(keyword="x"), AdvancedFilters())
    assert has_active_filters(BasicFilters(), AdvancedFilters(zones=["lago"]))
