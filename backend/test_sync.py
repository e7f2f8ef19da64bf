"""
backend/test_sync.py

Tests for the Sync Controller (filter state -> address bar).

Run: pytest backend/test_sync.py -v
"""

from __future__ import annotations

from backend.filter_state import default_basic_filters, empty_advanced_filters
from backend.sync import InMemoryAddressBar, SyncController, SyncPhase
from backend.url_codec import decode, encode
from domains.search.models.filters import AdvancedFilters, BasicFilters


def test_mount_without_query_returns_defaults_and_stays_synced():
    bar = InMemoryAddressBar("")
    sync = SyncController(bar)
    basic, advanced = sync.mount()
    assert basic == default_basic_filters()
    assert advanced == empty_advanced_filters()
    assert sync.phase is SyncPhase.SYNCED
    assert sync.transitions == []


def test_first_write_after_default_mount_records_contract():
    bar = InMemoryAddressBar("")
    sync = SyncController(bar)
    basic, advanced = sync.mount()
    assert sync.on_state_change(basic, advanced) is True
    assert bar.read() == "contract=vendita"


def test_mount_with_query_hydrates_without_writing_back():
    bar = InMemoryAddressBar("?city=Roma&bedrooms=2")
    sync = SyncController(bar)
    basic, advanced = sync.mount()
    assert basic.city == ("Roma",)
    assert sync.phase is SyncPhase.HYDRATING

    assert sync.on_state_change(basic, advanced) is False
    assert sync.phase is SyncPhase.SYNCED
    assert bar.replace_count == 0
    assert bar.read() == "city=Roma&bedrooms=2"


def test_transition_log():
    sync = SyncController(InMemoryAddressBar("city=Roma"))
    basic, advanced = sync.mount()
    sync.on_state_change(basic, advanced)
    assert sync.transitions == [
        (SyncPhase.SYNCED, SyncPhase.HYDRATING, "mount"),
        (SyncPhase.HYDRATING, SyncPhase.SYNCED, "hydration_applied"),
    ]


def test_change_during_hydration_is_written():
    bar = InMemoryAddressBar("city=Roma")
    sync = SyncController(bar)
    sync.mount()
    changed = BasicFilters(city=["Milano"])
    assert sync.on_state_change(changed, AdvancedFilters()) is True
    assert bar.read() == "city=Milano"
    assert sync.phase is SyncPhase.SYNCED


def test_writes_replace_history_entry():
    bar = InMemoryAddressBar("")
    sync = SyncController(bar)
    sync.mount()
    for city in ("Roma", "Milano", "Napoli"):
        sync.on_state_change(BasicFilters(city=[city]), AdvancedFilters())
    assert bar.history == ["city=Napoli"]
    assert bar.replace_count == 3


def test_identical_encoding_is_not_rewritten():
    bar = InMemoryAddressBar("")
    sync = SyncController(bar)
    sync.on_state_change(BasicFilters(city=["Roma"]), AdvancedFilters())
    sync.on_state_change(BasicFilters(city=["Roma"]), AdvancedFilters())
    assert bar.replace_count == 1


def test_url_is_projection_of_state():
    bar = InMemoryAddressBar("")
    sync = SyncController(bar)
    basic = BasicFilters(keyword="attico", city=["Milano"])
    advanced = AdvancedFilters(price_max="900000")
    sync.on_state_change(basic, advanced)
    assert bar.read() == encode(basic, advanced)
    assert decode(bar.read()) == (basic, advanced)


def test_external_navigation_is_not_absorbed():
    bar = InMemoryAddressBar("")
    sync = SyncController(bar)
    basic, advanced = sync.mount()
    sync.on_state_change(basic, advanced)

    bar.navigate("city=Torino")
    assert sync.phase is SyncPhase.SYNCED
    # Next state change overwrites the navigated entry
    sync.on_state_change(BasicFilters(city=["Bologna"]), AdvancedFilters())
    assert bar.read() == "city=Bologna"


def test_explicit_hydrate_reads_current_url():
    bar = InMemoryAddressBar("")
    sync = SyncController(bar)
    sync.mount()
    bar.navigate("city=Torino")

    basic, advanced = sync.hydrate_from_url()
    assert basic.city == ("Torino",)
    assert sync.phase is SyncPhase.HYDRATING
    assert sync.on_state_change(basic, advanced) is False
    assert sync.transitions[-1] == (SyncPhase.HYDRATING, SyncPhase.SYNCED, "hydration_applied")


def test_clear_url():
    bar = InMemoryAddressBar("city=Roma")
    sync = SyncController(bar)
    sync.clear_url()
    assert bar.read() == ""
