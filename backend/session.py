"""
backend/session.py

SearchSession: the surface the rendering layer consumes.

Owns the filter state for one browsing session, wires every mutation through
the Sync Controller, and exposes the memoized, sorted result list together
with the favorites.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Union

from backend.catalog import Catalog
from backend.config import PUBLIC_BASE_URL
from backend.favorites import FavoritesStore
from backend.filter_state import (
    clear_advanced_filters,
    has_active_filters,
    update_advanced_filters,
    update_filter,
)
from backend.pipeline import FilterDiagnostic, MemoizedSearch
from backend.sync import AddressBar, InMemoryAddressBar, SyncController
from backend.url_codec import build_share_url
from domains.search.models.filters import AdvancedFilters, BasicFilters, SortKey
from domains.search.models.property import Property


class SearchSession:
    def __init__(
        self,
        catalog: Catalog,
        favorites: FavoritesStore,
        address_bar: Optional[AddressBar] = None,
    ):
        self.catalog = catalog
        self.favorites_store = favorites
        self.sync = SyncController(address_bar or InMemoryAddressBar())
        self._search = MemoizedSearch()
        self._tick = 0
        self._sort_by = SortKey.default

        self._filters, self._advanced = self.sync.mount()
        self._notify()

    # ------------------------------------------------------------------
    # Filter state
    # ------------------------------------------------------------------

    @property
    def filters(self) -> BasicFilters:
        return self._filters

    @property
    def advanced_filters(self) -> AdvancedFilters:
        return self._advanced

    def _notify(self) -> None:
        self.sync.on_state_change(self._filters, self._advanced)

    def update_filter(self, key: str, value: Any) -> None:
        self._filters = update_filter(self._filters, key, value)
        self._notify()

    def update_advanced_filters(self, state: Union[AdvancedFilters, Mapping[str, Any]]) -> None:
        self._advanced = update_advanced_filters(state)
        self._notify()

    def clear_advanced_filters(self) -> None:
        self._advanced = clear_advanced_filters()
        self._notify()

    def hydrate_from_url(self) -> None:
        """Re-read the address bar (e.g. after back/forward) into the filter state."""
        self._filters, self._advanced = self.sync.hydrate_from_url()
        self._notify()

    @property
    def has_active_filters(self) -> bool:
        return has_active_filters(self._filters, self._advanced)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    @property
    def sort_by(self) -> SortKey:
        return self._sort_by

    def set_sort_by(self, sort_by: Any) -> None:
        self._sort_by = SortKey.parse(sort_by)

    def search(self) -> None:
        """Force a recomputation even when no input changed."""
        self._tick += 1

    def _compute(self) -> List[Property]:
        return self._search.compute(self.catalog, self._filters, self._advanced, self._sort_by, self._tick)

    @property
    def filtered_properties(self) -> List[Property]:
        return self._compute()

    @property
    def diagnostics(self) -> List[FilterDiagnostic]:
        """Ignored filter values for the current state."""
        self._compute()
        return self._search.diagnostics

    @property
    def computations(self) -> int:
        return self._search.computations

    @property
    def is_loading(self) -> bool:
        # The catalog is pre-loaded; there is no asynchronous phase.
        return False

    def share_url(self, base_url: str = PUBLIC_BASE_URL) -> str:
        return build_share_url(base_url, self._filters, self._advanced)

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    @property
    def favorites(self) -> List[str]:
        return self.favorites_store.ids

    def toggle_favorite(self, property_id: str) -> bool:
        return self.favorites_store.toggle(property_id)

    def is_favorite(self, property_id: str) -> bool:
        return self.favorites_store.is_favorite(property_id)
