"""
backend/sync.py

Sync Controller: keeps the address bar's query string a projection of the
in-memory filter state.

Filter state is the single source of truth. The controller writes the URL
on every state change (replacing the current history entry, never pushing)
and reads it only on mount or when `hydrate_from_url()` is called
explicitly. External navigation after mount is not observed.

Loop prevention is a two-state machine:

    SYNCED     --hydrate (mount with query / hydrate_from_url)-->  HYDRATING
    HYDRATING  --finish_hydration (first state change)-------->  SYNCED

While HYDRATING, the state change that installs the hydrated filters is not
written back to the URL.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Protocol, Tuple

from backend.config import ENABLE_VERBOSE_LOGGING
from backend.filter_state import default_basic_filters, empty_advanced_filters
from backend.url_codec import decode, encode, has_query
from domains.search.models.filters import AdvancedFilters, BasicFilters

FilterPair = Tuple[BasicFilters, AdvancedFilters]


class AddressBar(Protocol):
    """The page address as seen by the controller (query string only)."""

    def read(self) -> str: ...

    def replace(self, query: str) -> None: ...


class InMemoryAddressBar:
    """
    Address bar with an explicit history stack.

    `replace` rewrites the current entry; `navigate` simulates a navigation
    that happens outside the app (link click, back/forward).
    """

    def __init__(self, query: str = ""):
        self.history: List[str] = [query.lstrip("?")]
        self.replace_count = 0

    def read(self) -> str:
        return self.history[-1]

    def replace(self, query: str) -> None:
        self.history[-1] = query
        self.replace_count += 1

    def navigate(self, query: str) -> None:
        self.history.append(query.lstrip("?"))


class SyncPhase(str, Enum):
    HYDRATING = "hydrating"
    SYNCED = "synced"


class SyncController:
    def __init__(self, address_bar: AddressBar):
        self.address_bar = address_bar
        self.phase = SyncPhase.SYNCED
        self.transitions: List[Tuple[SyncPhase, SyncPhase, str]] = []
        self._hydrated: Optional[FilterPair] = None

    def _transition(self, target: SyncPhase, cause: str) -> None:
        source = self.phase
        self.phase = target
        self.transitions.append((source, target, cause))
        if ENABLE_VERBOSE_LOGGING:
            print(f"[SYNC] {source.value} -> {target.value} ({cause})")

    def mount(self) -> FilterPair:
        """
        Initial filter state for the session.

        Decoded from the URL when the query is non-empty, otherwise the
        defaults (in which case the controller is immediately SYNCED).
        """
        if has_query(self.address_bar.read()):
            return self.hydrate_from_url(cause="mount")
        return default_basic_filters(), empty_advanced_filters()

    def hydrate_from_url(self, cause: str = "hydrate_from_url") -> FilterPair:
        """Decode the current URL into a filter pair and enter HYDRATING."""
        pair = decode(self.address_bar.read())
        self._hydrated = pair
        self._transition(SyncPhase.HYDRATING, cause)
        return pair

    def finish_hydration(self) -> None:
        if self.phase is not SyncPhase.HYDRATING:
            return
        self._hydrated = None
        self._transition(SyncPhase.SYNCED, "hydration_applied")

    def on_state_change(self, basic: BasicFilters, advanced: AdvancedFilters) -> bool:
        """
        Project a new filter state onto the URL.

        Returns True when the address bar was rewritten.
        """
        if self.phase is SyncPhase.HYDRATING:
            hydrated = self._hydrated
            self.finish_hydration()
            if (basic, advanced) == hydrated:
                return False

        query = encode(basic, advanced)
        if query == self.address_bar.read():
            return False
        self.address_bar.replace(query)
        return True

    def clear_url(self) -> None:
        """Drop every query parameter (filter state is left unchanged)."""
        self.address_bar.replace("")
