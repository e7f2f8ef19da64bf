"""
backend/dependencies.py

Reusable FastAPI dependencies for the catalog and the favorites store.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import Depends, HTTPException, Request

try:
    from backend.catalog import Catalog, load_catalog
    from backend.favorites import FavoritesStore, JsonFileStorage
    from backend.config import FAVORITES_PATH, IS_DEV
    from backend.url_codec import RECOGNIZED_KEYS
except ModuleNotFoundError:
    from catalog import Catalog, load_catalog
    from favorites import FavoritesStore, JsonFileStorage
    from config import FAVORITES_PATH, IS_DEV
    from url_codec import RECOGNIZED_KEYS

_favorites_store: Optional[FavoritesStore] = None


def get_catalog() -> Catalog:
    """
    Process-wide catalog (loaded once on first request).

    Tests override this dependency with an in-memory catalog.
    """
    return load_catalog()


def get_favorites_store() -> FavoritesStore:
    """Favorites persisted to FAVORITES_PATH; loaded once per process."""
    global _favorites_store
    if _favorites_store is None:
        _favorites_store = FavoritesStore(JsonFileStorage(FAVORITES_PATH))
    return _favorites_store


def filter_query_params(request: Request) -> Dict[str, str]:
    """
    Recognized filter keys from the request query string.

    Unknown keys (sort, base_url, ...) are dropped so they never count as an
    active filter.
    """
    params: Dict[str, str] = {}
    for key, value in request.query_params.items():
        if key in RECOGNIZED_KEYS and value:
            params[key] = value
    return params


def require_property(property_id: str, catalog: Catalog = Depends(get_catalog)):
    """Resolve a property id or fail with 404."""
    prop = catalog.get(property_id)
    if prop is None:
        if IS_DEV:
            print(f"[PROPERTY_SEARCH] Unknown property id={property_id!r}")
        raise HTTPException(status_code=404, detail="Property not found")
    return prop
