"""
backend/routes_property_search.py

Property Search endpoints over the static catalog.

The query string of GET /api/properties uses the same keys as the page
address, so a shareable link's query can be forwarded unchanged:
it is decoded with the URL Codec, run through the Filter Pipeline and the
Sort Engine, and the canonical re-encoded query is returned alongside the
results.
"""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, Query

try:
    from backend.catalog import Catalog, catalog_stats, suggest
    from backend.config import IS_DEV, PUBLIC_BASE_URL
    from backend.dependencies import filter_query_params, get_catalog, get_favorites_store, require_property
    from backend.favorites import FavoritesStore
    from backend.filter_options import get_filter_options
    from backend.pipeline import run_pipeline
    from backend.schemas import (
        CatalogResponse,
        CatalogStatsResponse,
        FavoritesResponse,
        FavoriteToggleResponse,
        FilterDiagnosticResponse,
        FilterOptionsResponse,
        PropertySearchResponse,
        ShareUrlResponse,
        SuggestionsResponse,
    )
    from backend.sorting import sort_properties
    from backend.url_codec import build_share_url, colliding_keys, decode_params, encode
except ModuleNotFoundError:
    from catalog import Catalog, catalog_stats, suggest
    from config import IS_DEV, PUBLIC_BASE_URL
    from dependencies import filter_query_params, get_catalog, get_favorites_store, require_property
    from favorites import FavoritesStore
    from filter_options import get_filter_options
    from pipeline import run_pipeline
    from schemas import (
        CatalogResponse,
        CatalogStatsResponse,
        FavoritesResponse,
        FavoriteToggleResponse,
        FilterDiagnosticResponse,
        FilterOptionsResponse,
        PropertySearchResponse,
        ShareUrlResponse,
        SuggestionsResponse,
    )
    from sorting import sort_properties
    from url_codec import build_share_url, colliding_keys, decode_params, encode

from domains.search.models.filters import SortKey
from domains.search.models.property import Property


router = APIRouter(prefix="/api", tags=["property_search"])


@router.get("/properties", response_model=PropertySearchResponse)
def search_properties(
    sort: SortKey = Query(SortKey.default, description="Sort key"),
    params: Dict[str, str] = Depends(filter_query_params),
    catalog: Catalog = Depends(get_catalog),
) -> PropertySearchResponse:
    """
    Filter and sort the catalog for the filter state in the query string.

    An empty filter query means a fresh session: the default filters apply
    (contract type "vendita").

    Returns:
        PropertySearchResponse with ordered results, the decoded filters,
        the canonical query and any ignored (unparsable) filter values
    """
    basic, advanced = decode_params(params)
    items, diagnostics = run_pipeline(catalog, basic, advanced)
    ordered = sort_properties(items, sort)

    if IS_DEV:
        print(f"[PROPERTY_SEARCH] params={params} sort={sort.value} results={len(ordered)}/{len(catalog)}")

    return PropertySearchResponse(
        properties=ordered,
        total=len(ordered),
        query=encode(basic, advanced),
        sort_by=sort,
        filters=basic,
        advanced_filters=advanced,
        diagnostics=[
            FilterDiagnosticResponse(field=d.field, value=d.value, reason=d.reason)
            for d in diagnostics
        ],
    )


@router.get("/properties/{property_id}", response_model=Property)
def get_property(prop: Property = Depends(require_property)) -> Property:
    return prop


@router.get("/catalog", response_model=CatalogResponse)
def get_full_catalog(catalog: Catalog = Depends(get_catalog)) -> CatalogResponse:
    """Every listing in catalog order (clients that filter locally)."""
    return CatalogResponse(properties=list(catalog), total=len(catalog))


@router.get("/catalog/stats", response_model=CatalogStatsResponse)
def get_catalog_stats(catalog: Catalog = Depends(get_catalog)) -> CatalogStatsResponse:
    return CatalogStatsResponse(**catalog_stats(catalog))


@router.get("/catalog/suggestions", response_model=SuggestionsResponse)
def get_suggestions(
    q: str = Query(..., min_length=1, max_length=100),
    limit: int = Query(10, ge=1, le=50),
    catalog: Catalog = Depends(get_catalog),
) -> SuggestionsResponse:
    return SuggestionsResponse(query=q, suggestions=suggest(catalog, q, limit=limit))


@router.get("/filters/options", response_model=FilterOptionsResponse)
def get_options() -> FilterOptionsResponse:
    return FilterOptionsResponse(options=get_filter_options())


@router.get("/filters/share", response_model=ShareUrlResponse)
def get_share_url(
    base_url: str = Query(PUBLIC_BASE_URL, description="Page URL the link should open"),
    params: Dict[str, str] = Depends(filter_query_params),
) -> ShareUrlResponse:
    """
    Shareable link for the filter state in the query string.

    `colliding_keys` lists shared keys where the advanced value replaced the
    basic one, i.e. where the link does not reproduce the basic filters.
    """
    basic, advanced = decode_params(params)
    url = build_share_url(base_url, basic, advanced)
    return ShareUrlResponse(
        url=url,
        query=encode(basic, advanced),
        colliding_keys=colliding_keys(basic, advanced),
    )


@router.get("/favorites", response_model=FavoritesResponse)
def list_favorites(store: FavoritesStore = Depends(get_favorites_store)) -> FavoritesResponse:
    return FavoritesResponse(favorites=store.ids)


@router.post("/favorites/{property_id}/toggle", response_model=FavoriteToggleResponse)
def toggle_favorite(
    property_id: str,
    catalog: Catalog = Depends(get_catalog),
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoriteToggleResponse:
    """Flip favorite membership for a catalog property (404 for unknown ids)."""
    if property_id not in catalog:
        raise HTTPException(status_code=404, detail="Property not found")
    now_favorite = store.toggle(property_id)
    return FavoriteToggleResponse(id=property_id, is_favorite=now_favorite, favorites=store.ids)
