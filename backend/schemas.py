"""
backend/schemas.py

Pydantic response schemas for the property search API.
Property and filter records are reused from domains.search.models and
serialized with their camelCase wire names.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from domains.search.models.filters import AdvancedFilters, BasicFilters, SortKey
from domains.search.models.property import Property


class FilterDiagnosticResponse(BaseModel):
    """A filter value that was ignored because it could not be parsed."""
    field: str = Field(..., description="Filter field name (wire name)")
    value: str = Field(..., description="Raw value as received")
    reason: str = Field(..., description="Why the value was ignored")


class PropertySearchResponse(BaseModel):
    """Filtered + sorted listings for one filter state."""
    model_config = ConfigDict(populate_by_name=True)

    properties: List[Property] = Field(default_factory=list, description="Ordered results")
    total: int = Field(0, description="Number of results")
    query: str = Field("", description="Canonical query string for this filter state")
    sort_by: SortKey = Field(SortKey.default, description="Active sort key")
    filters: BasicFilters = Field(default_factory=BasicFilters)
    advanced_filters: AdvancedFilters = Field(default_factory=AdvancedFilters)
    diagnostics: List[FilterDiagnosticResponse] = Field(default_factory=list)
    is_loading: bool = Field(False, description="Always false: the catalog is pre-loaded")


class CatalogResponse(BaseModel):
    """The full catalog, in catalog order."""
    properties: List[Property] = Field(default_factory=list)
    total: int = 0


class FilterOption(BaseModel):
    value: str
    label: str


class FilterOptionsResponse(BaseModel):
    options: Dict[str, List[FilterOption]] = Field(default_factory=dict)


class ShareUrlResponse(BaseModel):
    url: str = Field(..., description="Absolute link reproducing the filter state")
    query: str = Field("", description="Query part of the link")
    colliding_keys: List[str] = Field(
        default_factory=list,
        description="Shared keys where an advanced value replaced a basic one",
    )


class CatalogStatsResponse(BaseModel):
    total_properties: int = 0
    average_price: int = 0
    property_types: Dict[str, int] = Field(default_factory=dict)
    cities: Dict[str, int] = Field(default_factory=dict)
    price_ranges: Dict[str, int] = Field(default_factory=dict)


class SuggestionsResponse(BaseModel):
    query: str
    suggestions: List[str] = Field(default_factory=list)


class FavoritesResponse(BaseModel):
    favorites: List[str] = Field(default_factory=list, description="Favorite ids, insertion order")


class FavoriteToggleResponse(BaseModel):
    id: str
    is_favorite: bool
    favorites: List[str] = Field(default_factory=list)
