"""
backend/catalog.py

Catalog Store: the immutable, pre-loaded collection of property records.

The catalog is read once per process from a static JSON array and never
mutated. Also provides the read-only helpers the search UI builds on
(summary statistics and keyword suggestions).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from backend.config import CATALOG_PATH, IS_DEV
from domains.search.models.property import Property


class CatalogError(Exception):
    """Raised when the catalog source cannot be loaded or is inconsistent."""


class Catalog:
    """Immutable, id-indexed collection of properties."""

    def __init__(self, properties: Iterable[Property]):
        items: Tuple[Property, ...] = tuple(properties)
        index: Dict[str, Property] = {}
        for prop in items:
            if prop.id in index:
                raise CatalogError(f"Duplicate property id in catalog: {prop.id!r}")
            index[prop.id] = prop
        self._properties = items
        self._index = index

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "Catalog":
        try:
            return cls(Property(**record) for record in records)
        except ValidationError as e:
            raise CatalogError(f"Invalid property record: {e}") from e

    @classmethod
    def from_json_file(cls, path: str | Path) -> "Catalog":
        try:
            with open(path, encoding="utf-8") as f:
                records = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogError(f"Cannot read catalog {path}: {e}") from e

        if not isinstance(records, list):
            raise CatalogError(f"Catalog {path} must contain a JSON array")

        catalog = cls.from_records(records)
        print(f"[CATALOG] Loaded {len(catalog)} properties from {path}")
        return catalog

    @property
    def properties(self) -> Tuple[Property, ...]:
        return self._properties

    def get(self, property_id: str) -> Optional[Property]:
        return self._index.get(property_id)

    def __contains__(self, property_id: object) -> bool:
        return property_id in self._index

    def __iter__(self) -> Iterator[Property]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)


_catalog: Optional[Catalog] = None


def load_catalog(path: Optional[str] = None) -> Catalog:
    """
    Return the process-wide catalog, loading it on first use.

    Passing an explicit path always reloads (used by tests and tooling).
    """
    global _catalog
    if path is not None:
        return Catalog.from_json_file(path)
    if _catalog is None:
        _catalog = Catalog.from_json_file(CATALOG_PATH)
    return _catalog


# ---------------------------------------------------------
# Read-only helpers
# ---------------------------------------------------------

PRICE_RANGES = ("under_500k", "500k_1m", "1m_2m", "over_2m")


def _price_range(price: float) -> str:
    if price < 500_000:
        return "under_500k"
    if price < 1_000_000:
        return "500k_1m"
    if price < 2_000_000:
        return "1m_2m"
    return "over_2m"


def catalog_stats(catalog: Iterable[Property]) -> Dict[str, Any]:
    """
    Summary numbers for the catalog.

    Hidden prices are excluded from the average and from the price ranges,
    but still counted in totals, types and cities.
    """
    stats: Dict[str, Any] = {
        "total_properties": 0,
        "average_price": 0,
        "property_types": {},
        "cities": {},
        "price_ranges": {name: 0 for name in PRICE_RANGES},
    }

    total_price = 0.0
    priced = 0
    for prop in catalog:
        stats["total_properties"] += 1
        stats["property_types"][prop.property_type] = stats["property_types"].get(prop.property_type, 0) + 1
        stats["cities"][prop.city] = stats["cities"].get(prop.city, 0) + 1

        if not prop.price_hidden:
            total_price += prop.price
            priced += 1
            stats["price_ranges"][_price_range(prop.price)] += 1

    stats["average_price"] = round(total_price / priced) if priced else 0
    return stats


def suggest(catalog: Iterable[Property], query: str, limit: int = 10) -> List[str]:
    """
    Keyword suggestions for a partial query.

    Matches cities, property types and comma-separated address parts
    longer than 2 chars, case-insensitively, in first-seen order.
    """
    needle = query.strip().lower()
    if not needle:
        return []

    seen: Dict[str, None] = {}
    for prop in catalog:
        for candidate in (prop.city, prop.property_type):
            if needle in candidate.lower():
                seen.setdefault(candidate, None)
        for part in prop.address.split(","):
            part = part.strip()
            if len(part) > 2 and needle in part.lower():
                seen.setdefault(part, None)

    suggestions = list(seen)[:limit]
    if IS_DEV:
        print(f"[CATALOG] suggest q={query!r} -> {len(suggestions)}")
    return suggestions
