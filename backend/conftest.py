# backend/conftest.py
# Shared fixtures for the property search test suites

import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# Add repo root to path so `backend` and `domains` import without install
sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.catalog import Catalog
from domains.search.models.property import Property


def property_record(**overrides: Any) -> Dict[str, Any]:
    """Raw catalog record (wire names) with sensible defaults."""
    record: Dict[str, Any] = {
        "id": "p0",
        "title": "Appartamento",
        "address": "Via Roma 1, Milano",
        "city": "Milano",
        "region": "Lombardia",
        "propertyType": "Appartamento",
        "contractType": "vendita",
        "bedrooms": 2,
        "bathrooms": 1,
        "area": 80,
        "price": 300000,
        "coordinates": {"lat": 45.46, "lng": 9.19},
        "images": [],
        "badges": [],
        "featured": False,
        "isNew": False,
        "priceHidden": False,
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_property() -> Callable[..., Property]:
    def _make(**overrides: Any) -> Property:
        return Property(**property_record(**overrides))
    return _make


@pytest.fixture
def make_catalog(make_property) -> Callable[..., Catalog]:
    """Catalog from override dicts; ids default to p1, p2, ... in order."""
    def _make(*overrides: Dict[str, Any]) -> Catalog:
        props = []
        for i, o in enumerate(overrides, start=1):
            o = dict(o)
            o.setdefault("id", f"p{i}")
            props.append(make_property(**o))
        return Catalog(props)
    return _make


@pytest.fixture
def bundled_catalog_path() -> Path:
    return Path(__file__).parent.parent / "data" / "properties.json"


@pytest.fixture
def make_record() -> Callable[..., Dict[str, Any]]:
    return property_record
