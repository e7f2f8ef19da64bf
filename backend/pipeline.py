"""
backend/pipeline.py

Filter Pipeline: (catalog, basic filters, advanced filters) -> candidate list.

Stages narrow the list one after another (AND across stages, OR within an
array field) and never reorder it. A stage whose controlling field is empty
is skipped. Numeric tokens that cannot be parsed are dropped from their
stage and reported as FilterDiagnostic entries; a stage left without any
usable token is skipped rather than emptying the result.

Matched fields:
    basic    keyword, city, propertyType, contractType, bedrooms, bathrooms,
             areaMin, areaMax
    advanced priceMin, priceMax, propertyType, contractType, bedrooms,
             bathrooms, area, areaMax, location
Carried but not matched: basic location, advanced zones, features,
amenities, energyRating, propertyCondition, schoolDistrict,
transportProximity, yearMin, yearMax.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from backend.config import CONTRACT_TYPE_ANY, ENABLE_VERBOSE_LOGGING
from backend.sorting import sort_properties
from domains.search.models.filters import AdvancedFilters, BasicFilters, SortKey
from domains.search.models.property import Property

Predicate = Callable[[Property], bool]


@dataclass(frozen=True)
class FilterDiagnostic:
    """A filter value that could not be used (and was ignored)."""
    field: str
    value: str
    reason: str


@dataclass(frozen=True)
class Bound:
    """Parsed numeric token; `open_ended` for bucket tokens such as "5+"."""
    value: float
    open_ended: bool = False


def parse_number(raw: str) -> Optional[float]:
    """Finite float or None ("nan" and "inf" count as unparsable)."""
    try:
        value = float(raw.strip())
    except (AttributeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_bound(raw: str) -> Optional[Bound]:
    """"3" -> Bound(3), "5+" -> Bound(5, open_ended=True), "abc" -> None."""
    text = raw.strip()
    open_ended = text.endswith("+")
    if open_ended:
        text = text[:-1]
    number = parse_number(text)
    if number is None:
        return None
    return Bound(number, open_ended)


def normalize_label(text: str) -> str:
    """Case/space-insensitive form: "Casa Indipendente" -> "casa-indipendente"."""
    return re.sub(r"\s+", "-", text.strip().lower())


class _Run:
    """Working state for one pipeline evaluation."""

    def __init__(self, properties: Iterable[Property]):
        self.items: List[Property] = list(properties)
        self.diagnostics: List[FilterDiagnostic] = []

    def narrow(self, predicate: Predicate) -> None:
        self.items = [p for p in self.items if predicate(p)]

    def bounds(self, field: str, tokens: Sequence[str]) -> List[Bound]:
        parsed: List[Bound] = []
        for token in tokens:
            bound = parse_bound(token)
            if bound is None:
                self.reject(field, token)
            else:
                parsed.append(bound)
        return parsed

    def number(self, field: str, raw: str) -> Optional[float]:
        value = parse_number(raw)
        if value is None:
            self.reject(field, raw)
        return value

    def reject(self, field: str, value: str) -> None:
        diag = FilterDiagnostic(field=field, value=value, reason="not a number; constraint ignored")
        self.diagnostics.append(diag)
        print(f"[PIPELINE] Ignoring {field}={value!r}: {diag.reason}")


# ---------------------------------------------------------
# Predicates
# ---------------------------------------------------------

def keyword_matches(prop: Property, keyword: str) -> bool:
    needle = keyword.strip().lower()
    haystack = (prop.title, prop.address, prop.city, prop.region, prop.property_type)
    return any(needle in field.lower() for field in haystack) or needle in prop.id


def label_in(value: str, tokens: Sequence[str]) -> bool:
    target = normalize_label(value)
    return any(normalize_label(token) == target for token in tokens)


def count_matches(count: float, bounds: Sequence[Bound]) -> bool:
    """Exact count, or at-least for a bucket token."""
    return any(count >= b.value if b.open_ended else count == b.value for b in bounds)


def at_least_any(value: float, bounds: Sequence[Bound]) -> bool:
    return any(value >= b.value for b in bounds)


def at_most_any(value: float, bounds: Sequence[Bound]) -> bool:
    """Upper bound; a bucket token such as "500+" means at least that much."""
    return any(value >= b.value if b.open_ended else value <= b.value for b in bounds)


# ---------------------------------------------------------
# Stages
# ---------------------------------------------------------

def _apply_basic(run: _Run, f: BasicFilters) -> None:
    if f.keyword.strip():
        run.narrow(lambda p: keyword_matches(p, f.keyword))

    if f.city:
        cities = [c.lower() for c in f.city]
        run.narrow(lambda p: p.city.lower() in cities)

    if f.location and ENABLE_VERBOSE_LOGGING:
        print(f"[PIPELINE] location filter has no listing data, not applied: {list(f.location)}")

    if f.property_type:
        run.narrow(lambda p: label_in(p.property_type, f.property_type))

    if f.contract_type and CONTRACT_TYPE_ANY not in f.contract_type:
        contracts = [c.lower() for c in f.contract_type]
        run.narrow(lambda p: p.contract_type.lower() in contracts)

    if f.bedrooms:
        bounds = run.bounds("bedrooms", f.bedrooms)
        if bounds:
            run.narrow(lambda p: count_matches(p.bedrooms, bounds))

    if f.bathrooms:
        bounds = run.bounds("bathrooms", f.bathrooms)
        if bounds:
            run.narrow(lambda p: count_matches(p.bathrooms, bounds))

    if f.area_min:
        bounds = run.bounds("areaMin", f.area_min)
        if bounds:
            run.narrow(lambda p: at_least_any(p.area, bounds))

    if f.area_max:
        bounds = run.bounds("areaMax", f.area_max)
        if bounds:
            run.narrow(lambda p: at_most_any(p.area, bounds))


def _apply_advanced(run: _Run, f: AdvancedFilters) -> None:
    if f.price_min:
        price_min = run.number("priceMin", f.price_min)
        if price_min is not None:
            run.narrow(lambda p: p.price >= price_min)

    if f.price_max:
        price_max = run.number("priceMax", f.price_max)
        if price_max is not None:
            run.narrow(lambda p: p.price <= price_max)

    if f.property_type:
        run.narrow(lambda p: label_in(p.property_type, f.property_type))

    if f.contract_type and f.contract_type.lower() != CONTRACT_TYPE_ANY:
        contract = f.contract_type.lower()
        run.narrow(lambda p: p.contract_type.lower() == contract)

    if f.bedrooms:
        bounds = run.bounds("advanced.bedrooms", [f.bedrooms])
        if bounds:
            run.narrow(lambda p: count_matches(p.bedrooms, bounds))

    if f.bathrooms:
        bounds = run.bounds("advanced.bathrooms", [f.bathrooms])
        if bounds:
            run.narrow(lambda p: count_matches(p.bathrooms, bounds))

    if f.area:
        bounds = run.bounds("advanced.area", [f.area])
        if bounds:
            run.narrow(lambda p: at_least_any(p.area, bounds))

    if f.area_max:
        bounds = run.bounds("advanced.areaMax", [f.area_max])
        if bounds:
            run.narrow(lambda p: at_most_any(p.area, bounds))

    if f.location:
        cities = [c.lower() for c in f.location]
        run.narrow(lambda p: p.city.lower() in cities)

    if ENABLE_VERBOSE_LOGGING:
        inert = {
            "zones": f.zones,
            "features": f.features,
            "amenities": f.amenities,
            "energyRating": f.energy_rating,
            "propertyCondition": f.property_condition,
            "schoolDistrict": f.school_district,
            "transportProximity": f.transport_proximity,
            "yearMin": f.year_min,
            "yearMax": f.year_max,
        }
        selected = {k: v for k, v in inert.items() if v}
        if selected:
            print(f"[PIPELINE] filters without listing data, not applied: {selected}")


def run_pipeline(
    properties: Iterable[Property],
    basic: BasicFilters,
    advanced: AdvancedFilters,
) -> Tuple[List[Property], List[FilterDiagnostic]]:
    """Filtered list (catalog order) plus the diagnostics for ignored values."""
    run = _Run(properties)
    _apply_basic(run, basic)
    _apply_advanced(run, advanced)
    return run.items, run.diagnostics


def filter_properties(
    properties: Iterable[Property],
    basic: BasicFilters,
    advanced: AdvancedFilters,
) -> List[Property]:
    items, _ = run_pipeline(properties, basic, advanced)
    return items


class MemoizedSearch:
    """
    Filter + sort, recomputed only when an input changes.

    Inputs are the catalog (by identity), both filter records, the sort key
    and a manual search tick.
    """

    def __init__(self) -> None:
        self._catalog: Optional[Iterable[Property]] = None
        self._key: Optional[tuple] = None
        self._result: List[Property] = []
        self._diagnostics: List[FilterDiagnostic] = []
        self.computations = 0

    def compute(
        self,
        catalog: Iterable[Property],
        basic: BasicFilters,
        advanced: AdvancedFilters,
        sort_key: SortKey,
        tick: int = 0,
    ) -> List[Property]:
        key = (basic, advanced, sort_key, tick)
        if catalog is not self._catalog or key != self._key:
            items, diagnostics = run_pipeline(catalog, basic, advanced)
            self._result = sort_properties(items, sort_key)
            self._diagnostics = diagnostics
            self._catalog = catalog
            self._key = key
            self.computations += 1
        return list(self._result)

    @property
    def diagnostics(self) -> List[FilterDiagnostic]:
        return list(self._diagnostics)
