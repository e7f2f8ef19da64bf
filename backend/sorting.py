# backend/sorting.py
# Sort Engine: stable ordering of a filtered list by a SortKey

from typing import Any, Callable, Dict, Iterable, List, Tuple

from domains.search.models.filters import SortKey
from domains.search.models.property import Property

SortSpec = Tuple[Callable[[Property], Any], bool]  # (key function, reverse)

# `sorted` is stable (also with reverse=True), so ties keep their input order.
# Flag keys sort True before False via `not flag`.
SORT_SPECS: Dict[SortKey, SortSpec] = {
    SortKey.price_asc: (lambda p: p.price, False),
    SortKey.price_desc: (lambda p: p.price, True),
    SortKey.area_asc: (lambda p: p.area, False),
    SortKey.area_desc: (lambda p: p.area, True),
    SortKey.bedrooms_asc: (lambda p: p.bedrooms, False),
    SortKey.bedrooms_desc: (lambda p: p.bedrooms, True),
    SortKey.newest: (lambda p: (not p.is_new, not p.featured), False),
    SortKey.default: (lambda p: (not p.featured, not p.is_new), False),
}


def sort_properties(properties: Iterable[Property], sort_key: Any = SortKey.default) -> List[Property]:
    """Return a new list ordered by `sort_key`; unknown keys use `default`."""
    key_fn, reverse = SORT_SPECS[SortKey.parse(sort_key)]
    return sorted(properties, key=key_fn, reverse=reverse)
