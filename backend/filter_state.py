"""
backend/filter_state.py

Filter State: defaults and setter operations for the Basic / Advanced filter
records. Both records are frozen value objects; every setter returns a new
instance and leaves the input untouched.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Union

from backend.config import DEFAULT_CONTRACT_TYPE
from domains.search.models.filters import AdvancedFilters, BasicFilters


def default_basic_filters() -> BasicFilters:
    """Session defaults: everything open except contract type ("for sale")."""
    return BasicFilters(contract_type=[DEFAULT_CONTRACT_TYPE])


def empty_basic_filters() -> BasicFilters:
    return BasicFilters()


def empty_advanced_filters() -> AdvancedFilters:
    return AdvancedFilters()


def _field_name(model: type, key: str) -> str:
    """Resolve a field by python name or wire alias ("areaMin" -> "area_min")."""
    fields = model.model_fields
    if key in fields:
        return key
    for name, info in fields.items():
        if info.alias == key:
            return name
    raise KeyError(f"Unknown {model.__name__} field: {key!r}")


def update_filter(filters: BasicFilters, key: str, value: Any) -> BasicFilters:
    """
    Set one basic filter field.

    A bare string for an array field becomes a one-element list; None clears
    the field.
    """
    name = _field_name(BasicFilters, key)
    data = filters.model_dump()
    data[name] = value
    return BasicFilters(**data)


def update_advanced_filters(new_state: Union[AdvancedFilters, Mapping[str, Any]]) -> AdvancedFilters:
    """
    Build the replacement advanced filters from a submitted panel state.

    The panel always submits a full state; keys may use python names or
    wire aliases, missing keys are empty.
    """
    if isinstance(new_state, AdvancedFilters):
        return new_state
    data: Dict[str, Any] = {}
    for key, value in new_state.items():
        data[_field_name(AdvancedFilters, key)] = value
    return AdvancedFilters(**data)


def clear_advanced_filters() -> AdvancedFilters:
    return empty_advanced_filters()


def has_active_filters(basic: BasicFilters, advanced: AdvancedFilters) -> bool:
    """True when any field would be written to the URL / constrains results."""
    for record in (basic, advanced):
        for value in record.model_dump().values():
            if value:
                return True
    return False
