from enum import Enum
from typing import Any, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


def as_tokens(value: Any) -> Tuple[str, ...]:
    """Coerce None / str / iterable into a tuple of string tokens."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value != "" else ()
    return tuple(str(v) for v in value)


def as_scalar(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class SortKey(str, Enum):
    default = "default"
    price_asc = "price_asc"
    price_desc = "price_desc"
    area_asc = "area_asc"
    area_desc = "area_desc"
    bedrooms_asc = "bedrooms_asc"
    bedrooms_desc = "bedrooms_desc"
    newest = "newest"

    @classmethod
    def parse(cls, value: Any) -> "SortKey":
        """Unknown or empty keys fall back to `default`."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return cls.default


class BasicFilters(BaseModel):
    """
    Coarse, always-visible search fields.

    Every array field is a tuple of tokens and is never None; an empty tuple
    means "no constraint".
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    keyword: str = ""
    location: Tuple[str, ...] = ()
    city: Tuple[str, ...] = ()
    property_type: Tuple[str, ...] = Field((), alias="propertyType")
    contract_type: Tuple[str, ...] = Field((), alias="contractType")
    bedrooms: Tuple[str, ...] = ()
    bathrooms: Tuple[str, ...] = ()
    area_min: Tuple[str, ...] = Field((), alias="areaMin")
    area_max: Tuple[str, ...] = Field((), alias="areaMax")

    @field_validator("keyword", mode="before")
    @classmethod
    def coerce_keyword(cls, v):
        return as_scalar(v)

    @field_validator(
        "location", "city", "property_type", "contract_type",
        "bedrooms", "bathrooms", "area_min", "area_max",
        mode="before",
    )
    @classmethod
    def coerce_tokens(cls, v):
        return as_tokens(v)


class AdvancedFilters(BaseModel):
    """
    Secondary-panel constraints.

    Scalar fields are strings ("" = unset); array fields are token tuples.
    zones, features, amenities, energy_rating, school_district,
    transport_proximity and the year range are carried but not matched.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    price_min: str = Field("", alias="priceMin")
    price_max: str = Field("", alias="priceMax")
    property_type: Tuple[str, ...] = Field((), alias="propertyType")
    bedrooms: str = ""
    bathrooms: str = ""
    area: str = ""
    area_max: str = Field("", alias="areaMax")
    location: Tuple[str, ...] = ()
    zones: Tuple[str, ...] = ()
    contract_type: str = Field("", alias="contractType")
    year_min: str = Field("", alias="yearMin")
    year_max: str = Field("", alias="yearMax")
    features: Tuple[str, ...] = ()
    amenities: Tuple[str, ...] = ()
    energy_rating: Tuple[str, ...] = Field((), alias="energyRating")
    property_condition: str = Field("", alias="propertyCondition")
    school_district: str = Field("", alias="schoolDistrict")
    transport_proximity: Tuple[str, ...] = Field((), alias="transportProximity")

    @field_validator(
        "price_min", "price_max", "bedrooms", "bathrooms", "area", "area_max",
        "contract_type", "year_min", "year_max", "property_condition",
        "school_district",
        mode="before",
    )
    @classmethod
    def coerce_scalar(cls, v):
        return as_scalar(v)

    @field_validator(
        "property_type", "location", "zones", "features", "amenities",
        "energy_rating", "transport_proximity",
        mode="before",
    )
    @classmethod
    def coerce_tokens(cls, v):
        return as_tokens(v)
