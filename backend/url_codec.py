"""
backend/url_codec.py

URL Codec: pure mapping between the (BasicFilters, AdvancedFilters) pair and
a query string.

Query keys:
    search, city, location, type, contract, bedrooms, bathrooms, areaMin,
    areaMax, priceMin, priceMax, zones, yearMin, yearMax, features,
    amenities, energyRating, propertyCondition, schoolDistrict,
    transportProximity

Array fields are comma-joined and omitted when empty; scalar fields are
omitted when empty. Several keys are shared by the basic and advanced
records (type, contract, bedrooms, bathrooms, areaMin/areaMax, location).
Advanced values are encoded after basic ones and overwrite them on those
keys; on decode a shared key populates both records (an advanced scalar
field only when the key holds a single token).
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from backend.config import CONTRACT_TYPE_ANY
from backend.filter_state import default_basic_filters, empty_advanced_filters
from domains.search.models.filters import AdvancedFilters, BasicFilters

RECOGNIZED_KEYS = (
    "search", "city", "location", "type", "contract", "bedrooms", "bathrooms",
    "areaMin", "areaMax", "priceMin", "priceMax", "zones", "yearMin", "yearMax",
    "features", "amenities", "energyRating", "propertyCondition",
    "schoolDistrict", "transportProximity",
)

# Keys written by both records; the advanced value wins on encode
SHARED_KEYS = ("type", "contract", "bedrooms", "bathrooms", "areaMin", "areaMax", "location")


def join_tokens(tokens: Iterable[str]) -> str:
    return ",".join(tokens)


def split_tokens(value: str | None) -> Tuple[str, ...]:
    """Comma-split a query value, dropping empty tokens."""
    if not value:
        return ()
    return tuple(token.strip() for token in value.split(",") if token.strip())


def single_token(value: str | None) -> str:
    """The value when it holds exactly one token, else ""."""
    tokens = split_tokens(value)
    return tokens[0] if len(tokens) == 1 else ""


def _set_tokens(params: Dict[str, str], key: str, tokens: Tuple[str, ...]) -> None:
    if tokens:
        params[key] = join_tokens(tokens)


def _set_scalar(params: Dict[str, str], key: str, value: str) -> None:
    if value:
        params[key] = value


def encode_params(basic: BasicFilters, advanced: AdvancedFilters) -> Dict[str, str]:
    """Ordered key -> value mapping for the filter pair (empty fields omitted)."""
    params: Dict[str, str] = {}

    # Basic filters
    _set_scalar(params, "search", basic.keyword)
    _set_tokens(params, "city", basic.city)
    _set_tokens(params, "location", basic.location)
    _set_tokens(params, "type", basic.property_type)
    if CONTRACT_TYPE_ANY not in basic.contract_type:
        _set_tokens(params, "contract", basic.contract_type)
    _set_tokens(params, "bedrooms", basic.bedrooms)
    _set_tokens(params, "bathrooms", basic.bathrooms)
    _set_tokens(params, "areaMin", basic.area_min)
    _set_tokens(params, "areaMax", basic.area_max)

    # Advanced filters (overwrite shared keys)
    _set_scalar(params, "priceMin", advanced.price_min)
    _set_scalar(params, "priceMax", advanced.price_max)
    _set_tokens(params, "type", advanced.property_type)
    _set_scalar(params, "contract", advanced.contract_type)
    _set_scalar(params, "bedrooms", advanced.bedrooms)
    _set_scalar(params, "bathrooms", advanced.bathrooms)
    _set_scalar(params, "areaMin", advanced.area)
    _set_scalar(params, "areaMax", advanced.area_max)
    _set_tokens(params, "location", advanced.location)
    _set_tokens(params, "zones", advanced.zones)
    _set_scalar(params, "yearMin", advanced.year_min)
    _set_scalar(params, "yearMax", advanced.year_max)
    _set_tokens(params, "features", advanced.features)
    _set_tokens(params, "amenities", advanced.amenities)
    _set_tokens(params, "energyRating", advanced.energy_rating)
    _set_scalar(params, "propertyCondition", advanced.property_condition)
    _set_scalar(params, "schoolDistrict", advanced.school_district)
    _set_tokens(params, "transportProximity", advanced.transport_proximity)

    return params


def encode(basic: BasicFilters, advanced: AdvancedFilters) -> str:
    """Query string (without leading '?') for the filter pair."""
    return urlencode(encode_params(basic, advanced))


def parse_query(query: str) -> Dict[str, str]:
    """Query string -> dict; a repeated key keeps its last value."""
    return dict(parse_qsl(query.lstrip("?"), keep_blank_values=False))


def has_query(query: str | Mapping[str, str]) -> bool:
    if isinstance(query, str):
        return len(query.lstrip("?")) > 0
    return len(query) > 0


def decode_params(params: Mapping[str, str]) -> Tuple[BasicFilters, AdvancedFilters]:
    """
    Filter pair for an already-parsed query mapping.

    An empty mapping yields the session defaults (contract = vendita); in a
    non-empty mapping every missing key decodes to empty.
    """
    if not params:
        return default_basic_filters(), empty_advanced_filters()

    get = params.get

    basic = BasicFilters(
        keyword=get("search", ""),
        location=split_tokens(get("location")),
        city=split_tokens(get("city")),
        property_type=split_tokens(get("type")),
        contract_type=split_tokens(get("contract")),
        bedrooms=split_tokens(get("bedrooms")),
        bathrooms=split_tokens(get("bathrooms")),
        area_min=split_tokens(get("areaMin")),
        area_max=split_tokens(get("areaMax")),
    )

    advanced = AdvancedFilters(
        price_min=get("priceMin", ""),
        price_max=get("priceMax", ""),
        property_type=split_tokens(get("type")),
        # Scalar fields only take a shared key when it holds a single token;
        # a list there was written by a basic multi-select
        bedrooms=single_token(get("bedrooms")),
        bathrooms=single_token(get("bathrooms")),
        area=single_token(get("areaMin")),
        area_max=single_token(get("areaMax")),
        location=split_tokens(get("location")),
        zones=split_tokens(get("zones")),
        contract_type=single_token(get("contract")),
        year_min=get("yearMin", ""),
        year_max=get("yearMax", ""),
        features=split_tokens(get("features")),
        amenities=split_tokens(get("amenities")),
        energy_rating=split_tokens(get("energyRating")),
        property_condition=get("propertyCondition", ""),
        school_district=get("schoolDistrict", ""),
        transport_proximity=split_tokens(get("transportProximity")),
    )

    return basic, advanced


def decode(query: str) -> Tuple[BasicFilters, AdvancedFilters]:
    """Filter pair for a query string (leading '?' optional)."""
    return decode_params(parse_query(query))


def colliding_keys(basic: BasicFilters, advanced: AdvancedFilters) -> List[str]:
    """Shared keys where the advanced value replaces a different basic value."""
    basic_params = encode_params(basic, empty_advanced_filters())
    advanced_params = encode_params(BasicFilters(), advanced)
    return [
        key for key in SHARED_KEYS
        if key in basic_params and key in advanced_params
        and basic_params[key] != advanced_params[key]
    ]


def build_share_url(base_url: str, basic: BasicFilters, advanced: AdvancedFilters) -> str:
    """Absolute link that reproduces the filter pair; replaces any existing query."""
    scheme, netloc, path, _query, fragment = urlsplit(base_url)
    return urlunsplit((scheme, netloc, path, encode(basic, advanced), fragment))
