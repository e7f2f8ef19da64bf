from pydantic import BaseModel, ConfigDict, Field
from typing import List


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lng: float


class Property(BaseModel):
    """
    A single catalog listing.
    Loaded once from the catalog file and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Identity & location
    id: str = Field(..., min_length=1)
    title: str
    address: str
    city: str
    region: str

    # Classification (free text, e.g. "Villa", "vendita")
    property_type: str = Field(..., alias="propertyType")
    contract_type: str = Field(..., alias="contractType")

    # Size & price (non-negative)
    bedrooms: int = Field(..., ge=0)
    bathrooms: int = Field(..., ge=0)
    area: float = Field(..., ge=0, description="Surface in square meters")
    price: float = Field(..., ge=0, description="Asking price in euros")

    coordinates: Coordinates
    images: List[str] = Field(default_factory=list)
    badges: List[str] = Field(default_factory=list)

    # Display flags
    featured: bool = False
    is_new: bool = Field(False, alias="isNew")
    price_hidden: bool = Field(False, alias="priceHidden")
