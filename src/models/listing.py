"""Listing models."""

import math
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator, model_validator


# Embedded resource alias -> flattened field name
REFERENCE_ALIASES = {
    "property_type": "property_type_name",
    "listing_type": "listing_type_name",
    "turnover_status": "turnover_status_name",
    "city": "city_name",
}


class Listing(BaseModel):
    """Property listing enriched with its reference names."""
    property_id: str = Field(..., description="Listing ID")
    listing_title: Optional[str] = Field(None, description="Listing title")
    listing_url: Optional[str] = Field(None, description="External listing URL")
    property_type_name: Optional[str] = Field(None, description="Joined property type name")
    listing_type_name: Optional[str] = Field(None, description="Joined listing type name")
    turnover_status_name: Optional[str] = Field(None, description="Joined turnover status name")
    current_price: Optional[float] = Field(None, description="Asking price, None when unpriced")
    floor_area: Optional[float] = None
    lot_area: Optional[float] = None
    sqm: Optional[float] = Field(None, description="Size in square meters")
    bedroom: Optional[int] = None
    bathroom: Optional[int] = None
    parking_lot: Optional[int] = None
    is_corner_lot: Optional[bool] = None
    studio_type: Optional[bool] = None
    building_name: Optional[str] = None
    year_built: Optional[Any] = Field(None, description="Year built, as stored")
    city_name: Optional[str] = Field(None, description="Joined city name")
    address: Optional[str] = None
    is_active: Optional[bool] = None
    is_cbd: Optional[bool] = Field(None, description="Located in a central business district")
    amenities: Optional[Any] = Field(None, description="Amenities, list or free text as stored")
    images: Optional[Any] = Field(None, description="Image URLs as stored")
    description: Optional[str] = None
    longitude: Optional[float] = None
    latitude: Optional[float] = None
    lease_end: Optional[str] = None
    created_at: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def flatten_references(cls, data: Any) -> Any:
        """Lift PostgREST embedded objects ({"city": {"name": ...}}) into *_name fields."""
        if not isinstance(data, dict):
            return data

        row = dict(data)
        for alias, field_name in REFERENCE_ALIASES.items():
            embedded = row.pop(alias, None)
            if isinstance(embedded, dict) and field_name not in row:
                row[field_name] = embedded.get("name")
        return row

    @field_validator("current_price", mode="before")
    @classmethod
    def drop_nan_price(cls, value: Any) -> Any:
        """Treat the NaN price sentinel as no price."""
        if isinstance(value, str) and value.strip().lower() == "nan":
            return None
        if isinstance(value, float) and math.isnan(value):
            return None
        return value
