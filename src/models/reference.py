"""Reference data models (lookup tables)."""

from pydantic import BaseModel, Field


class PropertyType(BaseModel):
    """Property type (condominium, house and lot, ...)."""
    property_type_id: int = Field(..., description="Property type ID")
    name: str = Field(..., description="Display name")


class ListingType(BaseModel):
    """Listing type (for sale, for rent, ...)."""
    listing_type_id: int = Field(..., description="Listing type ID")
    name: str = Field(..., description="Display name")


class TurnoverStatus(BaseModel):
    """Turnover status (pre-selling, ready for occupancy, ...)."""
    turnover_status_id: int = Field(..., description="Turnover status ID")
    name: str = Field(..., description="Display name")


class City(BaseModel):
    city_id: int = Field(..., description="City ID")
    name: str = Field(..., description="City name")
