"""
Property listing models.
Listings are stored as plain documents in the ``properties`` collection.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal
from datetime import datetime

PropertyStatus = Literal["For Sale", "For Rent", "Sold", "Rented"]


class PropertyCreate(BaseModel):
    """Schema for publishing a new listing from the owner portal"""
    title: str = Field(..., min_length=3)
    price: float = Field(..., gt=0)
    location: str = Field(..., min_length=3)
    description: Optional[str] = None
    beds: int = Field(..., ge=0)
    baths: int = Field(..., ge=0)
    sqft: int = Field(..., ge=0)
    status: PropertyStatus
    property_type: str = "House"
    image_url: Optional[str] = None
    image_urls: List[str] = []

    @field_validator("description", "image_url")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("property_type")
    @classmethod
    def default_property_type(cls, value: str) -> str:
        return value.strip() or "House"


class PropertyFilters(BaseModel):
    """Listing filters as sent by the website; empty strings and "any" mean no constraint"""
    min_price: Optional[str] = None
    max_price: Optional[str] = None
    beds: Optional[str] = None
    baths: Optional[str] = None
    property_type: Optional[str] = None


class PropertyResponse(BaseModel):
    id: str
    title: str
    price: float
    location: str
    description: Optional[str] = None
    beds: int = 0
    baths: int = 0
    sqft: int = 0
    status: str
    property_type: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: Optional[List[str]] = None
    images: List[str] = []
    created_at: Optional[datetime] = None


class PropertyUpdate(BaseModel):
    """Partial listing update; only the fields sent are changed"""
    title: Optional[str] = Field(None, min_length=3)
    price: Optional[float] = Field(None, gt=0)
    location: Optional[str] = Field(None, min_length=3)
    description: Optional[str] = None
    beds: Optional[int] = Field(None, ge=0)
    baths: Optional[int] = Field(None, ge=0)
    sqft: Optional[int] = Field(None, ge=0)
    status: Optional[PropertyStatus] = None
    property_type: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: Optional[List[str]] = None
