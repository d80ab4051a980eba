"""
Pydantic models for property listings and search.

These models define the listing records held by the store, the search
criteria accepted by the search endpoint and the paginated result it
returns.
"""

import math
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class PropertyType(str, Enum):
    HOUSE = "house"
    APARTMENT = "apartment"
    CONDO = "condo"
    TOWNHOUSE = "townhouse"
    LAND = "land"


class ListingType(str, Enum):
    SALE = "sale"
    RENT = "rent"


class PropertyStatus(str, Enum):
    ACTIVE = "active"
    PENDING = "pending"
    SOLD = "sold"
    RENTED = "rented"
    INACTIVE = "inactive"


class SortOrder(str, Enum):
    """Result orderings offered by the listings page."""

    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"


class Property(BaseModel):
    """
    A single property listing.

    Records are owned by the listing store and are never mutated by
    search or chat handling.
    """

    id: int = Field(description="Unique property identifier")
    title: str
    description: str
    price: float = Field(ge=0, description="Asking price or monthly rent")
    property_type: PropertyType
    listing_type: ListingType
    bedrooms: int = Field(ge=0)
    bathrooms: float = Field(ge=0)
    sqft: int = Field(ge=0, description="Covered area in square feet")
    year_built: Optional[int] = None
    address: str
    city: str
    state: str
    zip_code: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    images: List[str] = Field(default_factory=list)
    features: List[str] = Field(default_factory=list)
    agent_id: Optional[int] = None
    status: PropertyStatus = PropertyStatus.ACTIVE
    is_featured: bool = False
    created_at: datetime
    updated_at: datetime


class SearchCriteria(BaseModel):
    """
    Optional filters for a property search.

    Range and pagination checks are applied when the criteria are
    resolved, so that every rejection surfaces as InvalidArgument.
    """

    location: Optional[str] = Field(
        default=None,
        description="Matched case-insensitively against address, city and state",
    )
    property_type: Optional[PropertyType] = None
    listing_type: Optional[ListingType] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    bedrooms: Optional[int] = Field(
        default=None,
        description="Minimum number of bedrooms",
    )
    bathrooms: Optional[float] = Field(
        default=None,
        description="Minimum number of bathrooms",
    )
    min_sqft: Optional[int] = None
    max_sqft: Optional[int] = None
    sort: SortOrder = SortOrder.NEWEST
    page: int = 1
    page_size: int = 12


class SearchResult(BaseModel):
    """One page of matching properties plus the count across all pages."""

    items: List[Property] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    page: int = 1
    page_size: int = 12

    @computed_field
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0
