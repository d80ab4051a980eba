"""
Pydantic models for a user's saved properties and saved searches.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from app.models.property import SearchCriteria


class SavedProperty(BaseModel):
    id: int
    user_id: int
    property_id: int
    created_at: datetime


class SavedPropertyStatus(BaseModel):
    property_id: int
    saved: bool


class SavedSearchCreate(BaseModel):
    """API request body for saving a search."""

    name: str = Field(..., min_length=1, max_length=200)
    criteria: SearchCriteria


class SavedSearch(SavedSearchCreate):
    id: int
    user_id: int
    query_url: str = Field(description="Listings URL that re-runs the search")
    created_at: datetime
