"""
Pydantic models for buyer and tenant inquiries about a listing.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class InquiryStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    VIEWED = "viewed"
    CLOSED = "closed"


class InquiryCreate(BaseModel):
    """API request body for contacting the listing agent."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=40)
    message: str = Field(..., min_length=1, max_length=2000)


class Inquiry(InquiryCreate):
    id: int
    property_id: int
    status: InquiryStatus = InquiryStatus.NEW
    created_at: datetime
