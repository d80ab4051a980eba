"""
Pydantic models for the property assistant chat.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, computed_field, field_validator

from app.models.property import SearchCriteria


class IntentSignal(BaseModel):
    """Fragments recognised in a chat message."""

    location: Optional[str] = None
    price_range_text: Optional[str] = Field(
        default=None,
        description="Price mention exactly as written, e.g. '50 lakh'",
    )
    property_type: Optional[str] = None
    bedrooms: Optional[str] = None

    @computed_field
    @property
    def has_signal(self) -> bool:
        return any(
            (self.location, self.price_range_text, self.property_type, self.bedrooms)
        )


class ChatResponse(BaseModel):
    """
    Assistant reply to a single message.

    Either a redirect (criteria and URL set, no suggestions) or a
    suggestion list (no criteria).
    """

    text: str
    suggestions: List[str] = Field(default_factory=list)
    redirect_criteria: Optional[SearchCriteria] = None
    redirect_url: Optional[str] = None
    signal: IntentSignal


class ChatMessage(BaseModel):
    """Message envelope rendered by chat clients."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    text: str
    is_bot: bool = True
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    suggestions: List[str] = Field(default_factory=list)


class ChatStrings(BaseModel):
    """Localised labels and suggestion lists for rendering the chat widget."""

    language: str
    strings: Dict[str, str]
    lists: Dict[str, List[str]]


class ChatRequest(BaseModel):
    """API request body for the chat endpoint."""

    message: str = Field(
        ...,
        min_length=1,
        max_length=1000,
        examples=[
            "Show 2-bed flats in DHA Karachi",
            "Houses for sale in Islamabad",
        ],
    )
    language: Optional[str] = Field(
        default=None,
        description="'en' or 'ur'; the configured default is used when omitted",
    )

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be blank")
        return value


class ChatReply(BaseModel):
    """API response for the chat endpoint."""

    message: ChatMessage
    redirect_criteria: Optional[SearchCriteria] = None
    redirect_url: Optional[str] = None
    redirect_delay_ms: Optional[int] = Field(
        default=None,
        description="How long clients should wait before following redirect_url",
    )
    typing_delay_ms: int = 0
