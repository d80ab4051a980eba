from .chat import (
    ChatMessage,
    ChatReply,
    ChatRequest,
    ChatResponse,
    ChatStrings,
    IntentSignal,
)
from .inquiry import Inquiry, InquiryCreate, InquiryStatus
from .property import (
    ListingType,
    Property,
    PropertyStatus,
    PropertyType,
    SearchCriteria,
    SearchResult,
    SortOrder,
)
from .saved import SavedProperty, SavedPropertyStatus, SavedSearch, SavedSearchCreate

__all__ = [
    "ChatMessage",
    "ChatReply",
    "ChatRequest",
    "ChatResponse",
    "ChatStrings",
    "IntentSignal",
    "Inquiry",
    "InquiryCreate",
    "InquiryStatus",
    "ListingType",
    "Property",
    "PropertyStatus",
    "PropertyType",
    "SearchCriteria",
    "SavedProperty",
    "SavedPropertyStatus",
    "SavedSearch",
    "SavedSearchCreate",
    "SearchResult",
    "SortOrder",
]
