"""
Rule-based intent extraction for the property assistant chat.

Scans a free-text message for a known city or area, a price mention, a
property type keyword and a bedroom count, and turns whatever it finds
into search criteria plus a redirect to the listings page. Messages with
no recognisable fragment get a canned list of suggestions instead.
"""

import logging
import re
from typing import Optional, Sequence

from app.config import Settings
from app.models.chat import ChatMessage, ChatReply, ChatResponse, ChatStrings, IntentSignal
from app.models.property import PropertyType, SearchCriteria
from app.services.search_service import listings_url
from app.services.translations import (
    TranslationKey,
    TranslationListKey,
    resolve_language,
    translate,
    translate_list,
)

logger = logging.getLogger(__name__)

# Scanned in this order; the first hit wins
KNOWN_CITIES = (
    "lahore",
    "karachi",
    "islamabad",
    "rawalpindi",
    "faisalabad",
    "multan",
    "peshawar",
    "quetta",
    "sialkot",
    "gujranwala",
)

KNOWN_AREAS = (
    "dha",
    "clifton",
    "gulberg",
    "model town",
    "cantt",
    "blue area",
    "f-6",
    "f-7",
    "f-8",
    "defence",
)

# "50 lakh", "2,500,000 pkr"; anchored to the start of a digit run
PRICE_PATTERN = re.compile(
    r"(?<![\d,])\d[\d,]*\s*(?:rs|rupees|pkr|lakh|crore)",
    re.IGNORECASE,
)

# "Rs. 50,000", tried only when PRICE_PATTERN finds nothing
PREFIX_PRICE_PATTERN = re.compile(
    r"\b(?:rs\.?|rupees|pkr)\s*\d[\d,]*",
    re.IGNORECASE,
)

# At most three digits, so the count always converts to an int
BEDROOM_PATTERN = re.compile(
    r"(?<!\d)(\d{1,3})(?!\d)[-\s]*(?:bed|bedroom)",
    re.IGNORECASE,
)

COMMERCIAL = "commercial"

# Checked in priority order; only the first matching category is assigned
PROPERTY_TYPE_KEYWORDS = (
    (("flat", "apartment"), PropertyType.APARTMENT.value),
    (("house", "home"), PropertyType.HOUSE.value),
    (("plot", "land"), PropertyType.LAND.value),
    (("commercial", "shop"), COMMERCIAL),
)


def _first_contained(text: str, vocabulary: Sequence[str]) -> Optional[str]:
    for term in vocabulary:
        if term in text:
            return term
    return None


def extract(
    message: str,
    known_cities: Sequence[str] = KNOWN_CITIES,
    known_areas: Sequence[str] = KNOWN_AREAS,
) -> IntentSignal:
    """
    Extract search fragments from a chat message.

    Never fails: blank or unrecognisable input yields a signal with
    every field empty.

    Args:
        message: Free text typed by the user.
        known_cities: Lower-case city names, in priority order.
        known_areas: Lower-case area names, in priority order.

    Returns:
        IntentSignal with whatever fragments were found.
    """
    lowered = message.lower()

    city = _first_contained(lowered, known_cities)
    area = _first_contained(lowered, known_areas)
    if area and city:
        location = f"{area} {city}"
    else:
        location = area or city

    price_match = PRICE_PATTERN.search(message) or PREFIX_PRICE_PATTERN.search(message)

    property_type = None
    for keywords, mapped_type in PROPERTY_TYPE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            property_type = mapped_type
            break

    bedroom_match = BEDROOM_PATTERN.search(message)

    return IntentSignal(
        location=location,
        price_range_text=price_match.group(0) if price_match else None,
        property_type=property_type,
        bedrooms=bedroom_match.group(1) if bedroom_match else None,
    )


def criteria_from_signal(signal: IntentSignal) -> SearchCriteria:
    """
    Map a signal onto search criteria.

    "commercial" has no PropertyType counterpart and is left out, and the
    price text is not carried over since it is never parsed into numbers.
    """
    fields = {}
    if signal.location:
        fields["location"] = signal.location
    if signal.property_type and signal.property_type != COMMERCIAL:
        fields["property_type"] = PropertyType(signal.property_type)
    bedrooms = signal.bedrooms or ""
    if bedrooms.isdigit() and len(bedrooms) <= 3 and int(bedrooms) >= 1:
        fields["bedrooms"] = int(bedrooms)
    return SearchCriteria(**fields)


def build_response(signal: IntentSignal, language: Optional[str] = None) -> ChatResponse:
    """Turn an extracted signal into a redirect or a suggestion list."""
    if not signal.has_signal:
        return ChatResponse(
            text=translate(TranslationKey.NO_RESULTS, language),
            suggestions=translate_list(TranslationListKey.FALLBACK_SUGGESTIONS, language),
            signal=signal,
        )

    criteria = criteria_from_signal(signal)
    return ChatResponse(
        text=translate(TranslationKey.SEARCH_REDIRECT, language),
        redirect_criteria=criteria,
        redirect_url=listings_url(criteria),
        signal=signal,
    )


class IntentService:
    """Chat front-end to the property search."""

    def __init__(self, settings: Settings) -> None:
        """
        Initialize the intent service.

        Args:
            settings: Application settings with the chat UX timings.
        """
        self.default_language = settings.default_language
        self.typing_delay_ms = settings.chat_typing_delay_ms
        self.redirect_delay_ms = settings.chat_redirect_delay_ms
        self.known_cities = KNOWN_CITIES
        self.known_areas = KNOWN_AREAS

    def respond(self, message: str, language: Optional[str] = None) -> ChatResponse:
        language = language or self.default_language
        signal = extract(message, self.known_cities, self.known_areas)
        logger.info("Chat signal: %s", signal.model_dump(exclude_none=True))
        return build_response(signal, language)

    def reply(self, message: str, language: Optional[str] = None) -> ChatReply:
        """Wrap a response in the message envelope chat clients render."""
        response = self.respond(message, language)
        return ChatReply(
            message=ChatMessage(text=response.text, suggestions=response.suggestions),
            redirect_criteria=response.redirect_criteria,
            redirect_url=response.redirect_url,
            redirect_delay_ms=self.redirect_delay_ms if response.redirect_criteria else None,
            typing_delay_ms=self.typing_delay_ms,
        )

    def welcome(self, language: Optional[str] = None) -> ChatMessage:
        language = language or self.default_language
        return ChatMessage(
            id="welcome",
            text=translate(TranslationKey.WELCOME, language),
            suggestions=translate_list(TranslationListKey.WELCOME_SUGGESTIONS, language),
        )

    def strings(self, language: Optional[str] = None) -> ChatStrings:
        """Every label and suggestion list the chat widget renders."""
        language = resolve_language(language or self.default_language)
        return ChatStrings(
            language=language,
            strings={key.value: translate(key, language) for key in TranslationKey},
            lists={key.value: translate_list(key, language) for key in TranslationListKey},
        )


# Dependency injection helper for FastAPI
_intent_service: Optional[IntentService] = None


def get_intent_service(settings: Settings) -> IntentService:
    """
    Get or create the intent service singleton.
    """
    global _intent_service
    if _intent_service is None:
        _intent_service = IntentService(settings)
    return _intent_service
