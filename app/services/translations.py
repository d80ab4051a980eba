"""
English and Urdu strings for the property assistant.
"""

from enum import Enum
from typing import Dict, List, Optional, Union

DEFAULT_LANGUAGE = "en"


class TranslationKey(str, Enum):
    WELCOME = "welcome"
    PLACEHOLDER = "placeholder"
    SEND = "send"
    TYPING = "typing"
    NO_RESULTS = "no_results"
    SEARCH_REDIRECT = "search_redirect"
    ASSISTANT_TITLE = "assistant_title"
    HELP_BUTTON = "help_button"


class TranslationListKey(str, Enum):
    WELCOME_SUGGESTIONS = "welcome_suggestions"
    FALLBACK_SUGGESTIONS = "fallback_suggestions"


_STRINGS: Dict[str, Dict[TranslationKey, str]] = {
    "en": {
        TranslationKey.WELCOME: (
            "Hello! I'm here to help you find the perfect property. "
            "You can ask me things like:"
        ),
        TranslationKey.PLACEHOLDER: "Type your property question...",
        TranslationKey.SEND: "Send",
        TranslationKey.TYPING: "Bot is typing...",
        TranslationKey.NO_RESULTS: (
            "I couldn't find exact matches, but here are some suggestions:"
        ),
        TranslationKey.SEARCH_REDIRECT: (
            "Let me search for properties matching your criteria..."
        ),
        TranslationKey.ASSISTANT_TITLE: "Property Assistant",
        TranslationKey.HELP_BUTTON: "Property Help",
    },
    "ur": {
        TranslationKey.WELCOME: (
            "آسلام علیکم! میں آپ کو بہترین پراپرٹی تلاش کرنے میں مدد کرسکتا ہوں۔ "
            "آپ مجھ سے یہ سوالات پوچھ سکتے ہیں:"
        ),
        TranslationKey.PLACEHOLDER: "اپنا پراپرٹی سوال ٹائپ کریں...",
        TranslationKey.SEND: "بھیجیں",
        TranslationKey.TYPING: "بوٹ ٹائپ کر رہا ہے...",
        TranslationKey.NO_RESULTS: "مجھے بالکل میچ نہیں ملا، لیکن یہ تجاویز ہیں:",
        TranslationKey.SEARCH_REDIRECT: "میں آپ کے معیار کے مطابق پراپرٹیز تلاش کر رہا ہوں...",
        TranslationKey.ASSISTANT_TITLE: "پراپرٹی اسسٹنٹ",
        TranslationKey.HELP_BUTTON: "پراپرٹی سپورٹ",
    },
}

_LISTS: Dict[str, Dict[TranslationListKey, List[str]]] = {
    "en": {
        TranslationListKey.WELCOME_SUGGESTIONS: [
            "What's available in Lahore under Rs. 50,000?",
            "Show 2-bed flats in DHA Karachi",
            "Houses for sale in Islamabad",
            "Commercial properties in Multan",
        ],
        TranslationListKey.FALLBACK_SUGGESTIONS: [
            "Houses in Lahore",
            "Flats in Karachi",
            "Under 50 Lakh",
            "3 bedrooms",
        ],
    },
    "ur": {
        TranslationListKey.WELCOME_SUGGESTIONS: [
            "لاہور میں 50,000 روپے سے کم کیا دستیاب ہے؟",
            "ڈی ایچ اے کراچی میں 2 بیڈ روم فلیٹس دکھائیں",
            "اسلام آباد میں مکانات برائے فروخت",
            "ملتان میں کمرشل پراپرٹیز",
        ],
        TranslationListKey.FALLBACK_SUGGESTIONS: [
            "لاہور میں مکانات",
            "کراچی میں فلیٹس",
            "50 لاکھ سے کم",
            "3 بیڈ روم",
        ],
    },
}


def resolve_language(language: Optional[str]) -> str:
    """Return a supported language code, falling back to English."""
    if language and language.lower() in _STRINGS:
        return language.lower()
    return DEFAULT_LANGUAGE


def translate(key: Union[TranslationKey, str], language: Optional[str] = None) -> str:
    """
    Look up a UI string.

    Raises:
        KeyError: If the key is not a known TranslationKey.
    """
    try:
        key = TranslationKey(key)
    except ValueError as e:
        raise KeyError(key) from e
    return _STRINGS[resolve_language(language)][key]


def translate_list(key: Union[TranslationListKey, str], language: Optional[str] = None) -> List[str]:
    """Look up a list of suggestion strings; returns a fresh copy."""
    try:
        key = TranslationListKey(key)
    except ValueError as e:
        raise KeyError(key) from e
    return list(_LISTS[resolve_language(language)][key])
