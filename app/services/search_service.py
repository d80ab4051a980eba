"""
Property search: query-string parsing, filtering, sorting and pagination.

Everything here is a pure function over its inputs. The corpus comes from
the listing store and is never modified; errors are raised to the caller
as InvalidArgument.
"""

import math
import re
from typing import Callable, Iterable, List, Mapping, Optional
from urllib.parse import urlencode

from app.errors import InvalidArgument
from app.models.property import (
    ListingType,
    Property,
    PropertyStatus,
    PropertyType,
    SearchCriteria,
    SearchResult,
    SortOrder,
)

Predicate = Callable[[Property], bool]

LISTINGS_PATH = "/properties"

# Query-string keys as sent by the listings page and chat redirects
QUERY_KEYS = {
    "location": "location",
    "propertyType": "property_type",
    "listingType": "listing_type",
    "minPrice": "min_price",
    "maxPrice": "max_price",
    "bedrooms": "bedrooms",
    "bathrooms": "bathrooms",
    "minSqft": "min_sqft",
    "maxSqft": "max_sqft",
    "sort": "sort",
    "page": "page",
    "limit": "page_size",
}

_INT_FIELDS = {"bedrooms", "min_sqft", "max_sqft", "page", "page_size"}
_FLOAT_FIELDS = {"min_price", "max_price", "bathrooms"}
_ENUM_FIELDS = {
    "property_type": PropertyType,
    "listing_type": ListingType,
    "sort": SortOrder,
}


# Plain decimal text only: no exponents, underscores, "inf" or "nan"
_DECIMAL_TEXT = re.compile(r"-?\d+(?:\.\d+)?")

_MAX_INT_DIGITS = 18


def _decimal_text(raw: str) -> Optional[str]:
    text = raw.strip()
    return text if _DECIMAL_TEXT.fullmatch(text) else None


def _parse_int(raw: str) -> Optional[int]:
    """Integer part of decimal text, so "2.5" reads as 2."""
    text = _decimal_text(raw)
    if text is None:
        return None
    whole = text.split(".")[0]
    if len(whole.lstrip("-")) > _MAX_INT_DIGITS:
        return None
    return int(whole)


def _parse_float(raw: str) -> Optional[float]:
    text = _decimal_text(raw)
    if text is None:
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def parse_search_params(
    params: Mapping[str, str],
    default_page_size: int = 12,
) -> SearchCriteria:
    """
    Build search criteria from query-string pairs.

    Absent, blank or unparseable values are omitted rather than read as
    zero, and enum values outside the known set (such as "all") are
    dropped. Numeric values that parse but are out of range are kept so
    that resolve() can reject them.

    Args:
        params: Raw query parameters, e.g. a Starlette QueryParams.
        default_page_size: Page size used when "limit" is omitted.

    Returns:
        SearchCriteria with every recognised field populated.
    """
    fields = {"page_size": default_page_size}

    for key, field_name in QUERY_KEYS.items():
        raw = params.get(key)
        if raw is None or not raw.strip():
            continue

        if field_name in _INT_FIELDS:
            value = _parse_int(raw)
        elif field_name in _FLOAT_FIELDS:
            value = _parse_float(raw)
        elif field_name in _ENUM_FIELDS:
            enum_cls = _ENUM_FIELDS[field_name]
            try:
                value = enum_cls(raw.strip().lower())
            except ValueError:
                value = None
        else:
            value = raw.strip()

        if value is not None:
            fields[field_name] = value

    return SearchCriteria(**fields)


def to_query_params(criteria: SearchCriteria) -> dict:
    """Inverse of parse_search_params for the fields that are set."""
    defaults = SearchCriteria()
    params = {}
    for key, field_name in QUERY_KEYS.items():
        value = getattr(criteria, field_name)
        if value is None or value == getattr(defaults, field_name):
            continue
        params[key] = value.value if hasattr(value, "value") else str(value)
    return params


def listings_url(criteria: SearchCriteria) -> str:
    """Listings page URL that re-runs a search."""
    query = urlencode(to_query_params(criteria))
    return f"{LISTINGS_PATH}?{query}" if query else LISTINGS_PATH


def validate_criteria(criteria: SearchCriteria) -> None:
    """
    Reject criteria that cannot describe a page of results.

    Raises:
        InvalidArgument: On non-positive pagination, negative bounds or
            an inverted price or area range.
    """
    if criteria.page < 1:
        raise InvalidArgument(f"page must be >= 1, got {criteria.page}")
    if criteria.page_size < 1:
        raise InvalidArgument(f"page size must be >= 1, got {criteria.page_size}")

    for name in ("min_price", "max_price", "min_sqft", "max_sqft"):
        value = getattr(criteria, name)
        if value is not None and value < 0:
            raise InvalidArgument(f"{name} must be >= 0, got {value}")
    for name in ("bedrooms", "bathrooms"):
        value = getattr(criteria, name)
        if value is not None and value < 1:
            raise InvalidArgument(f"{name} must be >= 1, got {value}")

    if (
        criteria.min_price is not None
        and criteria.max_price is not None
        and criteria.min_price > criteria.max_price
    ):
        raise InvalidArgument("min_price must not exceed max_price")
    if (
        criteria.min_sqft is not None
        and criteria.max_sqft is not None
        and criteria.min_sqft > criteria.max_sqft
    ):
        raise InvalidArgument("min_sqft must not exceed max_sqft")


def _build_predicates(criteria: SearchCriteria) -> List[Predicate]:
    predicates: List[Predicate] = [lambda p: p.status == PropertyStatus.ACTIVE]

    if criteria.location:
        needle = criteria.location.lower()
        predicates.append(
            lambda p: any(needle in field.lower() for field in (p.address, p.city, p.state))
        )
    if criteria.property_type is not None:
        predicates.append(lambda p: p.property_type == criteria.property_type)
    if criteria.listing_type is not None:
        predicates.append(lambda p: p.listing_type == criteria.listing_type)
    if criteria.min_price is not None:
        predicates.append(lambda p: p.price >= criteria.min_price)
    if criteria.max_price is not None:
        predicates.append(lambda p: p.price <= criteria.max_price)
    if criteria.bedrooms is not None:
        predicates.append(lambda p: p.bedrooms >= criteria.bedrooms)
    if criteria.bathrooms is not None:
        predicates.append(lambda p: p.bathrooms >= criteria.bathrooms)
    if criteria.min_sqft is not None:
        predicates.append(lambda p: p.sqft >= criteria.min_sqft)
    if criteria.max_sqft is not None:
        predicates.append(lambda p: p.sqft <= criteria.max_sqft)

    return predicates


def _sort(properties: List[Property], order: SortOrder) -> None:
    # id breaks ties so every order is total
    if order == SortOrder.NEWEST:
        properties.sort(key=lambda p: (p.created_at, p.id), reverse=True)
    elif order == SortOrder.OLDEST:
        properties.sort(key=lambda p: (p.created_at, p.id))
    elif order == SortOrder.PRICE_LOW:
        properties.sort(key=lambda p: (p.price, p.id))
    else:
        properties.sort(key=lambda p: (-p.price, p.id))


def resolve(criteria: SearchCriteria, corpus: Iterable[Property]) -> SearchResult:
    """
    Filter, sort and paginate a corpus of listings.

    Only active listings are considered. Every populated criterion must
    hold for a listing to match; bedrooms and bathrooms are minimums.

    Args:
        criteria: Search filters, sort order and page.
        corpus: Listings to search, typically the store's snapshot.

    Returns:
        SearchResult with the requested page and the total match count.

    Raises:
        InvalidArgument: If the criteria fail validate_criteria().
    """
    validate_criteria(criteria)

    predicates = _build_predicates(criteria)
    matches = [p for p in corpus if all(check(p) for check in predicates)]
    _sort(matches, criteria.sort)

    start = (criteria.page - 1) * criteria.page_size
    return SearchResult(
        items=matches[start:start + criteria.page_size],
        total=len(matches),
        page=criteria.page,
        page_size=criteria.page_size,
    )
