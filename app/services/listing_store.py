"""
In-memory listing store.

Holds the property corpus the search and chat features read from, plus
the inquiries sent to listing agents and each user's saved properties
and saved searches. The corpus is loaded once from a JSON document,
either a local file or an http(s) URL, and is immutable afterwards.
"""

import itertools
import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import httpx

from app.config import Settings
from app.errors import NotFound
from app.models.inquiry import Inquiry, InquiryCreate
from app.models.property import Property, PropertyStatus
from app.models.saved import SavedProperty, SavedSearch, SavedSearchCreate
from app.services.search_service import listings_url, validate_criteria

logger = logging.getLogger(__name__)


def _read_source(source: str) -> Any:
    if source.startswith(("http://", "https://")):
        logger.info("Fetching listings from %s", source)
        with httpx.Client(timeout=30.0) as client:
            response = client.get(source, headers={"Accept": "application/json"})
            response.raise_for_status()
            return response.json()

    logger.info("Loading listings from %s", source)
    return json.loads(Path(source).read_text(encoding="utf-8"))


def load_listings(source: str) -> List[Property]:
    """
    Load property records from a JSON document.

    The document is either a list of records or an object with a
    "properties" list.

    Raises:
        httpx.HTTPError: If a remote source cannot be fetched.
        OSError: If a local source cannot be read.
        ValueError: If the document is not valid listing data.
    """
    data = _read_source(source)
    if isinstance(data, dict):
        data = data.get("properties")
    if not isinstance(data, list):
        raise ValueError(f"Listing source {source} does not contain a list of properties")

    return [Property.model_validate(item) for item in data]


class ListingStore:
    """Read-only property corpus with per-user inquiry and bookmark records."""

    def __init__(self, properties: Iterable[Property]) -> None:
        self._properties: Tuple[Property, ...] = tuple(properties)
        self._by_id: Dict[int, Property] = {p.id: p for p in self._properties}
        self._inquiries: List[Inquiry] = []
        self._saved_properties: Dict[Tuple[int, int], SavedProperty] = {}
        self._saved_searches: Dict[int, SavedSearch] = {}
        self._saved_property_ids = itertools.count(1)
        self._saved_search_ids = itertools.count(1)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._properties)

    def list_all_properties(self) -> Tuple[Property, ...]:
        return self._properties

    def list_active_properties(self) -> List[Property]:
        return [p for p in self._properties if p.status == PropertyStatus.ACTIVE]

    def list_by_agent(self, agent_id: int) -> List[Property]:
        """Every listing owned by an agent, whatever its status, newest first."""
        owned = [p for p in self._properties if p.agent_id == agent_id]
        owned.sort(key=lambda p: (p.created_at, p.id), reverse=True)
        return owned

    def list_featured(self, limit: int) -> List[Property]:
        featured = [p for p in self.list_active_properties() if p.is_featured]
        featured.sort(key=lambda p: (p.created_at, p.id), reverse=True)
        return featured[:limit]

    def get_property(self, property_id: int) -> Property:
        try:
            return self._by_id[property_id]
        except KeyError:
            raise NotFound(f"Property {property_id} not found") from None

    def add_inquiry(self, property_id: int, inquiry: InquiryCreate) -> Inquiry:
        """
        Record an inquiry about a listing.

        Raises:
            NotFound: If the property does not exist.
        """
        self.get_property(property_id)
        with self._lock:
            created = Inquiry(
                id=len(self._inquiries) + 1,
                property_id=property_id,
                created_at=datetime.now(timezone.utc),
                **inquiry.model_dump(),
            )
            self._inquiries.append(created)

        logger.info("Inquiry %d recorded for property %d", created.id, property_id)
        return created

    def list_inquiries(self, property_id: int) -> List[Inquiry]:
        self.get_property(property_id)
        with self._lock:
            return [i for i in self._inquiries if i.property_id == property_id]

    def save_property(self, user_id: int, property_id: int) -> SavedProperty:
        """
        Bookmark a listing for a user. Saving twice returns the first record.

        Raises:
            NotFound: If the property does not exist.
        """
        self.get_property(property_id)
        with self._lock:
            existing = self._saved_properties.get((user_id, property_id))
            if existing is not None:
                return existing
            saved = SavedProperty(
                id=next(self._saved_property_ids),
                user_id=user_id,
                property_id=property_id,
                created_at=datetime.now(timezone.utc),
            )
            self._saved_properties[(user_id, property_id)] = saved

        logger.info("User %d saved property %d", user_id, property_id)
        return saved

    def unsave_property(self, user_id: int, property_id: int) -> None:
        with self._lock:
            if self._saved_properties.pop((user_id, property_id), None) is None:
                raise NotFound(f"Property {property_id} is not saved by user {user_id}")

        logger.info("User %d removed saved property %d", user_id, property_id)

    def is_property_saved(self, user_id: int, property_id: int) -> bool:
        with self._lock:
            return (user_id, property_id) in self._saved_properties

    def list_saved_properties(self, user_id: int) -> List[Property]:
        """A user's saved listings, most recently saved first."""
        with self._lock:
            saved = [s for s in self._saved_properties.values() if s.user_id == user_id]
        saved.sort(key=lambda s: s.id, reverse=True)
        return [self._by_id[s.property_id] for s in saved]

    def add_saved_search(self, user_id: int, search: SavedSearchCreate) -> SavedSearch:
        """
        Save a search for a user along with the listings URL that re-runs it.

        Raises:
            InvalidArgument: If the criteria fail validate_criteria().
        """
        validate_criteria(search.criteria)
        with self._lock:
            created = SavedSearch(
                id=next(self._saved_search_ids),
                user_id=user_id,
                query_url=listings_url(search.criteria),
                created_at=datetime.now(timezone.utc),
                **search.model_dump(),
            )
            self._saved_searches[created.id] = created

        logger.info("User %d saved search %d (%s)", user_id, created.id, created.name)
        return created

    def list_saved_searches(self, user_id: int) -> List[SavedSearch]:
        """A user's saved searches, newest first."""
        with self._lock:
            searches = [s for s in self._saved_searches.values() if s.user_id == user_id]
        searches.sort(key=lambda s: s.id, reverse=True)
        return searches

    def delete_saved_search(self, user_id: int, search_id: int) -> None:
        with self._lock:
            search = self._saved_searches.get(search_id)
            if search is None or search.user_id != user_id:
                raise NotFound(f"Saved search {search_id} not found for user {user_id}")
            del self._saved_searches[search_id]

        logger.info("User %d deleted saved search %d", user_id, search_id)


# Dependency injection helper
_listing_store: Optional[ListingStore] = None


def get_listing_store(settings: Settings) -> ListingStore:
    """
    Get or create the listing store singleton.
    """
    global _listing_store
    if _listing_store is None:
        _listing_store = ListingStore(load_listings(settings.listings_source))
        logger.info("Listing store ready with %d properties", len(_listing_store))
    return _listing_store
