"""
API routes for property search, listings, inquiries, saved items and the
chat assistant.
"""

import logging
from typing import Annotated, List, NamedTuple, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from app.config import Settings, get_settings
from app.errors import InvalidArgument, NotFound
from app.models.chat import ChatMessage, ChatReply, ChatRequest, ChatStrings
from app.models.inquiry import Inquiry, InquiryCreate
from app.models.property import Property, SearchResult
from app.models.saved import SavedProperty, SavedPropertyStatus, SavedSearch, SavedSearchCreate
from app.services.intent_service import IntentService, get_intent_service
from app.services.listing_store import ListingStore, get_listing_store
from app.services.search_service import parse_search_params, resolve

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class Services(NamedTuple):
    """Container for injected services."""

    store: ListingStore
    intents: IntentService
    settings: Settings


def get_services(
    settings: Annotated[Settings, Depends(get_settings)],
) -> Services:
    """Dependency that provides all required services."""
    return Services(
        store=get_listing_store(settings),
        intents=get_intent_service(settings),
        settings=settings,
    )


@router.get(
    "/properties",
    response_model=SearchResult,
    tags=["properties"],
    summary="Search active listings",
    description=(
        "Filter active listings by location, type, price, bedrooms, bathrooms "
        "and area, then return one page of results with the total match count."
    ),
)
def search_properties(
    request: Request,
    services: Annotated[Services, Depends(get_services)],
) -> SearchResult:
    """
    Search for properties using query-string filters.

    Filters are read straight from the query string so that blank or
    non-numeric values are ignored instead of rejected. Recognised keys:
    location, propertyType, listingType, minPrice, maxPrice, bedrooms,
    bathrooms, minSqft, maxSqft, sort, page, limit.

    Raises:
        HTTPException: 422 if pagination or ranges are invalid.
    """
    criteria = parse_search_params(
        request.query_params,
        default_page_size=services.settings.default_page_size,
    )
    if criteria.page_size > services.settings.max_page_size:
        criteria = criteria.model_copy(update={"page_size": services.settings.max_page_size})
    logger.info("Search criteria: %s", criteria.model_dump(exclude_none=True))

    try:
        result = resolve(criteria, services.store.list_active_properties())
    except InvalidArgument as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e
    except Exception as e:
        logger.exception("Unexpected error during search")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An unexpected error occurred: {type(e).__name__}: {e}",
        ) from e

    logger.info("Found %d matching properties", result.total)
    return result


@router.get(
    "/properties/featured",
    response_model=List[Property],
    tags=["properties"],
    summary="Featured listings",
)
def featured_properties(
    services: Annotated[Services, Depends(get_services)],
    limit: Optional[int] = Query(default=None, ge=1, le=50),
) -> List[Property]:
    """Featured active listings, newest first."""
    return services.store.list_featured(limit or services.settings.featured_limit)


@router.get(
    "/properties/{property_id}",
    response_model=Property,
    tags=["properties"],
    summary="Get a single listing",
)
def get_property(
    property_id: int,
    services: Annotated[Services, Depends(get_services)],
) -> Property:
    try:
        return services.store.get_property(property_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get(
    "/agents/{agent_id}/properties",
    response_model=List[Property],
    tags=["properties"],
    summary="Listings owned by an agent",
    description="Every listing for the agent regardless of status, for the agent dashboard.",
)
def agent_properties(
    agent_id: int,
    services: Annotated[Services, Depends(get_services)],
) -> List[Property]:
    return services.store.list_by_agent(agent_id)


@router.post(
    "/properties/{property_id}/inquiries",
    response_model=Inquiry,
    status_code=status.HTTP_201_CREATED,
    tags=["inquiries"],
    summary="Contact the listing agent",
)
def create_inquiry(
    property_id: int,
    inquiry: InquiryCreate,
    services: Annotated[Services, Depends(get_services)],
) -> Inquiry:
    try:
        return services.store.add_inquiry(property_id, inquiry)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get(
    "/properties/{property_id}/inquiries",
    response_model=List[Inquiry],
    tags=["inquiries"],
    summary="Inquiries received for a listing",
)
def list_inquiries(
    property_id: int,
    services: Annotated[Services, Depends(get_services)],
) -> List[Inquiry]:
    try:
        return services.store.list_inquiries(property_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post(
    "/chat",
    response_model=ChatReply,
    tags=["chat"],
    summary="Ask the property assistant",
    description=(
        "Recognise a location, price, property type or bedroom count in the "
        "message. If any is found, reply with search criteria and a listings "
        "URL to redirect to; otherwise reply with suggestions."
    ),
)
def chat(
    request: ChatRequest,
    services: Annotated[Services, Depends(get_services)],
) -> ChatReply:
    logger.info("Received chat message: %s", request.message[:100])
    return services.intents.reply(request.message, request.language)


@router.get(
    "/chat/welcome",
    response_model=ChatMessage,
    tags=["chat"],
    summary="Assistant greeting",
)
def chat_welcome(
    services: Annotated[Services, Depends(get_services)],
    language: Optional[str] = None,
) -> ChatMessage:
    return services.intents.welcome(language)


@router.get(
    "/chat/strings",
    response_model=ChatStrings,
    tags=["chat"],
    summary="Chat widget labels",
    description="Placeholder, button, typing indicator and suggestion texts for one language.",
)
def chat_strings(
    services: Annotated[Services, Depends(get_services)],
    language: Optional[str] = None,
) -> ChatStrings:
    return services.intents.strings(language)


@router.get(
    "/users/{user_id}/saved-properties",
    response_model=List[Property],
    tags=["saved"],
    summary="A user's saved listings",
)
def list_saved_properties(
    user_id: int,
    services: Annotated[Services, Depends(get_services)],
) -> List[Property]:
    return services.store.list_saved_properties(user_id)


@router.post(
    "/users/{user_id}/saved-properties/{property_id}",
    response_model=SavedProperty,
    status_code=status.HTTP_201_CREATED,
    tags=["saved"],
    summary="Save a listing",
)
def save_property(
    user_id: int,
    property_id: int,
    services: Annotated[Services, Depends(get_services)],
) -> SavedProperty:
    try:
        return services.store.save_property(user_id, property_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete(
    "/users/{user_id}/saved-properties/{property_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["saved"],
    summary="Remove a saved listing",
)
def unsave_property(
    user_id: int,
    property_id: int,
    services: Annotated[Services, Depends(get_services)],
) -> Response:
    try:
        services.store.unsave_property(user_id, property_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/users/{user_id}/saved-properties/{property_id}/status",
    response_model=SavedPropertyStatus,
    tags=["saved"],
    summary="Whether a listing is saved",
)
def saved_property_status(
    user_id: int,
    property_id: int,
    services: Annotated[Services, Depends(get_services)],
) -> SavedPropertyStatus:
    return SavedPropertyStatus(
        property_id=property_id,
        saved=services.store.is_property_saved(user_id, property_id),
    )


@router.post(
    "/users/{user_id}/saved-searches",
    response_model=SavedSearch,
    status_code=status.HTTP_201_CREATED,
    tags=["saved"],
    summary="Save a search",
    description="Store named search criteria together with the listings URL that re-runs them.",
)
def create_saved_search(
    user_id: int,
    search: SavedSearchCreate,
    services: Annotated[Services, Depends(get_services)],
) -> SavedSearch:
    try:
        return services.store.add_saved_search(user_id, search)
    except InvalidArgument as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e


@router.get(
    "/users/{user_id}/saved-searches",
    response_model=List[SavedSearch],
    tags=["saved"],
    summary="A user's saved searches",
)
def list_saved_searches(
    user_id: int,
    services: Annotated[Services, Depends(get_services)],
) -> List[SavedSearch]:
    return services.store.list_saved_searches(user_id)


@router.delete(
    "/users/{user_id}/saved-searches/{search_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["saved"],
    summary="Delete a saved search",
)
def delete_saved_search(
    user_id: int,
    search_id: int,
    services: Annotated[Services, Depends(get_services)],
) -> Response:
    try:
        services.store.delete_saved_search(user_id, search_id)
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
