from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.api.routes import Services, get_services
from app.config import Settings
from app.main import app
from app.models.property import Property
from app.services.intent_service import IntentService
from app.services.listing_store import ListingStore

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_property(id, **overrides):
    created = BASE_TIME + timedelta(days=id)
    data = {
        "id": id,
        "title": f"Listing {id}",
        "description": "A listing used in tests.",
        "price": 1000 * id,
        "property_type": "apartment",
        "listing_type": "rent",
        "bedrooms": 2,
        "bathrooms": 1,
        "sqft": 900,
        "address": f"{id} Main Boulevard",
        "city": "Lahore",
        "state": "Punjab",
        "zip_code": "54000",
        "agent_id": 1,
        "status": "active",
        "created_at": created,
        "updated_at": created,
    }
    data.update(overrides)
    return Property.model_validate(data)


@pytest.fixture
def corpus():
    return [
        make_property(1, price=45000, bedrooms=1, sqft=550),
        make_property(2, price=85000, city="Karachi", state="Sindh",
                      address="Phase 6, DHA", is_featured=True),
        make_property(3, price=150000, property_type="house", bedrooms=4,
                      bathrooms=3.5, sqft=3000, address="Block K, Model Town"),
        make_property(4, price=38000000, property_type="townhouse",
                      listing_type="sale", bedrooms=3, bathrooms=3, sqft=2200,
                      city="Islamabad", state="Islamabad Capital Territory",
                      agent_id=2, is_featured=True),
        make_property(5, price=60000, city="Multan", address="Cantt", agent_id=2),
        make_property(6, price=42000000, property_type="condo", listing_type="sale",
                      bedrooms=3, city="Karachi", state="Sindh", status="sold"),
        make_property(7, price=70000, status="pending", is_featured=True),
        make_property(8, price=12500000, property_type="land", listing_type="sale",
                      bedrooms=0, bathrooms=0, sqft=2722, city="Rawalpindi"),
    ]


@pytest.fixture
def settings():
    return Settings(default_page_size=3, max_page_size=5, featured_limit=6)


@pytest.fixture
def store(corpus):
    return ListingStore(corpus)


@pytest.fixture
def client(store, settings):
    app.dependency_overrides[get_services] = lambda: Services(
        store=store,
        intents=IntentService(settings),
        settings=settings,
    )
    yield TestClient(app)
    app.dependency_overrides.clear()
