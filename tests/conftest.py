import os

# Keep the module-level engine off disk; tests use their own engine below
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import storefront_checkout.db as db
from storefront_checkout.main import app
from storefront_checkout.models import Base
from storefront_checkout.routes import limiter
from storefront_checkout.routes.dependencies import get_geolocator
from storefront_checkout.schemas.shipping import (
    CartItem,
    DistanceBasedMethod,
    EstimatedDays,
    FixedMethod,
    FreeMethod,
    GlobalShippingSettings,
    OriginAddress,
    RateBand,
    ShippingSettings,
    ShippingZone,
    WeightBasedMethod,
)
from storefront_checkout.services.geolocation import GeoLookupResult


class FakeGeolocator:
    """Stands in for IPGeolocator; records which IPs were looked up."""

    def __init__(self, result: GeoLookupResult = None):
        self.result = result or GeoLookupResult.failure("not configured")
        self.calls = []

    def lookup(self, ip):
        self.calls.append(ip)
        return self.result


@pytest.fixture
def geolocator():
    return FakeGeolocator()


@pytest.fixture
def db_session_factory():
    """In-memory SQLite sessionmaker shared across connections via StaticPool."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield TestingSessionLocal
    engine.dispose()


@pytest.fixture
def db_session(db_session_factory):
    session = db_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session_factory, geolocator):
    """Shared FastAPI TestClient using an in-memory SQLite DB and a fake IP lookup."""

    def override_get_db():
        db_sess = db_session_factory()
        try:
            yield db_sess
        finally:
            db_sess.close()

    app.dependency_overrides[db.get_db] = override_get_db
    app.dependency_overrides[get_geolocator] = lambda: geolocator

    original_enabled = limiter.enabled
    limiter.enabled = False

    with TestClient(app) as test_client:
        yield test_client

    limiter.enabled = original_enabled
    app.dependency_overrides.clear()


@pytest.fixture
def shipping_settings():
    """Two zones with one method of each priced type plus a disabled method."""
    return ShippingSettings(
        default_currency="USD",
        weight_unit="kg",
        origin_address=OriginAddress(country="United States", state="NY", city="New York"),
        zones=[
            ShippingZone(
                id="domestic",
                name="Domestic",
                countries=["United States"],
                methods=[
                    FixedMethod(
                        id="standard",
                        name="Standard Shipping",
                        price=9.99,
                        estimated_days=EstimatedDays(min=3, max=7),
                    ),
                    FixedMethod(
                        id="express",
                        name="Express Shipping",
                        price=24.5,
                        estimated_days=EstimatedDays(min=1, max=2),
                    ),
                    FreeMethod(id="free_over_200", name="Free Shipping", free_threshold=200),
                    FixedMethod(id="overnight", name="Overnight", price=49.0, enabled=False),
                ],
            ),
            ShippingZone(
                id="international",
                name="International",
                countries=["Canada", "United Kingdom"],
                methods=[
                    WeightBasedMethod(
                        id="intl_weight",
                        name="International Tracked",
                        weight_rates=[
                            RateBand(min=0, max=5, rate=10),
                            RateBand(min=5, max=-1, rate=20),
                        ],
                    ),
                    DistanceBasedMethod(
                        id="intl_distance",
                        name="International Courier",
                        distance_rates=[
                            RateBand(min=0, max=1000, rate=15),
                            RateBand(min=1000, max=-1, rate=35),
                        ],
                    ),
                ],
            ),
        ],
        global_settings=GlobalShippingSettings(),
    )


@pytest.fixture
def cart_items():
    return [
        CartItem(id="ring-1", name="Gold Ring", price=120.0, quantity=1, weight=0.2),
        CartItem(id="chain-1", name="Silver Chain", price=40.0, quantity=2),
    ]
