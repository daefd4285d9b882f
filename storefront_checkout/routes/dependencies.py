"""
Shared FastAPI dependencies for checkout routes.

External lookups are injected through these functions so tests (and
alternative deployments) can swap them with ``app.dependency_overrides``.
"""

from fastapi import Request
from slowapi.util import get_remote_address

from ..services.distance import get_distance_calculator
from ..services.geolocation import IPGeolocator, client_ip_from_headers
from ..services.shipping_rates import ShippingRateEngine


def get_geolocator() -> IPGeolocator:
    return IPGeolocator()


def get_shipping_engine() -> ShippingRateEngine:
    return ShippingRateEngine(distance_calculator=get_distance_calculator())


def get_client_ip_or_remote(request: Request) -> str:
    """Rate limit key: forwarded client IP, falling back to the peer address."""
    return client_ip_from_headers(request.headers) or get_remote_address(request)
