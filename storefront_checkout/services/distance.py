"""
Distance estimation for distance-based shipping.

Two calculators implement ``calculate_distance(origin, destination) -> km``:

1. PlaceholderDistanceCalculator (default): 500 km when origin and
   destination share a country, 2000 km otherwise. No I/O.
2. NominatimDistanceCalculator: geocodes "city, state, country" for both
   ends with Nominatim (OpenStreetMap) and returns the great-circle
   distance. Select it with DISTANCE_PROVIDER=nominatim.

Rate limits: Nominatim allows 1 request/second; each calculation makes two.
Attribution: Results from OpenStreetMap must be attributed
"""

import logging
import math
from typing import Optional, Protocol, Tuple

import requests

from ..config import (
    DISTANCE_PROVIDER,
    DOMESTIC_DISTANCE_KM,
    INTERNATIONAL_DISTANCE_KM,
    NOMINATIM_TIMEOUT_SECONDS,
    NOMINATIM_URL,
    NOMINATIM_USER_AGENT,
)
from ..exceptions import ShippingProviderError
from ..schemas.shipping import OriginAddress, ShippingDestination

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


class DistanceCalculator(Protocol):
    def calculate_distance(
        self,
        origin: OriginAddress,
        destination: ShippingDestination,
    ) -> float:
        ...


class PlaceholderDistanceCalculator:
    """Two-value country comparison until a geocoder is configured."""

    def calculate_distance(
        self,
        origin: OriginAddress,
        destination: ShippingDestination,
    ) -> float:
        if origin.country == destination.country:
            return DOMESTIC_DISTANCE_KM
        return INTERNATIONAL_DISTANCE_KM


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two lat/lon points."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def _format_place(city: Optional[str], state: Optional[str], country: Optional[str]) -> str:
    return ", ".join(part for part in (city, state, country) if part)


class NominatimDistanceCalculator:
    """
    Geocode both ends with Nominatim and measure the great-circle distance.

    Raises ShippingProviderError when either end cannot be geocoded; the
    shipping engine then leaves the distance-based method out.
    """

    def __init__(
        self,
        url: str = NOMINATIM_URL,
        user_agent: str = NOMINATIM_USER_AGENT,
        timeout: float = NOMINATIM_TIMEOUT_SECONDS,
    ) -> None:
        self.url = url
        self.user_agent = user_agent
        self.timeout = timeout

    def calculate_distance(
        self,
        origin: OriginAddress,
        destination: ShippingDestination,
    ) -> float:
        origin_coords = self.geocode(_format_place(origin.city, origin.state, origin.country))
        dest_coords = self.geocode(
            _format_place(destination.city, destination.state, destination.country)
        )
        if origin_coords is None or dest_coords is None:
            raise ShippingProviderError("Could not geocode shipping origin or destination")

        distance = haversine_km(*origin_coords, *dest_coords)
        logger.debug("Geocoded distance %.1f km", distance)
        return distance

    def geocode(self, place: str) -> Optional[Tuple[float, float]]:
        """
        Look up a place name and return (lat, lon) of the best match.

        Returns None for a blank place or when Nominatim has no match.
        Network and HTTP errors are raised as ShippingProviderError.
        """
        if not place:
            return None

        params = {
            "q": place,
            "format": "json",
            "limit": 1,
        }
        headers = {"User-Agent": self.user_agent}

        logger.debug("Querying Nominatim: %s", place)

        try:
            response = requests.get(
                self.url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            results = response.json()
        except (requests.RequestException, ValueError) as e:
            raise ShippingProviderError(f"Geocoding failed for {place!r}: {e}") from e

        if not results:
            return None

        try:
            return float(results[0]["lat"]), float(results[0]["lon"])
        except (KeyError, TypeError, ValueError):
            logger.warning("Nominatim returned an unusable result for %r", place)
            return None


def get_distance_calculator(provider: str = None) -> DistanceCalculator:
    """Build the distance calculator selected by DISTANCE_PROVIDER."""
    if provider is None:
        provider = DISTANCE_PROVIDER

    if provider == "nominatim":
        return NominatimDistanceCalculator()
    if provider != "placeholder":
        logger.warning("Unknown DISTANCE_PROVIDER %r, using placeholder distances", provider)
    return PlaceholderDistanceCalculator()
