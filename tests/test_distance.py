"""
Tests for distance calculators.
"""

from unittest.mock import patch, MagicMock

import pytest
import requests

from storefront_checkout.exceptions import ShippingProviderError
from storefront_checkout.schemas.shipping import OriginAddress, ShippingDestination
from storefront_checkout.services.distance import (
    NominatimDistanceCalculator,
    PlaceholderDistanceCalculator,
    get_distance_calculator,
    haversine_km,
)


ORIGIN = OriginAddress(country="United States", state="NY", city="New York")


class TestPlaceholderDistance:
    """Tests for the country-comparison placeholder."""

    def test_same_country(self):
        dest = ShippingDestination(country="United States", state="CA")
        assert PlaceholderDistanceCalculator().calculate_distance(ORIGIN, dest) == 500

    def test_other_country(self):
        dest = ShippingDestination(country="Canada")
        assert PlaceholderDistanceCalculator().calculate_distance(ORIGIN, dest) == 2000


class TestHaversine:
    """Tests for great-circle distance."""

    def test_same_point(self):
        assert haversine_km(40.7, -74.0, 40.7, -74.0) == 0

    def test_new_york_to_los_angeles(self):
        distance = haversine_km(40.7128, -74.0060, 34.0522, -118.2437)
        assert distance == pytest.approx(3936, abs=10)


def _geocode_response(lat, lon):
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json.return_value = [{"lat": str(lat), "lon": str(lon)}]
    return mock_response


class TestNominatimDistance:
    """Tests for geocoded distances."""

    @patch("storefront_checkout.services.distance.requests.get")
    def test_distance_between_geocoded_places(self, mock_get):
        mock_get.side_effect = [
            _geocode_response(40.7128, -74.0060),
            _geocode_response(34.0522, -118.2437),
        ]
        dest = ShippingDestination(country="United States", state="CA", city="Los Angeles")

        distance = NominatimDistanceCalculator().calculate_distance(ORIGIN, dest)

        assert distance == pytest.approx(3936, abs=10)
        first_query = mock_get.call_args_list[0].kwargs["params"]["q"]
        second_query = mock_get.call_args_list[1].kwargs["params"]["q"]
        assert first_query == "New York, NY, United States"
        assert second_query == "Los Angeles, CA, United States"

    @patch("storefront_checkout.services.distance.requests.get")
    def test_sends_user_agent_and_timeout(self, mock_get):
        mock_get.return_value = _geocode_response(1, 2)
        calculator = NominatimDistanceCalculator(user_agent="shop-test/1.0", timeout=2)

        calculator.geocode("Toronto, Canada")

        kwargs = mock_get.call_args.kwargs
        assert kwargs["headers"]["User-Agent"] == "shop-test/1.0"
        assert kwargs["timeout"] == 2

    @patch("storefront_checkout.services.distance.requests.get")
    def test_no_match_raises_provider_error(self, mock_get):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = []
        mock_get.return_value = mock_response

        with pytest.raises(ShippingProviderError):
            NominatimDistanceCalculator().calculate_distance(
                ORIGIN, ShippingDestination(country="Atlantis")
            )

    @patch("storefront_checkout.services.distance.requests.get")
    def test_network_error_raises_provider_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("Network error")

        with pytest.raises(ShippingProviderError):
            NominatimDistanceCalculator().geocode("Paris, France")

    @patch("storefront_checkout.services.distance.requests.get")
    def test_unusable_result_returns_none(self, mock_get):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.return_value = [{"display_name": "Somewhere"}]
        mock_get.return_value = mock_response

        assert NominatimDistanceCalculator().geocode("Somewhere") is None

    def test_blank_place_skips_lookup(self):
        with patch("storefront_checkout.services.distance.requests.get") as mock_get:
            assert NominatimDistanceCalculator().geocode("") is None
            mock_get.assert_not_called()


class TestGetDistanceCalculator:
    """Tests for provider selection."""

    def test_nominatim(self):
        assert isinstance(get_distance_calculator("nominatim"), NominatimDistanceCalculator)

    def test_placeholder(self):
        assert isinstance(get_distance_calculator("placeholder"), PlaceholderDistanceCalculator)

    def test_unknown_falls_back_to_placeholder(self):
        assert isinstance(get_distance_calculator("teleport"), PlaceholderDistanceCalculator)
