"""
Tests for IP geolocation.
"""

from unittest.mock import patch, MagicMock

import requests

from storefront_checkout.services.geolocation import (
    IPGeolocator,
    client_ip_from_headers,
)


def _json_response(data):
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json.return_value = data
    return mock_response


class TestIPGeolocator:
    """Tests for IPGeolocator.lookup."""

    @patch("storefront_checkout.services.geolocation.requests.get")
    def test_successful_lookup(self, mock_get):
        mock_get.return_value = _json_response({
            "status": "success",
            "country": "Canada",
            "countryCode": "CA",
            "region": "ON",
            "regionName": "Ontario",
        })

        result = IPGeolocator(base_url="http://geo.test/json").lookup("203.0.113.7")

        assert result.success is True
        assert result.country_code == "CA"
        assert result.region == "ON"
        assert result.region_name == "Ontario"
        args, kwargs = mock_get.call_args
        assert args[0] == "http://geo.test/json/203.0.113.7"
        assert "timeout" in kwargs

    @patch("storefront_checkout.services.geolocation.requests.get")
    def test_fail_status(self, mock_get):
        mock_get.return_value = _json_response({"status": "fail", "message": "private range"})

        result = IPGeolocator().lookup("10.0.0.1")

        assert result.success is False
        assert "fail" in result.error_message

    @patch("storefront_checkout.services.geolocation.requests.get")
    def test_timeout(self, mock_get):
        mock_get.side_effect = requests.Timeout()

        result = IPGeolocator().lookup("203.0.113.7")

        assert result.success is False
        assert result.error_message == "Lookup timed out"

    @patch("storefront_checkout.services.geolocation.requests.get")
    def test_network_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("Network error")

        result = IPGeolocator().lookup("203.0.113.7")

        assert result.success is False
        assert "Network error" in result.error_message

    @patch("storefront_checkout.services.geolocation.requests.get")
    def test_malformed_json(self, mock_get):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.side_effect = ValueError("No JSON object could be decoded")
        mock_get.return_value = mock_response

        assert IPGeolocator().lookup("203.0.113.7").success is False

    @patch("storefront_checkout.services.geolocation.requests.get")
    def test_blank_ip_skips_request(self, mock_get):
        result = IPGeolocator().lookup("  ")

        assert result.success is False
        mock_get.assert_not_called()


class TestClientIpFromHeaders:
    """Tests for client IP extraction."""

    def test_first_forwarded_entry(self):
        headers = {"x-forwarded-for": "203.0.113.7, 10.0.0.2, 10.0.0.3"}
        assert client_ip_from_headers(headers) == "203.0.113.7"

    def test_real_ip_fallback(self):
        assert client_ip_from_headers({"x-real-ip": " 198.51.100.4 "}) == "198.51.100.4"

    def test_forwarded_takes_precedence(self):
        headers = {"x-forwarded-for": "203.0.113.7", "x-real-ip": "198.51.100.4"}
        assert client_ip_from_headers(headers) == "203.0.113.7"

    def test_no_headers(self):
        assert client_ip_from_headers({}) is None
