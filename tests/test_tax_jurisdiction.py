"""
Tests for tax jurisdiction resolution.
"""

from storefront_checkout.schemas.tax import DetectedLocationIn, ShippingAddressIn
from storefront_checkout.services.geolocation import GeoLookupResult
from storefront_checkout.services.tax_jurisdiction import resolve_jurisdiction


def _codes(resolution):
    return resolution.jurisdiction.code, resolution.provenance


class TestShippingAddress:
    """Shipping address is the highest-priority signal."""

    def test_state_name(self):
        resolution = resolve_jurisdiction(
            shipping_address=ShippingAddressIn(state="California", country="United States")
        )
        assert _codes(resolution) == ("CA", "Shipping Address: California")

    def test_state_code_and_country_alias(self):
        resolution = resolve_jurisdiction(shipping_address={"state": "ny", "country": "USA"})
        assert _codes(resolution) == ("NY", "Shipping Address: New York")

    def test_province_name(self):
        resolution = resolve_jurisdiction(
            shipping_address={"state": "Quebec", "country": "Canada"}
        )
        assert _codes(resolution) == ("QC", "Shipping Address: Quebec")

    def test_unknown_state_uses_us_default(self):
        resolution = resolve_jurisdiction(
            shipping_address={"state": "Narnia", "country": "United States"}
        )
        assert _codes(resolution) == ("DEFAULT_US", "Shipping Address: United States (Default)")

    def test_unknown_province_uses_canada_default(self):
        resolution = resolve_jurisdiction(shipping_address={"state": "ZZ", "country": "CA"})
        assert resolution.jurisdiction.code == "DEFAULT_CA"

    def test_province_code_not_found_in_us_table(self):
        """A Canadian code under a US address does not pick up the province."""
        resolution = resolve_jurisdiction(
            shipping_address={"state": "ON", "country": "United States"}
        )
        assert resolution.jurisdiction.code == "DEFAULT_US"

    def test_other_country_is_tax_free(self):
        resolution = resolve_jurisdiction(
            shipping_address={"state": "Bavaria", "country": "Germany"}
        )
        assert resolution.jurisdiction.is_tax_free
        assert resolution.provenance == "Shipping Address: International"

    def test_missing_state_skips_tier(self):
        resolution = resolve_jurisdiction(
            shipping_address={"country": "United States"},
            detected_location={"country": "Canada", "region": "ON"},
        )
        assert _codes(resolution) == ("ON", "Detected Location: Ontario")

    def test_wins_over_detected_location(self):
        resolution = resolve_jurisdiction(
            shipping_address={"state": "TX", "country": "US"},
            detected_location={"country": "Canada", "region": "ON"},
        )
        assert resolution.jurisdiction.code == "TX"


class TestDetectedLocation:
    """Detected location is used when no full shipping address is given."""

    def test_region_code(self):
        resolution = resolve_jurisdiction(
            detected_location=DetectedLocationIn(country="US", region="wa")
        )
        assert _codes(resolution) == ("WA", "Detected Location: Washington")

    def test_region_name_is_not_mapped(self):
        resolution = resolve_jurisdiction(
            detected_location={"country": "United States", "region": "Washington"}
        )
        assert resolution.jurisdiction.code == "DEFAULT_US"

    def test_no_region(self):
        resolution = resolve_jurisdiction(detected_location={"country": "Canada"})
        assert resolution.jurisdiction.code == "DEFAULT_CA"

    def test_other_country(self):
        resolution = resolve_jurisdiction(detected_location={"country": "FR", "region": "IDF"})
        assert _codes(resolution) == ("DEFAULT_INTERNATIONAL", "Detected Location: International")
        assert resolution.jurisdiction.location == "International (Tax Free)"

    def test_skips_ip_lookup(self, geolocator):
        resolve_jurisdiction(
            detected_location={"country": "US", "region": "CA"},
            client_ip="203.0.113.7",
            geolocator=geolocator,
        )
        assert geolocator.calls == []


class TestIPLocation:
    """IP geolocation is the last resort."""

    def test_successful_lookup(self, geolocator):
        geolocator.result = GeoLookupResult(
            success=True, country_code="US", country="United States", region="OR",
        )
        resolution = resolve_jurisdiction(client_ip="203.0.113.7", geolocator=geolocator)

        assert _codes(resolution) == ("OR", "IP Location: Oregon")
        assert geolocator.calls == ["203.0.113.7"]

    def test_lookup_outside_north_america(self, geolocator):
        geolocator.result = GeoLookupResult(success=True, country_code="DE", region="BY")
        resolution = resolve_jurisdiction(client_ip="203.0.113.7", geolocator=geolocator)

        assert _codes(resolution) == ("DEFAULT_INTERNATIONAL", "IP Location: International")

    def test_failed_lookup(self, geolocator):
        geolocator.result = GeoLookupResult.failure("Lookup timed out")
        resolution = resolve_jurisdiction(client_ip="203.0.113.7", geolocator=geolocator)

        assert _codes(resolution) == ("DEFAULT_INTERNATIONAL", "Location Detection Failed")

    def test_no_signals_at_all(self):
        resolution = resolve_jurisdiction()
        assert _codes(resolution) == ("DEFAULT_INTERNATIONAL", "Unknown")

    def test_blank_fields_count_as_missing(self, geolocator):
        resolution = resolve_jurisdiction(
            shipping_address={"state": "  ", "country": "United States"},
            detected_location={"country": ""},
            geolocator=geolocator,
        )
        assert resolution.provenance == "Unknown"
        assert geolocator.calls == []
