"""
IP geolocation lookup using ip-api.com (or a compatible service).

This is the last-resort location signal for tax resolution, used only when
the buyer supplied neither a shipping address nor a detected location.

The service is treated as an untrusted, best-effort oracle:
1. Every request has a short timeout (GEOLOCATION_TIMEOUT_SECONDS)
2. Any failure (network error, timeout, HTTP error, non-"success" status,
   malformed JSON) is returned as an unsuccessful GeoLookupResult
3. Nothing is retried; the caller decides what default to fall back to

Response shape: {status, country, countryCode, region, regionName}
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import requests

from ..config import GEOLOCATION_TIMEOUT_SECONDS, IP_GEOLOCATION_URL

logger = logging.getLogger(__name__)

LOOKUP_FIELDS = "status,country,countryCode,region,regionName"


@dataclass
class GeoLookupResult:
    """Result of an IP geolocation attempt."""
    success: bool
    country_code: Optional[str] = None
    country: Optional[str] = None
    region: Optional[str] = None
    region_name: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "GeoLookupResult":
        return cls(success=False, error_message=message)


class IPGeolocator:
    """Look up the country and region of a client IP address."""

    def __init__(
        self,
        base_url: str = IP_GEOLOCATION_URL,
        timeout: float = GEOLOCATION_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def lookup(self, ip: str) -> GeoLookupResult:
        """
        Geolocate an IP address.

        Args:
            ip: Client IP address (e.g., "203.0.113.7")

        Returns:
            GeoLookupResult; ``success`` is False on any kind of failure
        """
        if not ip or not ip.strip():
            return GeoLookupResult.failure("No client IP address")

        ip = ip.strip()
        logger.debug("Looking up location for IP %s", ip)

        try:
            response = requests.get(
                f"{self.base_url}/{ip}",
                params={"fields": LOOKUP_FIELDS},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.Timeout:
            logger.warning("IP geolocation timed out after %ss", self.timeout)
            return GeoLookupResult.failure("Lookup timed out")
        except (requests.RequestException, ValueError) as e:
            logger.warning("IP geolocation failed: %s", e)
            return GeoLookupResult.failure(str(e))

        if not isinstance(data, dict) or data.get("status") != "success":
            status = data.get("status") if isinstance(data, dict) else None
            logger.warning("IP geolocation returned status %r", status)
            return GeoLookupResult.failure(f"Lookup status: {status}")

        return GeoLookupResult(
            success=True,
            country_code=data.get("countryCode"),
            country=data.get("country"),
            region=data.get("region"),
            region_name=data.get("regionName"),
        )


def client_ip_from_headers(headers: Mapping[str, str]) -> Optional[str]:
    """
    Best-known client IP from proxy headers.

    Uses the first (client-most) entry of X-Forwarded-For, then X-Real-IP.
    Returns None when neither header carries an address.
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return None
