"""
Tax jurisdiction resolution.

Picks the tax jurisdiction for an order from the best location signal
available, in priority order:

1. Shipping address (state + country both present). State/province names
   are mapped to codes; 2-character values are taken as codes.
2. Detected location (country present). The region is used directly as a
   code, with no name mapping.
3. Client IP, geolocated via IPGeolocator. A failed lookup resolves to the
   international (tax-free) default with provenance "Location Detection Failed".
4. Nothing usable: international default, provenance "Unknown".

For the US and Canada an unrecognized or missing state/province resolves to
DEFAULT_US / DEFAULT_CA. Codes are only looked up among the country's own
jurisdictions. Every other country resolves to DEFAULT_INTERNATIONAL.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .geolocation import IPGeolocator
from .tax_rates import (
    CA_JURISDICTIONS,
    DEFAULT_CA,
    DEFAULT_INTERNATIONAL,
    DEFAULT_US,
    TAX_JURISDICTIONS,
    US_JURISDICTIONS,
    TaxJurisdiction,
    get_province_code,
    get_state_code,
)

logger = logging.getLogger(__name__)

US_COUNTRY_NAMES = {"UNITED STATES", "US", "USA"}
CA_COUNTRY_NAMES = {"CANADA", "CA"}

PROVENANCE_SHIPPING_ADDRESS = "Shipping Address"
PROVENANCE_DETECTED = "Detected Location"
PROVENANCE_IP = "IP Location"
PROVENANCE_LOOKUP_FAILED = "Location Detection Failed"
PROVENANCE_UNKNOWN = "Unknown"


@dataclass(frozen=True)
class JurisdictionResolution:
    jurisdiction: TaxJurisdiction
    provenance: str


def _provenance(source: str, jurisdiction: TaxJurisdiction) -> str:
    # "Shipping Address: California", "IP Location: International"
    if jurisdiction.code == DEFAULT_INTERNATIONAL:
        return f"{source}: International"
    return f"{source}: {jurisdiction.location}"


def _field(source: Any, name: str) -> Optional[str]:
    """Read a field from a pydantic model or a plain dict."""
    if source is None:
        return None
    if isinstance(source, dict):
        value = source.get(name)
    else:
        value = getattr(source, name, None)
    if isinstance(value, str):
        value = value.strip()
    return value or None


def _jurisdiction_for(
    country: str,
    region: Optional[str],
    map_names: bool = False,
) -> TaxJurisdiction:
    """
    Resolve a country + region pair.

    Args:
        country: Country name or code (case-insensitive)
        region: State/province name or code, may be None
        map_names: Map state/province names to codes; when False, the
            upper-cased region is used as the code directly
    """
    country = country.upper()

    if country in US_COUNTRY_NAMES:
        table, fallback, mapper = US_JURISDICTIONS, DEFAULT_US, get_state_code
    elif country in CA_COUNTRY_NAMES:
        table, fallback, mapper = CA_JURISDICTIONS, DEFAULT_CA, get_province_code
    else:
        return TAX_JURISDICTIONS[DEFAULT_INTERNATIONAL]

    code = None
    if region:
        code = mapper(region) if map_names else region.upper()

    if code and code in table:
        return table[code]
    return TAX_JURISDICTIONS[fallback]


def resolve_jurisdiction(
    shipping_address: Any = None,
    detected_location: Any = None,
    client_ip: Optional[str] = None,
    geolocator: Optional[IPGeolocator] = None,
) -> JurisdictionResolution:
    """
    Determine which tax jurisdiction applies and how it was determined.

    Args:
        shipping_address: Object or dict with ``state`` and ``country``
        detected_location: Object or dict with ``country`` and ``region``
        client_ip: Best-known client IP, used only when neither of the above
            carries usable data
        geolocator: IP lookup client (defaults to IPGeolocator())

    Returns:
        JurisdictionResolution with the jurisdiction and a provenance string
        such as "Shipping Address: California". Never raises for lookup
        failures.
    """
    state = _field(shipping_address, "state")
    country = _field(shipping_address, "country")
    if state and country:
        jurisdiction = _jurisdiction_for(country, state, map_names=True)
        return JurisdictionResolution(
            jurisdiction, _provenance(PROVENANCE_SHIPPING_ADDRESS, jurisdiction)
        )

    detected_country = _field(detected_location, "country")
    if detected_country:
        jurisdiction = _jurisdiction_for(detected_country, _field(detected_location, "region"))
        return JurisdictionResolution(
            jurisdiction, _provenance(PROVENANCE_DETECTED, jurisdiction)
        )

    if client_ip:
        geolocator = geolocator or IPGeolocator()
        geo = geolocator.lookup(client_ip)
        if geo.success and geo.country_code:
            jurisdiction = _jurisdiction_for(geo.country_code, geo.region)
            return JurisdictionResolution(
                jurisdiction, _provenance(PROVENANCE_IP, jurisdiction)
            )
        logger.info("Falling back to international tax: IP location unavailable")
        return JurisdictionResolution(
            TAX_JURISDICTIONS[DEFAULT_INTERNATIONAL], PROVENANCE_LOOKUP_FAILED
        )

    return JurisdictionResolution(TAX_JURISDICTIONS[DEFAULT_INTERNATIONAL], PROVENANCE_UNKNOWN)
