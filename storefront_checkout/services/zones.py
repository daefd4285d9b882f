"""
Shipping zone resolution.

Maps a destination country to the merchant-defined zone whose methods apply.
Zone country lists hold free-text names entered by the merchant
(e.g. "United States"), not ISO codes, and matching is exact.
"""

import logging
from typing import Iterable, List, Optional

from ..schemas.shipping import ShippingZone

logger = logging.getLogger(__name__)


def resolve_zone(country: str, zones: Iterable[ShippingZone]) -> Optional[ShippingZone]:
    """
    Return the first zone (in configured order) that lists ``country``.

    Matching is case-sensitive exact membership; callers wanting looser
    matching must normalize before calling. If a country appears in more
    than one zone, the first one wins.

    Returns:
        The matching ShippingZone, or None when no zone lists the country
    """
    for zone in zones:
        if country in zone.countries:
            logger.debug("Destination %r resolved to zone %s", country, zone.id)
            return zone
    logger.debug("No shipping zone configured for %r", country)
    return None


def normalize_country_list(countries: Iterable[str]) -> List[str]:
    """
    Clean a merchant-entered country list before it is saved.

    Strips surrounding whitespace and drops blank and repeated entries while
    keeping the original order and spelling. Case is preserved because zone
    matching is case-sensitive.
    """
    seen = set()
    cleaned = []
    for country in countries:
        name = (country or "").strip()
        if not name or name in seen:
            continue
        seen.add(name)
        cleaned.append(name)
    return cleaned
