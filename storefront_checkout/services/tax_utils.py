"""
Tax calculation utilities.

This module applies a jurisdiction's tax components to a subtotal. Each
component is rounded to cents on its own, since components are displayed
separately, and the total is the rounded sum of those rounded amounts.
"""

import logging
import math
from typing import Any, Optional

from ..exceptions import InvalidCheckoutInput
from ..schemas.tax import TaxLineItem, TaxResult
from .geolocation import IPGeolocator
from .tax_jurisdiction import resolve_jurisdiction
from .tax_rates import TaxJurisdiction

logger = logging.getLogger(__name__)


def round_money(amount: float) -> float:
    """Round to 2 decimal places for currency, halves rounding up."""
    return math.floor(amount * 100 + 0.5) / 100


def validate_subtotal(subtotal: Optional[float]) -> float:
    """Return the subtotal as a float, rejecting missing or non-positive values."""
    if subtotal is None or isinstance(subtotal, bool):
        raise InvalidCheckoutInput("Invalid subtotal")
    try:
        value = float(subtotal)
    except (TypeError, ValueError):
        raise InvalidCheckoutInput("Invalid subtotal") from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidCheckoutInput("Invalid subtotal")
    return value


def compute_tax(
    subtotal: float,
    jurisdiction: TaxJurisdiction,
    detected_location: Optional[str] = None,
) -> TaxResult:
    """
    Itemize tax on a subtotal for one jurisdiction.

    Args:
        subtotal: Order subtotal before tax; must be positive
        jurisdiction: Jurisdiction whose components apply
        detected_location: Provenance string describing how the jurisdiction
            was chosen. Defaults to the jurisdiction's display name.

    Returns:
        TaxResult with one line per component. Tax-free jurisdictions yield
        no lines, zero tax and total == subtotal.

    Raises:
        InvalidCheckoutInput: subtotal is missing or not positive
    """
    subtotal = validate_subtotal(subtotal)

    lines = [
        TaxLineItem(
            name=component.name,
            type=component.type,
            rate=component.rate,
            amount=round_money(subtotal * component.rate),
        )
        for component in jurisdiction.taxes
    ]

    total_tax_amount = round_money(sum(line.amount for line in lines))
    total_tax_rate = sum(line.rate for line in lines)

    logger.debug(
        "Tax for %s: %d component(s), %.2f on %.2f",
        jurisdiction.code, len(lines), total_tax_amount, subtotal,
    )

    return TaxResult(
        taxes=lines,
        total_tax_rate=total_tax_rate,
        total_tax_amount=total_tax_amount,
        tax_location=jurisdiction.location,
        detected_location=detected_location or jurisdiction.location,
        subtotal=subtotal,
        total=subtotal + total_tax_amount,
    )


def calculate_tax(
    subtotal: Optional[float],
    shipping_address: Any = None,
    detected_location: Any = None,
    client_ip: Optional[str] = None,
    geolocator: Optional[IPGeolocator] = None,
) -> TaxResult:
    """
    Resolve the buyer's jurisdiction and itemize tax on a subtotal.

    The subtotal is validated before any location lookup, so an invalid
    request never triggers an IP geolocation call.

    Raises:
        InvalidCheckoutInput: subtotal is missing or not positive
    """
    subtotal = validate_subtotal(subtotal)
    resolution = resolve_jurisdiction(
        shipping_address=shipping_address,
        detected_location=detected_location,
        client_ip=client_ip,
        geolocator=geolocator,
    )
    return compute_tax(subtotal, resolution.jurisdiction, resolution.provenance)
