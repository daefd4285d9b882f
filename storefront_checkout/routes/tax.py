"""
Tax Routes for Storefront Checkout
==================================

Endpoints:
----------
- POST /tax/calculate: Itemized tax for a subtotal

Location Resolution:
--------------------
The shipping address wins, then the detected user location, then the
client IP from the X-Forwarded-For / X-Real-IP headers. The IP lookup is
best-effort: if it fails or times out the order is treated as international
(no tax) and ``detected_location`` reads "Location Detection Failed".

Errors:
-------
- 400: Missing or non-positive subtotal ("Invalid subtotal")
- 429: Too many requests (rate limited per client IP)
"""

import logging

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter

from ..config import RATE_LIMIT_ENABLED, get_rate_limit_tax
from ..schemas.tax import TaxCalculateRequest, TaxCalculateResponse
from ..services.geolocation import IPGeolocator, client_ip_from_headers
from ..services.tax_utils import calculate_tax
from .dependencies import get_client_ip_or_remote, get_geolocator


logger = logging.getLogger(__name__)

tax_router = APIRouter(prefix="/tax", tags=["Tax"])

limiter = Limiter(key_func=get_client_ip_or_remote, enabled=RATE_LIMIT_ENABLED)


@tax_router.post("/calculate", response_model=TaxCalculateResponse)
@limiter.limit(get_rate_limit_tax)
def calculate_order_tax(
    request: Request,
    payload: TaxCalculateRequest,
    geolocator: IPGeolocator = Depends(get_geolocator),
) -> TaxCalculateResponse:
    """
    Resolve the buyer's tax jurisdiction and itemize tax on the subtotal.

    InvalidCheckoutInput raised for a bad subtotal is turned into a 400 by
    the application's exception handler.
    """
    result = calculate_tax(
        payload.subtotal,
        shipping_address=payload.shipping_address,
        detected_location=payload.user_location,
        client_ip=client_ip_from_headers(request.headers),
        geolocator=geolocator,
    )
    logger.info("Tax calculated: %s", result.detected_location)
    return TaxCalculateResponse(**result.model_dump())
