"""
Checkout Routes for Storefront Checkout
=======================================

Endpoints:
----------
- POST /checkout/quote: Subtotal, shipping options, tax and grand total

The cart page calls this once per change to the cart, destination or
selected shipping option. Tax uses the same location priority as
POST /tax/calculate; when no shipping address is given, the destination's
state and country stand in for it.

Errors:
-------
- 400: Empty cart, missing destination country, or unknown selected option
- 429: Too many requests (RATE_LIMIT_TAX per client IP, as for /tax/calculate)
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..config import get_rate_limit_tax
from ..db import get_db
from ..schemas.checkout import CheckoutQuote, CheckoutQuoteRequest
from ..services.checkout import build_checkout_quote
from ..services.geolocation import IPGeolocator, client_ip_from_headers
from ..services.settings_store import load_shipping_settings
from ..services.shipping_rates import ShippingRateEngine
from .dependencies import get_geolocator, get_shipping_engine
from .tax import limiter


logger = logging.getLogger(__name__)

checkout_router = APIRouter(prefix="/checkout", tags=["Checkout"])


@checkout_router.post("/quote", response_model=CheckoutQuote)
@limiter.limit(get_rate_limit_tax)
def quote_checkout(
    request: Request,
    payload: CheckoutQuoteRequest,
    db: Session = Depends(get_db),
    engine: ShippingRateEngine = Depends(get_shipping_engine),
    geolocator: IPGeolocator = Depends(get_geolocator),
) -> CheckoutQuote:
    """Price the cart: shipping options, selected shipping, tax and grand total."""
    settings = load_shipping_settings(db)
    return build_checkout_quote(
        payload.cart_items,
        payload.destination,
        settings,
        shipping_address=payload.shipping_address,
        detected_location=payload.user_location,
        client_ip=client_ip_from_headers(request.headers),
        selected_option_id=payload.selected_option_id,
        engine=engine,
        geolocator=geolocator,
    )
