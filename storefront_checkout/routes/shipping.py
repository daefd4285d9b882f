"""
Shipping Routes for Storefront Checkout
=======================================

This module contains the shipping settings and shipping calculation endpoints.

Endpoints:
----------
- GET /shipping/settings: Current merchant shipping settings
- PUT /shipping/settings: Replace merchant shipping settings
- POST /shipping/calculate: Ranked shipping options for a cart

Settings Defaults:
------------------
Until the merchant saves settings, GET returns a default configuration with
a single "Domestic" zone (United States) offering Standard Shipping at 9.99.

Option Ranking:
---------------
Options come back free-first, then by ascending price. A destination outside
every zone only gets the global overlays (free shipping / local pickup) when
those are enabled, and an empty list otherwise. That is a normal 200 response.

Usage:
------
    POST /shipping/calculate
    {
        "cart_items": [{"id": "r1", "name": "Ring", "price": 120, "quantity": 1, "weight": 0.2}],
        "destination": {"country": "United States", "state": "NY"}
    }
    →
    {
        "success": true,
        "options": [
            {"id": "standard", "name": "Standard Shipping", "price": 9.99,
             "estimated_days": {"min": 3, "max": 7}, "description": null}
        ]
    }
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.shipping import (
    ShippingCalculateRequest,
    ShippingCalculateResponse,
    ShippingSettings,
)
from ..services.checkout import cart_subtotal
from ..services.settings_store import load_shipping_settings, save_shipping_settings
from ..services.shipping_rates import ShippingRateEngine
from .dependencies import get_shipping_engine


logger = logging.getLogger(__name__)

shipping_router = APIRouter(prefix="/shipping", tags=["Shipping"])


# =============================================================================
# Settings Endpoints
# =============================================================================

@shipping_router.get("/settings", response_model=ShippingSettings)
def get_shipping_settings(
    db: Session = Depends(get_db),
) -> ShippingSettings:
    """Get the merchant's shipping settings (defaults if never saved)."""
    return load_shipping_settings(db)


@shipping_router.put("/settings", response_model=ShippingSettings)
def update_shipping_settings(
    payload: ShippingSettings,
    db: Session = Depends(get_db),
) -> ShippingSettings:
    """Replace the merchant's shipping settings."""
    return save_shipping_settings(db, payload)


# =============================================================================
# Calculation Endpoints
# =============================================================================

@shipping_router.post("/calculate", response_model=ShippingCalculateResponse)
def calculate_shipping_options(
    payload: ShippingCalculateRequest,
    db: Session = Depends(get_db),
    engine: ShippingRateEngine = Depends(get_shipping_engine),
) -> ShippingCalculateResponse:
    """
    Rank the shipping options available for a cart and destination.

    ``cart_total`` defaults to the cart's merchandise subtotal.
    """
    settings = load_shipping_settings(db)
    cart_total = payload.cart_total
    if cart_total is None:
        cart_total = cart_subtotal(payload.cart_items)

    options = engine.calculate(payload.cart_items, payload.destination, settings, cart_total)
    logger.info("Calculated %d shipping option(s)", len(options))
    return ShippingCalculateResponse(options=options)
