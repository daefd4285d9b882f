"""
Routes Package for Storefront Checkout
======================================

This package contains all API route definitions organized by domain. Each
module defines a FastAPI APIRouter with related endpoints grouped together.

Architecture Overview:
----------------------
- shipping.py: Shipping settings and shipping option calculation
- tax.py: Tax calculation (rate limited)
- checkout.py: Combined checkout quote
- dependencies.py: Injectable lookups (IP geolocator, shipping engine)

Router Registration:
--------------------
All routers are registered in main.py under two prefixes:
1. /api/v1/* - Versioned API (recommended)
2. /* - Root paths for backward compatibility

Error Handling:
---------------
- 400: Invalid input (InvalidCheckoutInput, via the app exception handler)
- 422: Request body failed schema validation
- 429: Too many requests (rate limited)

Usage:
------
    from storefront_checkout.routes import shipping_router, tax_router

    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(shipping_router)
"""

from .shipping import shipping_router
from .tax import tax_router, limiter
from .checkout import checkout_router

__all__ = [
    "shipping_router",
    "tax_router",
    "checkout_router",
    "limiter",
]
