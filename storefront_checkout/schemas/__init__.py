"""
Schemas Package for Storefront Checkout
=======================================

This package contains all Pydantic models (schemas) used for API request
validation, response serialization, and as the typed inputs/outputs of the
shipping and tax calculators.

Schema Organization:
--------------------
- **shipping.py**: Shipping settings, zones, methods, cart and destination
- **tax.py**: Tax request/response and the itemized TaxResult
- **checkout.py**: Combined checkout quote

Naming Conventions:
-------------------
- *Request: Request bodies (e.g., TaxCalculateRequest)
- *Response: Response envelopes (e.g., ShippingCalculateResponse)
- *In: Nested input objects (e.g., ShippingAddressIn)

Usage:
------
    from storefront_checkout.schemas import ShippingSettings, CartItem
    from storefront_checkout.schemas.tax import TaxResult
"""

from .shipping import (
    RateBand,
    EstimatedDays,
    FreeMethod,
    FixedMethod,
    WeightBasedMethod,
    DistanceBasedMethod,
    CalculatedMethod,
    ShippingMethod,
    ShippingZone,
    OriginAddress,
    GlobalShippingSettings,
    ShippingSettings,
    CartItem,
    ShippingDestination,
    CalculatedShippingOption,
    ShippingCalculateRequest,
    ShippingCalculateResponse,
)
from .tax import (
    ShippingAddressIn,
    DetectedLocationIn,
    TaxLineItem,
    TaxResult,
    TaxCalculateRequest,
    TaxCalculateResponse,
)
from .checkout import (
    CheckoutQuoteRequest,
    CheckoutQuote,
)

__all__ = [
    "RateBand",
    "EstimatedDays",
    "FreeMethod",
    "FixedMethod",
    "WeightBasedMethod",
    "DistanceBasedMethod",
    "CalculatedMethod",
    "ShippingMethod",
    "ShippingZone",
    "OriginAddress",
    "GlobalShippingSettings",
    "ShippingSettings",
    "CartItem",
    "ShippingDestination",
    "CalculatedShippingOption",
    "ShippingCalculateRequest",
    "ShippingCalculateResponse",
    "ShippingAddressIn",
    "DetectedLocationIn",
    "TaxLineItem",
    "TaxResult",
    "TaxCalculateRequest",
    "TaxCalculateResponse",
    "CheckoutQuoteRequest",
    "CheckoutQuote",
]
