"""
Tax Schemas for Storefront Checkout
===================================

Pydantic models for the tax calculation endpoint and for the itemized result
produced by ``services.tax_utils.compute_tax``.

Endpoint Coverage:
------------------
- POST /tax/calculate: Resolve the buyer's jurisdiction and itemize tax

Location Signals:
-----------------
The request may carry up to two explicit location signals. They are used in
this order, and the client IP from the forwarding headers is the last resort:

1. shipping_address: {state, country}; state may be a name or a code
2. user_location: {country, region}; region is expected to already be a code
3. client IP (x-forwarded-for / x-real-ip) looked up via IP geolocation

Result Fields:
--------------
- taxes: One line per tax component, each rounded to cents independently
- total_tax_rate: Unrounded sum of component rates (informational)
- total_tax_amount: Sum of the rounded component amounts
- tax_location: Display name of the jurisdiction
- detected_location: How the jurisdiction was determined
  (e.g., "Shipping Address: California", "Location Detection Failed")

Usage:
------
    POST /tax/calculate
    {
        "subtotal": 200,
        "shipping_address": {"state": "Quebec", "country": "Canada"}
    }
    →
    {
        "success": true,
        "taxes": [
            {"name": "GST", "type": "gst", "rate": 0.05, "amount": 10.0},
            {"name": "QST", "type": "qst", "rate": 0.09975, "amount": 19.95}
        ],
        "total_tax_amount": 29.95,
        "total": 229.95,
        ...
    }
"""

from typing import List, Literal, Optional

from pydantic import BaseModel


TaxType = Literal["sales", "excise", "gross_receipts", "gst", "pst", "hst", "qst"]


class ShippingAddressIn(BaseModel):
    """Buyer's shipping address as far as tax resolution is concerned."""
    state: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None


class DetectedLocationIn(BaseModel):
    """Location detected client-side (browser geolocation or a prior IP lookup)."""
    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None


class TaxLineItem(BaseModel):
    name: str
    type: TaxType
    rate: float
    amount: float


class TaxResult(BaseModel):
    """
    Itemized tax for a subtotal in one jurisdiction.

    A tax-free jurisdiction yields an empty ``taxes`` list, zero tax and
    ``total == subtotal``.
    """
    taxes: List[TaxLineItem]
    total_tax_rate: float
    total_tax_amount: float
    tax_location: str
    detected_location: str
    subtotal: float
    total: float


class TaxCalculateRequest(BaseModel):
    """
    Request model for POST /tax/calculate.

    ``subtotal`` is optional at the schema level so a missing value is
    reported as "Invalid subtotal" (400) alongside non-positive ones.
    """
    subtotal: Optional[float] = None
    shipping_address: Optional[ShippingAddressIn] = None
    user_location: Optional[DetectedLocationIn] = None


class TaxCalculateResponse(TaxResult):
    success: bool = True
