"""
Checkout Schemas for Storefront Checkout
========================================

Pydantic models for the combined checkout quote: merchandise subtotal, the
ranked shipping options with the selected one, itemized tax and the grand
total the buyer will be charged.

Endpoint Coverage:
------------------
- POST /checkout/quote: Price a cart for a destination in one call

Totals:
-------
    grand_total = subtotal + tax.total_tax_amount + selected_shipping.price

Tax is computed on the merchandise subtotal only; shipping is not taxed.
"""

from typing import List, Optional

from pydantic import BaseModel

from .shipping import CalculatedShippingOption, CartItem, ShippingDestination
from .tax import DetectedLocationIn, ShippingAddressIn, TaxResult


class CheckoutQuoteRequest(BaseModel):
    """
    Request model for POST /checkout/quote.

    Attributes:
        cart_items: Items in the cart (must produce a positive subtotal)
        destination: Shipping destination used for zone matching
        shipping_address: Optional address used for tax resolution. When
            omitted, the destination's state/country are used if both are set.
        user_location: Optional detected location for tax resolution
        selected_option_id: Shipping option chosen by the buyer. Defaults to
            the first ranked option.
    """
    cart_items: List[CartItem]
    destination: ShippingDestination
    shipping_address: Optional[ShippingAddressIn] = None
    user_location: Optional[DetectedLocationIn] = None
    selected_option_id: Optional[str] = None


class CheckoutQuote(BaseModel):
    subtotal: float
    shipping_options: List[CalculatedShippingOption]
    selected_shipping: Optional[CalculatedShippingOption] = None
    shipping_total: float
    tax: TaxResult
    grand_total: float
    # How much more the buyer must add to reach global free shipping
    free_shipping_remaining: Optional[float] = None
