"""
Carrier rate quotes for "calculated" shipping methods.

No live carrier integration is wired up yet. EstimatedCarrierRates produces a
weight-driven estimate in its place; a real integration implements the same
``quote`` method and raises ShippingProviderError when the carrier cannot
quote, which makes the engine drop the method for that calculation.
"""

from typing import Iterable, Protocol

from ..config import CARRIER_BASE_RATE, CARRIER_RATE_PER_WEIGHT_UNIT, DEFAULT_ITEM_WEIGHT
from ..schemas.shipping import CalculatedMethod, CartItem, ShippingDestination
from .tax_utils import round_money


def item_weight(item: CartItem) -> float:
    """Per-unit weight of a cart item, falling back to DEFAULT_ITEM_WEIGHT."""
    # A weight of 0 is treated as missing
    return item.weight or DEFAULT_ITEM_WEIGHT


def total_cart_weight(cart_items: Iterable[CartItem]) -> float:
    """Total shipping weight of the cart: Σ unit weight × quantity."""
    return sum(item_weight(item) * item.quantity for item in cart_items)


class CarrierRateProvider(Protocol):
    def quote(
        self,
        method: CalculatedMethod,
        cart_items: Iterable[CartItem],
        destination: ShippingDestination,
    ) -> float:
        ...


class EstimatedCarrierRates:
    """Flat base rate plus a per-weight-unit charge, rounded to cents."""

    def __init__(
        self,
        base_rate: float = CARRIER_BASE_RATE,
        rate_per_weight_unit: float = CARRIER_RATE_PER_WEIGHT_UNIT,
    ) -> None:
        self.base_rate = base_rate
        self.rate_per_weight_unit = rate_per_weight_unit

    def quote(
        self,
        method: CalculatedMethod,
        cart_items: Iterable[CartItem],
        destination: ShippingDestination,
    ) -> float:
        weight = total_cart_weight(cart_items)
        return round_money(self.base_rate + weight * self.rate_per_weight_unit)
