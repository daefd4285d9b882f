"""
Shipping Schemas for Storefront Checkout
========================================

This module defines Pydantic models for the merchant's shipping configuration
and for the inputs/outputs of the shipping rate engine.

Endpoint Coverage:
------------------
- GET /shipping/settings: Current merchant shipping settings
- PUT /shipping/settings: Replace merchant shipping settings
- POST /shipping/calculate: Rank shipping options for a cart and destination

Shipping Methods:
-----------------
A zone holds an ordered list of methods. Each method is one variant of a
tagged union discriminated on ``type``; a variant only carries the fields its
pricing rule reads:

- "free": always price 0, optionally gated by ``free_threshold``
- "fixed": flat ``price``
- "weight_based": ``weight_rates`` bands keyed on total cart weight
- "distance_based": ``distance_rates`` bands keyed on origin→destination distance
- "calculated": carrier-quoted price

Fields belonging to other variants are ignored on input rather than rejected,
so a method can be switched between types in the admin UI without clearing
its old configuration first.

Rate Bands:
-----------
Bands are ``{min, max, rate}``. A band matches when ``min <= value`` and
either ``max == -1`` (unbounded) or ``value <= max``. Bands are evaluated in
configured order and the first match wins.

Prices, thresholds, rates and band bounds are non-negative; ``max == -1`` is
the one negative value accepted.

Usage:
------
    settings = ShippingSettings.model_validate(document)
    destination = ShippingDestination(country="United States", state="CA")
    items = [CartItem(id="ring-1", name="Gold Ring", price=250.0, quantity=1)]
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


UNBOUNDED = -1


class RateBand(BaseModel):
    """One row of a weight or distance rate table. ``max == -1`` is unbounded."""
    model_config = ConfigDict(frozen=True)

    min: float = Field(default=0, ge=0)
    max: float = Field(default=UNBOUNDED, ge=UNBOUNDED)
    rate: float = Field(ge=0)

    def matches(self, value: float) -> bool:
        return value >= self.min and (self.max == UNBOUNDED or value <= self.max)


class EstimatedDays(BaseModel):
    """Business-day delivery window, passed through to the output unchanged."""
    model_config = ConfigDict(frozen=True)

    min: int
    max: int


class _ShippingMethodBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    enabled: bool = True
    estimated_days: Optional[EstimatedDays] = None


class FreeMethod(_ShippingMethodBase):
    type: Literal["free"] = "free"
    # None means the method is always free
    free_threshold: Optional[float] = Field(default=None, ge=0)


class FixedMethod(_ShippingMethodBase):
    type: Literal["fixed"] = "fixed"
    price: Optional[float] = Field(default=None, ge=0)


class WeightBasedMethod(_ShippingMethodBase):
    type: Literal["weight_based"] = "weight_based"
    # Flat fallback when no weight_rates are configured
    price: Optional[float] = Field(default=None, ge=0)
    weight_rates: List[RateBand] = []


class DistanceBasedMethod(_ShippingMethodBase):
    type: Literal["distance_based"] = "distance_based"
    price: Optional[float] = Field(default=None, ge=0)
    distance_rates: List[RateBand] = []


class CalculatedMethod(_ShippingMethodBase):
    type: Literal["calculated"] = "calculated"


ShippingMethod = Annotated[
    Union[FreeMethod, FixedMethod, WeightBasedMethod, DistanceBasedMethod, CalculatedMethod],
    Field(discriminator="type"),
]


class ShippingZone(BaseModel):
    """
    A group of destination countries sharing one set of shipping methods.

    Attributes:
        id: Zone identifier (e.g., "domestic")
        name: Display name (e.g., "Domestic")
        countries: Country names as entered by the merchant (e.g., "United States").
            Matching against a destination is exact and case-sensitive.
        methods: Shipping methods offered in this zone, in display order
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    countries: List[str] = []
    methods: List[ShippingMethod] = []


class OriginAddress(BaseModel):
    """Merchant ship-from location. Only read by distance-based pricing."""
    model_config = ConfigDict(frozen=True)

    country: str = ""
    state: str = ""
    city: str = ""
    postal_code: str = ""
    address: str = ""


class GlobalShippingSettings(BaseModel):
    """Zone-independent options that are offered on top of zone methods."""
    model_config = ConfigDict(frozen=True)

    enable_free_shipping: bool = False
    free_shipping_threshold: float = Field(default=100, ge=0)
    enable_local_pickup: bool = False
    local_pickup_instructions: str = ""


class ShippingSettings(BaseModel):
    """
    Merchant-wide shipping configuration.

    Loaded once per calculation from the settings store and treated as an
    immutable snapshot for the duration of that calculation.

    Attributes:
        default_currency: ISO currency code used in option descriptions
        weight_unit: "kg" or "lb"; item weights are assumed to be in this unit
        dimension_unit: "cm" or "in"
        origin_address: Ship-from location
        zones: Shipping zones in resolution order (first match wins)
        global_settings: Free-shipping and local-pickup overlays
    """
    model_config = ConfigDict(frozen=True)

    default_currency: str = "USD"
    weight_unit: Literal["kg", "lb"] = "kg"
    dimension_unit: Literal["cm", "in"] = "cm"
    origin_address: OriginAddress = OriginAddress()
    zones: List[ShippingZone] = []
    global_settings: GlobalShippingSettings = GlobalShippingSettings()


class CartItem(BaseModel):
    """A cart line. ``weight`` is per unit; missing weight gets the engine default."""
    id: str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    weight: Optional[float] = Field(default=None, ge=0)


class ShippingDestination(BaseModel):
    """Where the order ships. Only ``country`` is needed for zone matching."""
    country: str
    state: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None


class CalculatedShippingOption(BaseModel):
    """
    One selectable shipping option.

    ``id`` is the source method's id, or "free_global" / "local_pickup" for
    the global overlays. A price of 0 is a real price, not a missing one.
    """
    id: str
    name: str
    price: float
    estimated_days: Optional[EstimatedDays] = None
    description: Optional[str] = None


class ShippingCalculateRequest(BaseModel):
    """
    Request model for POST /shipping/calculate.

    Attributes:
        cart_items: Items in the cart
        destination: Shipping destination
        cart_total: Order subtotal used for free-shipping thresholds.
            Defaults to the sum of price × quantity over cart_items.

    Example:
        {
            "cart_items": [{"id": "r1", "name": "Ring", "price": 120, "quantity": 1}],
            "destination": {"country": "United States", "state": "NY"}
        }
    """
    cart_items: List[CartItem]
    destination: ShippingDestination
    cart_total: Optional[float] = None


class ShippingCalculateResponse(BaseModel):
    success: bool = True
    options: List[CalculatedShippingOption]
