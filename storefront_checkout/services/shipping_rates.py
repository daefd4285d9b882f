"""
Shipping rate engine.

Given a cart, a destination and the merchant's shipping settings, this module
produces the ranked list of shipping options the buyer can choose from.

Evaluation Order:
-----------------
1. Global free shipping ("free_global") when enabled and the cart total
   reaches the threshold
2. Local pickup ("local_pickup") when enabled
3. The destination country is resolved to a zone; with no zone, only the
   options from steps 1-2 are returned
4. Each enabled method in the zone is priced according to its type. A method
   that cannot be priced (no matching rate band, any error from the distance
   or carrier provider) is left out rather than failing the calculation
5. Options are ranked free-first, then by ascending price

Units:
------
Item weights are in the merchant's ``weight_unit``. Items without a weight
count as DEFAULT_ITEM_WEIGHT each. Distances are in kilometres.
"""

import logging
from typing import Iterable, List, Optional, Sequence

import requests

from ..config import (
    GLOBAL_FREE_SHIPPING_DAYS,
    LOCAL_PICKUP_DAYS,
    LOCAL_PICKUP_FALLBACK_INSTRUCTIONS,
)
from ..exceptions import InvalidCheckoutInput, ShippingProviderError
from ..schemas.shipping import (
    CalculatedMethod,
    CalculatedShippingOption,
    CartItem,
    DistanceBasedMethod,
    EstimatedDays,
    FixedMethod,
    FreeMethod,
    RateBand,
    ShippingDestination,
    ShippingSettings,
    WeightBasedMethod,
)
from .carrier_rates import CarrierRateProvider, EstimatedCarrierRates, total_cart_weight
from .distance import DistanceCalculator, PlaceholderDistanceCalculator
from .zones import resolve_zone

logger = logging.getLogger(__name__)

FREE_GLOBAL_ID = "free_global"
LOCAL_PICKUP_ID = "local_pickup"


def find_rate_band(bands: Iterable[RateBand], value: float) -> Optional[RateBand]:
    """First band where ``min <= value`` and (``max == -1`` or ``value <= max``)."""
    for band in bands:
        if band.matches(value):
            return band
    return None


def rank_options(options: Sequence[CalculatedShippingOption]) -> List[CalculatedShippingOption]:
    """
    Order options free-first, then by ascending price.

    Every zero-price option precedes every priced option. The sort is stable,
    so zero-price options (and equal prices) keep their insertion order.
    """
    return sorted(options, key=lambda option: (option.price != 0, option.price))


def _format_amount(amount: float) -> str:
    # 100.0 -> "100", 99.5 -> "99.5"
    amount = float(amount)
    return str(int(amount)) if amount.is_integer() else str(amount)


def _free_threshold_description(currency: str, threshold: float) -> str:
    return f"Free shipping on orders over {currency} {_format_amount(threshold)}"


def _global_options(settings: ShippingSettings, cart_total: float) -> List[CalculatedShippingOption]:
    options = []
    overlay = settings.global_settings

    if overlay.enable_free_shipping and cart_total >= overlay.free_shipping_threshold:
        options.append(CalculatedShippingOption(
            id=FREE_GLOBAL_ID,
            name="Free Shipping",
            price=0,
            estimated_days=EstimatedDays(
                min=GLOBAL_FREE_SHIPPING_DAYS[0], max=GLOBAL_FREE_SHIPPING_DAYS[1]
            ),
            description=_free_threshold_description(
                settings.default_currency, overlay.free_shipping_threshold
            ),
        ))

    if overlay.enable_local_pickup:
        options.append(CalculatedShippingOption(
            id=LOCAL_PICKUP_ID,
            name="Local Pickup",
            price=0,
            estimated_days=EstimatedDays(min=LOCAL_PICKUP_DAYS[0], max=LOCAL_PICKUP_DAYS[1]),
            description=overlay.local_pickup_instructions or LOCAL_PICKUP_FALLBACK_INSTRUCTIONS,
        ))

    return options


class ShippingRateEngine:
    """
    Prices a zone's shipping methods for one cart.

    The distance calculator and carrier rate provider are the only pieces
    that may do I/O; both default to local placeholders.
    """

    def __init__(
        self,
        distance_calculator: Optional[DistanceCalculator] = None,
        carrier_rates: Optional[CarrierRateProvider] = None,
    ) -> None:
        self.distance_calculator = distance_calculator or PlaceholderDistanceCalculator()
        self.carrier_rates = carrier_rates or EstimatedCarrierRates()

    def calculate(
        self,
        cart_items: Sequence[CartItem],
        destination: ShippingDestination,
        settings: ShippingSettings,
        cart_total: float,
    ) -> List[CalculatedShippingOption]:
        """
        Compute the ranked shipping options for a cart.

        Args:
            cart_items: Items in the cart
            destination: Where the order ships; ``country`` is required
            settings: Merchant shipping settings snapshot
            cart_total: Order subtotal, compared against free-shipping thresholds

        Returns:
            Ranked options, possibly empty

        Raises:
            InvalidCheckoutInput: destination has no country
        """
        if destination is None or not (destination.country or "").strip():
            raise InvalidCheckoutInput("Destination country is required")

        options = _global_options(settings, cart_total)

        zone = resolve_zone(destination.country, settings.zones)
        if zone is None:
            return rank_options(options)

        for method in zone.methods:
            if not method.enabled:
                continue
            try:
                option = self._price_method(method, cart_items, destination, settings, cart_total)
            except (ShippingProviderError, requests.RequestException) as e:
                logger.warning("Shipping method %s unavailable: %s", method.id, e)
                continue
            except Exception:
                # Third-party providers may fail in ways of their own
                logger.warning("Shipping method %s unavailable", method.id, exc_info=True)
                continue
            if option is not None:
                options.append(option)

        return rank_options(options)

    def _price_method(
        self,
        method,
        cart_items: Sequence[CartItem],
        destination: ShippingDestination,
        settings: ShippingSettings,
        cart_total: float,
    ) -> Optional[CalculatedShippingOption]:
        """Price one method; None means the method does not apply to this cart."""
        if isinstance(method, FreeMethod):
            # A threshold of 0 counts as no threshold
            if method.free_threshold and cart_total < method.free_threshold:
                return None
            description = (
                _free_threshold_description(settings.default_currency, method.free_threshold)
                if method.free_threshold
                else "Free shipping"
            )
            return self._option(method, 0, description)

        if isinstance(method, FixedMethod):
            return self._option(method, method.price or 0)

        if isinstance(method, WeightBasedMethod):
            total_weight = total_cart_weight(cart_items)
            if not method.weight_rates:
                return self._option(method, method.price or 0)
            band = find_rate_band(method.weight_rates, total_weight)
            if band is None:
                logger.debug("No weight band for %.2f in method %s", total_weight, method.id)
                return None
            return self._option(
                method, band.rate,
                f"Based on {total_weight:.1f} {settings.weight_unit} total weight",
            )

        if isinstance(method, DistanceBasedMethod):
            distance = self.distance_calculator.calculate_distance(
                settings.origin_address, destination
            )
            if not method.distance_rates:
                return self._option(method, method.price or 0)
            band = find_rate_band(method.distance_rates, distance)
            if band is None:
                logger.debug("No distance band for %.0f km in method %s", distance, method.id)
                return None
            return self._option(method, band.rate, f"Based on {distance:.0f} km distance")

        if isinstance(method, CalculatedMethod):
            price = self.carrier_rates.quote(method, cart_items, destination)
            return self._option(method, price, "Calculated via shipping API")

        raise TypeError(f"Unsupported shipping method type: {type(method).__name__}")

    @staticmethod
    def _option(method, price: float, description: str = None) -> CalculatedShippingOption:
        return CalculatedShippingOption(
            id=method.id,
            name=method.name,
            price=price,
            estimated_days=method.estimated_days,
            description=description,
        )


def calculate_shipping(
    cart_items: Sequence[CartItem],
    destination: ShippingDestination,
    settings: ShippingSettings,
    cart_total: float,
    distance_calculator: Optional[DistanceCalculator] = None,
    carrier_rates: Optional[CarrierRateProvider] = None,
) -> List[CalculatedShippingOption]:
    """
    Compute the ranked shipping options for a cart.

    Convenience wrapper around ShippingRateEngine for one-off calculations.
    """
    engine = ShippingRateEngine(
        distance_calculator=distance_calculator,
        carrier_rates=carrier_rates,
    )
    return engine.calculate(cart_items, destination, settings, cart_total)
