"""
Checkout quote composition.

Runs the shipping rate engine and the tax calculator for one cart and
combines them into the totals the checkout page shows:

    grand_total = subtotal + tax + selected shipping

Tax is charged on the merchandise subtotal only.
"""

import logging
from typing import Any, Optional, Sequence

from ..exceptions import InvalidCheckoutInput
from ..schemas.checkout import CheckoutQuote
from ..schemas.shipping import CartItem, ShippingDestination, ShippingSettings
from ..schemas.tax import ShippingAddressIn
from .geolocation import IPGeolocator
from .shipping_rates import ShippingRateEngine
from .tax_utils import calculate_tax, round_money

logger = logging.getLogger(__name__)


def cart_subtotal(cart_items: Sequence[CartItem]) -> float:
    """Merchandise subtotal: Σ price × quantity, rounded to cents."""
    return round_money(sum(item.price * item.quantity for item in cart_items))


def free_shipping_remaining(settings: ShippingSettings, subtotal: float) -> Optional[float]:
    """
    Amount the buyer still needs to add to qualify for global free shipping.

    None when global free shipping is disabled or already reached.
    """
    overlay = settings.global_settings
    if not overlay.enable_free_shipping or subtotal >= overlay.free_shipping_threshold:
        return None
    return round_money(overlay.free_shipping_threshold - subtotal)


def build_checkout_quote(
    cart_items: Sequence[CartItem],
    destination: ShippingDestination,
    settings: ShippingSettings,
    shipping_address: Any = None,
    detected_location: Any = None,
    client_ip: Optional[str] = None,
    selected_option_id: Optional[str] = None,
    engine: Optional[ShippingRateEngine] = None,
    geolocator: Optional[IPGeolocator] = None,
) -> CheckoutQuote:
    """
    Price a cart for a destination.

    When no explicit shipping address is given for tax, the destination's
    state and country are used (they only count if both are present).

    Args:
        cart_items: Items in the cart
        destination: Shipping destination
        settings: Merchant shipping settings snapshot
        shipping_address: Address for tax resolution
        detected_location: Detected buyer location for tax resolution
        client_ip: Client IP for the last-resort tax lookup
        selected_option_id: Chosen shipping option; defaults to the first
            ranked option
        engine: Shipping rate engine (defaults to placeholder providers)
        geolocator: IP geolocation client for tax resolution

    Raises:
        InvalidCheckoutInput: empty/zero-value cart, missing destination
            country, or a selected option that is not offered
    """
    subtotal = cart_subtotal(cart_items)
    if subtotal <= 0:
        raise InvalidCheckoutInput("Cart subtotal must be greater than zero")

    engine = engine or ShippingRateEngine()
    options = engine.calculate(cart_items, destination, settings, subtotal)

    selected = None
    if selected_option_id is not None:
        selected = next((o for o in options if o.id == selected_option_id), None)
        if selected is None:
            raise InvalidCheckoutInput(
                f"Shipping option '{selected_option_id}' is not available for this destination"
            )
    elif options:
        selected = options[0]

    if shipping_address is None and destination.state:
        shipping_address = ShippingAddressIn(
            state=destination.state,
            country=destination.country,
            city=destination.city,
            postal_code=destination.postal_code,
        )

    tax = calculate_tax(
        subtotal,
        shipping_address=shipping_address,
        detected_location=detected_location,
        client_ip=client_ip,
        geolocator=geolocator,
    )

    shipping_total = selected.price if selected else 0.0
    grand_total = round_money(subtotal + tax.total_tax_amount + shipping_total)

    logger.debug(
        "Checkout quote: subtotal=%.2f shipping=%.2f tax=%.2f total=%.2f",
        subtotal, shipping_total, tax.total_tax_amount, grand_total,
    )

    return CheckoutQuote(
        subtotal=subtotal,
        shipping_options=options,
        selected_shipping=selected,
        shipping_total=shipping_total,
        tax=tax,
        grand_total=grand_total,
        free_shipping_remaining=free_shipping_remaining(settings, subtotal),
    )
