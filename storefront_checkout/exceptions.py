"""
Exceptions raised by the checkout engine.

Only invalid input surfaces to callers. Provider failures are raised by the
distance and carrier-rate integrations and caught by the shipping engine,
which drops the affected method instead of failing the calculation.
"""


class CheckoutError(Exception):
    """Base class for checkout engine errors."""


class InvalidCheckoutInput(CheckoutError, ValueError):
    """Caller supplied input the engine cannot price (e.g. subtotal <= 0)."""


class ShippingProviderError(CheckoutError):
    """A distance or carrier-rate lookup could not produce a value."""
