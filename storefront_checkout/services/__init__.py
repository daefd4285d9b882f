"""
Services Package for Storefront Checkout
========================================

This package contains the checkout calculators and the infrastructure they
lean on. The calculators are stateless: every call works from its arguments
and a read-only settings snapshot, so concurrent requests need no locking.

Available Services:
-------------------
- **zones**: Destination country → shipping zone
- **shipping_rates**: Shipping rate engine (ranked options for a cart)
- **distance**: Origin → destination distance for distance-based methods
- **carrier_rates**: Quotes for "calculated" methods, cart weight helpers
- **tax_rates**: Static jurisdiction table and state/province code maps
- **geolocation**: Best-effort IP geolocation lookup
- **tax_jurisdiction**: Location signals → tax jurisdiction
- **tax_utils**: Itemized tax computation and money rounding
- **checkout**: Combined shipping + tax checkout quote
- **settings_store**: Shipping settings persistence

Failure Handling:
-----------------
Only invalid input (non-positive subtotal, missing destination country) is
raised to callers, as InvalidCheckoutInput. External lookups degrade instead:
a failed IP lookup falls back to the international tax-free jurisdiction, and
a failed distance or carrier lookup drops that shipping method.

Usage:
------
    from storefront_checkout.services.shipping_rates import calculate_shipping
    from storefront_checkout.services.tax_utils import calculate_tax
"""
