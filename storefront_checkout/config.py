"""
Configuration Module for Storefront Checkout
============================================

This module centralizes all configuration settings, environment variables, and
constants used by the checkout engine. By consolidating configuration in one
place, we achieve:

1. **Single Source of Truth**: All environment variables and defaults are defined
   here, making it easy to see what configuration options exist.

2. **Easy Environment Management**: Different environments (dev, staging, prod)
   can override settings via environment variables without code changes.

3. **Named Engine Policy**: Defaults that the shipping and tax calculators apply
   to incomplete input (item weight, delivery windows, placeholder distances)
   live here instead of being re-derived at each call site.

Configuration Categories:
-------------------------
- **Database**: Where the merchant's settings document is stored.

- **Location Lookups**: The IP geolocation oracle used as the last-resort tax
  location signal, and the geocoder used by distance-based shipping.

- **Rate Limiting**: Throttling for the tax and checkout quote endpoints,
  which fan out to the external IP geolocation service.

- **CORS Settings**: Cross-Origin Resource Sharing configuration for the
  storefront frontend.

- **Shipping Engine Policy**: Constants applied by the shipping rate engine.

Environment Variables:
----------------------
- DATABASE_URL: SQLAlchemy URL (default: "sqlite:///./storefront_checkout.db")
- IP_GEOLOCATION_URL: IP lookup endpoint (default: "http://ip-api.com/json")
- GEOLOCATION_TIMEOUT_SECONDS: IP lookup timeout (default: 3)
- DISTANCE_PROVIDER: "placeholder" or "nominatim" (default: "placeholder")
- NOMINATIM_URL: Geocoding endpoint for the nominatim distance provider
- NOMINATIM_USER_AGENT: User agent sent to Nominatim (required by its TOS)
- NOMINATIM_TIMEOUT_SECONDS: Geocoding timeout (default: 5)
- RATE_LIMIT_TAX: Tax and checkout quote rate limit (default: "60 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")

Usage:
------
    from storefront_checkout.config import (
        DEFAULT_ITEM_WEIGHT,
        GEOLOCATION_TIMEOUT_SECONDS,
        IP_GEOLOCATION_URL,
    )
"""

import os
from typing import List, Tuple


# =============================================================================
# Database Configuration
# =============================================================================
# The merchant's shipping settings are kept as a single JSON document.
# Any SQLAlchemy URL works; SQLite is fine for a single storefront.

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./storefront_checkout.db")


# =============================================================================
# Location Lookup Configuration
# =============================================================================
# Both lookups are best-effort: a failure or timeout degrades to a default
# (international tax-free jurisdiction / method excluded), never an error.

# IP geolocation service returning {status, country, countryCode, region, regionName}
IP_GEOLOCATION_URL: str = os.getenv("IP_GEOLOCATION_URL", "http://ip-api.com/json")

# Timeout applies to connect and read; a timeout counts as a failed lookup
GEOLOCATION_TIMEOUT_SECONDS: float = float(os.getenv("GEOLOCATION_TIMEOUT_SECONDS", "3"))

# Which distance calculator distance_based shipping methods use
DISTANCE_PROVIDER: str = os.getenv("DISTANCE_PROVIDER", "placeholder").lower()

NOMINATIM_URL: str = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/search")
NOMINATIM_USER_AGENT: str = os.getenv(
    "NOMINATIM_USER_AGENT", "StorefrontCheckout/1.0 (shipping distance estimation)"
)
NOMINATIM_TIMEOUT_SECONDS: float = float(os.getenv("NOMINATIM_TIMEOUT_SECONDS", "5"))


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Every anonymous tax calculation or checkout quote may trigger an outbound IP
# lookup, so both endpoints are throttled per client address.

# Rate limit format: "X per Y" where Y is second, minute, hour, or day
RATE_LIMIT_TAX: str = os.getenv("RATE_LIMIT_TAX", "60 per minute")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"


def get_rate_limit_tax() -> str:
    """
    Return the current tax endpoint rate limit.

    This function allows dynamic override in tests without modifying
    the module-level constant.
    """
    return RATE_LIMIT_TAX


# =============================================================================
# CORS Configuration
# =============================================================================

# Format: comma-separated list of origins, e.g., "https://shop.example.com"
# Default "*" allows all origins (suitable for development only)
_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]


# =============================================================================
# Shipping Engine Policy
# =============================================================================
# Applied by services.shipping_rates; values are in the merchant's configured
# weight unit / kilometres / default currency respectively.

# Weight assumed for a cart item that carries none (a boxed piece of jewelry)
DEFAULT_ITEM_WEIGHT: float = 0.5

# Delivery windows (min, max business days) for the synthetic overlay options
GLOBAL_FREE_SHIPPING_DAYS: Tuple[int, int] = (3, 7)
LOCAL_PICKUP_DAYS: Tuple[int, int] = (1, 1)

LOCAL_PICKUP_FALLBACK_INSTRUCTIONS: str = "Pick up at our location"

# Placeholder distances until a real geocoding service is configured
DOMESTIC_DISTANCE_KM: float = 500
INTERNATIONAL_DISTANCE_KM: float = 2000

# Estimate used for "calculated" methods in lieu of a live carrier integration
CARRIER_BASE_RATE: float = 15.99
CARRIER_RATE_PER_WEIGHT_UNIT: float = 2.5
