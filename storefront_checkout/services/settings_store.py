"""
Shipping settings persistence.

The merchant's shipping configuration is one JSON document under the
"shipping" key. Reads fall back to DEFAULT_SHIPPING_SETTINGS when nothing has
been saved yet, so checkout always has a usable configuration.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from ..models import SettingsDocument
from ..schemas.shipping import (
    EstimatedDays,
    FixedMethod,
    GlobalShippingSettings,
    OriginAddress,
    ShippingSettings,
    ShippingZone,
)
from .zones import normalize_country_list

logger = logging.getLogger(__name__)

SHIPPING_SETTINGS_KEY = "shipping"

DEFAULT_SHIPPING_SETTINGS = ShippingSettings(
    default_currency="USD",
    weight_unit="kg",
    dimension_unit="cm",
    origin_address=OriginAddress(),
    zones=[
        ShippingZone(
            id="domestic",
            name="Domestic",
            countries=["United States"],
            methods=[
                FixedMethod(
                    id="standard",
                    name="Standard Shipping",
                    price=9.99,
                    estimated_days=EstimatedDays(min=3, max=7),
                    enabled=True,
                ),
            ],
        ),
    ],
    global_settings=GlobalShippingSettings(
        enable_free_shipping=False,
        free_shipping_threshold=100,
        enable_local_pickup=False,
        local_pickup_instructions="",
    ),
)


def load_shipping_settings(db: Session) -> ShippingSettings:
    """Return the saved shipping settings, or the defaults if none are saved."""
    document = db.get(SettingsDocument, SHIPPING_SETTINGS_KEY)
    if document is None:
        logger.debug("No saved shipping settings, using defaults")
        return DEFAULT_SHIPPING_SETTINGS
    return ShippingSettings.model_validate(document.data)


def save_shipping_settings(db: Session, settings: ShippingSettings) -> ShippingSettings:
    """
    Replace the saved shipping settings.

    Zone country lists are cleaned (whitespace trimmed, blanks and repeats
    dropped) before saving.

    Returns:
        The settings as saved
    """
    zones = [
        zone.model_copy(update={"countries": normalize_country_list(zone.countries)})
        for zone in settings.zones
    ]
    cleaned = settings.model_copy(update={"zones": zones})
    data = cleaned.model_dump(mode="json")

    document = db.get(SettingsDocument, SHIPPING_SETTINGS_KEY)
    if document is None:
        document = SettingsDocument(key=SHIPPING_SETTINGS_KEY, data=data)
        db.add(document)
    else:
        document.data = data
        document.updated_at = datetime.now(timezone.utc)

    db.commit()
    logger.info("Shipping settings saved (%d zone(s))", len(zones))
    return ShippingSettings.model_validate(data)
