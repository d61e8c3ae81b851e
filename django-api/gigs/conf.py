"""Game tunables read from ``settings.GIGS`` with fallbacks."""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    # Upper bound of the overall gig rating. Fan conversion formulas are
    # calibrated on 25.
    "RATING_SCALE_MAX": 25,
    # Lead time assumed when a gig has no recorded booking lead time.
    "DEFAULT_DAYS_BOOKED": 14,
    "DEFAULT_TICKET_PRICE": 20,
    # Used when a venue reports zero capacity.
    "DEFAULT_VENUE_CAPACITY": 100,
    "PRICE_ADJUSTMENT_MIN_DAYS": 7,
    "PRICE_ADJUSTMENT_MAX_SALES_PERCENT": 50,
    "CITY_FANS_CACHE_TIMEOUT": 300,
}


def get_setting(name: str) -> Any:
    if name not in DEFAULTS:
        raise KeyError(f"Unknown gigs setting: {name}")
    return getattr(settings, "GIGS", {}).get(name, DEFAULTS[name])
