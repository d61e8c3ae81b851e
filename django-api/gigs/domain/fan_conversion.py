"""Post-gig fan conversion formulas.

Ratings are interpreted on a 0-25 reference scale. Callers on a different
scale pass ``rating_scale`` and the rating is normalized before the tier
thresholds are applied.
"""

import math
from collections.abc import Iterable

from gigs.domain.models import AgeDemographic, FanConversion, FanTiers

REFERENCE_RATING_SCALE = 25.0

BASE_CONVERSION_RATE = 0.05
MAX_CONVERSION_RATE = 0.35
MAX_REPEAT_ATTENDEE_RATE = 0.8

GRADE_MULTIPLIERS = {
    "S+": 2.5,
    "S": 2.0,
    "A": 1.5,
    "B": 1.2,
    "C": 1.0,
    "D": 0.6,
    "F": 0.3,
}

COUNTRY_SPILLOVER_RATE = 0.10
MAX_SPILLOVER_CITIES = 10


def grade_multiplier(performance_grade: str) -> float:
    """Unknown grades count as an average show."""
    return GRADE_MULTIPLIERS.get(performance_grade, 1.0)


def normalize_rating(overall_rating: float, rating_scale: float = REFERENCE_RATING_SCALE) -> float:
    rating = min(max(0.0, overall_rating), rating_scale)
    if rating_scale == REFERENCE_RATING_SCALE:
        return rating
    return rating * REFERENCE_RATING_SCALE / rating_scale


def tier_rates(rating: float) -> tuple[float, float, float]:
    """Return (superfan, dedicated, casual) shares for a 0-25 rating."""
    if rating >= 22:
        superfan_rate = 0.10
    elif rating >= 18:
        superfan_rate = 0.05
    else:
        superfan_rate = 0.02

    if rating >= 18:
        dedicated_rate = 0.25
    elif rating >= 14:
        dedicated_rate = 0.15
    else:
        dedicated_rate = 0.10

    return superfan_rate, dedicated_rate, 1 - superfan_rate - dedicated_rate


def calculate_conversion_rate(rating: float, performance_grade: str, band_fame: float) -> float:
    rating_bonus = (rating / REFERENCE_RATING_SCALE) * 0.1
    fame_bonus = min(0.05, max(0.0, band_fame) / 50000)
    return min(
        MAX_CONVERSION_RATE,
        (BASE_CONVERSION_RATE + rating_bonus + fame_bonus) * grade_multiplier(performance_grade),
    )


def calculate_fan_conversion(
    actual_attendance: int,
    overall_rating: float,
    performance_grade: str,
    band_fame: float,
    existing_city_fans: int = 0,
    prior_gigs_in_city: int = 0,
    rating_scale: float = REFERENCE_RATING_SCALE,
) -> FanConversion:
    """Turn a gig's attendance into new fans split by tier.

    Returning fans are estimated from how often the band has played the city
    and its fame, and can never exceed the city's existing fan count.
    """
    attendance = max(0, actual_attendance)
    existing_city_fans = max(0, existing_city_fans)
    fame = max(0.0, band_fame)
    rating = normalize_rating(overall_rating, rating_scale)

    gigs_in_city = max(0, prior_gigs_in_city) + 1
    repeat_attendee_rate = min(MAX_REPEAT_ATTENDEE_RATE, gigs_in_city * 0.1 + (fame / 10000) * 0.3)
    repeat_attendees = math.floor(min(existing_city_fans, attendance * repeat_attendee_rate))
    new_potential_fans = max(0, attendance - repeat_attendees)

    conversion_rate = calculate_conversion_rate(rating, performance_grade, fame)
    new_fans_gained = math.floor(new_potential_fans * conversion_rate)

    superfan_rate, dedicated_rate, _ = tier_rates(rating)
    superfans = math.floor(new_fans_gained * superfan_rate)
    dedicated = math.floor(new_fans_gained * dedicated_rate)

    return FanConversion(
        new_fans_gained=new_fans_gained,
        fans=FanTiers(
            casual=new_fans_gained - superfans - dedicated,
            dedicated=dedicated,
            superfans=superfans,
        ),
        repeat_attendees=repeat_attendees,
        conversion_rate=conversion_rate,
        gigs_in_city=gigs_in_city,
    )


def calculate_country_spillover(new_fans_gained: int) -> int:
    return math.floor(max(0, new_fans_gained) * COUNTRY_SPILLOVER_RATE)


def spillover_per_city(country_spillover: int, city_count: int) -> int:
    if city_count <= 0:
        return 0
    return country_spillover // city_count


def distribute_demographics(
    new_fans_gained: int,
    demographics: Iterable[AgeDemographic],
    genre: str | None,
) -> dict[str, int]:
    """Split new fans across age demographics by genre preference.

    Returns an empty breakdown when there is no genre or no demographic.
    """
    demographics = list(demographics)
    if not demographics or not genre:
        return {}

    weights = [demo.genre_preferences.get(genre, 1.0) for demo in demographics]
    total_weight = sum(weights)
    if total_weight <= 0:
        return {}

    return {
        demo.name: math.floor(new_fans_gained * weight / total_weight)
        for demo, weight in zip(demographics, weights)
    }
