"""Ticket-sales simulation: draw power, daily sales rate and the daily tick.

All functions here are pure. The only source of randomness is the
``random.Random`` passed to :func:`simulate_daily_ticket_sales`.
"""

import math
import random

from gigs.domain.models import SalesMomentum, TicketSalesForecast

FAME_FOR_FULL_DRAW = 5000
FANS_PER_SEAT_FOR_FULL_DRAW = 3
FAME_WEIGHT = 0.6
FAN_WEIGHT = 0.4
MAX_DRAW_POWER = 1.2
MIN_VENUE_SIZE_MODIFIER = 0.3

MAX_ADVANCE_BOOKING_BONUS = 0.3
ADVANCE_BOOKING_DAYS = 14
MIN_PRICE_SENSITIVITY = 0.5

# (momentum, minimum daily sale rate), fastest first
MOMENTUM_THRESHOLDS = (
    (SalesMomentum.SELLOUT, 0.25),
    (SalesMomentum.FAST, 0.12),
    (SalesMomentum.STEADY, 0.05),
)

JITTER_LOW = 0.8
JITTER_HIGH = 1.2


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_draw_power(band_fame: float, band_total_fans: float, venue_capacity: int) -> float:
    """Return how much of a venue the band can fill, nominally 0 to 1.2.

    Larger venues are proportionally harder to fill; the size penalty
    bottoms out at 0.3.
    """
    fame = max(0.0, band_fame)
    fans = max(0.0, band_total_fans)
    capacity = max(1, venue_capacity)

    fame_draw = min(1.0, fame / FAME_FOR_FULL_DRAW)
    fan_draw = min(1.0, fans / (capacity * FANS_PER_SEAT_FOR_FULL_DRAW))
    combined = FAME_WEIGHT * fame_draw + FAN_WEIGHT * fan_draw

    venue_size_modifier = max(MIN_VENUE_SIZE_MODIFIER, 1 - (capacity / 10000) * 0.5)
    return min(MAX_DRAW_POWER, combined * venue_size_modifier)


def _base_daily_rate(draw_power: float) -> float:
    if draw_power >= 1.0:
        return 0.25 + (draw_power - 1.0) * 0.5
    if draw_power >= 0.7:
        return 0.12 + (draw_power - 0.7) * 0.4
    if draw_power >= 0.4:
        return 0.05 + (draw_power - 0.4) * 0.2
    return 0.02 + draw_power * 0.08


def momentum_for_rate(daily_sale_rate: float) -> SalesMomentum:
    for momentum, threshold in MOMENTUM_THRESHOLDS:
        if daily_sale_rate >= threshold:
            return momentum
    return SalesMomentum.SLOW


def calculate_daily_sales_rate(
    band_fame: float,
    band_total_fans: float,
    venue_capacity: int,
    days_until_gig: int,
    days_booked: int,
    ticket_price: float,
) -> TicketSalesForecast:
    """Forecast daily sell-through, total sales and sellout odds for a booking.

    ``days_until_gig`` is accepted for call-site symmetry with the daily tick;
    the forecast itself depends on the lead time at booking (``days_booked``).
    """
    capacity = max(0, venue_capacity)
    days_booked = max(0, days_booked)
    ticket_price = max(0.0, ticket_price)

    draw_power = calculate_draw_power(band_fame, band_total_fans, capacity)
    advance_booking_bonus = min(
        MAX_ADVANCE_BOOKING_BONUS,
        (days_booked / ADVANCE_BOOKING_DAYS) * MAX_ADVANCE_BOOKING_BONUS,
    )
    price_sensitivity = max(MIN_PRICE_SENSITIVITY, 1 - (ticket_price / 100) * 0.3)

    daily_sale_rate = (
        _base_daily_rate(draw_power) * price_sensitivity * (1 + advance_booking_bonus)
    )
    expected_total_sales = min(
        capacity,
        round_half_up(capacity * daily_sale_rate * days_booked * (1 + advance_booking_bonus)),
    )
    sellout_probability = min(100, round_half_up(draw_power * 100 * (1 + advance_booking_bonus)))

    return TicketSalesForecast(
        daily_sale_rate=daily_sale_rate,
        expected_total_sales=expected_total_sales,
        sellout_probability=sellout_probability,
        sales_momentum=momentum_for_rate(daily_sale_rate),
    )


def urgency_multiplier(days_until_gig: int) -> float:
    if days_until_gig <= 3:
        return 1.5
    if days_until_gig <= 7:
        return 1.2
    return 1.0


def simulate_daily_ticket_sales(
    current_tickets_sold: int,
    venue_capacity: int,
    forecast: TicketSalesForecast,
    days_until_gig: int,
    rng: random.Random,
) -> int:
    """Draw one day of ticket sales, never selling past capacity."""
    remaining = venue_capacity - max(0, current_tickets_sold)
    if remaining <= 0:
        return 0

    base_sales = round_half_up(venue_capacity * forecast.daily_sale_rate)
    jitter = rng.uniform(JITTER_LOW, JITTER_HIGH)
    sold = round_half_up(base_sales * urgency_multiplier(days_until_gig) * jitter)
    return max(0, min(sold, remaining))
