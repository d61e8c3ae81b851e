"""Ticket sales service: booking forecasts, the daily sales tick and price changes.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging
import random
from dataclasses import replace
from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal

from django.utils import timezone

from gigs.conf import get_setting
from gigs.domain import (
    Band,
    Gig,
    GigId,
    GigStatus,
    Money,
    SalesTick,
    TicketSalesForecast,
    Venue,
)
from gigs.domain.errors import (
    BandNotFoundError,
    DomainError,
    GigNotFoundError,
    GigNotOpenForSalesError,
    PriceAdjustmentNotAllowedError,
    VenueNotFoundError,
)
from gigs.domain.ticket_sales import calculate_daily_sales_rate, simulate_daily_ticket_sales
from gigs.services.common import parse_id
from gigs.stores.interfaces import GigStore

logger = logging.getLogger(__name__)


class TicketSalesService:
    """Service for gig ticket-sales operations."""

    def __init__(self, store: GigStore, now: Callable[[], datetime] = timezone.now) -> None:
        self._store = store
        self._now = now

    def forecast_for_gig(self, gig_id: str, today: date | None = None) -> TicketSalesForecast:
        """Return the sales forecast for a gig.

        Raises:
            InvalidIdError: If the gig_id is not a valid UUID.
            GigNotFoundError: If the gig does not exist.
        """
        gig = self._get_gig(gig_id)
        venue, band = self._load_venue_and_band(gig)
        return self._forecast(gig, venue, band, today or timezone.localdate())

    def simulate_sales_day(
        self, gig_id: str, rng: random.Random, today: date | None = None
    ) -> SalesTick:
        """Advance a gig's ticket sales by one simulated day.

        Raises:
            InvalidIdError: If the gig_id is not a valid UUID.
            GigNotFoundError: If the gig does not exist.
            GigNotOpenForSalesError: If the gig is not scheduled or already past.
        """
        today = today or timezone.localdate()
        with self._store.atomic():
            gig = self._get_gig(gig_id, for_update=True)
            if gig.status is not GigStatus.SCHEDULED or gig.scheduled_date < today:
                logger.warning("Rejected sales tick for gig %s (status=%s)", gig_id, gig.status.value)
                raise GigNotOpenForSalesError()

            venue, band = self._load_venue_and_band(gig)
            capacity = self._capacity(venue)
            forecast = self._forecast(gig, venue, band, today)
            days_until_gig = (gig.scheduled_date - today).days

            sold_today = simulate_daily_ticket_sales(
                current_tickets_sold=gig.tickets_sold,
                venue_capacity=capacity,
                forecast=forecast,
                days_until_gig=days_until_gig,
                rng=rng,
            )
            total_sold = gig.tickets_sold + sold_today
            if sold_today:
                self._store.update_ticket_sales(gig.id, total_sold)

        logger.info(
            "Gig %s sold %d tickets (%d/%d, %d days out)",
            gig_id, sold_today, total_sold, capacity, days_until_gig,
        )
        return SalesTick(
            gig_id=gig.id,
            tickets_sold_today=sold_today,
            total_sold=total_sold,
            remaining=max(0, capacity - total_sold),
        )

    def simulate_all_upcoming(
        self, rng: random.Random, today: date | None = None
    ) -> list[SalesTick]:
        """Run one sales day for every open gig.

        Each gig commits separately. A gig that fails with a domain error is
        logged and skipped so the rest of the batch still runs.
        """
        today = today or timezone.localdate()
        ticks = []
        for gig_id in self._store.list_open_gig_ids(today):
            try:
                ticks.append(self.simulate_sales_day(str(gig_id.value), rng, today))
            except DomainError as exc:
                logger.warning("Skipped sales tick for gig %s: %s", gig_id.value, exc)
        return ticks

    def adjust_ticket_price(
        self, gig_id: str, new_price: Decimal, today: date | None = None
    ) -> Gig:
        """Change a gig's ticket price once, while it is early and undersold.

        Raises:
            InvalidIdError: If the gig_id is not a valid UUID.
            GigNotFoundError: If the gig does not exist.
            PriceAdjustmentNotAllowedError: If the gig is too close, selling
                well enough, or was already repriced.
        """
        today = today or timezone.localdate()
        price = Money(Decimal(new_price))
        with self._store.atomic():
            gig = self._get_gig(gig_id, for_update=True)
            if gig.status is not GigStatus.SCHEDULED:
                raise PriceAdjustmentNotAllowedError("Gig is not scheduled")
            if gig.price_adjusted_at is not None:
                raise PriceAdjustmentNotAllowedError("Ticket price was already adjusted")

            min_days = get_setting("PRICE_ADJUSTMENT_MIN_DAYS")
            if (gig.scheduled_date - today).days < min_days:
                raise PriceAdjustmentNotAllowedError(
                    f"Ticket price can only change {min_days} or more days before the gig"
                )

            venue, band = self._load_venue_and_band(gig)
            forecast = self._forecast(gig, venue, band, today)
            sales_percent = self._sales_percent(gig.tickets_sold, forecast.expected_total_sales)
            if sales_percent >= get_setting("PRICE_ADJUSTMENT_MAX_SALES_PERCENT"):
                raise PriceAdjustmentNotAllowedError("Gig is already selling well")

            adjusted_at = self._now()
            self._store.update_ticket_price(gig.id, price, adjusted_at)

        logger.info("Gig %s ticket price changed from %s to %s", gig_id, gig.ticket_price, price)
        return replace(gig, ticket_price=price, price_adjusted_at=adjusted_at)

    def _get_gig(self, gig_id: str, for_update: bool = False) -> Gig:
        gig = self._store.get_gig(parse_id(GigId, gig_id, "gig"), for_update=for_update)
        if gig is None:
            raise GigNotFoundError(gig_id)
        return gig

    def _load_venue_and_band(self, gig: Gig) -> tuple[Venue, Band]:
        venue = self._store.get_venue(gig.venue_id)
        if venue is None:
            raise VenueNotFoundError(str(gig.venue_id.value))
        band = self._store.get_band(gig.band_id)
        if band is None:
            raise BandNotFoundError(str(gig.band_id.value))
        return venue, band

    @staticmethod
    def _capacity(venue: Venue) -> int:
        return venue.capacity.value or get_setting("DEFAULT_VENUE_CAPACITY")

    @staticmethod
    def _sales_percent(tickets_sold: int, expected_total_sales: int) -> float:
        if expected_total_sales <= 0:
            return 0.0
        return tickets_sold / expected_total_sales * 100

    def _forecast(self, gig: Gig, venue: Venue, band: Band, today: date) -> TicketSalesForecast:
        days_booked = gig.days_booked
        if days_booked is None:
            days_booked = get_setting("DEFAULT_DAYS_BOOKED")
        ticket_price = float(gig.ticket_price.amount) or float(get_setting("DEFAULT_TICKET_PRICE"))

        forecast = calculate_daily_sales_rate(
            band_fame=band.fame,
            band_total_fans=band.total_fans,
            venue_capacity=self._capacity(venue),
            days_until_gig=max(1, (gig.scheduled_date - today).days),
            days_booked=days_booked,
            ticket_price=ticket_price,
        )
        logger.debug("Forecast for gig %s: %s", gig.id.value, forecast)
        return forecast
