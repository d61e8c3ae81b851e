"""Unit tests for TicketSalesService and FanConversionService.

These test orchestration, error handling and transactional behaviour
against an in-memory store.
Run with: pytest tests/test_services.py -v
"""

import random
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from gigs.domain import ConversionStatus, FanTiers, GigStatus
from gigs.domain.errors import (
    BandNotFoundError,
    GigNotConvertibleError,
    GigNotFoundError,
    GigNotOpenForSalesError,
    InvalidIdError,
    PriceAdjustmentNotAllowedError,
    VenueNotFoundError,
)
from gigs.services import FanConversionService, TicketSalesService

TODAY = date(2026, 3, 1)
NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
MISSING_ID = "00000000-0000-0000-0000-000000000000"


@pytest.fixture
def world(store):
    manchester = store.add_city("Manchester", "UK")
    leeds = store.add_city("Leeds", "UK")
    liverpool = store.add_city("Liverpool", "UK")
    store.add_city("Paris", "FR")
    venue = store.add_venue(1000, city=manchester, location="Manchester")
    band = store.add_band(fame=3000, total_fans=0)
    gig = store.add_gig(band, venue, TODAY - timedelta(days=1), status=GigStatus.COMPLETED)
    return {
        "store": store,
        "city": manchester,
        "siblings": [leeds, liverpool],
        "venue": venue,
        "band": band,
        "gig": gig,
    }


@pytest.fixture
def conversions(store):
    return FanConversionService(store, now=lambda: NOW)


@pytest.fixture
def sales(store):
    return TicketSalesService(store, now=lambda: NOW)


def _process(service, gig, attendance=500, rating=20, grade="A"):
    return service.process_gig(str(gig.id.value), attendance, rating, grade)


class TestFanConversionService:
    """Tests for FanConversionService."""

    def test_invalid_id_raises_error(self, conversions):
        with pytest.raises(InvalidIdError):
            conversions.process_gig("not-a-uuid", 100, 20, "A")

    def test_gig_not_found_raises_error(self, conversions):
        with pytest.raises(GigNotFoundError):
            conversions.process_gig(MISSING_ID, 100, 20, "A")

    def test_missing_venue_raises_error(self, world, conversions):
        del world["store"].venues[world["venue"].id]
        with pytest.raises(VenueNotFoundError):
            _process(conversions, world["gig"])
        assert world["store"].conversions == {}

    def test_first_gig_creates_city_ledger(self, world, conversions):
        store, band, city = world["store"], world["band"], world["city"]

        outcome = _process(conversions, world["gig"])

        assert outcome.status is ConversionStatus.PROCESSED
        result = outcome.result
        assert result.new_fans_gained == 135
        assert result.fans == FanTiers(casual=96, dedicated=33, superfans=6)
        assert result.repeat_attendees == 0
        assert result.conversion_rate_percent == pytest.approx(27.0)
        assert result.city_name == "Manchester"
        assert result.country_spillover == 13

        ledger = store.city_fans[(band.id, city.id)]
        assert ledger.total_fans == 135
        assert ledger.fans == FanTiers(casual=96, dedicated=33, superfans=6)
        assert ledger.gigs_in_city == 1
        assert ledger.last_gig_date == NOW
        assert ledger.avg_satisfaction == 80
        assert ledger.city_fame == 150

    def test_spillover_reaches_other_cities_in_country(self, world, conversions):
        store, band = world["store"], world["band"]

        _process(conversions, world["gig"])

        for sibling in world["siblings"]:
            ledger = store.city_fans[(band.id, sibling.id)]
            assert ledger.total_fans == 6
            assert ledger.fans == FanTiers(casual=6)
            assert ledger.gigs_in_city == 0
        cities_with_fans = {city_id for (_, city_id) in store.city_fans}
        assert cities_with_fans == {world["city"].id} | {city.id for city in world["siblings"]}

        country = store.country_fans[(band.id, "UK")]
        assert country.total_fans == 148
        assert country.fans == FanTiers(casual=109, dedicated=33, superfans=6)
        assert country.fame == 30

    def test_country_ledger_counts_gig_without_spillover(self, world, conversions):
        store, band = world["store"], world["band"]

        result = _process(conversions, world["gig"], attendance=20).result

        assert (result.new_fans_gained, result.country_spillover) == (5, 0)
        assert store.country_fans[(band.id, "UK")].total_fans == 5
        assert all((band.id, sibling.id) not in store.city_fans for sibling in world["siblings"])

    def test_band_aggregate_includes_spillover(self, world, conversions):
        store, band = world["store"], world["band"]

        _process(conversions, world["gig"])

        updated = store.bands[band.id]
        assert updated.total_fans == 148
        assert updated.fans == FanTiers(casual=109, dedicated=33, superfans=6)
        assert updated.global_fame == 3
        assert len(store.fame_history) == 1

    def test_second_call_is_already_processed(self, world, conversions):
        store, band = world["store"], world["band"]
        first = _process(conversions, world["gig"])
        band_after_first = store.bands[band.id]
        ledgers_after_first = dict(store.city_fans)

        second = _process(conversions, world["gig"], attendance=900, rating=25, grade="S+")

        assert second.status is ConversionStatus.ALREADY_PROCESSED
        assert not second.created
        assert second.result == first.result
        assert store.bands[band.id] == band_after_first
        assert store.city_fans == ledgers_after_first
        assert len(store.fame_history) == 1

    def test_failed_write_leaves_nothing_behind(self, world, conversions):
        store, band = world["store"], world["band"]
        store.fail_on.add("save_band")

        with pytest.raises(RuntimeError):
            _process(conversions, world["gig"])

        assert store.conversions == {}
        assert store.city_fans == {}
        assert store.country_fans == {}
        assert store.bands[band.id] == band

        store.fail_on.clear()
        assert _process(conversions, world["gig"]).status is ConversionStatus.PROCESSED

    def test_cancelled_gig_is_rejected(self, world, conversions):
        store, band = world["store"], world["band"]
        gig = store.add_gig(band, world["venue"], TODAY, status=GigStatus.CANCELLED)

        with pytest.raises(GigNotConvertibleError):
            _process(conversions, gig)

        assert store.conversions == {}
        assert store.city_fans == {}
        assert store.bands[band.id] == band
        assert store.gigs[gig.id].status is GigStatus.CANCELLED

    def test_conversion_completes_scheduled_gig(self, world, conversions, sales):
        store = world["store"]
        gig = store.add_gig(world["band"], world["venue"], TODAY)

        assert _process(conversions, gig).status is ConversionStatus.PROCESSED

        assert store.gigs[gig.id].status is GigStatus.COMPLETED
        with pytest.raises(GigNotOpenForSalesError):
            sales.simulate_sales_day(str(gig.id.value), random.Random(0), TODAY)
        assert gig.id not in store.list_open_gig_ids(TODAY)

    def test_later_gig_in_same_city_merges_ledger(self, world, conversions):
        store, band, city = world["store"], world["band"], world["city"]
        _process(conversions, world["gig"])
        encore = store.add_gig(band, world["venue"], TODAY, status=GigStatus.COMPLETED)

        result = _process(conversions, encore).result

        ledger = store.city_fans[(band.id, city.id)]
        assert ledger.gigs_in_city == 2
        assert result.repeat_attendees == 135
        assert ledger.total_fans == 135 + result.new_fans_gained
        assert ledger.fans == FanTiers(casual=96, dedicated=33, superfans=6) + result.fans

    def test_venue_without_city_uses_location(self, store, conversions):
        venue = store.add_venue(300, location="A Field Somewhere")
        band = store.add_band(fame=3000)
        gig = store.add_gig(band, venue, TODAY)

        result = _process(conversions, gig, attendance=200).result

        assert result.city_name == "A Field Somewhere"
        assert result.country == "Unknown"
        assert result.country_spillover == 0
        assert store.city_fans == {}
        assert store.bands[band.id].total_fans == result.new_fans_gained

    def test_demographic_fans_are_recorded(self, world, conversions):
        from gigs.domain import AgeDemographic

        store = world["store"]
        store.demographics = [
            AgeDemographic(id="young", name="18-24", genre_preferences={"rock": 3.0}),
            AgeDemographic(id="old", name="35+", genre_preferences={"rock": 1.0}),
        ]

        result = _process(conversions, world["gig"]).result

        assert result.demographic_breakdown == {"18-24": 101, "35+": 33}
        assert store.demographic_fans[(world["band"].id, "young", world["city"].id)] == 101

    def test_list_city_fans_unknown_band(self, conversions):
        with pytest.raises(BandNotFoundError):
            conversions.list_city_fans(MISSING_ID)

    def test_list_city_fans_biggest_first(self, world, conversions):
        _process(conversions, world["gig"])
        ledgers = conversions.list_city_fans(str(world["band"].id.value))
        assert [ledger.city_name for ledger in ledgers] == ["Manchester", "Leeds", "Liverpool"]


@pytest.fixture
def booking(store):
    city = store.add_city("Manchester", "UK")
    venue = store.add_venue(1000, city=city)
    band = store.add_band(fame=2500, total_fans=3000)
    gig = store.add_gig(band, venue, TODAY + timedelta(days=30))
    return {"store": store, "venue": venue, "band": band, "gig": gig}


class TestTicketSalesService:
    """Tests for TicketSalesService."""

    def test_forecast_invalid_id_raises_error(self, sales):
        with pytest.raises(InvalidIdError):
            sales.forecast_for_gig("123", TODAY)

    def test_forecast_not_found_raises_error(self, sales):
        with pytest.raises(GigNotFoundError):
            sales.forecast_for_gig(MISSING_ID, TODAY)

    def test_forecast_for_booked_gig(self, booking, sales):
        forecast = sales.forecast_for_gig(str(booking["gig"].id.value), TODAY)
        assert forecast.daily_sale_rate == pytest.approx(0.1259, abs=1e-4)
        assert forecast.expected_total_sales == 1000

    def test_forecast_defaults_lead_time(self, booking, sales):
        store = booking["store"]
        gig = store.add_gig(booking["band"], booking["venue"], TODAY + timedelta(days=30), days_booked=None)
        with_default = sales.forecast_for_gig(str(gig.id.value), TODAY)
        explicit = sales.forecast_for_gig(str(booking["gig"].id.value), TODAY)
        assert with_default == explicit

    def test_sales_day_adds_to_tickets_sold(self, booking, sales):
        store, gig = booking["store"], booking["gig"]

        tick = sales.simulate_sales_day(str(gig.id.value), random.Random(3), TODAY)

        assert tick.tickets_sold_today > 0
        assert store.gigs[gig.id].tickets_sold == tick.total_sold == tick.tickets_sold_today
        assert tick.remaining == 1000 - tick.total_sold

    def test_sales_day_stops_at_capacity(self, booking, sales):
        store, gig = booking["store"], booking["gig"]
        store.update_ticket_sales(gig.id, 1000)

        tick = sales.simulate_sales_day(str(gig.id.value), random.Random(3), TODAY)

        assert tick.tickets_sold_today == 0
        assert tick.sold_out

    def test_sales_day_rejects_cancelled_gig(self, booking, sales):
        store = booking["store"]
        gig = store.add_gig(
            booking["band"], booking["venue"], TODAY + timedelta(days=3), status=GigStatus.CANCELLED
        )
        with pytest.raises(GigNotOpenForSalesError):
            sales.simulate_sales_day(str(gig.id.value), random.Random(0), TODAY)

    def test_sales_day_rejects_past_gig(self, booking, sales):
        gig = booking["store"].add_gig(booking["band"], booking["venue"], TODAY - timedelta(days=1))
        with pytest.raises(GigNotOpenForSalesError):
            sales.simulate_sales_day(str(gig.id.value), random.Random(0), TODAY)

    def test_simulate_all_upcoming_skips_closed_gigs(self, booking, sales):
        store, band, venue = booking["store"], booking["band"], booking["venue"]
        tonight = store.add_gig(band, venue, TODAY)
        store.add_gig(band, venue, TODAY - timedelta(days=2))
        store.add_gig(band, venue, TODAY + timedelta(days=5), status=GigStatus.CANCELLED)

        ticks = sales.simulate_all_upcoming(random.Random(9), TODAY)

        assert [tick.gig_id for tick in ticks] == [tonight.id, booking["gig"].id]

    def test_simulate_all_upcoming_continues_past_failed_gig(self, booking, sales):
        store, venue = booking["store"], booking["venue"]
        orphan_band = store.add_band(fame=100)
        orphan = store.add_gig(orphan_band, venue, TODAY)
        del store.bands[orphan_band.id]

        ticks = sales.simulate_all_upcoming(random.Random(9), TODAY)

        assert [tick.gig_id for tick in ticks] == [booking["gig"].id]
        assert store.gigs[orphan.id].tickets_sold == 0
        assert store.gigs[booking["gig"].id].tickets_sold == ticks[0].total_sold

    def test_adjust_price_once(self, booking, sales):
        store, gig = booking["store"], booking["gig"]

        updated = sales.adjust_ticket_price(str(gig.id.value), Decimal("15.00"), TODAY)

        assert updated.ticket_price.amount == Decimal("15.00")
        assert store.gigs[gig.id].price_adjusted_at == NOW
        with pytest.raises(PriceAdjustmentNotAllowedError):
            sales.adjust_ticket_price(str(gig.id.value), Decimal("12.00"), TODAY)

    def test_adjust_price_too_close_to_show(self, booking, sales):
        gig = booking["gig"]
        with pytest.raises(PriceAdjustmentNotAllowedError):
            sales.adjust_ticket_price(str(gig.id.value), Decimal("15.00"), gig.scheduled_date - timedelta(days=6))

    def test_adjust_price_when_selling_well(self, booking, sales):
        store, gig = booking["store"], booking["gig"]
        store.update_ticket_sales(gig.id, 600)
        with pytest.raises(PriceAdjustmentNotAllowedError):
            sales.adjust_ticket_price(str(gig.id.value), Decimal("15.00"), TODAY)
