"""Pytest configuration and shared fixtures."""

import copy
import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from gigs.domain import (
    Band,
    BandId,
    Capacity,
    City,
    CityFanLedger,
    CityId,
    FanTiers,
    Gig,
    GigId,
    GigStatus,
    Money,
    Venue,
    VenueId,
)
from gigs.stores.interfaces import GigStore


class _Atomic:
    """Snapshot the store on enter, restore it if the block raises."""

    def __init__(self, store: "InMemoryGigStore") -> None:
        self._store = store

    def __enter__(self) -> None:
        self._snapshot = copy.deepcopy(self._store._state())

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self._store._restore(self._snapshot)
        return False


class InMemoryGigStore(GigStore):
    """Dict-backed GigStore for service tests.

    Method names listed in ``fail_on`` raise RuntimeError when called.
    """

    def __init__(self) -> None:
        self.gigs = {}
        self.venues = {}
        self.cities = {}
        self.bands = {}
        self.city_fans = {}
        self.country_fans = {}
        self.demographics = []
        self.demographic_fans = {}
        self.fame_history = []
        self.conversions = {}
        self.fail_on = set()

    def _state(self) -> dict:
        return {
            name: getattr(self, name)
            for name in (
                "gigs",
                "bands",
                "city_fans",
                "country_fans",
                "demographic_fans",
                "fame_history",
                "conversions",
            )
        }

    def _restore(self, snapshot: dict) -> None:
        for name, value in snapshot.items():
            setattr(self, name, value)

    def _check(self, name: str) -> None:
        if name in self.fail_on:
            raise RuntimeError(f"{name} failed")

    # seeding helpers

    def add_city(self, name: str, country: str) -> City:
        city = City(id=CityId(uuid.uuid4()), name=name, country=country)
        self.cities[city.id] = city
        return city

    def add_venue(self, capacity: int, city: City | None = None, location: str = "") -> Venue:
        venue = Venue(
            id=VenueId(uuid.uuid4()),
            name="The Venue",
            location=location,
            capacity=Capacity(capacity),
            city_id=city.id if city else None,
        )
        self.venues[venue.id] = venue
        return venue

    def add_band(self, fame: int = 0, total_fans: int = 0, genre: str = "rock") -> Band:
        band = Band(
            id=BandId(uuid.uuid4()),
            name="The Band",
            genre=genre,
            fame=fame,
            global_fame=0,
            total_fans=total_fans,
            fans=FanTiers(casual=total_fans),
        )
        self.bands[band.id] = band
        return band

    def add_gig(self, band: Band, venue: Venue, scheduled_date: date, **overrides) -> Gig:
        fields = dict(
            id=GigId(uuid.uuid4()),
            band_id=band.id,
            venue_id=venue.id,
            scheduled_date=scheduled_date,
            ticket_price=Money(Decimal("20.00")),
            tickets_sold=0,
            status=GigStatus.SCHEDULED,
            days_booked=14,
        )
        fields.update(overrides)
        gig = Gig(**fields)
        self.gigs[gig.id] = gig
        return gig

    # GigStore

    def atomic(self):
        return _Atomic(self)

    def get_gig(self, gig_id, for_update=False):
        return self.gigs.get(gig_id)

    def list_open_gig_ids(self, today):
        open_gigs = [
            gig
            for gig in self.gigs.values()
            if gig.status is GigStatus.SCHEDULED and gig.scheduled_date >= today
        ]
        return [gig.id for gig in sorted(open_gigs, key=lambda gig: gig.scheduled_date)]

    def get_venue(self, venue_id):
        return self.venues.get(venue_id)

    def get_city(self, city_id):
        return self.cities.get(city_id)

    def list_cities_in_country(self, country, exclude, limit):
        matches = [
            city for city in self.cities.values() if city.country == country and city.id != exclude
        ]
        return matches[:limit]

    def get_band(self, band_id, for_update=False):
        return self.bands.get(band_id)

    def get_city_fans(self, band_id, city_id, for_update=False):
        return self.city_fans.get((band_id, city_id))

    def list_city_fans(self, band_id):
        rows = [ledger for (bid, _), ledger in self.city_fans.items() if bid == band_id]
        return sorted(rows, key=lambda ledger: (-ledger.total_fans, ledger.city_name))

    def get_country_fans(self, band_id, country, for_update=False):
        return self.country_fans.get((band_id, country))

    def list_age_demographics(self):
        return list(self.demographics)

    def get_fan_conversion(self, gig_id):
        return self.conversions.get(gig_id)

    def update_ticket_sales(self, gig_id, tickets_sold):
        self._check("update_ticket_sales")
        self.gigs[gig_id] = replace(self.gigs[gig_id], tickets_sold=tickets_sold)

    def update_ticket_price(self, gig_id, price, adjusted_at):
        self.gigs[gig_id] = replace(
            self.gigs[gig_id], ticket_price=price, price_adjusted_at=adjusted_at
        )

    def update_gig_status(self, gig_id, status):
        self._check("update_gig_status")
        self.gigs[gig_id] = replace(self.gigs[gig_id], status=status)

    def save_band(self, band):
        self._check("save_band")
        self.bands[band.id] = band

    def save_city_fans(self, ledger: CityFanLedger):
        self._check("save_city_fans")
        self.city_fans[(ledger.band_id, ledger.city_id)] = ledger

    def save_country_fans(self, ledger):
        self.country_fans[(ledger.band_id, ledger.country)] = ledger

    def add_demographic_fans(self, band_id, demographic_id, city_id, country, fan_count, engagement_rate):
        key = (band_id, demographic_id, city_id)
        self.demographic_fans[key] = self.demographic_fans.get(key, 0) + fan_count

    def record_fame_change(self, band_id, city_id, country, fame_value, fame_change):
        self.fame_history.append((band_id, city_id, country, fame_value, fame_change))

    def insert_fan_conversion(self, result):
        self._check("insert_fan_conversion")
        if result.gig_id in self.conversions:
            return False
        self.conversions[result.gig_id] = result
        return True


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def store() -> InMemoryGigStore:
    return InMemoryGigStore()


@pytest.fixture
def db_world(db):
    """A band, a city with a sibling city, and a 1000-seat venue in the database."""
    from gigs import models

    city = models.City.objects.create(name="Manchester", country="UK")
    models.City.objects.create(name="Leeds", country="UK")
    venue = models.Venue.objects.create(
        name="Band on the Wall", location="Manchester", capacity=1000, city=city
    )
    band = models.Band.objects.create(
        name="The Ledgers", genre="rock", fame=2500, total_fans=3000, casual_fans=3000
    )
    return {"city": city, "venue": venue, "band": band}
