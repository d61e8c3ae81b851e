"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import date, datetime

from gigs.domain import (
    AgeDemographic,
    Band,
    BandId,
    City,
    CityFanLedger,
    CityId,
    CountryFanLedger,
    FanConversionResult,
    Gig,
    GigId,
    GigStatus,
    Money,
    Venue,
    VenueId,
)


class GigStore(ABC):
    """Interface for gig, venue, band and fan-ledger persistence."""

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager wrapping writes in one transaction."""
        ...

    @abstractmethod
    def get_gig(self, gig_id: GigId, for_update: bool = False) -> Gig | None:
        """Return a gig by ID, or None. ``for_update`` locks the row."""
        ...

    @abstractmethod
    def list_open_gig_ids(self, today: date) -> list[GigId]:
        """Return scheduled gigs dated today or later, soonest first."""
        ...

    @abstractmethod
    def get_venue(self, venue_id: VenueId) -> Venue | None:
        ...

    @abstractmethod
    def get_city(self, city_id: CityId) -> City | None:
        ...

    @abstractmethod
    def list_cities_in_country(
        self, country: str, exclude: CityId | None, limit: int
    ) -> list[City]:
        """Return up to ``limit`` cities in ``country`` other than ``exclude``."""
        ...

    @abstractmethod
    def get_band(self, band_id: BandId, for_update: bool = False) -> Band | None:
        ...

    @abstractmethod
    def get_city_fans(
        self, band_id: BandId, city_id: CityId, for_update: bool = False
    ) -> CityFanLedger | None:
        ...

    @abstractmethod
    def list_city_fans(self, band_id: BandId) -> list[CityFanLedger]:
        """Return a band's city ledgers ordered by total fans descending."""
        ...

    @abstractmethod
    def get_country_fans(
        self, band_id: BandId, country: str, for_update: bool = False
    ) -> CountryFanLedger | None:
        ...

    @abstractmethod
    def list_age_demographics(self) -> list[AgeDemographic]:
        ...

    @abstractmethod
    def get_fan_conversion(self, gig_id: GigId) -> FanConversionResult | None:
        """Return the stored conversion for a gig, or None if not processed."""
        ...

    @abstractmethod
    def update_ticket_sales(self, gig_id: GigId, tickets_sold: int) -> None:
        ...

    @abstractmethod
    def update_ticket_price(self, gig_id: GigId, price: Money, adjusted_at: datetime) -> None:
        ...

    @abstractmethod
    def update_gig_status(self, gig_id: GigId, status: GigStatus) -> None:
        ...

    @abstractmethod
    def save_band(self, band: Band) -> None:
        """Persist the band's fame and fan aggregate."""
        ...

    @abstractmethod
    def save_city_fans(self, ledger: CityFanLedger) -> None:
        """Insert or replace the ledger row keyed by (band, city)."""
        ...

    @abstractmethod
    def save_country_fans(self, ledger: CountryFanLedger) -> None:
        """Insert or replace the ledger row keyed by (band, country)."""
        ...

    @abstractmethod
    def add_demographic_fans(
        self,
        band_id: BandId,
        demographic_id: str,
        city_id: CityId | None,
        country: str,
        fan_count: int,
        engagement_rate: float,
    ) -> None:
        """Add ``fan_count`` to the (band, demographic, city) row."""
        ...

    @abstractmethod
    def record_fame_change(
        self,
        band_id: BandId,
        city_id: CityId | None,
        country: str,
        fame_value: int,
        fame_change: int,
    ) -> None:
        ...

    @abstractmethod
    def insert_fan_conversion(self, result: FanConversionResult) -> bool:
        """Insert the conversion record if none exists for the gig.

        Returns False when the gig already has a record.
        """
        ...
