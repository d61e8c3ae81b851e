"""Domain models representing persisted state and calculator results.

These are pure domain objects with no API input rules.
Django ORM models are in gigs/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from gigs.domain.value_objects import BandId, Capacity, CityId, GigId, Money, VenueId


class GigStatus(Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SalesMomentum(Enum):
    """Qualitative label for how fast tickets move."""

    SLOW = "slow"
    STEADY = "steady"
    FAST = "fast"
    SELLOUT = "sellout"


class ConversionStatus(Enum):
    PROCESSED = "processed"
    ALREADY_PROCESSED = "already_processed"


@dataclass(frozen=True)
class FanTiers:
    """Fan counts split by engagement level."""

    casual: int = 0
    dedicated: int = 0
    superfans: int = 0

    @property
    def total(self) -> int:
        return self.casual + self.dedicated + self.superfans

    def __add__(self, other: "FanTiers") -> "FanTiers":
        return FanTiers(
            casual=self.casual + other.casual,
            dedicated=self.dedicated + other.dedicated,
            superfans=self.superfans + other.superfans,
        )


@dataclass(frozen=True)
class City:
    id: CityId
    name: str
    country: str


@dataclass(frozen=True)
class Venue:
    id: VenueId
    name: str
    location: str
    capacity: Capacity
    city_id: CityId | None


@dataclass(frozen=True)
class Band:
    """Band aggregate. ``total_fans`` is tracked alongside the tiers."""

    id: BandId
    name: str
    genre: str
    fame: int
    global_fame: int
    total_fans: int
    fans: FanTiers


@dataclass(frozen=True)
class Gig:
    id: GigId
    band_id: BandId
    venue_id: VenueId
    scheduled_date: date
    ticket_price: Money
    tickets_sold: int
    status: GigStatus
    days_booked: int | None = None
    price_adjusted_at: datetime | None = None


@dataclass(frozen=True)
class CityFanLedger:
    """A band's accumulated fans in one city."""

    band_id: BandId
    city_id: CityId
    city_name: str
    country: str
    total_fans: int = 0
    fans: FanTiers = FanTiers()
    gigs_in_city: int = 0
    last_gig_date: datetime | None = None
    avg_satisfaction: float = 0.0
    city_fame: int = 0


@dataclass(frozen=True)
class CountryFanLedger:
    band_id: BandId
    country: str
    total_fans: int = 0
    fans: FanTiers = FanTiers()
    fame: int = 0
    last_activity_date: datetime | None = None


@dataclass(frozen=True)
class AgeDemographic:
    id: str
    name: str
    genre_preferences: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class TicketSalesForecast:
    """Booking-time projection of how a gig will sell."""

    daily_sale_rate: float
    expected_total_sales: int
    sellout_probability: int
    sales_momentum: SalesMomentum


@dataclass(frozen=True)
class SalesTick:
    """Outcome of one simulated day of ticket sales."""

    gig_id: GigId
    tickets_sold_today: int
    total_sold: int
    remaining: int

    @property
    def sold_out(self) -> bool:
        return self.remaining <= 0


@dataclass(frozen=True)
class FanConversion:
    """Pure result of converting a gig's attendance into fans."""

    new_fans_gained: int
    fans: FanTiers
    repeat_attendees: int
    conversion_rate: float
    gigs_in_city: int


@dataclass(frozen=True)
class FanConversionResult:
    """What a processed gig did to the band's fan base."""

    gig_id: GigId
    band_id: BandId
    attendance: int
    new_fans_gained: int
    fans: FanTiers
    repeat_attendees: int
    conversion_rate_percent: float
    city_name: str
    country: str
    country_spillover: int = 0
    demographic_breakdown: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ConversionOutcome:
    status: ConversionStatus
    result: FanConversionResult

    @property
    def created(self) -> bool:
        return self.status is ConversionStatus.PROCESSED
