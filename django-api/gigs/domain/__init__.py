from gigs.domain.models import (
    AgeDemographic,
    Band,
    City,
    CityFanLedger,
    ConversionOutcome,
    ConversionStatus,
    CountryFanLedger,
    FanConversion,
    FanConversionResult,
    FanTiers,
    Gig,
    GigStatus,
    SalesMomentum,
    SalesTick,
    TicketSalesForecast,
    Venue,
)
from gigs.domain.value_objects import BandId, Capacity, CityId, GigId, Money, VenueId

__all__ = [
    "AgeDemographic",
    "Band",
    "City",
    "CityFanLedger",
    "ConversionOutcome",
    "ConversionStatus",
    "CountryFanLedger",
    "FanConversion",
    "FanConversionResult",
    "FanTiers",
    "Gig",
    "GigStatus",
    "SalesMomentum",
    "SalesTick",
    "TicketSalesForecast",
    "Venue",
    "BandId",
    "CityId",
    "GigId",
    "VenueId",
    "Money",
    "Capacity",
]
