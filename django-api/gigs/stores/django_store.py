"""Django ORM implementation of the GigStore."""

from contextlib import AbstractContextManager
from datetime import date, datetime

from django.db import transaction
from django.db.models import F

from gigs import models as orm
from gigs.domain import (
    AgeDemographic,
    Band,
    BandId,
    Capacity,
    City,
    CityFanLedger,
    CityId,
    CountryFanLedger,
    FanConversionResult,
    FanTiers,
    Gig,
    GigId,
    GigStatus,
    Money,
    Venue,
    VenueId,
)
from gigs.stores.interfaces import GigStore


def _tiers(row) -> FanTiers:
    return FanTiers(
        casual=row.casual_fans,
        dedicated=row.dedicated_fans,
        superfans=row.superfans,
    )


def _to_gig(row: orm.Gig) -> Gig:
    return Gig(
        id=GigId(row.id),
        band_id=BandId(row.band_id),
        venue_id=VenueId(row.venue_id),
        scheduled_date=row.scheduled_date,
        ticket_price=Money(row.ticket_price),
        tickets_sold=row.tickets_sold,
        status=GigStatus(row.status),
        days_booked=row.days_booked,
        price_adjusted_at=row.price_adjusted_at,
    )


def _to_city(row: orm.City) -> City:
    return City(id=CityId(row.id), name=row.name, country=row.country)


def _to_band(row: orm.Band) -> Band:
    return Band(
        id=BandId(row.id),
        name=row.name,
        genre=row.genre,
        fame=row.fame,
        global_fame=row.global_fame,
        total_fans=row.total_fans,
        fans=_tiers(row),
    )


def _to_city_fans(row: orm.BandCityFans) -> CityFanLedger:
    return CityFanLedger(
        band_id=BandId(row.band_id),
        city_id=CityId(row.city_id),
        city_name=row.city_name,
        country=row.country,
        total_fans=row.total_fans,
        fans=_tiers(row),
        gigs_in_city=row.gigs_in_city,
        last_gig_date=row.last_gig_date,
        avg_satisfaction=row.avg_satisfaction,
        city_fame=row.city_fame,
    )


def _to_fan_conversion(row: orm.GigFanConversion) -> FanConversionResult:
    snapshot = row.fan_demographics or {}
    return FanConversionResult(
        gig_id=GigId(row.gig_id),
        band_id=BandId(row.band_id),
        attendance=row.attendance_count,
        new_fans_gained=row.new_fans_gained,
        fans=FanTiers(
            casual=snapshot.get("casual", 0),
            dedicated=snapshot.get("dedicated", 0),
            superfans=row.superfans_converted,
        ),
        repeat_attendees=row.repeat_fans,
        conversion_rate_percent=row.conversion_rate,
        city_name=snapshot.get("city", ""),
        country=snapshot.get("country", ""),
        country_spillover=snapshot.get("spillover", 0),
        demographic_breakdown=snapshot.get("breakdown", {}),
    )


class DjangoGigStore(GigStore):
    """Relational gig store using Django ORM."""

    def atomic(self) -> AbstractContextManager:
        return transaction.atomic()

    def get_gig(self, gig_id: GigId, for_update: bool = False) -> Gig | None:
        queryset = orm.Gig.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        row = queryset.filter(id=gig_id.value).first()
        return _to_gig(row) if row else None

    def list_open_gig_ids(self, today: date) -> list[GigId]:
        ids = orm.Gig.objects.filter(
            status=orm.Gig.Status.SCHEDULED, scheduled_date__gte=today
        ).values_list("id", flat=True)
        return [GigId(value) for value in ids]

    def get_venue(self, venue_id: VenueId) -> Venue | None:
        row = orm.Venue.objects.filter(id=venue_id.value).first()
        if row is None:
            return None
        return Venue(
            id=VenueId(row.id),
            name=row.name,
            location=row.location,
            capacity=Capacity(row.capacity),
            city_id=CityId(row.city_id) if row.city_id else None,
        )

    def get_city(self, city_id: CityId) -> City | None:
        row = orm.City.objects.filter(id=city_id.value).first()
        return _to_city(row) if row else None

    def list_cities_in_country(
        self, country: str, exclude: CityId | None, limit: int
    ) -> list[City]:
        queryset = orm.City.objects.filter(country=country)
        if exclude is not None:
            queryset = queryset.exclude(id=exclude.value)
        return [_to_city(row) for row in queryset[:limit]]

    def get_band(self, band_id: BandId, for_update: bool = False) -> Band | None:
        queryset = orm.Band.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        row = queryset.filter(id=band_id.value).first()
        return _to_band(row) if row else None

    def get_city_fans(
        self, band_id: BandId, city_id: CityId, for_update: bool = False
    ) -> CityFanLedger | None:
        queryset = orm.BandCityFans.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        row = queryset.filter(band_id=band_id.value, city_id=city_id.value).first()
        return _to_city_fans(row) if row else None

    def list_city_fans(self, band_id: BandId) -> list[CityFanLedger]:
        rows = orm.BandCityFans.objects.filter(band_id=band_id.value).order_by(
            "-total_fans", "city_name"
        )
        return [_to_city_fans(row) for row in rows]

    def get_country_fans(
        self, band_id: BandId, country: str, for_update: bool = False
    ) -> CountryFanLedger | None:
        queryset = orm.BandCountryFans.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        row = queryset.filter(band_id=band_id.value, country=country).first()
        if row is None:
            return None
        return CountryFanLedger(
            band_id=BandId(row.band_id),
            country=row.country,
            total_fans=row.total_fans,
            fans=_tiers(row),
            fame=row.fame,
            last_activity_date=row.last_activity_date,
        )

    def list_age_demographics(self) -> list[AgeDemographic]:
        return [
            AgeDemographic(
                id=str(row.id),
                name=row.name,
                genre_preferences=row.genre_preferences or {},
            )
            for row in orm.AgeDemographic.objects.all()
        ]

    def get_fan_conversion(self, gig_id: GigId) -> FanConversionResult | None:
        row = orm.GigFanConversion.objects.filter(gig_id=gig_id.value).first()
        return _to_fan_conversion(row) if row else None

    def update_ticket_sales(self, gig_id: GigId, tickets_sold: int) -> None:
        orm.Gig.objects.filter(id=gig_id.value).update(tickets_sold=tickets_sold)

    def update_ticket_price(self, gig_id: GigId, price: Money, adjusted_at: datetime) -> None:
        orm.Gig.objects.filter(id=gig_id.value).update(
            ticket_price=price.amount, price_adjusted_at=adjusted_at
        )

    def update_gig_status(self, gig_id: GigId, status: GigStatus) -> None:
        orm.Gig.objects.filter(id=gig_id.value).update(status=status.value)

    def save_band(self, band: Band) -> None:
        orm.Band.objects.filter(id=band.id.value).update(
            fame=band.fame,
            global_fame=band.global_fame,
            total_fans=band.total_fans,
            casual_fans=band.fans.casual,
            dedicated_fans=band.fans.dedicated,
            superfans=band.fans.superfans,
        )

    def save_city_fans(self, ledger: CityFanLedger) -> None:
        orm.BandCityFans.objects.update_or_create(
            band_id=ledger.band_id.value,
            city_id=ledger.city_id.value,
            defaults={
                "city_name": ledger.city_name,
                "country": ledger.country,
                "total_fans": ledger.total_fans,
                "casual_fans": ledger.fans.casual,
                "dedicated_fans": ledger.fans.dedicated,
                "superfans": ledger.fans.superfans,
                "gigs_in_city": ledger.gigs_in_city,
                "last_gig_date": ledger.last_gig_date,
                "avg_satisfaction": ledger.avg_satisfaction,
                "city_fame": ledger.city_fame,
            },
        )

    def save_country_fans(self, ledger: CountryFanLedger) -> None:
        orm.BandCountryFans.objects.update_or_create(
            band_id=ledger.band_id.value,
            country=ledger.country,
            defaults={
                "total_fans": ledger.total_fans,
                "casual_fans": ledger.fans.casual,
                "dedicated_fans": ledger.fans.dedicated,
                "superfans": ledger.fans.superfans,
                "fame": ledger.fame,
                "last_activity_date": ledger.last_activity_date,
            },
        )

    def add_demographic_fans(
        self,
        band_id: BandId,
        demographic_id: str,
        city_id: CityId | None,
        country: str,
        fan_count: int,
        engagement_rate: float,
    ) -> None:
        row, created = orm.BandDemographicFans.objects.get_or_create(
            band_id=band_id.value,
            demographic_id=demographic_id,
            city_id=city_id.value if city_id else None,
            defaults={
                "country": country,
                "fan_count": fan_count,
                "engagement_rate": engagement_rate,
            },
        )
        if not created:
            orm.BandDemographicFans.objects.filter(id=row.id).update(
                fan_count=F("fan_count") + fan_count,
                engagement_rate=engagement_rate,
            )

    def record_fame_change(
        self,
        band_id: BandId,
        city_id: CityId | None,
        country: str,
        fame_value: int,
        fame_change: int,
    ) -> None:
        orm.BandFameHistory.objects.create(
            band_id=band_id.value,
            city_id=city_id.value if city_id else None,
            country=country,
            scope="city",
            fame_value=fame_value,
            fame_change=fame_change,
            event_type="gig",
        )

    def insert_fan_conversion(self, result: FanConversionResult) -> bool:
        _, created = orm.GigFanConversion.objects.get_or_create(
            gig_id=result.gig_id.value,
            defaults={
                "band_id": result.band_id.value,
                "attendance_count": result.attendance,
                "new_fans_gained": result.new_fans_gained,
                "repeat_fans": result.repeat_attendees,
                "superfans_converted": result.fans.superfans,
                "conversion_rate": result.conversion_rate_percent,
                "fan_demographics": {
                    "city": result.city_name,
                    "country": result.country,
                    "casual": result.fans.casual,
                    "dedicated": result.fans.dedicated,
                    "superfans": result.fans.superfans,
                    "spillover": result.country_spillover,
                    "breakdown": result.demographic_breakdown,
                },
            },
        )
        return created
