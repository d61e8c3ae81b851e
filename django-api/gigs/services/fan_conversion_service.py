"""Fan conversion service: turns a completed gig into fans and ledger updates.

Every write for one gig happens inside a single store transaction, and the
gig's conversion record is inserted before any ledger is touched. A gig that
already has a record is reported as already processed and nothing changes.
"""

import logging
import math
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from django.utils import timezone

from gigs.conf import get_setting
from gigs.domain import (
    Band,
    BandId,
    City,
    CityFanLedger,
    ConversionOutcome,
    ConversionStatus,
    CountryFanLedger,
    FanConversionResult,
    FanTiers,
    GigId,
    GigStatus,
)
from gigs.domain.errors import (
    BandNotFoundError,
    GigNotConvertibleError,
    GigNotFoundError,
    VenueNotFoundError,
)
from gigs.domain.fan_conversion import (
    MAX_SPILLOVER_CITIES,
    REFERENCE_RATING_SCALE,
    calculate_country_spillover,
    calculate_fan_conversion,
    distribute_demographics,
    normalize_rating,
    spillover_per_city,
)
from gigs.services.common import parse_id
from gigs.stores.interfaces import GigStore

logger = logging.getLogger(__name__)

UNKNOWN_CITY = "Unknown City"
UNKNOWN_COUNTRY = "Unknown"

CITY_FAME_SHARE = 0.05
COUNTRY_FAME_SHARE = 0.01
GLOBAL_FAME_SHARE = 0.001


class FanConversionService:
    """Service for post-gig fan conversion."""

    def __init__(self, store: GigStore, now: Callable[[], datetime] = timezone.now) -> None:
        self._store = store
        self._now = now

    def get_conversion(self, gig_id: str) -> FanConversionResult | None:
        return self._store.get_fan_conversion(parse_id(GigId, gig_id, "gig"))

    def list_city_fans(self, band_id: str) -> list[CityFanLedger]:
        """Return a band's per-city fan ledgers, biggest city first.

        Raises:
            InvalidIdError: If the band_id is not a valid UUID.
            BandNotFoundError: If the band does not exist.
        """
        bid = parse_id(BandId, band_id, "band")
        if self._store.get_band(bid) is None:
            raise BandNotFoundError(band_id)
        return self._store.list_city_fans(bid)

    def process_gig(
        self,
        gig_id: str,
        actual_attendance: int,
        overall_rating: float,
        performance_grade: str,
    ) -> ConversionOutcome:
        """Convert a gig's attendance into fans and update every ledger.

        Safe to call more than once for the same gig: later calls return
        ``ConversionStatus.ALREADY_PROCESSED`` with the stored result.
        The first call marks the gig completed, closing it to ticket sales.

        Raises:
            InvalidIdError: If the gig_id is not a valid UUID.
            GigNotFoundError: If the gig does not exist.
            VenueNotFoundError: If the gig's venue does not exist.
            BandNotFoundError: If the gig's band does not exist.
            GigNotConvertibleError: If the gig was cancelled.
        """
        gid = parse_id(GigId, gig_id, "gig")
        rating_scale = float(get_setting("RATING_SCALE_MAX"))

        with self._store.atomic():
            gig = self._store.get_gig(gid, for_update=True)
            if gig is None:
                raise GigNotFoundError(gig_id)

            existing = self._store.get_fan_conversion(gid)
            if existing is not None:
                logger.info("Gig %s already converted, skipping", gig_id)
                return ConversionOutcome(ConversionStatus.ALREADY_PROCESSED, existing)
            if gig.status is GigStatus.CANCELLED:
                logger.warning("Rejected fan conversion for cancelled gig %s", gig_id)
                raise GigNotConvertibleError()

            venue = self._store.get_venue(gig.venue_id)
            if venue is None:
                raise VenueNotFoundError(str(gig.venue_id.value))
            city = self._store.get_city(venue.city_id) if venue.city_id else None

            band = self._store.get_band(gig.band_id, for_update=True)
            if band is None:
                raise BandNotFoundError(str(gig.band_id.value))

            city_fans = None
            if city is not None:
                city_fans = self._store.get_city_fans(band.id, city.id, for_update=True)

            conversion = calculate_fan_conversion(
                actual_attendance=actual_attendance,
                overall_rating=overall_rating,
                performance_grade=performance_grade,
                band_fame=band.fame,
                existing_city_fans=city_fans.total_fans if city_fans else 0,
                prior_gigs_in_city=city_fans.gigs_in_city if city_fans else 0,
                rating_scale=rating_scale,
            )
            logger.debug("Gig %s conversion: %s", gig_id, conversion)

            city_name = city.name if city else (venue.location or UNKNOWN_CITY)
            country = city.country if city else UNKNOWN_COUNTRY
            demographics = self._store.list_age_demographics()
            breakdown = distribute_demographics(
                conversion.new_fans_gained, demographics, band.genre
            )
            spillover = 0
            if country != UNKNOWN_COUNTRY:
                spillover = calculate_country_spillover(conversion.new_fans_gained)

            result = FanConversionResult(
                gig_id=gid,
                band_id=band.id,
                attendance=max(0, actual_attendance),
                new_fans_gained=conversion.new_fans_gained,
                fans=conversion.fans,
                repeat_attendees=conversion.repeat_attendees,
                conversion_rate_percent=conversion.conversion_rate * 100,
                city_name=city_name,
                country=country,
                country_spillover=spillover,
                demographic_breakdown=breakdown,
            )
            if not self._store.insert_fan_conversion(result):
                logger.info("Gig %s converted concurrently, skipping", gig_id)
                return ConversionOutcome(
                    ConversionStatus.ALREADY_PROCESSED, self._store.get_fan_conversion(gid)
                )
            if gig.status is not GigStatus.COMPLETED:
                self._store.update_gig_status(gid, GigStatus.COMPLETED)

            now = self._now()
            rating = normalize_rating(overall_rating, rating_scale)

            if city is not None:
                merged = self._merge_city_fans(
                    city_fans, band, city, result, conversion.gigs_in_city, rating, now
                )
                self._store.save_city_fans(merged)
            if spillover:
                self._spread_spillover(band, city, country, spillover)
            if country != UNKNOWN_COUNTRY and (conversion.new_fans_gained or spillover):
                self._merge_country_fans(band, country, result, now)

            for demographic in demographics:
                fan_count = breakdown.get(demographic.name, 0)
                if fan_count > 0:
                    self._store.add_demographic_fans(
                        band_id=band.id,
                        demographic_id=demographic.id,
                        city_id=city.id if city else None,
                        country=country,
                        fan_count=fan_count,
                        engagement_rate=rating / REFERENCE_RATING_SCALE,
                    )

            self._store.save_band(self._merge_band(band, result))
            self._store.record_fame_change(
                band_id=band.id,
                city_id=city.id if city else None,
                country=country,
                fame_value=band.fame,
                fame_change=math.floor(band.fame * CITY_FAME_SHARE),
            )

        logger.info(
            "Gig %s in %s: %d attended, %d new fans (%d repeat, %.1f%% conversion)",
            gig_id,
            city_name,
            result.attendance,
            result.new_fans_gained,
            result.repeat_attendees,
            result.conversion_rate_percent,
        )
        return ConversionOutcome(ConversionStatus.PROCESSED, result)

    @staticmethod
    def _merge_city_fans(
        existing: CityFanLedger | None,
        band: Band,
        city: City,
        result: FanConversionResult,
        gigs_in_city: int,
        rating: float,
        now: datetime,
    ) -> CityFanLedger:
        existing = existing or CityFanLedger(
            band_id=band.id, city_id=city.id, city_name=city.name, country=city.country
        )
        return replace(
            existing,
            city_name=city.name,
            country=city.country,
            total_fans=existing.total_fans + result.new_fans_gained,
            fans=existing.fans + result.fans,
            gigs_in_city=gigs_in_city,
            last_gig_date=now,
            avg_satisfaction=rating * 4,
            city_fame=math.floor(band.fame * CITY_FAME_SHARE),
        )

    def _spread_spillover(self, band: Band, city: City | None, country: str, spillover: int) -> None:
        others = self._store.list_cities_in_country(
            country, exclude=city.id if city else None, limit=MAX_SPILLOVER_CITIES
        )
        per_city = spillover_per_city(spillover, len(others))
        if per_city <= 0:
            return
        for other in others:
            ledger = self._store.get_city_fans(band.id, other.id, for_update=True)
            ledger = ledger or CityFanLedger(
                band_id=band.id, city_id=other.id, city_name=other.name, country=country
            )
            self._store.save_city_fans(
                replace(
                    ledger,
                    total_fans=ledger.total_fans + per_city,
                    fans=ledger.fans + FanTiers(casual=per_city),
                )
            )
        logger.debug("Spread %d spillover fans over %d cities in %s", spillover, len(others), country)

    def _merge_country_fans(
        self, band: Band, country: str, result: FanConversionResult, now: datetime
    ) -> None:
        existing = self._store.get_country_fans(band.id, country, for_update=True)
        existing = existing or CountryFanLedger(band_id=band.id, country=country)
        self._store.save_country_fans(
            replace(
                existing,
                total_fans=existing.total_fans + result.new_fans_gained + result.country_spillover,
                fans=existing.fans + result.fans + FanTiers(casual=result.country_spillover),
                fame=existing.fame + math.floor(band.fame * COUNTRY_FAME_SHARE),
                last_activity_date=now,
            )
        )

    @staticmethod
    def _merge_band(band: Band, result: FanConversionResult) -> Band:
        return replace(
            band,
            total_fans=band.total_fans + result.new_fans_gained + result.country_spillover,
            fans=band.fans + result.fans + FanTiers(casual=result.country_spillover),
            global_fame=band.global_fame + math.floor(band.fame * GLOBAL_FAME_SHARE),
        )
