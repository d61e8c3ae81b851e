"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import random

from django.core.cache import cache
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from gigs.cache_keys import city_fans_key
from gigs.conf import get_setting
from gigs.domain import BandId
from gigs.domain.errors import DomainError, ErrorCode, InvalidIdError
from gigs.handlers.serializers import (
    CityFanLedgerSerializer,
    FanConversionRequestSerializer,
    FanConversionResultSerializer,
    GigPriceSerializer,
    PriceAdjustmentRequestSerializer,
    SalesTickSerializer,
    SimulateSalesRequestSerializer,
    TicketSalesForecastSerializer,
)
from gigs.services import FanConversionService, TicketSalesService
from gigs.stores import DjangoGigStore

ERROR_STATUS = {
    ErrorCode.INVALID_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.GIG_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.VENUE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.BAND_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.GIG_NOT_OPEN_FOR_SALES: status.HTTP_409_CONFLICT,
    ErrorCode.GIG_NOT_CONVERTIBLE: status.HTTP_409_CONFLICT,
    ErrorCode.PRICE_ADJUSTMENT_NOT_ALLOWED: status.HTTP_409_CONFLICT,
}


def error_response(error: DomainError) -> Response:
    return Response(
        {"code": error.code.value, "message": error.message},
        status=ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


def ticket_sales_service() -> TicketSalesService:
    return TicketSalesService(DjangoGigStore())


def fan_conversion_service() -> FanConversionService:
    return FanConversionService(DjangoGigStore())


class GigForecastView(APIView):
    """Handler for GET /api/gigs/{gig_id}/forecast"""

    def get(self, request: Request, gig_id: str) -> Response:
        try:
            forecast = ticket_sales_service().forecast_for_gig(gig_id)
        except DomainError as error:
            return error_response(error)
        return Response(TicketSalesForecastSerializer(forecast).data)


class GigSalesSimulationView(APIView):
    """Handler for POST /api/gigs/{gig_id}/sales/simulate"""

    def post(self, request: Request, gig_id: str) -> Response:
        payload = SimulateSalesRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        rng = random.Random(payload.validated_data.get("seed"))
        try:
            tick = ticket_sales_service().simulate_sales_day(gig_id, rng)
        except DomainError as error:
            return error_response(error)
        return Response(SalesTickSerializer(tick).data)


class GigPriceView(APIView):
    """Handler for POST /api/gigs/{gig_id}/price"""

    def post(self, request: Request, gig_id: str) -> Response:
        payload = PriceAdjustmentRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        try:
            gig = ticket_sales_service().adjust_ticket_price(
                gig_id, payload.validated_data["ticket_price"]
            )
        except DomainError as error:
            return error_response(error)
        return Response(GigPriceSerializer(gig).data)


class GigFanConversionView(APIView):
    """Handler for GET and POST /api/gigs/{gig_id}/fan-conversion"""

    def get(self, request: Request, gig_id: str) -> Response:
        try:
            result = fan_conversion_service().get_conversion(gig_id)
        except DomainError as error:
            return error_response(error)
        if result is None:
            return Response(
                {"code": ErrorCode.GIG_NOT_FOUND.value, "message": "Gig has no fan conversion"},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(FanConversionResultSerializer(result).data)

    def post(self, request: Request, gig_id: str) -> Response:
        payload = FanConversionRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        try:
            outcome = fan_conversion_service().process_gig(gig_id, **payload.validated_data)
        except DomainError as error:
            return error_response(error)

        data = FanConversionResultSerializer(outcome.result).data
        data["status"] = outcome.status.value
        return Response(data, status=status.HTTP_201_CREATED if outcome.created else status.HTTP_200_OK)


class BandCityFansView(APIView):
    """Handler for GET /api/bands/{band_id}/city-fans"""

    def get(self, request: Request, band_id: str) -> Response:
        try:
            key = city_fans_key(BandId.from_string(band_id).value)
        except ValueError:
            return error_response(InvalidIdError("band"))

        data = cache.get(key)
        if data is not None:
            return Response(data)

        try:
            ledgers = fan_conversion_service().list_city_fans(band_id)
        except DomainError as error:
            return error_response(error)

        data = CityFanLedgerSerializer(ledgers, many=True).data
        cache.set(key, data, get_setting("CITY_FANS_CACHE_TIMEOUT"))
        return Response(data)
