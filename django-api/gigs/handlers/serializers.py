"""Serializers for request validation and for rendering domain models."""

from rest_framework import serializers

from gigs.conf import get_setting


class TicketSalesForecastSerializer(serializers.Serializer):
    """Serializer for TicketSalesForecast domain model."""

    daily_sale_rate = serializers.FloatField()
    expected_total_sales = serializers.IntegerField()
    sellout_probability = serializers.IntegerField()
    sales_momentum = serializers.CharField(source="sales_momentum.value")


class SalesTickSerializer(serializers.Serializer):
    """Serializer for SalesTick domain model."""

    gig_id = serializers.UUIDField(source="gig_id.value")
    tickets_sold_today = serializers.IntegerField()
    total_sold = serializers.IntegerField()
    remaining = serializers.IntegerField()
    sold_out = serializers.BooleanField()


class SimulateSalesRequestSerializer(serializers.Serializer):
    seed = serializers.IntegerField(required=False)


class PriceAdjustmentRequestSerializer(serializers.Serializer):
    ticket_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=1)


class GigPriceSerializer(serializers.Serializer):
    gig_id = serializers.UUIDField(source="id.value")
    ticket_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, source="ticket_price.amount"
    )
    price_adjusted_at = serializers.DateTimeField()


class FanConversionRequestSerializer(serializers.Serializer):
    actual_attendance = serializers.IntegerField(min_value=0)
    overall_rating = serializers.FloatField(min_value=0)
    performance_grade = serializers.CharField(max_length=3)

    def validate_overall_rating(self, value: float) -> float:
        scale_max = get_setting("RATING_SCALE_MAX")
        if value > scale_max:
            raise serializers.ValidationError(f"Ensure this value is less than or equal to {scale_max}.")
        return value


class FanConversionResultSerializer(serializers.Serializer):
    """Serializer for FanConversionResult domain model."""

    gig_id = serializers.UUIDField(source="gig_id.value")
    band_id = serializers.UUIDField(source="band_id.value")
    attendance = serializers.IntegerField()
    new_fans_gained = serializers.IntegerField()
    casual_fans = serializers.IntegerField(source="fans.casual")
    dedicated_fans = serializers.IntegerField(source="fans.dedicated")
    superfans = serializers.IntegerField(source="fans.superfans")
    repeat_attendees = serializers.IntegerField()
    conversion_rate_percent = serializers.FloatField()
    city_name = serializers.CharField()
    country = serializers.CharField()
    country_spillover = serializers.IntegerField()
    demographic_breakdown = serializers.DictField(child=serializers.IntegerField())


class CityFanLedgerSerializer(serializers.Serializer):
    """Serializer for CityFanLedger domain model."""

    city_id = serializers.UUIDField(source="city_id.value")
    city_name = serializers.CharField()
    country = serializers.CharField()
    total_fans = serializers.IntegerField()
    casual_fans = serializers.IntegerField(source="fans.casual")
    dedicated_fans = serializers.IntegerField(source="fans.dedicated")
    superfans = serializers.IntegerField(source="fans.superfans")
    gigs_in_city = serializers.IntegerField()
    last_gig_date = serializers.DateTimeField(allow_null=True)
    city_fame = serializers.IntegerField()
