"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in gigs/domain/.
"""

import uuid

from django.db import models


class City(models.Model):
    """Persistence model for cities."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    country = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "cities"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["country"], name="gigs_city_country_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name}, {self.country}"


class Venue(models.Model):
    """Persistence model for venues."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, blank=True)
    capacity = models.PositiveIntegerField()
    city = models.ForeignKey(
        City, on_delete=models.SET_NULL, null=True, blank=True, related_name="venues"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.name


class Band(models.Model):
    """Persistence model for the band aggregate."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    genre = models.CharField(max_length=100, blank=True)
    fame = models.PositiveIntegerField(default=0)
    global_fame = models.PositiveIntegerField(default=0)
    total_fans = models.PositiveIntegerField(default=0)
    casual_fans = models.PositiveIntegerField(default=0)
    dedicated_fans = models.PositiveIntegerField(default=0)
    superfans = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.name


class Gig(models.Model):
    """Persistence model for a booked gig."""

    class Status(models.TextChoices):
        SCHEDULED = "scheduled"
        COMPLETED = "completed"
        CANCELLED = "cancelled"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    band = models.ForeignKey(Band, on_delete=models.CASCADE, related_name="gigs")
    venue = models.ForeignKey(Venue, on_delete=models.PROTECT, related_name="gigs")
    scheduled_date = models.DateField()
    ticket_price = models.DecimalField(max_digits=10, decimal_places=2, default=20)
    tickets_sold = models.PositiveIntegerField(default=0)
    days_booked = models.PositiveIntegerField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.SCHEDULED)
    price_adjusted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["scheduled_date"]
        indexes = [
            models.Index(fields=["status", "scheduled_date"], name="gigs_gig_status_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.band.name} @ {self.venue.name} on {self.scheduled_date}"


class BandCityFans(models.Model):
    """Per-city fan ledger for a band."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    band = models.ForeignKey(Band, on_delete=models.CASCADE, related_name="city_fans")
    city = models.ForeignKey(City, on_delete=models.CASCADE, related_name="band_fans")
    city_name = models.CharField(max_length=255)
    country = models.CharField(max_length=255, blank=True)
    total_fans = models.PositiveIntegerField(default=0)
    casual_fans = models.PositiveIntegerField(default=0)
    dedicated_fans = models.PositiveIntegerField(default=0)
    superfans = models.PositiveIntegerField(default=0)
    gigs_in_city = models.PositiveIntegerField(default=0)
    last_gig_date = models.DateTimeField(null=True, blank=True)
    avg_satisfaction = models.FloatField(default=0)
    city_fame = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "band city fans"
        ordering = ["-total_fans"]
        constraints = [
            models.UniqueConstraint(fields=["band", "city"], name="unique_band_city_fans"),
        ]

    def __str__(self) -> str:
        return f"{self.band.name} in {self.city_name}: {self.total_fans}"


class BandCountryFans(models.Model):
    """Per-country fan ledger for a band."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    band = models.ForeignKey(Band, on_delete=models.CASCADE, related_name="country_fans")
    country = models.CharField(max_length=255)
    total_fans = models.PositiveIntegerField(default=0)
    casual_fans = models.PositiveIntegerField(default=0)
    dedicated_fans = models.PositiveIntegerField(default=0)
    superfans = models.PositiveIntegerField(default=0)
    fame = models.PositiveIntegerField(default=0)
    last_activity_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name_plural = "band country fans"
        constraints = [
            models.UniqueConstraint(fields=["band", "country"], name="unique_band_country_fans"),
        ]

    def __str__(self) -> str:
        return f"{self.band.name} in {self.country}: {self.total_fans}"


class AgeDemographic(models.Model):
    """Audience age bracket with per-genre preference weights."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    genre_preferences = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class BandDemographicFans(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    band = models.ForeignKey(Band, on_delete=models.CASCADE, related_name="demographic_fans")
    demographic = models.ForeignKey(AgeDemographic, on_delete=models.CASCADE)
    city = models.ForeignKey(City, on_delete=models.CASCADE, null=True, blank=True)
    country = models.CharField(max_length=255, blank=True)
    fan_count = models.PositiveIntegerField(default=0)
    engagement_rate = models.FloatField(default=0)

    class Meta:
        verbose_name_plural = "band demographic fans"
        constraints = [
            models.UniqueConstraint(
                fields=["band", "demographic", "city"], name="unique_band_demographic_city"
            ),
        ]


class BandFameHistory(models.Model):
    """Append-only log of fame-affecting events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    band = models.ForeignKey(Band, on_delete=models.CASCADE, related_name="fame_history")
    city = models.ForeignKey(City, on_delete=models.SET_NULL, null=True, blank=True)
    country = models.CharField(max_length=255, blank=True)
    scope = models.CharField(max_length=20)
    fame_value = models.PositiveIntegerField()
    fame_change = models.IntegerField()
    event_type = models.CharField(max_length=50)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "band fame history"
        ordering = ["-created_at"]


class GigFanConversion(models.Model):
    """Write-once record of a gig's fan conversion. One row per gig."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    gig = models.OneToOneField(Gig, on_delete=models.CASCADE, related_name="fan_conversion")
    band = models.ForeignKey(Band, on_delete=models.CASCADE, related_name="fan_conversions")
    attendance_count = models.PositiveIntegerField()
    new_fans_gained = models.PositiveIntegerField()
    repeat_fans = models.PositiveIntegerField()
    superfans_converted = models.PositiveIntegerField()
    conversion_rate = models.FloatField()
    fan_demographics = models.JSONField(default=dict)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.gig_id}: +{self.new_fans_gained} fans"
