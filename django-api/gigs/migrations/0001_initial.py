import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="City",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("country", models.CharField(max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name_plural": "cities",
                "ordering": ["name"],
                "indexes": [models.Index(fields=["country"], name="gigs_city_country_idx")],
            },
        ),
        migrations.CreateModel(
            name="Band",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("genre", models.CharField(blank=True, max_length=100)),
                ("fame", models.PositiveIntegerField(default=0)),
                ("global_fame", models.PositiveIntegerField(default=0)),
                ("total_fans", models.PositiveIntegerField(default=0)),
                ("casual_fans", models.PositiveIntegerField(default=0)),
                ("dedicated_fans", models.PositiveIntegerField(default=0)),
                ("superfans", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name="AgeDemographic",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=100, unique=True)),
                ("genre_preferences", models.JSONField(blank=True, default=dict)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Venue",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("location", models.CharField(blank=True, max_length=255)),
                ("capacity", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "city",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="venues",
                        to="gigs.city",
                    ),
                ),
            ],
        ),
        migrations.CreateModel(
            name="Gig",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("scheduled_date", models.DateField()),
                ("ticket_price", models.DecimalField(decimal_places=2, default=20, max_digits=10)),
                ("tickets_sold", models.PositiveIntegerField(default=0)),
                ("days_booked", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("scheduled", "Scheduled"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="scheduled",
                        max_length=20,
                    ),
                ),
                ("price_adjusted_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "band",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="gigs",
                        to="gigs.band",
                    ),
                ),
                (
                    "venue",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="gigs",
                        to="gigs.venue",
                    ),
                ),
            ],
            options={
                "ordering": ["scheduled_date"],
                "indexes": [
                    models.Index(fields=["status", "scheduled_date"], name="gigs_gig_status_date_idx")
                ],
            },
        ),
        migrations.CreateModel(
            name="BandCityFans",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("city_name", models.CharField(max_length=255)),
                ("country", models.CharField(blank=True, max_length=255)),
                ("total_fans", models.PositiveIntegerField(default=0)),
                ("casual_fans", models.PositiveIntegerField(default=0)),
                ("dedicated_fans", models.PositiveIntegerField(default=0)),
                ("superfans", models.PositiveIntegerField(default=0)),
                ("gigs_in_city", models.PositiveIntegerField(default=0)),
                ("last_gig_date", models.DateTimeField(blank=True, null=True)),
                ("avg_satisfaction", models.FloatField(default=0)),
                ("city_fame", models.PositiveIntegerField(default=0)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "band",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="city_fans",
                        to="gigs.band",
                    ),
                ),
                (
                    "city",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="band_fans",
                        to="gigs.city",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "band city fans",
                "ordering": ["-total_fans"],
                "constraints": [
                    models.UniqueConstraint(fields=("band", "city"), name="unique_band_city_fans")
                ],
            },
        ),
        migrations.CreateModel(
            name="BandCountryFans",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("country", models.CharField(max_length=255)),
                ("total_fans", models.PositiveIntegerField(default=0)),
                ("casual_fans", models.PositiveIntegerField(default=0)),
                ("dedicated_fans", models.PositiveIntegerField(default=0)),
                ("superfans", models.PositiveIntegerField(default=0)),
                ("fame", models.PositiveIntegerField(default=0)),
                ("last_activity_date", models.DateTimeField(blank=True, null=True)),
                (
                    "band",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="country_fans",
                        to="gigs.band",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "band country fans",
                "constraints": [
                    models.UniqueConstraint(fields=("band", "country"), name="unique_band_country_fans")
                ],
            },
        ),
        migrations.CreateModel(
            name="BandDemographicFans",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("country", models.CharField(blank=True, max_length=255)),
                ("fan_count", models.PositiveIntegerField(default=0)),
                ("engagement_rate", models.FloatField(default=0)),
                (
                    "band",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="demographic_fans",
                        to="gigs.band",
                    ),
                ),
                (
                    "city",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        to="gigs.city",
                    ),
                ),
                (
                    "demographic",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="gigs.agedemographic",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "band demographic fans",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("band", "demographic", "city"), name="unique_band_demographic_city"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="BandFameHistory",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("country", models.CharField(blank=True, max_length=255)),
                ("scope", models.CharField(max_length=20)),
                ("fame_value", models.PositiveIntegerField()),
                ("fame_change", models.IntegerField()),
                ("event_type", models.CharField(max_length=50)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "band",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="fame_history",
                        to="gigs.band",
                    ),
                ),
                (
                    "city",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to="gigs.city",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "band fame history",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="GigFanConversion",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("attendance_count", models.PositiveIntegerField()),
                ("new_fans_gained", models.PositiveIntegerField()),
                ("repeat_fans", models.PositiveIntegerField()),
                ("superfans_converted", models.PositiveIntegerField()),
                ("conversion_rate", models.FloatField()),
                ("fan_demographics", models.JSONField(default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "band",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="fan_conversions",
                        to="gigs.band",
                    ),
                ),
                (
                    "gig",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="fan_conversion",
                        to="gigs.gig",
                    ),
                ),
            ],
        ),
    ]
