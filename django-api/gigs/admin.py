from django.contrib import admin

from gigs.models import (
    AgeDemographic,
    Band,
    BandCityFans,
    BandCountryFans,
    City,
    Gig,
    GigFanConversion,
    Venue,
)


class VenueInline(admin.TabularInline):
    model = Venue
    extra = 0


class BandCityFansInline(admin.TabularInline):
    model = BandCityFans
    extra = 0
    readonly_fields = ["last_gig_date", "updated_at"]


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    list_display = ["name", "country"]
    search_fields = ["name", "country"]
    inlines = [VenueInline]


@admin.register(Venue)
class VenueAdmin(admin.ModelAdmin):
    list_display = ["name", "city", "location", "capacity"]
    list_filter = ["city__country"]
    search_fields = ["name", "location"]


@admin.register(Band)
class BandAdmin(admin.ModelAdmin):
    list_display = ["name", "genre", "fame", "total_fans", "superfans"]
    search_fields = ["name"]
    inlines = [BandCityFansInline]


@admin.register(Gig)
class GigAdmin(admin.ModelAdmin):
    list_display = ["band", "venue", "scheduled_date", "status", "tickets_sold", "ticket_price"]
    list_filter = ["status", "venue__city"]


@admin.register(BandCountryFans)
class BandCountryFansAdmin(admin.ModelAdmin):
    list_display = ["band", "country", "total_fans", "fame"]
    list_filter = ["country"]


@admin.register(GigFanConversion)
class GigFanConversionAdmin(admin.ModelAdmin):
    list_display = ["gig", "band", "attendance_count", "new_fans_gained", "conversion_rate"]
    readonly_fields = [field.name for field in GigFanConversion._meta.fields]


admin.site.register(AgeDemographic)
