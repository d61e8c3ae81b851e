from django.urls import path

from gigs.handlers import (
    BandCityFansView,
    GigFanConversionView,
    GigForecastView,
    GigPriceView,
    GigSalesSimulationView,
)

urlpatterns = [
    path("gigs/<str:gig_id>/forecast", GigForecastView.as_view(), name="gig-forecast"),
    path(
        "gigs/<str:gig_id>/sales/simulate",
        GigSalesSimulationView.as_view(),
        name="gig-sales-simulate",
    ),
    path("gigs/<str:gig_id>/price", GigPriceView.as_view(), name="gig-price"),
    path(
        "gigs/<str:gig_id>/fan-conversion",
        GigFanConversionView.as_view(),
        name="gig-fan-conversion",
    ),
    path("bands/<str:band_id>/city-fans", BandCityFansView.as_view(), name="band-city-fans"),
]
