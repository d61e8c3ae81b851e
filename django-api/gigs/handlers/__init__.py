from gigs.handlers.views import (
    BandCityFansView,
    GigFanConversionView,
    GigForecastView,
    GigPriceView,
    GigSalesSimulationView,
)

__all__ = [
    "BandCityFansView",
    "GigFanConversionView",
    "GigForecastView",
    "GigPriceView",
    "GigSalesSimulationView",
]
