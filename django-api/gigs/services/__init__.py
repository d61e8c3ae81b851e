from gigs.services.fan_conversion_service import FanConversionService
from gigs.services.ticket_sales_service import TicketSalesService

__all__ = ["FanConversionService", "TicketSalesService"]
