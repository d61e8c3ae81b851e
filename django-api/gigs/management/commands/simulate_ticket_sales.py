import random
from datetime import date

from django.core.management.base import BaseCommand, CommandError

from gigs.services import TicketSalesService
from gigs.stores import DjangoGigStore


class Command(BaseCommand):
    help = "Run one day of simulated ticket sales for every scheduled gig."

    def add_arguments(self, parser):
        parser.add_argument("--seed", type=int, help="Seed for reproducible sales")
        parser.add_argument("--date", help="Simulated day (YYYY-MM-DD), defaults to today")

    def handle(self, *args, **options):
        today = None
        if options["date"]:
            try:
                today = date.fromisoformat(options["date"])
            except ValueError:
                raise CommandError(f"Invalid date: {options['date']}") from None

        service = TicketSalesService(DjangoGigStore())
        ticks = service.simulate_all_upcoming(random.Random(options["seed"]), today)

        sold = sum(tick.tickets_sold_today for tick in ticks)
        sold_out = sum(1 for tick in ticks if tick.sold_out)
        self.stdout.write(
            self.style.SUCCESS(f"Simulated {len(ticks)} gigs: {sold} tickets sold, {sold_out} sold out")
        )
