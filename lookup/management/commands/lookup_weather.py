from __future__ import annotations

from typing import Any

from asgiref.sync import async_to_sync
from django.core.management.base import (
    BaseCommand,
    CommandError,
    CommandParser,
)

from lookup.errors import LookupFailure
from lookup.formatting import summarize
from lookup.services import resolve_weather, search_locations


class Command(BaseCommand):
    help = "Resolve a city name and print its current weather."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("location", help='City name, e.g. "Paris, FR"')
        parser.add_argument(
            "--suggest",
            action="store_true",
            help="List matching locations instead of fetching weather.",
        )

    def handle(self, *args: object, **options: Any) -> None:
        location = str(options["location"])
        try:
            if options["suggest"]:
                candidates = async_to_sync(search_locations)(location)
                if not candidates:
                    self.stdout.write(f'No cities found for "{location}"')
                for candidate in candidates:
                    self.stdout.write(candidate.label)
                return
            record = async_to_sync(resolve_weather)(location)
        except LookupFailure as exc:
            raise CommandError(str(exc.detail)) from exc

        self.stdout.write(summarize(record))
