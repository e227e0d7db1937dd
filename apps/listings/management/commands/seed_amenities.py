from django.core.management.base import BaseCommand

from apps.listings.services import seed_default_amenities


class Command(BaseCommand):
    help = "Create the default amenity catalogue from settings.DEFAULT_AMENITIES"

    def handle(self, *args, **options):
        created = seed_default_amenities()
        self.stdout.write(self.style.SUCCESS(f"Amenities created: {created}"))
