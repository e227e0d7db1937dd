from django.apps import AppConfig
from django.db.models.signals import post_migrate


def _seed_amenities(sender, **kwargs):  # type: ignore
    from django.conf import settings

    if not getattr(settings, "SEED_AMENITIES_ON_MIGRATE", False):
        return
    from .services import seed_default_amenities

    seed_default_amenities()


class ListingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.listings"
    label = "listings"

    def ready(self) -> None:
        post_migrate.connect(_seed_amenities, sender=self, dispatch_uid="listings.seed_amenities")
