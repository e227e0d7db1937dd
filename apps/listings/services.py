"""Listing services: amenity seeding, approval rules and moderation."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.db import transaction  # type: ignore

from .models import Amenity, Listing

logger = logging.getLogger(__name__)


@transaction.atomic
def seed_default_amenities(amenities: list[dict] | None = None) -> int:
    """Create missing catalogue amenities. Returns the number created.

    Existing amenities are matched by name and left untouched, so the call
    is safe to repeat after every migration.
    """
    if amenities is None:
        amenities = getattr(settings, "DEFAULT_AMENITIES", [])

    created_count = 0
    for item in amenities:
        _, created = Amenity.objects.get_or_create(
            name=item["name"],
            defaults={"icon": item.get("icon", "")},
        )
        created_count += int(created)

    if created_count:
        logger.info("Seeded %s default amenities", created_count)
    return created_count


def approval_on_create(owner) -> bool:  # type: ignore
    """Hosts publish immediately, other users wait for moderation."""
    return bool(owner.is_host)


def approval_on_update(listing: Listing, editor) -> bool:  # type: ignore
    """Edits by a non-host send the listing back to moderation.

    Staff keep the current approval state so a moderation fix does not
    unpublish the listing.
    """
    if editor.is_platform_admin and editor.id != listing.owner_id:
        return listing.is_approved
    return bool(editor.is_host)


def approve_listing(listing: Listing, moderator) -> Listing:  # type: ignore
    if not listing.is_approved:
        listing.is_approved = True
        listing.save(update_fields=["is_approved", "updated_at"])
        logger.info("Listing %s approved by %s", listing.pk, moderator.pk)
    return listing
