"""Review services: eligibility, creation and the rating aggregator."""

from __future__ import annotations

import logging
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Avg  # type: ignore
from django.utils import timezone  # type: ignore

from apps.bookings.models import Booking
from apps.bookings.services import lock_listing
from apps.listings.models import Listing
from shared.domain.exceptions import (
    AuthorizationError,
    ConflictError,
    ValidationFailed,
)
from shared.domain.value_objects import CENT
from .models import Review

logger = logging.getLogger(__name__)


def recompute_listing_rating(listing_id: int) -> Decimal:
    """Store the plain mean of the listing's review ratings, 0 with no reviews."""
    average = Review.objects.filter(listing_id=listing_id).aggregate(value=Avg("rating"))["value"]
    rating = Decimal("0.00") if average is None else Decimal(str(average)).quantize(CENT, ROUND_HALF_UP)
    Listing.objects.filter(pk=listing_id).update(rating=rating)
    logger.info("Listing %s rating recomputed: %s", listing_id, rating)
    return rating


def has_completed_stay(user, listing_id: int, *, today: date | None = None) -> bool:  # type: ignore
    today = today or timezone.localdate()
    return Booking.objects.filter(
        customer=user,
        listing_id=listing_id,
        status=Booking.Status.COMPLETED,
        end_date__lt=today,
    ).exists()


def ensure_can_review(user, listing_id: int, *, today: date | None = None) -> None:  # type: ignore
    if not has_completed_stay(user, listing_id, today=today):
        raise AuthorizationError("You can only review listings you have stayed at.")
    if Review.objects.filter(user=user, listing_id=listing_id).exists():
        raise ConflictError("You have already reviewed this listing.")


@transaction.atomic
def create_review(
    user,  # type: ignore
    listing_id: int,
    rating: int,
    comment: str = "",
    *,
    today: date | None = None,
) -> Review:
    """Insert a review and refresh the listing rating in one transaction.

    The listing row is locked first, so concurrent reviews of one listing
    recompute the mean one after the other and each sees the previous insert.
    """
    lock_listing(listing_id)
    if not 1 <= rating <= 5:
        raise ValidationFailed(
            "Rating must be between 1 and 5.",
            errors={"rating": ["Rating must be between 1 and 5."]},
        )
    ensure_can_review(user, listing_id, today=today)

    try:
        with transaction.atomic():
            review = Review.objects.create(
                user=user,
                listing_id=listing_id,
                rating=rating,
                comment=comment,
            )
    except IntegrityError:
        raise ConflictError("You have already reviewed this listing.")

    recompute_listing_rating(listing_id)
    logger.info("Review %s created by %s for listing %s", review.pk, user.pk, listing_id)
    return review


@transaction.atomic
def delete_review(review: Review, actor) -> None:  # type: ignore
    if review.user_id != actor.id and not actor.is_platform_admin:
        raise AuthorizationError("Only the author can delete this review.")
    listing_id = review.listing_id
    review.delete()
    recompute_listing_rating(listing_id)


def respond_to_review(review: Review, host, text: str) -> Review:  # type: ignore
    if review.listing.owner_id != host.id:
        raise AuthorizationError("Only the host can respond to reviews.")
    review.response = text
    review.response_at = timezone.now()
    review.save(update_fields=["response", "response_at", "updated_at"])
    return review
