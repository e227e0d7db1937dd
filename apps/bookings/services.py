"""Domain services for booking workflows.

Availability follows half-open intervals: a stay occupies
[start_date, end_date), so a checkout on the day another guest checks in
is not a conflict. Every booking that is not cancelled blocks its dates.
"""

from __future__ import annotations

import logging
from datetime import date

from django.db import transaction  # type: ignore
from django.db.models import Q  # type: ignore
from django.db.utils import NotSupportedError  # type: ignore
from django.utils import timezone  # type: ignore

from apps.listings.models import Listing
from shared.domain.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationFailed
from shared.domain.value_objects import DateRange, StayQuote
from .models import Booking

logger = logging.getLogger(__name__)


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset

    try:
        return queryset.select_for_update()
    except NotSupportedError:
        return queryset


def lock_listing(listing_id: int) -> Listing:
    """Load the listing row under a lock, serializing bookings and reviews per listing."""
    try:
        return _lock_queryset_if_possible(Listing.objects.all()).get(pk=listing_id)
    except Listing.DoesNotExist:
        raise NotFoundError("Listing not found.")


def _to_range(start_date: date, end_date: date) -> DateRange:
    try:
        return DateRange(start_date, end_date)
    except ValueError:
        raise ValidationFailed(
            "End date must be after start date.",
            errors={"end_date": ["End date must be after start date."]},
        )


def overlapping_bookings(listing_id: int, dates: DateRange, *, exclude_booking_id: int | None = None):
    """Bookings on the listing that still hold any night of ``dates``."""

    overlapping_filter = Q(start_date__lt=dates.end_date) & Q(end_date__gt=dates.start_date)
    qs = (
        Booking.objects.filter(listing_id=listing_id)
        .exclude(status=Booking.Status.CANCELLED)
        .filter(overlapping_filter)
    )
    if exclude_booking_id is not None:
        qs = qs.exclude(pk=exclude_booking_id)
    return qs


def is_available(
    listing_id: int,
    requested_start: date,
    requested_end: date,
    *,
    exclude_booking_id: int | None = None,
) -> bool:
    dates = _to_range(requested_start, requested_end)
    return not overlapping_bookings(
        listing_id, dates, exclude_booking_id=exclude_booking_id
    ).exists()


def ensure_listing_is_available(
    listing_id: int,
    dates: DateRange,
    *,
    exclude_booking_id: int | None = None,
) -> None:
    """Raise ConflictError when another active booking holds any of the nights."""

    if overlapping_bookings(listing_id, dates, exclude_booking_id=exclude_booking_id).exists():
        logger.info("Rejected dates %s for listing %s: overlap", dates, listing_id)
        raise ConflictError("Listing not available for selected dates.")


def quote_stay(listing: Listing, dates: DateRange) -> StayQuote:
    return StayQuote(
        dates=dates,
        nightly_price=listing.price,
        discount_percent=listing.discount,
    )


def validate_stay_request(
    listing: Listing,
    dates: DateRange,
    guests: int,
    requester,  # type: ignore
    *,
    today: date | None = None,
) -> None:
    """Reject requests that could never become a booking, whatever the calendar says."""

    today = today or timezone.localdate()
    if dates.start_date < today:
        raise ValidationFailed(
            "Start date cannot be in the past.",
            errors={"start_date": ["Start date cannot be in the past."]},
        )
    if listing.available_from and dates.start_date < listing.available_from:
        raise ValidationFailed(
            f"Listing is available from {listing.available_from.isoformat()}.",
            errors={"start_date": ["Outside the listing availability window."]},
        )
    if listing.available_to and dates.end_date > listing.available_to:
        raise ValidationFailed(
            f"Listing is available until {listing.available_to.isoformat()}.",
            errors={"end_date": ["Outside the listing availability window."]},
        )
    if guests < 1 or guests > listing.guests:
        raise ValidationFailed(
            f"This listing hosts between 1 and {listing.guests} guests.",
            errors={"guests": [f"Must be between 1 and {listing.guests}."]},
        )
    if not listing.is_approved and listing.owner_id != getattr(requester, "id", None):
        raise ValidationFailed("Listing is not open for booking yet.")


@transaction.atomic
def create_booking(
    customer,  # type: ignore
    listing_id: int,
    start_date: date,
    end_date: date,
    guests: int = 1,
    *,
    payment_method: str = "",
    today: date | None = None,
) -> Booking:
    """Validate, check overlap and insert a pending booking atomically.

    The listing row is locked first, so two requests for the same listing
    run the overlap check one after the other.
    """
    dates = _to_range(start_date, end_date)
    listing = lock_listing(listing_id)
    validate_stay_request(listing, dates, guests, customer, today=today)
    ensure_listing_is_available(listing.pk, dates)

    quote = quote_stay(listing, dates)
    booking = Booking.objects.create(
        customer=customer,
        listing=listing,
        start_date=dates.start_date,
        end_date=dates.end_date,
        guests=guests,
        payment_method=payment_method,
        nights=quote.nights,
        nightly_price=quote.nightly_price,
        discount_percent=quote.discount_percent,
        total_price=quote.total,
    )
    logger.info(
        "Booking %s created: listing=%s customer=%s dates=%s total=%s",
        booking.pk,
        listing.pk,
        customer.pk,
        dates,
        booking.total_price,
    )
    return booking


def _is_host_or_admin(booking: Booking, user) -> bool:  # type: ignore
    return booking.listing.owner_id == user.id or user.is_platform_admin


@transaction.atomic
def update_booking_status(booking: Booking, new_status: str, actor) -> Booking:  # type: ignore
    """Host-side status change.

    Bringing a cancelled booking back to an active status re-checks the
    calendar, since its nights may have been taken in the meantime.
    """
    if not _is_host_or_admin(booking, actor):
        raise AuthorizationError("Only the host can change the booking status.")
    if new_status not in Booking.Status.values:
        raise ValidationFailed(
            f"Unknown status '{new_status}'.",
            errors={"status": [f"Must be one of: {', '.join(Booking.Status.values)}."]},
        )
    if new_status == booking.status:
        return booking
    if booking.status == Booking.Status.COMPLETED:
        raise ValidationFailed(
            "Completed bookings cannot change status.",
            errors={"status": ["Booking is already completed."]},
        )

    if new_status == Booking.Status.CANCELLED:
        return _mark_cancelled(booking, actor)

    if booking.status == Booking.Status.CANCELLED:
        lock_listing(booking.listing_id)
        ensure_listing_is_available(booking.listing_id, booking.dates, exclude_booking_id=booking.pk)
        booking.cancelled_at = None

    previous = booking.status
    booking.status = new_status
    booking.save(update_fields=["status", "cancelled_at", "updated_at"])
    logger.info(
        "Booking %s status %s -> %s by %s", booking.pk, previous, new_status, actor.pk
    )
    return booking


@transaction.atomic
def cancel_booking(booking: Booking, actor) -> Booking:  # type: ignore
    """Cancel on behalf of the customer, the host or staff."""
    if booking.customer_id != actor.id and not _is_host_or_admin(booking, actor):
        raise AuthorizationError("Not authorized to cancel this booking.")
    if booking.status == Booking.Status.COMPLETED:
        raise ValidationFailed("Completed bookings cannot be cancelled.")
    if booking.status == Booking.Status.CANCELLED:
        return booking
    return _mark_cancelled(booking, actor)


def _mark_cancelled(booking: Booking, actor) -> Booking:  # type: ignore
    booking.status = Booking.Status.CANCELLED
    booking.cancelled_at = timezone.now()
    if booking.payment_status == Booking.PaymentStatus.PAID:
        booking.payment_status = Booking.PaymentStatus.REFUNDED
    booking.save(update_fields=["status", "cancelled_at", "payment_status", "updated_at"])
    logger.info("Booking %s cancelled by %s", booking.pk, actor.pk)
    return booking


def complete_finished_bookings(today: date | None = None) -> int:
    """Mark confirmed bookings whose checkout has passed as completed."""
    today = today or timezone.localdate()
    return Booking.objects.filter(
        status=Booking.Status.CONFIRMED,
        end_date__lt=today,
    ).update(status=Booking.Status.COMPLETED, updated_at=timezone.now())
