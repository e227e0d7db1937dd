"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from . import services

logger = logging.getLogger(__name__)


# ============================================================================
# PERIODIC TASKS (scheduled through Celery Beat, see config/celery.py)
# ============================================================================

@shared_task(name="bookings.complete_finished_bookings")
def complete_finished_bookings() -> dict[str, int]:
    """
    Complete confirmed bookings after checkout.

    A booking becomes eligible for a review only once it is completed, so
    this runs hourly and moves every confirmed booking whose end date has
    passed to COMPLETED.

    Returns:
        dict: {"completed": number of bookings completed}
    """
    completed_count = services.complete_finished_bookings()

    if completed_count > 0:
        logger.info("Completed %s bookings", completed_count)

    return {"completed": completed_count}
