"""Models for the review domain.

Defines the ``Review`` entity: a 1..5 rating with an optional comment,
left by a guest for a listing they have stayed at. One user can leave at
most one review per listing; the listing's host may attach a response.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Review(models.Model):
    """Represents a review left by a guest for a listing."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews'
    )
    listing = models.ForeignKey(
        'listings.Listing', on_delete=models.CASCADE, related_name='reviews'
    )
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        help_text=_('Rating from 1 to 5')
    )
    comment = models.TextField(blank=True)

    # Host response
    response = models.TextField(
        blank=True,
        help_text=_('Host response to the review')
    )
    response_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'listing'], name='review_one_per_user_listing'),
            models.CheckConstraint(
                condition=models.Q(rating__gte=1) & models.Q(rating__lte=5),
                name='review_rating_range',
            ),
        ]
        indexes = [
            models.Index(fields=['listing', '-created_at'], name='review_listing_created_idx'),
        ]

    def __str__(self) -> str:
        return f"Review by {self.user_id} for listing {self.listing_id} (Rating: {self.rating})"
