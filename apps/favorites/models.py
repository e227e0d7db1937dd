"""Model definition for the wishlist.

The ``Favorite`` model is one wishlist entry: a listing bookmarked by a
user. Duplicate entries are prevented by a unique constraint.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore


class Favorite(models.Model):
    """A listing on a user's wishlist."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='favorites'
    )
    listing = models.ForeignKey(
        'listings.Listing', on_delete=models.CASCADE, related_name='favorited_by'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'listing'], name='favorite_unique_user_listing'),
        ]

    def __str__(self) -> str:
        return f"Favorite listing {self.listing_id} by user {self.user_id}"
