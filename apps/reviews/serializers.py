"""Serializers for reviews.

Provide read and write serializers for the ``Review`` model. The
reviewing user is inferred from the request in the view; eligibility is
checked by ``apps.reviews.services``.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.users.serializers import UserShortSerializer
from .models import Review


class ReviewCreateSerializer(serializers.Serializer):
    """Serializer for creating a new review."""

    listing_id = serializers.IntegerField(min_value=1)
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, default='')


class ReviewSerializer(serializers.ModelSerializer):
    """Read serializer for reviews including the author."""

    user = UserShortSerializer(read_only=True)
    listing_id = serializers.ReadOnlyField()

    class Meta:
        model = Review
        fields = [
            'id',
            'user',
            'listing_id',
            'rating',
            'comment',
            'response',
            'response_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ReviewResponseSerializer(serializers.Serializer):
    """Serializer for the host response to a review."""

    response = serializers.CharField(
        max_length=2000,
        required=True,
        help_text="Host response to the review"
    )
