"""Serializers for the wishlist."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.listings.serializers import ListingShortSerializer
from .models import Favorite


class FavoriteCreateSerializer(serializers.Serializer):
    """Serializer for adding a listing to the wishlist."""

    listing_id = serializers.IntegerField(min_value=1)


class FavoriteSerializer(serializers.ModelSerializer):
    """Wishlist entry with a compact listing card."""

    listing = ListingShortSerializer(read_only=True)

    class Meta:
        model = Favorite
        fields = ['id', 'listing', 'created_at']
