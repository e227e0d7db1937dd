"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public profile of an account."""

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "phone",
            "about",
            "profile_image_path",
            "is_host",
            "is_staff",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "is_host",
            "is_staff",
            "created_at",
            "updated_at",
        ]


class UserShortSerializer(serializers.ModelSerializer):
    """Compact user reference embedded in listings, bookings and reviews."""

    class Meta:
        model = User
        fields = ["id", "first_name", "last_name", "profile_image_path"]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["first_name", "last_name", "phone", "about", "profile_image_path"]
