"""Serializers for authentication flows (register, login)."""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from rest_framework import exceptions, serializers  # type: ignore

from .models import PHONE_VALIDATOR


User = get_user_model()


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])
    is_host = serializers.BooleanField(required=False, default=False)

    def validate_email(self, value: str) -> str:  # type: ignore
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already in use.")
        return value

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        try:
            user = User.objects.get(email__iexact=attrs["email"])
        except User.DoesNotExist:
            raise exceptions.AuthenticationFailed("Invalid credentials.")

        if not user.is_active or not user.check_password(attrs["password"]):
            raise exceptions.AuthenticationFailed("Invalid credentials.")

        attrs["user"] = user
        return attrs
