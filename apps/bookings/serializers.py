"""Serializers for the booking domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.listings.serializers import ListingShortSerializer
from apps.users.serializers import UserShortSerializer
from .models import Booking


class BookingCreateSerializer(serializers.Serializer):
    """Input of a booking request. Overlap and listing rules are checked by the service."""

    listing_id = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    guests = serializers.IntegerField(min_value=1, default=1)
    payment_method = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")

    def validate(self, attrs):  # type: ignore
        if attrs["start_date"] >= attrs["end_date"]:
            raise serializers.ValidationError({"end_date": "End date must be after start date."})
        return attrs


class BookingStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Booking.Status.choices)


class BookingSerializer(serializers.ModelSerializer):
    listing = ListingShortSerializer(read_only=True)
    customer = UserShortSerializer(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "listing",
            "customer",
            "start_date",
            "end_date",
            "guests",
            "nights",
            "nightly_price",
            "discount_percent",
            "total_price",
            "status",
            "payment_status",
            "payment_method",
            "transaction_id",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
