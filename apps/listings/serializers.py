"""Serializers for the listings domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.reviews.serializers import ReviewSerializer
from apps.users.serializers import UserShortSerializer
from .models import Amenity, Listing


class AmenitySerializer(serializers.ModelSerializer):
    class Meta:
        model = Amenity
        fields = ["id", "name", "icon"]


class ListingSerializer(serializers.ModelSerializer):
    owner = UserShortSerializer(read_only=True)
    amenities = AmenitySerializer(many=True, read_only=True)

    class Meta:
        model = Listing
        fields = [
            "id",
            "owner",
            "title",
            "description",
            "property_type",
            "category",
            "street",
            "city",
            "state",
            "country",
            "zip_code",
            "latitude",
            "longitude",
            "price",
            "discount",
            "bedrooms",
            "bathrooms",
            "guests",
            "beds",
            "amenities",
            "images",
            "rules",
            "available_from",
            "available_to",
            "is_approved",
            "rating",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ListingDetailSerializer(ListingSerializer):
    reviews = ReviewSerializer(many=True, read_only=True)

    class Meta(ListingSerializer.Meta):
        fields = ListingSerializer.Meta.fields + ["reviews"]
        read_only_fields = fields


class ListingWriteSerializer(serializers.ModelSerializer):
    amenities = serializers.PrimaryKeyRelatedField(
        queryset=Amenity.objects.all(),
        many=True,
        required=False,
    )
    images = serializers.ListField(
        child=serializers.CharField(max_length=255),
        required=False,
    )
    rules = serializers.ListField(
        child=serializers.CharField(max_length=255, allow_blank=True),
        required=False,
    )

    class Meta:
        model = Listing
        fields = [
            "title",
            "description",
            "property_type",
            "category",
            "street",
            "city",
            "state",
            "country",
            "zip_code",
            "latitude",
            "longitude",
            "price",
            "discount",
            "bedrooms",
            "bathrooms",
            "guests",
            "beds",
            "amenities",
            "images",
            "rules",
            "available_from",
            "available_to",
        ]

    def validate_rules(self, value: list[str]) -> list[str]:  # type: ignore
        return [rule.strip() for rule in value if rule.strip()]

    def validate(self, attrs):  # type: ignore
        instance = self.instance
        start = attrs.get("available_from", getattr(instance, "available_from", None))
        end = attrs.get("available_to", getattr(instance, "available_to", None))
        if start and end and end <= start:
            raise serializers.ValidationError(
                {"available_to": "Availability must end after it starts."}
            )
        return attrs


class StayRequestSerializer(serializers.Serializer):
    """Query parameters of an availability check."""

    start_date = serializers.DateField()
    end_date = serializers.DateField()
    guests = serializers.IntegerField(required=False, default=1, min_value=1)

    def validate(self, attrs):  # type: ignore
        if attrs["end_date"] <= attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "End date must be after start date."})
        return attrs


class AvailabilitySerializer(serializers.Serializer):
    """Response of an availability check."""

    listing_id = serializers.IntegerField()
    available = serializers.BooleanField()
    reason = serializers.CharField(allow_blank=True)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    nights = serializers.IntegerField()
    nightly_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    discount_percent = serializers.DecimalField(max_digits=5, decimal_places=2)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2)

    @classmethod
    def from_quote(
        cls, listing_id: int, available: bool, quote, reason: str = ""  # type: ignore
    ) -> "AvailabilitySerializer":
        payload = {
            "listing_id": listing_id,
            "available": available,
            "reason": reason,
            "start_date": quote.dates.start_date,
            "end_date": quote.dates.end_date,
            "nights": quote.nights,
            "nightly_price": quote.nightly_price,
            "discount_percent": quote.discount_percent,
            "total_price": quote.total,
        }
        return cls(payload)


class ListingShortSerializer(serializers.ModelSerializer):
    """Compact listing reference embedded in bookings and wishlists."""

    class Meta:
        model = Listing
        fields = ["id", "title", "city", "country", "price", "discount", "images", "rating", "owner_id"]
        read_only_fields = fields
