"""Listing domain models for StayNest.

A listing is a rentable place published by a user. Listings created by
hosts are approved immediately, everyone else waits for a platform
administrator. ``rating`` is derived from reviews and is recomputed by
``apps.reviews.services.recompute_listing_rating``; never write it from
request data.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Amenity(models.Model):
    """Amenity from the shared catalogue (WiFi, Kitchen, ...)."""

    name = models.CharField(max_length=100, unique=True)
    icon = models.CharField(
        max_length=100,
        blank=True,
        help_text=_("Icon identifier used by the frontend."),
    )

    class Meta:
        verbose_name = _("Amenity")
        verbose_name_plural = _("Amenities")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Listing(models.Model):
    """Place offered for nightly rental."""

    class PropertyType(models.TextChoices):
        ENTIRE_HOME = "Entire Home", _("Entire home")
        PRIVATE_ROOM = "Private Room", _("Private room")
        SHARED_ROOM = "Shared Room", _("Shared room")
        PG = "PG", _("Paying guest")
        CO_LIVING = "Co-Living", _("Co-living")
        HOTEL = "Hotel", _("Hotel")
        APARTMENT = "Apartment", _("Apartment")
        VILLA = "Villa", _("Villa")

    class Category(models.TextChoices):
        HOUSE = "House", _("House")
        APARTMENT = "Apartment", _("Apartment")
        HOTEL = "Hotel", _("Hotel")
        VILLA = "Villa", _("Villa")
        CABIN = "Cabin", _("Cabin")
        BEACH_HOUSE = "Beach House", _("Beach house")
        COUNTRYSIDE = "Countryside", _("Countryside")
        UNIQUE_STAYS = "Unique stays", _("Unique stays")

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="listings",
    )
    title = models.CharField(max_length=255)
    description = models.TextField()
    property_type = models.CharField(max_length=30, choices=PropertyType.choices)
    category = models.CharField(max_length=30, choices=Category.choices)

    street = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100, blank=True)
    country = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=20, blank=True)
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Price per night."),
    )
    discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00")), MaxValueValidator(Decimal("100.00"))],
        help_text=_("Discount in percent applied to the whole stay."),
    )
    bedrooms = models.PositiveSmallIntegerField()
    bathrooms = models.PositiveSmallIntegerField()
    guests = models.PositiveSmallIntegerField(validators=[MinValueValidator(1)])
    beds = models.PositiveSmallIntegerField()

    amenities = models.ManyToManyField(Amenity, blank=True, related_name="listings")
    images = models.JSONField(default=list, blank=True, help_text=_("Stored image paths."))
    rules = models.JSONField(default=list, blank=True, help_text=_("House rules."))

    available_from = models.DateField(null=True, blank=True)
    available_to = models.DateField(null=True, blank=True)

    is_approved = models.BooleanField(default=False)
    rating = models.DecimalField(
        max_digits=3,
        decimal_places=2,
        default=Decimal("0.00"),
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Listing")
        verbose_name_plural = _("Listings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="listing_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(discount__gte=0) & models.Q(discount__lte=100),
                name="listing_discount_percent_range",
            ),
            models.CheckConstraint(
                condition=models.Q(available_from__isnull=True)
                | models.Q(available_to__isnull=True)
                | models.Q(available_to__gt=models.F("available_from")),
                name="listing_valid_availability_window",
            ),
        ]
        indexes = [
            models.Index(fields=["is_approved"], name="listing_approved_idx"),
            models.Index(fields=["owner", "is_approved"], name="listing_owner_approved_idx"),
            models.Index(fields=["city"], name="listing_city_idx"),
        ]

    def __str__(self) -> str:
        return self.title

    def is_visible_to(self, user) -> bool:  # type: ignore
        if self.is_approved:
            return True
        if user is None or not user.is_authenticated:
            return False
        return self.owner_id == user.id or user.is_platform_admin
