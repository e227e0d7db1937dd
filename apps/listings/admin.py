"""Admin registrations for the listings domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Amenity, Listing
from .services import approve_listing


@admin.register(Amenity)
class AmenityAdmin(admin.ModelAdmin):
    list_display = ("name", "icon")
    search_fields = ("name",)


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "city",
        "country",
        "property_type",
        "category",
        "price",
        "discount",
        "is_approved",
        "rating",
        "owner",
    )
    list_filter = ("is_approved", "property_type", "category", "country")
    search_fields = ("title", "city", "owner__email")
    filter_horizontal = ("amenities",)
    readonly_fields = ("rating", "created_at", "updated_at")
    actions = ("approve_selected",)

    @admin.action(description="Approve selected listings")
    def approve_selected(self, request, queryset):  # type: ignore
        for listing in queryset.filter(is_approved=False):
            approve_listing(listing, request.user)
