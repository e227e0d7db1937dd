"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "listing",
        "customer",
        "status",
        "payment_status",
        "start_date",
        "end_date",
        "total_price",
        "created_at",
    )
    list_filter = ("status", "payment_status", "start_date")
    search_fields = ("listing__title", "customer__email", "transaction_id")
    readonly_fields = (
        "created_at",
        "updated_at",
        "cancelled_at",
        "nights",
        "nightly_price",
        "discount_percent",
        "total_price",
    )
