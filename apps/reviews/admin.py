from django.contrib import admin

from .models import Review
from .services import recompute_listing_rating


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('listing', 'user', 'rating', 'created_at')
    list_filter = ('rating',)
    search_fields = ('listing__title', 'user__email', 'comment')
    readonly_fields = ('created_at', 'updated_at', 'response_at')

    def save_model(self, request, obj, form, change):  # type: ignore
        previous_listing_id = form.initial.get('listing') if change else None
        super().save_model(request, obj, form, change)
        recompute_listing_rating(obj.listing_id)
        if previous_listing_id and previous_listing_id != obj.listing_id:
            recompute_listing_rating(previous_listing_id)

    def delete_model(self, request, obj):  # type: ignore
        listing_id = obj.listing_id
        super().delete_model(request, obj)
        recompute_listing_rating(listing_id)

    def delete_queryset(self, request, queryset):  # type: ignore
        listing_ids = set(queryset.values_list('listing_id', flat=True))
        super().delete_queryset(request, queryset)
        for listing_id in listing_ids:
            recompute_listing_rating(listing_id)
