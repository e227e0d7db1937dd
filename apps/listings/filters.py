"""FilterSet definitions for listing search."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Count, Q  # type: ignore

from .models import Listing


class ListingFilterSet(django_filters.FilterSet):
    """Search filters for the public listings endpoint."""

    location = django_filters.CharFilter(field_name="city", lookup_expr="icontains")
    property_type = django_filters.ChoiceFilter(choices=Listing.PropertyType.choices)
    category = django_filters.ChoiceFilter(choices=Listing.Category.choices)
    min_price = django_filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = django_filters.NumberFilter(field_name="price", lookup_expr="lte")
    guests = django_filters.NumberFilter(field_name="guests", lookup_expr="gte")
    bedrooms = django_filters.NumberFilter(field_name="bedrooms", lookup_expr="gte")

    # CSV of amenity ids, requires all selected amenities
    amenities = django_filters.CharFilter(method="filter_amenities")

    class Meta:
        model = Listing
        fields = ["location", "property_type", "category"]

    def filter_amenities(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        try:
            ids = {int(x) for x in str(value).replace(" ", "").split(",") if x}
        except ValueError:
            return queryset.none()
        if not ids:
            return queryset
        qs = queryset.annotate(
            matched_amenities=Count("amenities", filter=Q(amenities__id__in=ids), distinct=True)
        ).filter(matched_amenities=len(ids))
        return qs


class ModerationFilterSet(django_filters.FilterSet):
    is_approved = django_filters.BooleanFilter(field_name="is_approved")
    owner = django_filters.NumberFilter(field_name="owner_id")

    class Meta:
        model = Listing
        fields = ["is_approved", "owner"]
