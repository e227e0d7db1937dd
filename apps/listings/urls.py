"""URL routing for the listings domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import AmenityViewSet, ListingViewSet

router = DefaultRouter()
# Registered first so "amenities/" is not captured as a listing id.
router.register(r"amenities", AmenityViewSet, basename="amenity")
router.register(r"", ListingViewSet, basename="listing")

urlpatterns = [
    path("", include(router.urls)),
]
