"""URL routing for listing moderation (staff only)."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import ListingModerationViewSet

router = DefaultRouter()
router.register(r"", ListingModerationViewSet, basename="admin-listing")

urlpatterns = [
    path("", include(router.urls)),
]
