"""URL routing for the wishlist."""

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import FavoriteViewSet

router = DefaultRouter()
router.register(r'', FavoriteViewSet, basename='wishlist')

urlpatterns = [path('', include(router.urls))]
