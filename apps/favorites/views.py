"""API views for wishlist management."""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Q  # type: ignore
from rest_framework import permissions, viewsets  # type: ignore

from apps.listings.models import Listing
from shared.api.responses import success_response
from shared.domain.exceptions import ConflictError, NotFoundError
from .models import Favorite
from .serializers import FavoriteCreateSerializer, FavoriteSerializer

logger = logging.getLogger(__name__)


class FavoriteViewSet(viewsets.GenericViewSet):
    """
    Viewset to add, list and remove wishlist entries.

    Endpoints:
    - GET /api/v1/wishlist/ - the current wishlist
    - POST /api/v1/wishlist/ - add a listing, body {"listing_id": 1}
    - DELETE /api/v1/wishlist/{listing_id}/ - remove a listing

    Every endpoint answers with the full wishlist.
    """

    queryset = Favorite.objects.select_related('listing').all()
    permission_classes = [permissions.IsAuthenticated]
    lookup_url_kwarg = 'listing_id'
    lookup_value_regex = '[0-9]+'

    def get_serializer_class(self):  # type: ignore
        if self.action == 'create':
            return FavoriteCreateSerializer
        return FavoriteSerializer

    def get_queryset(self):  # type: ignore
        """Users only see their own wishlist."""
        return super().get_queryset().filter(user=self.request.user)

    def _wishlist_response(self, status=200):  # type: ignore
        serializer = FavoriteSerializer(self.get_queryset(), many=True)
        return success_response(status=status, wishlist=serializer.data)

    def list(self, request, *args, **kwargs):  # type: ignore
        return self._wishlist_response()

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = FavoriteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        listing_id = serializer.validated_data['listing_id']

        visible = Q(is_approved=True) | Q(owner=request.user)
        listing = Listing.objects.filter(visible, pk=listing_id).first()
        if listing is None:
            raise NotFoundError('Listing not found.')

        try:
            with transaction.atomic():
                Favorite.objects.create(user=request.user, listing=listing)
        except IntegrityError:
            raise ConflictError('Listing already in wishlist.')

        logger.info('User %s added listing %s to wishlist', request.user.pk, listing_id)
        return self._wishlist_response(status=201)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        """Removing a listing that is not on the wishlist is a no-op."""
        self.get_queryset().filter(listing_id=kwargs['listing_id']).delete()
        return self._wishlist_response()
