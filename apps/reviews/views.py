"""API views for managing reviews."""

from __future__ import annotations

from django.db import models  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore

from shared.api.responses import success_response
from . import services
from .models import Review
from .serializers import ReviewCreateSerializer, ReviewResponseSerializer, ReviewSerializer


class ReviewViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Viewset for creating, listing, deleting and answering reviews."""

    queryset = Review.objects.select_related('listing', 'user').all()
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]

    def get_serializer_class(self):  # type: ignore
        if self.action == 'create':
            return ReviewCreateSerializer
        if self.action == 'respond':
            return ReviewResponseSerializer
        return ReviewSerializer

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user

        # Filter by listing id (query param)
        listing_id = self.request.query_params.get('listing', None)
        if listing_id:
            qs = qs.filter(listing_id=listing_id)

        # Reviews follow listing visibility
        if not user.is_authenticated:
            return qs.filter(listing__is_approved=True)
        if user.is_platform_admin:
            return qs
        return qs.filter(
            models.Q(listing__is_approved=True) | models.Q(user=user) | models.Q(listing__owner=user)
        )

    def list(self, request, *args, **kwargs):  # type: ignore
        serializer = ReviewSerializer(self.filter_queryset(self.get_queryset()), many=True)
        return success_response(reviews=serializer.data)

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        return success_response(review=ReviewSerializer(self.get_object()).data)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = services.create_review(
            request.user,
            serializer.validated_data['listing_id'],
            serializer.validated_data['rating'],
            serializer.validated_data['comment'],
        )
        return success_response(status=status.HTTP_201_CREATED, review=ReviewSerializer(review).data)

    def destroy(self, request, *args, **kwargs):  # type: ignore
        services.delete_review(self.get_object(), request.user)
        return success_response(message='Review deleted')

    @action(detail=True, methods=['post'], permission_classes=[permissions.IsAuthenticated])
    def respond(self, request, pk=None):  # type: ignore
        """Host response to a review of their listing."""
        review = self.get_object()
        serializer = ReviewResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = services.respond_to_review(review, request.user, serializer.validated_data['response'])
        return success_response(review=ReviewSerializer(review).data)
