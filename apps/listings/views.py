"""Listing API views."""

from __future__ import annotations

import logging

from django.db.models import Prefetch, Q  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore

from apps.bookings import services as booking_services
from apps.reviews.models import Review
from shared.api.responses import success_response
from shared.domain.exceptions import AuthorizationError, ValidationFailed
from shared.domain.value_objects import DateRange
from .filters import ListingFilterSet, ModerationFilterSet
from .models import Amenity, Listing
from .serializers import (
    AmenitySerializer,
    AvailabilitySerializer,
    ListingDetailSerializer,
    ListingSerializer,
    ListingWriteSerializer,
    StayRequestSerializer,
)
from .services import approval_on_create, approval_on_update, approve_listing

logger = logging.getLogger(__name__)


class IsListingOwnerOrAdmin(permissions.BasePermission):
    """Only the owner or platform staff may modify a listing."""

    message = "Only the owner can modify this listing."

    def has_object_permission(self, request, view, obj: Listing):  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        user = request.user
        if not user.is_authenticated:
            return False
        return obj.owner_id == user.id or user.is_platform_admin


class ListingViewSet(viewsets.ModelViewSet):
    """Search, detail and CRUD for listings.

    Anonymous users see approved listings. Authenticated users additionally
    see their own listings whatever their approval state, and staff see
    everything on the detail endpoint.
    """

    queryset = Listing.objects.select_related("owner").prefetch_related("amenities")
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsListingOwnerOrAdmin]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = ListingFilterSet
    ordering_fields = ["price", "rating", "created_at"]

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user

        if self.action == "retrieve":
            qs = qs.prefetch_related(
                Prefetch("reviews", queryset=Review.objects.select_related("user"))
            )

        if self.action in {"list", "retrieve", "availability"}:
            if self.action != "list" and user.is_authenticated and user.is_platform_admin:
                return qs
            visible = Q(is_approved=True)
            if user.is_authenticated:
                visible |= Q(owner=user)
            return qs.filter(visible)

        return qs

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return ListingWriteSerializer
        if self.action == "retrieve":
            return ListingDetailSerializer
        return ListingSerializer

    def list(self, request, *args, **kwargs):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return success_response(count=len(serializer.data), listings=serializer.data)

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(self.get_object())
        return success_response(listing=serializer.data)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        listing = serializer.save(
            owner=request.user,
            is_approved=approval_on_create(request.user),
        )
        logger.info(
            "Listing %s created by %s (approved=%s)", listing.pk, request.user.pk, listing.is_approved
        )
        return success_response(
            status=status.HTTP_201_CREATED,
            listing=ListingSerializer(listing, context=self.get_serializer_context()).data,
        )

    def update(self, request, *args, **kwargs):  # type: ignore
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        listing = serializer.save(is_approved=approval_on_update(instance, request.user))
        return success_response(
            listing=ListingSerializer(listing, context=self.get_serializer_context()).data,
        )

    def destroy(self, request, *args, **kwargs):  # type: ignore
        instance = self.get_object()
        listing_id = instance.pk
        instance.delete()
        logger.info("Listing %s deleted by %s", listing_id, request.user.pk)
        return success_response(message="Listing deleted")

    @action(detail=False, methods=["get"], url_path=r"user/(?P<user_id>\d+)")
    def by_user(self, request, user_id=None):  # type: ignore
        """All listings of one user, approved or not. Self or staff only."""
        user = request.user
        if not user.is_authenticated:
            self.permission_denied(request)
        if str(user.id) != str(user_id) and not user.is_platform_admin:
            raise AuthorizationError("Not authorized to view these listings.")

        queryset = super().get_queryset().filter(owner_id=user_id)
        serializer = ListingSerializer(queryset, many=True, context=self.get_serializer_context())
        return success_response(listings=serializer.data)

    @action(detail=True, methods=["get"])
    def availability(self, request, pk=None):  # type: ignore
        """Check dates and price a stay without booking it.

        Query params: `start_date`, `end_date` (ISO dates, end exclusive) and
        optional `guests`. Requests a booking would reject come back with
        `available: false` and the rejection message in `reason`.
        """
        listing = self.get_object()
        params = StayRequestSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        dates = DateRange(params.validated_data["start_date"], params.validated_data["end_date"])

        reason = ""
        try:
            booking_services.validate_stay_request(
                listing, dates, params.validated_data["guests"], request.user
            )
        except ValidationFailed as exc:
            reason = exc.message
        else:
            if not booking_services.is_available(listing.pk, dates.start_date, dates.end_date):
                reason = "Listing not available for selected dates."

        quote = booking_services.quote_stay(listing, dates)
        return success_response(
            availability=AvailabilitySerializer.from_quote(listing.pk, not reason, quote, reason).data
        )


class AmenityViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = Amenity.objects.all()
    serializer_class = AmenitySerializer
    permission_classes = [permissions.AllowAny]
    pagination_class = None

    def list(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return success_response(amenities=serializer.data)


class ListingModerationViewSet(mixins.ListModelMixin, viewsets.GenericViewSet):
    """Platform administrators review every listing and approve pending ones."""

    queryset = Listing.objects.select_related("owner").prefetch_related("amenities")
    serializer_class = ListingSerializer
    permission_classes = [permissions.IsAdminUser]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ModerationFilterSet

    def list(self, request, *args, **kwargs):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return success_response(count=len(serializer.data), listings=serializer.data)

    @action(detail=True, methods=["put"])
    def approve(self, request, pk=None):  # type: ignore
        listing = get_object_or_404(self.get_queryset(), pk=pk)
        approve_listing(listing, request.user)
        return success_response(listing=self.get_serializer(listing).data)
