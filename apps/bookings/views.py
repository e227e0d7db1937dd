"""API views for the booking domain."""

from __future__ import annotations

from django.db.models import Q  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore

from shared.api.responses import success_response
from shared.domain.exceptions import AuthorizationError
from . import services
from .models import Booking
from .serializers import BookingCreateSerializer, BookingSerializer, BookingStatusSerializer


class IsBookingStakeholder(permissions.BasePermission):
    """The customer, the listing host and platform staff have access to a booking."""

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if user.is_platform_admin:
            return True
        return obj.customer_id == user.id or obj.listing.owner_id == user.id


class BookingViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """Create bookings and manage them from either side of the stay.

    - `POST /` books a listing for the current user
    - `GET mine/` bookings made by the current user
    - `GET host/` bookings on the current user's listings (hosts only)
    - `PUT {id}/status/` host changes the status
    - `POST {id}/cancel/` customer, host or staff cancels
    """

    queryset = Booking.objects.select_related("listing", "customer", "listing__owner").all()
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated, IsBookingStakeholder]

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if not user.is_authenticated:
            return qs.none()
        if user.is_platform_admin:
            return qs
        return qs.filter(Q(customer=user) | Q(listing__owner=user))

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "update_status":
            return BookingStatusSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = services.create_booking(
            request.user,
            data["listing_id"],
            data["start_date"],
            data["end_date"],
            data["guests"],
            payment_method=data.get("payment_method", ""),
        )
        return success_response(
            status=status.HTTP_201_CREATED,
            booking=BookingSerializer(booking, context=self.get_serializer_context()).data,
        )

    def retrieve(self, request, *args, **kwargs):  # type: ignore
        return success_response(booking=self.get_serializer(self.get_object()).data)

    @action(detail=False, methods=["get"])
    def mine(self, request):  # type: ignore
        qs = super().get_queryset().filter(customer=request.user)
        return success_response(bookings=BookingSerializer(qs, many=True).data)

    @action(detail=False, methods=["get"])
    def host(self, request):  # type: ignore
        if not request.user.is_host:
            raise AuthorizationError("Only hosts can view host bookings.")
        qs = super().get_queryset().filter(listing__owner=request.user)
        return success_response(bookings=BookingSerializer(qs, many=True).data)

    @action(detail=True, methods=["put", "patch"], url_path="status")
    def update_status(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        serializer = BookingStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.update_booking_status(booking, serializer.validated_data["status"], request.user)
        return success_response(booking=BookingSerializer(booking).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        booking = services.cancel_booking(booking, request.user)
        return success_response(booking=BookingSerializer(booking).data)
