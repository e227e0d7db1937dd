"""User API views."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore
from rest_framework.views import APIView  # type: ignore

from shared.api.responses import success_response
from .serializers import ProfileUpdateSerializer, UserSerializer


class MeView(APIView):
    """Profile of the current user.

    - `GET` returns the profile
    - `PATCH`/`PUT` update name, phone, about and profile image path
    """

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):  # type: ignore
        return success_response(user=UserSerializer(request.user).data)

    def patch(self, request):  # type: ignore
        return self._update(request, partial=True)

    def put(self, request):  # type: ignore
        return self._update(request, partial=True)

    def _update(self, request, partial: bool):  # type: ignore
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return success_response(user=UserSerializer(user).data)
