"""
Core views - current user profile.
"""
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.observability.correlation import bind_actor
from .serializers import UserProfileSerializer


class CurrentUserView(APIView):
    """
    Current authenticated user profile endpoint.

    GET /api/auth/me/ - Returns profile of the authenticated user.

    The frontend calls this after JWT login to learn whether it is acting
    as a patient or as a doctor. The backend remains the authorization
    authority; the role here only drives which screens are shown.

    Response format:
    {
        "id": "uuid",
        "email": "user@example.com",
        "name": "Jane Doe",
        "role": "doctor",
        "is_active": true
    }
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        """Return current user profile with role."""
        bind_actor(request.user)
        serializer = UserProfileSerializer(request.user)
        return Response(serializer.data, status=status.HTTP_200_OK)
