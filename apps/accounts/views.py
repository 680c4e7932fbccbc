from rest_framework import status, generics, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.core.permissions import IsNotBanned
from .models import User
from .serializers import UserSerializer, IdentitySerializer
from .services import get_identity
from .services.account_management import delete_user_account


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsNotBanned])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=UserSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Update the current user's display name.",
    tags=['auth'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsNotBanned])
def update_profile(request):
    """Update user profile."""
    serializer = UserSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response(serializer.data)


@extend_schema(
    responses={204: None},
    description="Delete the current account with its groups, notes, shares, votes and friendships.",
    tags=['auth'],
)
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsNotBanned])
def delete_account(request):
    """Hard-delete the caller's account."""
    delete_user_account(user_id=request.user.id)
    return Response(status=status.HTTP_204_NO_CONTENT)


class UserDetailView(generics.RetrieveAPIView):
    """
    Get a user's public identity by ID.

    GET /api/auth/users/{id}/
    """
    queryset = User.objects.filter(is_active=True)
    serializer_class = IdentitySerializer
    permission_classes = [IsAuthenticated, IsNotBanned]

    def retrieve(self, request, *args, **kwargs):
        identity = get_identity(self.get_object())
        return Response(self.get_serializer(identity).data)
