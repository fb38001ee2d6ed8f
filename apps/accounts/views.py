from rest_framework import status, serializers
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .permissions import HasProviderCallbackSecret
from .serializers import ProviderSignInSerializer, UserLoginSerializer, UserSerializer
from .services import (
    authenticate_user,
    sign_in_with_provider,
    IdentityConflictError,
    InvalidCredentialsError,
    InactiveAccountError,
)


# Response serializers for API documentation
class AuthResponseSerializer(serializers.Serializer):
    user = UserSerializer()
    refresh = serializers.CharField()
    access = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def issue_tokens(user):
    """Return a fresh refresh/access token pair for the user."""
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def obtain_token(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError as e:
        return Response({'error': str(e)}, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response({
        'user': UserSerializer(user).data,
        **issue_tokens(user),
    })


@extend_schema(
    request=ProviderSignInSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
    },
    description=(
        "Exchange an identity verified by an external provider handshake for JWT tokens. "
        "Called by the trusted sign-in server with the X-Provider-Secret header."
    ),
    tags=['auth'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([HasProviderCallbackSecret])
def provider_sign_in(request):
    """Find, link or create the user for a verified provider identity."""
    serializer = ProviderSignInSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        user = sign_in_with_provider(**serializer.validated_data)
    except IdentityConflictError as e:
        return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
    except InactiveAccountError as e:
        return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)

    return Response({
        'user': UserSerializer(user).data,
        **issue_tokens(user),
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=UserSerializer,
    responses={
        200: UserSerializer,
        400: ErrorResponseSerializer,
    },
    description="Update the current user's profile (display_name).",
    tags=['auth'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated])
def update_profile(request):
    """Update user profile."""
    serializer = UserSerializer(request.user, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    return Response(serializer.data)
