from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes, parser_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    ProfileSerializer,
    ProfileUpdateSerializer,
    OnboardingSerializer,
    LogoUploadSerializer,
    ProfileCompletenessSerializer,
    AdminProfileSerializer,
)
from .permissions import IsPlatformAdmin
from .services import (
    register_user,
    authenticate_user,
    get_profile,
    resolve_landing_route,
    complete_onboarding,
    update_business_profile,
    upload_logo,
    check_profile_completeness,
    list_profiles,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    MissingBusinessNameError,
    SlugUnavailableError,
    LogoUploadError,
)


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()
    redirect_to = serializers.CharField()


class LandingResponseSerializer(serializers.Serializer):
    redirect_to = serializers.CharField()


class LogoResponseSerializer(serializers.Serializer):
    logo_url = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a new business account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    data = serializer.validated_data.copy()
    data.pop('password_confirm', None)

    try:
        user = register_user(**data)
    except UserRegistrationError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response({
        'message': 'Registration successful.',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
        'redirect_to': resolve_landing_route(user),
    }, status=status.HTTP_201_CREATED)


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
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(**serializer.validated_data)
    except InvalidCredentialsError:
        return Response({
            'error': 'Invalid credentials'
        }, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError:
        return Response({
            'error': 'Account is deactivated'
        }, status=status.HTTP_403_FORBIDDEN)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
        'redirect_to': resolve_landing_route(user),
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    responses={200: LandingResponseSerializer},
    description="Where to send the user after sign-in: admin, onboarding or dashboard.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def landing(request):
    """Post-login traffic control."""
    return Response({'redirect_to': resolve_landing_route(request.user)})


@extend_schema(
    methods=['GET'],
    responses={200: ProfileSerializer},
    description="Get the current user's business profile.",
    tags=['profile'],
)
@extend_schema(
    methods=['PATCH'],
    request=ProfileUpdateSerializer,
    responses={
        200: ProfileSerializer,
        400: ErrorResponseSerializer,
    },
    description="Update business profile fields. The store slug is normalised.",
    tags=['profile'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def profile(request):
    """Read or update the business profile."""
    if request.method == 'GET':
        return Response(ProfileSerializer(get_profile(request.user)).data)

    serializer = ProfileUpdateSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)

    try:
        updated = update_business_profile(user=request.user, **serializer.validated_data)
    except SlugUnavailableError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(ProfileSerializer(updated).data)


@extend_schema(
    request=LogoUploadSerializer,
    responses={
        200: LogoResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Upload a business logo (multipart field 'logo').",
    tags=['profile'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def upload_profile_logo(request):
    """Store a new business logo."""
    serializer = LogoUploadSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        url = upload_logo(user=request.user, logo_file=serializer.validated_data['logo'])
    except LogoUploadError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response({'logo_url': url})


@extend_schema(
    responses={200: ProfileCompletenessSerializer},
    description="Which branding fields are still missing (drives the incomplete-profile banner).",
    tags=['profile'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_completeness(request):
    """Report incomplete branding."""
    return Response(check_profile_completeness(get_profile(request.user)))


@extend_schema(
    request=OnboardingSerializer,
    responses={
        200: ProfileSerializer,
        400: ErrorResponseSerializer,
    },
    description="Save business name, phone and currency after signup.",
    tags=['profile'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def onboarding(request):
    """Complete first-run onboarding."""
    serializer = OnboardingSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        updated = complete_onboarding(user=request.user, **serializer.validated_data)
    except MissingBusinessNameError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(ProfileSerializer(updated).data)


@extend_schema(
    responses={200: AdminProfileSerializer(many=True)},
    description="All business profiles, newest accounts first.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_user_list(request):
    """Back-office user directory."""
    profiles = list_profiles()
    return Response(AdminProfileSerializer(profiles, many=True).data)
