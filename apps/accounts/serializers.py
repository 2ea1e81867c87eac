from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, Profile


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for account display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'created_at', 'last_login']


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Validate signup input; the account itself is created by register_user()."""

    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )

    class Meta:
        model = User
        fields = ['email', 'password', 'password_confirm', 'display_name']

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ProfileSerializer(serializers.ModelSerializer):
    """Full business profile as shown on the settings page."""

    email = serializers.EmailField(source='user.email', read_only=True)
    logo_letter = serializers.CharField(read_only=True)

    class Meta:
        model = Profile
        fields = [
            'id',
            'email',
            'business_name',
            'business_phone',
            'business_email',
            'tagline',
            'address',
            'footer_message',
            'currency',
            'logo_url',
            'logo_letter',
            'theme_color',
            'slug',
            'is_admin',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ProfileUpdateSerializer(serializers.Serializer):
    """Validate the settings form. Every field is optional (PATCH semantics)."""

    business_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    business_phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    business_email = serializers.EmailField(max_length=255, required=False, allow_blank=True)
    tagline = serializers.CharField(max_length=200, required=False, allow_blank=True)
    address = serializers.CharField(max_length=300, required=False, allow_blank=True)
    footer_message = serializers.CharField(max_length=300, required=False, allow_blank=True)
    currency = serializers.CharField(max_length=20, required=False)
    theme_color = serializers.RegexField(
        regex=r'^#[0-9a-fA-F]{6}$',
        required=False,
        help_text='Hex color, e.g. #09090b'
    )
    slug = serializers.CharField(max_length=80, required=False, allow_blank=True)


class OnboardingSerializer(serializers.Serializer):
    """First-run business details."""

    business_name = serializers.CharField(max_length=150, allow_blank=True)
    business_phone = serializers.CharField(max_length=30, required=False, allow_blank=True)
    currency = serializers.CharField(max_length=20, required=False, allow_blank=True)


class LogoUploadSerializer(serializers.Serializer):
    logo = serializers.ImageField()


class ProfileCompletenessSerializer(serializers.Serializer):
    is_complete = serializers.BooleanField()
    missing = serializers.ListField(child=serializers.CharField())


class AdminProfileSerializer(serializers.ModelSerializer):
    """Row in the back-office user table."""

    email = serializers.EmailField(source='user.email', read_only=True)
    is_active = serializers.BooleanField(source='user.is_active', read_only=True)
    joined_at = serializers.DateTimeField(source='user.created_at', read_only=True)
    receipt_count = serializers.SerializerMethodField()

    class Meta:
        model = Profile
        fields = [
            'id',
            'email',
            'business_name',
            'business_phone',
            'currency',
            'slug',
            'logo_url',
            'is_admin',
            'is_active',
            'receipt_count',
            'joined_at',
        ]
        read_only_fields = fields

    def get_receipt_count(self, obj):
        return obj.user.receipts.count()
