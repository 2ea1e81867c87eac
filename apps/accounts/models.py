from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


DEFAULT_BUSINESS_NAME = 'My Business'
DEFAULT_CURRENCY = '₦'
DEFAULT_THEME_COLOR = '#09090b'


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Custom user model with email authentication."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    display_name = models.CharField(max_length=100, blank=True)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_idx'),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Return display name or email prefix."""
        return self.display_name or self.email.split('@')[0]


class Profile(models.Model):
    """Business profile driving branding and receipt defaults (one per user)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name='profile'
    )

    # Branding
    business_name = models.CharField(max_length=150, default=DEFAULT_BUSINESS_NAME, blank=True)
    business_phone = models.CharField(max_length=30, blank=True)
    business_email = models.EmailField(max_length=255, blank=True)
    tagline = models.CharField(max_length=200, blank=True)
    address = models.CharField(max_length=300, blank=True)
    footer_message = models.CharField(max_length=300, blank=True)
    currency = models.CharField(max_length=20, default=DEFAULT_CURRENCY)
    logo_url = models.CharField(max_length=500, blank=True)
    theme_color = models.CharField(max_length=7, default=DEFAULT_THEME_COLOR)

    # Public storefront address (/m/<slug>)
    slug = models.SlugField(max_length=80, unique=True, null=True, blank=True)

    # Back-office access
    is_admin = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'profiles'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.business_name} ({self.user.email})"

    @property
    def has_business_name(self):
        return bool(self.business_name) and self.business_name != DEFAULT_BUSINESS_NAME

    @property
    def logo_letter(self):
        """First letter of the business name, used when no logo is uploaded."""
        return (self.business_name[:1] or 'R').upper()
