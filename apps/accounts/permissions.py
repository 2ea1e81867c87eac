"""
Custom permission classes for the back-office.

Permission Classes:
    IsPlatformAdmin - Requires an authenticated user whose profile is flagged admin
"""

from rest_framework.permissions import BasePermission


class IsPlatformAdmin(BasePermission):
    """
    Allow access only to back-office administrators.

    A user is an administrator when their business profile carries the
    ``is_admin`` flag. Django superusers are always allowed.

    Usage:
        @api_view(['GET'])
        @permission_classes([IsAuthenticated, IsPlatformAdmin])
        def admin_stats(request):
            ...
    """

    message = 'Admin access required.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_superuser:
            return True
        profile = getattr(user, 'profile', None)
        return bool(profile and profile.is_admin)
