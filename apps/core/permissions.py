from rest_framework import permissions

from apps.moderation.services.registry import ModerationRegistry


class IsNotBanned(permissions.BasePermission):
    """
    Permission: Authenticated user must not be banned.

    Consults the moderation registry on every request, before any group or
    content action runs.
    """

    message = 'Your account has been banned.'
    registry_class = ModerationRegistry

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return not self.registry_class().is_banned(user.id)
