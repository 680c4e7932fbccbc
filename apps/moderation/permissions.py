"""
Custom permission classes for moderation endpoints.

Permission Classes:
    IsModerator - Requires MODERATOR or ADMIN moderation role

Usage:
    from apps.moderation.permissions import IsModerator

    @api_view(['POST'])
    @permission_classes([IsAuthenticated, IsNotBanned, IsModerator])
    def ban_user(request, user_id):
        # The service still applies the per-action rules (ADMIN-only
        # actions, protected targets)
        ...
"""

from rest_framework.permissions import BasePermission

from .services.registry import ModerationRegistry


class IsModerator(BasePermission):
    """
    Coarse gate for the moderation console.

    Plain USERs are turned away before any lookup of the target happens.
    """

    message = 'Moderator role required.'
    registry_class = ModerationRegistry

    def has_permission(self, request, view):
        return self.registry_class().is_at_least_moderator(request.user.id)
