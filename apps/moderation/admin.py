from django.contrib import admin
from apps.moderation.models import UserModerationRecord


@admin.register(UserModerationRecord)
class UserModerationRecordAdmin(admin.ModelAdmin):
    """Admin interface for moderation standing."""

    list_display = ['user', 'role', 'is_banned', 'warning_count', 'updated_at']
    list_filter = ['role', 'is_banned']
    search_fields = ['user__email']
    readonly_fields = ['updated_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user')
