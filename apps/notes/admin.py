from django.contrib import admin
from django.db import transaction
from apps.notes.models import Note, NoteShare, NoteVote
from apps.notes.services import purge_note


class NoteShareInline(admin.TabularInline):
    model = NoteShare
    extra = 0
    fields = ['recipient_email', 'recipient', 'permission', 'status', 'created_at']
    readonly_fields = ['created_at']

    def has_add_permission(self, request, obj=None):
        # Shares are created through create_share, which issues the token
        return False


@admin.register(Note)
class NoteAdmin(admin.ModelAdmin):
    """Admin interface for Notes."""

    list_display = ['title', 'owner', 'group', 'created_at']
    list_filter = ['created_at']
    search_fields = ['title', 'owner__email', 'group__name']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [NoteShareInline]
    date_hierarchy = 'created_at'

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('owner', 'group')

    def delete_model(self, request, obj):
        purge_note(obj)

    @transaction.atomic
    def delete_queryset(self, request, queryset):
        for note in queryset:
            purge_note(note)


@admin.register(NoteShare)
class NoteShareAdmin(admin.ModelAdmin):
    list_display = ['note', 'recipient_email', 'permission', 'status', 'updated_at']
    list_filter = ['permission', 'status']
    search_fields = ['note__title', 'recipient_email']
    readonly_fields = ['token', 'created_at', 'updated_at']

    def has_add_permission(self, request):
        return False


@admin.register(NoteVote)
class NoteVoteAdmin(admin.ModelAdmin):
    list_display = ['note', 'user', 'created_at']
    search_fields = ['note__title', 'user__email']
