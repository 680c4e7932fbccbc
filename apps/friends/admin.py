from django.contrib import admin
from apps.friends.models import Friendship


@admin.register(Friendship)
class FriendshipAdmin(admin.ModelAdmin):
    list_display = ['requester_email', 'addressee_email', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['requester_email', 'addressee_email']
    readonly_fields = ['pair_key', 'created_at']
