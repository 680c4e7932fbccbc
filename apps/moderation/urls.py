from django.urls import path
from . import views

app_name = 'moderation'

urlpatterns = [
    path('users/', views.list_users, name='users'),
    path('users/<uuid:user_id>/ban/', views.ban_user, name='ban'),
    path('users/<uuid:user_id>/warn/', views.warn_user, name='warn'),
    path('users/<uuid:user_id>/unwarn/', views.unwarn_user, name='unwarn'),
    path('users/<uuid:user_id>/promote/', views.promote_user, name='promote'),
    path('users/<uuid:user_id>/demote/', views.demote_user, name='demote'),
    path('users/<uuid:user_id>/', views.delete_user_view, name='delete'),
    path('notes/', views.list_notes, name='notes'),
    path('notes/<uuid:note_id>/', views.delete_note_view, name='delete-note'),
    path('groups/', views.list_groups, name='groups'),
    path('groups/<uuid:group_id>/', views.delete_group_view, name='delete-group'),
]
