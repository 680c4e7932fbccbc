from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'groups'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.GroupViewSet, basename='group')

urlpatterns = [
    # Group ViewSet routes
    # GET    /api/groups/              - List user's groups
    # POST   /api/groups/              - Create group
    # GET    /api/groups/{id}/         - Get group details (members)
    # PUT    /api/groups/{id}/         - Update group (admin)
    # PATCH  /api/groups/{id}/         - Partial update (admin)
    # DELETE /api/groups/{id}/         - Delete group (owner)

    # Custom group actions
    # POST   /api/groups/{id}/invite/               - Invite by email (admin)
    # POST   /api/groups/{id}/change_role/          - Change member role (admin)
    # DELETE /api/groups/{id}/members/{user_id}/    - Remove member or leave
    # GET    /api/groups/{id}/notes/                - Group notes

    # Invitations addressed to the current user
    path('invitations/', views.my_invitations, name='my-invitations'),
    path(
        'invitations/<uuid:invitation_id>/respond/',
        views.respond_invitation,
        name='respond-invitation'
    ),

    # Include router URLs
    path('', include(router.urls)),
]
