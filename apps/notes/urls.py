from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'notes'

router = DefaultRouter()
router.register(r'', views.NoteViewSet, basename='note')

urlpatterns = [
    # Note ViewSet routes
    # GET    /api/notes/               - List private notes
    # POST   /api/notes/               - Create note
    # GET    /api/notes/{id}/          - Get note with effective permission
    # PUT    /api/notes/{id}/          - Update note (WRITE)
    # PATCH  /api/notes/{id}/          - Partial update (WRITE)
    # DELETE /api/notes/{id}/          - Delete note (owner) or drop own share

    # Custom note actions
    # POST   /api/notes/{id}/vote/     - Toggle vote
    # POST   /api/notes/{id}/share/    - Share with an email (owner)
    # GET    /api/notes/{id}/shares/   - List shares (owner)

    # Sharing
    path('shared/', views.shared_with_me, name='shared-with-me'),
    path('share/<str:token>/accept/', views.accept_share_view, name='share-accept'),
    path('share/<str:token>/reject/', views.reject_share_view, name='share-reject'),
    path('share/<uuid:share_id>/', views.share_detail, name='share-detail'),

    path('', include(router.urls)),
]
